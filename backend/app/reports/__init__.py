# backend/app/reports/__init__.py

"""
市民からの課題報告（Report）を扱うモジュール群。

- schemas: Report の Pydantic モデルとリクエストボディの解釈
"""

from .schemas import (  # noqa: F401
    Report,
    ReportPriority,
    ReportValidationError,
    parse_report_payload,
)
