# backend/app/reports/schemas.py

"""
課題報告（Report）のスキーマ定義。

フロントエンドから `{ "reportData": Report }` の形で受け取る。
このコンポーネントでは Report 自体を永続化しない（受け取ったら不変）。
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ReportValidationError(ValueError):
    """リクエストボディに Report が含まれていない場合の例外。"""


class ReportPriority(str, Enum):
    """報告の優先度。"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Report(BaseModel):
    """
    市民から寄せられた課題報告 1件分。

    location / image_url は任意項目。
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: str = Field(..., description="報告の識別子（issues テーブルの ID）。数値 ID は文字列に変換する")
    title: str = Field(..., description="報告タイトル")
    category: str = Field(..., description="報告カテゴリ（例: test）")
    description: str = Field(..., description="報告本文")
    priority: ReportPriority = Field(..., description="low / medium / high")
    location: Optional[str] = Field(None, description="発生場所（任意）")
    created_at: datetime = Field(..., description="報告日時（ISO8601）")
    image_url: Optional[str] = Field(None, description="添付画像の URL（任意）")


REPORT_PAYLOAD_KEY = "reportData"


def parse_report_payload(body: Any) -> Report:
    """
    デコード済みの JSON ボディから Report を取り出す。

    - ボディがオブジェクトでない / reportData が無い・null → ReportValidationError
    - 各フィールドの不正は pydantic の ValidationError をそのまま投げる
    """
    if not isinstance(body, dict):
        raise ReportValidationError("Report data is required")

    report_data = body.get(REPORT_PAYLOAD_KEY)
    if not report_data:
        raise ReportValidationError("Report data is required")

    return Report.model_validate(report_data)
