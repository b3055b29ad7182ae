# backend/tests/conftest.py
"""
Pytest configuration for CivicConnect notifier backend tests.

- Ensures that the project root (backend/) is added to sys.path
  so that `import app.*` works correctly in tests.
- Ensures notification settings for tests use zero send delays and
  never talk to a real Supabase project.
"""

import os
import sys
from pathlib import Path

import pytest


def _ensure_project_root_in_sys_path() -> None:
    # This file is located at: backend/tests/conftest.py
    # parents[1] -> backend/
    project_root = Path(__file__).resolve().parents[1]
    project_root_str = str(project_root)

    if project_root_str not in sys.path:
        # Insert at the beginning so it has priority over site-packages, etc.
        sys.path.insert(0, project_root_str)


def _ensure_test_env_vars() -> None:
    """
    Set environment variables required for tests.

    Simulated senders must not sleep, and the audit log must go to the logger
    rather than a real Supabase project.
    """
    os.environ["NOTIFY_SMS_DELAY_SECONDS"] = "0"
    os.environ["NOTIFY_EMAIL_DELAY_SECONDS"] = "0"
    os.environ.pop("SUPABASE_URL", None)
    os.environ.pop("SUPABASE_SERVICE_ROLE_KEY", None)


_ensure_project_root_in_sys_path()
_ensure_test_env_vars()


@pytest.fixture(autouse=True)
def _reset_notification_state():
    """各テストの前後で設定・ディスパッチャのキャッシュを破棄する。"""
    from app.notifications.factory import reset_notification_dispatcher

    reset_notification_dispatcher()
    yield
    reset_notification_dispatcher()
