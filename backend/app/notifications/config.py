# backend/app/notifications/config.py

"""
通知送信に必要な設定値をまとめるモジュール。
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from app.utils.config import get_env, get_env_float

# テストカテゴリ通知の送信先。リクエストや環境変数からは変更できない。
TARGET_PHONE = "+15555550123"
TARGET_EMAIL = "civic-alerts@example.com"

SMS_SENDER_ID = "CivicConnect"
EMAIL_FROM = "noreply@civicconnect.com"

DEFAULT_LOG_TABLE = "notification_logs"


@dataclass(frozen=True)
class NotificationSettings:
    """通知ディスパッチャ用の設定値コンテナ。"""

    target_phone: str = TARGET_PHONE
    target_email: str = TARGET_EMAIL
    sms_sender_id: str = SMS_SENDER_ID
    email_from: str = EMAIL_FROM
    sms_delay_seconds: float = 1.0
    email_delay_seconds: float = 1.5
    supabase_url: Optional[str] = None
    supabase_service_role_key: Optional[str] = None
    log_table: str = DEFAULT_LOG_TABLE
    log_timeout_seconds: float = 10.0

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role_key)


def _get_non_negative_float(name: str, default: float) -> float:
    value = get_env_float(name, default)
    if value < 0:
        raise RuntimeError(f"Env var {name} must be >= 0, got {value!r}")
    return value


@lru_cache()
def get_notification_settings() -> NotificationSettings:
    """
    環境変数から通知設定を読み込む。

    任意:
      - SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY（未設定なら監査ログはロガーにのみ出力）
      - NOTIFY_SMS_DELAY_SECONDS   (デフォルト: 1.0)
      - NOTIFY_EMAIL_DELAY_SECONDS (デフォルト: 1.5)
      - NOTIFY_LOG_TABLE           (デフォルト: notification_logs)
      - NOTIFY_LOG_TIMEOUT_SECONDS (デフォルト: 10)
    """
    supabase_url = get_env("SUPABASE_URL", required=False)
    supabase_service_role_key = get_env("SUPABASE_SERVICE_ROLE_KEY", required=False)

    log_table = get_env(
        "NOTIFY_LOG_TABLE",
        default=DEFAULT_LOG_TABLE,
        required=False,
    )

    return NotificationSettings(
        sms_delay_seconds=_get_non_negative_float("NOTIFY_SMS_DELAY_SECONDS", 1.0),
        email_delay_seconds=_get_non_negative_float("NOTIFY_EMAIL_DELAY_SECONDS", 1.5),
        supabase_url=supabase_url.rstrip("/") if supabase_url else None,
        supabase_service_role_key=supabase_service_role_key,
        log_table=log_table,
        log_timeout_seconds=_get_non_negative_float("NOTIFY_LOG_TIMEOUT_SECONDS", 10.0),
    )
