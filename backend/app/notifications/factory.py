# backend/app/notifications/factory.py

"""
通知ディスパッチャの簡易ファクトリ。

- SMS / Email はシミュレーション Sender を使う。
- SUPABASE_URL と SUPABASE_SERVICE_ROLE_KEY が揃っていれば Supabase に監査ログを書き込み、
  そうでなければロガーにのみ記録する。
"""

from __future__ import annotations

from typing import Optional

from .config import NotificationSettings, get_notification_settings
from .log_store import (
    LoggingNotificationLogStore,
    NotificationLogStore,
    SupabaseNotificationLogStore,
)
from .senders import SimulatedEmailSender, SimulatedSmsSender
from .service import NotificationDispatcher

_notification_dispatcher: Optional[NotificationDispatcher] = None


def build_log_store(settings: NotificationSettings) -> NotificationLogStore:
    if settings.supabase_configured:
        return SupabaseNotificationLogStore(
            base_url=settings.supabase_url,
            service_role_key=settings.supabase_service_role_key,
            table=settings.log_table,
            timeout=settings.log_timeout_seconds,
        )
    return LoggingNotificationLogStore()


def build_notification_dispatcher(settings: NotificationSettings) -> NotificationDispatcher:
    """
    設定値から NotificationDispatcher を組み立てる。
    """
    return NotificationDispatcher(
        sms_sender=SimulatedSmsSender(
            sender_id=settings.sms_sender_id,
            delay_seconds=settings.sms_delay_seconds,
        ),
        email_sender=SimulatedEmailSender(
            from_email=settings.email_from,
            delay_seconds=settings.email_delay_seconds,
        ),
        log_store=build_log_store(settings),
        settings=settings,
    )


def get_notification_dispatcher() -> NotificationDispatcher:
    """
    アプリ全体で共有する NotificationDispatcher を返す。

    初回呼び出し時にのみ生成し、それ以降は同じインスタンスを返す。
    """
    global _notification_dispatcher
    if _notification_dispatcher is None:
        _notification_dispatcher = build_notification_dispatcher(get_notification_settings())
    return _notification_dispatcher


def reset_notification_dispatcher() -> None:
    """
    テスト用にディスパッチャと設定のキャッシュをリセットする。
    """
    global _notification_dispatcher
    _notification_dispatcher = None
    get_notification_settings.cache_clear()
