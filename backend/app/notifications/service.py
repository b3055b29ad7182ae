# backend/app/notifications/service.py

"""
テストカテゴリ通知のディスパッチャ。

1 件の Report について:
- SMS 本文 / Email 件名・HTML を生成
- SMS と Email を並行に送信し、両方が決着（成功 or 失敗）するまで待つ
- 結果を notification_logs にベストエフォートで記録
- レスポンス用のサマリを返す

片方のチャンネルの失敗（False / 例外）はもう片方に影響させない。
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from app.reports.schemas import Report

from .config import NotificationSettings
from .formatters import build_email_subject, format_report_for_email, format_report_for_sms
from .log_store import NotificationLogStore
from .schemas import (
    DispatchOutcome,
    NotificationChannel,
    NotificationDispatchResponse,
    NotificationLogEntry,
)
from .senders import EmailSender, SmsSender

logger = logging.getLogger(__name__)


def _status_label(succeeded: bool) -> str:
    return "SUCCESS" if succeeded else "FAILED"


def settle_outcome(channel: NotificationChannel, result: Any) -> DispatchOutcome:
    """
    asyncio.gather(return_exceptions=True) の結果 1 件を DispatchOutcome に変換する。

    例外、または偽値が返った場合は失敗扱い。
    """
    if isinstance(result, BaseException):
        logger.warning("%s channel raised: %r", channel.value, result)
        return DispatchOutcome(channel=channel, succeeded=False)
    return DispatchOutcome(channel=channel, succeeded=bool(result))


def build_status_message(sms_sent: bool, email_sent: bool) -> str:
    return (
        f"Notifications sent - SMS: {_status_label(sms_sent)}, "
        f"Email: {_status_label(email_sent)}"
    )


class NotificationDispatcher:
    """
    SMS / Email の 2 チャンネルへ Report を通知するサービス。

    Sender・ログストア・設定はすべてコンストラクタで注入する（テストではダミーを渡す）。
    """

    def __init__(
        self,
        *,
        sms_sender: SmsSender,
        email_sender: EmailSender,
        log_store: NotificationLogStore,
        settings: NotificationSettings,
    ) -> None:
        self._sms_sender = sms_sender
        self._email_sender = email_sender
        self._log_store = log_store
        self._settings = settings

    async def dispatch(self, report: Report) -> NotificationDispatchResponse:
        """
        Report を SMS / Email で並行送信し、結果をまとめて返す。

        本文生成中の例外はそのまま呼び出し元に伝播させる（リクエスト単位の失敗）。
        """
        target_phone = self._settings.target_phone
        target_email = self._settings.target_email

        sms_content = format_report_for_sms(report)
        email_subject = build_email_subject(report)
        email_content = format_report_for_email(report)

        sms_result, email_result = await asyncio.gather(
            self._sms_sender.send(target_phone, sms_content),
            self._email_sender.send(target_email, email_subject, email_content),
            return_exceptions=True,
        )

        sms_outcome = settle_outcome(NotificationChannel.SMS, sms_result)
        email_outcome = settle_outcome(NotificationChannel.EMAIL, email_result)

        logger.info("SMS Result: %s", _status_label(sms_outcome.succeeded))
        logger.info("Email Result: %s", _status_label(email_outcome.succeeded))

        await self._record_log(report, sms_outcome, email_outcome)

        return NotificationDispatchResponse(
            success=True,
            sms_sent=sms_outcome.succeeded,
            email_sent=email_outcome.succeeded,
            target_phone=target_phone,
            target_email=target_email,
            message=build_status_message(sms_outcome.succeeded, email_outcome.succeeded),
        )

    async def _record_log(
        self,
        report: Report,
        sms_outcome: DispatchOutcome,
        email_outcome: DispatchOutcome,
    ) -> None:
        """
        notification_logs への書き込み。失敗してもログに残すだけで本処理は止めない。
        """
        try:
            entry = NotificationLogEntry(
                issue_id=report.id,
                sms_sent=sms_outcome.succeeded,
                email_sent=email_outcome.succeeded,
                target_phone=self._settings.target_phone,
                target_email=self._settings.target_email,
            )
            await self._log_store.insert(entry)
        except Exception:  # noqa: BLE001 - 監査ログの失敗はレスポンスに影響させない
            logger.exception("Failed to log notification. issue_id=%s", report.id)
