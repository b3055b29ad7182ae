# backend/app/notifications/senders.py

"""
SMS / Email 送信インターフェースとシミュレーション実装。

実際の Twilio / SendGrid などへの送信は行わず、送信内容をログに記録し、
外部 API 呼び出し相当の遅延を挟んで成功を返す。
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class SmsSender(Protocol):
    """
    SMS 送信の最小インターフェース。

    送信に成功したら True、失敗したら False を返す（例外を投げてもよい）。
    """

    async def send(self, phone_number: str, message: str) -> bool:  # pragma: no cover - Protocol
        ...


class EmailSender(Protocol):
    """
    Email 送信の最小インターフェース。
    """

    async def send(self, to_email: str, subject: str, html_body: str) -> bool:  # pragma: no cover - Protocol
        ...


class SimulatedSmsSender:
    """
    SMS 送信をシミュレートする Sender。
    """

    def __init__(
        self,
        *,
        sender_id: str,
        delay_seconds: float = 1.0,
        logger_: logging.Logger | None = None,
    ) -> None:
        self._sender_id = sender_id
        self._delay_seconds = delay_seconds
        self._logger = logger_ or logger

    async def send(self, phone_number: str, message: str) -> bool:
        try:
            self._logger.info("Sending SMS to %s: %s", phone_number, message)
            payload = {"to": phone_number, "message": message, "from": self._sender_id}

            await asyncio.sleep(self._delay_seconds)

            self._logger.info("SMS sent successfully: %s", payload)
            return True
        except Exception:  # noqa: BLE001 - 送信失敗は False として扱う
            self._logger.exception("SMS sending failed.")
            return False


class SimulatedEmailSender:
    """
    Email 送信をシミュレートする Sender。

    本文（HTML）はサイズが大きいため、INFO には件名と長さのみ、DEBUG に本文全体を残す。
    """

    def __init__(
        self,
        *,
        from_email: str,
        delay_seconds: float = 1.5,
        logger_: logging.Logger | None = None,
    ) -> None:
        self._from_email = from_email
        self._delay_seconds = delay_seconds
        self._logger = logger_ or logger

    async def send(self, to_email: str, subject: str, html_body: str) -> bool:
        try:
            self._logger.info("Sending email to %s: %s", to_email, subject)
            payload = {
                "to": to_email,
                "subject": subject,
                "from": self._from_email,
                "html_length": len(html_body),
            }

            self._logger.debug("Email html body to %s:\n%s", to_email, html_body)

            await asyncio.sleep(self._delay_seconds)

            self._logger.info("Email sent successfully: %s", payload)
            return True
        except Exception:  # noqa: BLE001
            self._logger.exception("Email sending failed.")
            return False
