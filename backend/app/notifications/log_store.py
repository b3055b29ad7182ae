# backend/app/notifications/log_store.py

"""
通知結果（NotificationLogEntry）の書き込み先。

- SupabaseNotificationLogStore: Supabase の PostgREST API に INSERT する
- LoggingNotificationLogStore: ロガーに記録するだけ（Supabase 未設定時のデフォルト）
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

import httpx

from .schemas import NotificationLogEntry

logger = logging.getLogger(__name__)


class NotificationLogError(Exception):
    """監査ログ書き込み全般の基底例外。"""


class NotificationLogHTTPError(NotificationLogError):
    """Supabase が 2xx 以外を返した場合の例外。"""

    def __init__(self, status_code: int, body: Any | None = None) -> None:
        super().__init__(f"Supabase insert failed: status_code={status_code}")
        self.status_code = status_code
        self.body = body


class NotificationLogConnectionError(NotificationLogError):
    """接続エラー・タイムアウト時の例外。"""


class NotificationLogStore(Protocol):
    async def insert(self, entry: NotificationLogEntry) -> None:  # pragma: no cover - Protocol
        ...


class SupabaseNotificationLogStore:
    """
    Supabase（PostgREST）の指定テーブルに 1 行 INSERT するストア。

    NOTE:
      - service role key を使うため RLS はバイパスされる前提。
      - transport はテストで httpx.MockTransport を差し込むためのもの。
    """

    def __init__(
        self,
        *,
        base_url: str,
        service_role_key: str,
        table: str = "notification_logs",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._service_role_key = service_role_key
        self._table = table
        self._timeout = timeout
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/rest/v1/{self._table}"

    def _build_headers(self) -> Dict[str, str]:
        return {
            "apikey": self._service_role_key,
            "Authorization": f"Bearer {self._service_role_key}",
            "Content-Type": "application/json",
            "Prefer": "return=minimal",
        }

    async def insert(self, entry: NotificationLogEntry) -> None:
        """
        NotificationLogEntry を 1 行 INSERT する。

        :raises NotificationLogHTTPError: Supabase が 4xx/5xx を返した場合。
        :raises NotificationLogConnectionError: 接続エラーやタイムアウト時。
        """
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.endpoint,
                    json=entry.model_dump(mode="json"),
                    headers=self._build_headers(),
                )
        except httpx.RequestError as exc:
            raise NotificationLogConnectionError(str(exc)) from exc

        if response.status_code // 100 != 2:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            raise NotificationLogHTTPError(status_code=response.status_code, body=body)


class LoggingNotificationLogStore:
    """
    NotificationLogEntry をロガーに記録するだけのストア。
    """

    def __init__(self, logger_: logging.Logger | None = None) -> None:
        self._logger = logger_ or logger

    async def insert(self, entry: NotificationLogEntry) -> None:
        self._logger.info("Notification log: %s", entry.model_dump(mode="json"))
