# backend/app/notifications/schemas.py

"""
通知まわりの共通スキーマ定義。

- 通知チャンネル種別（SMS / Email）
- チャンネルごとの送信結果（DispatchOutcome）
- notification_logs テーブルに書き込む 1 行分（NotificationLogEntry）
- /send-test-notifications のレスポンス

※ 送信先の電話番号・メールアドレス以外の機密情報（Supabase のキーなど）は
  これらのモデルに含めないこと。
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field

NOTIFICATION_TYPE_TEST_CATEGORY = "test_category"


class NotificationChannel(str, Enum):
    """
    通知の送信チャンネル。
    """

    SMS = "sms"
    EMAIL = "email"


class DispatchOutcome(BaseModel):
    """
    1 チャンネル分の送信結果。リクエストごとに生成し、レスポンス構築後は捨てる。
    """

    channel: NotificationChannel = Field(..., description="送信チャンネル")
    succeeded: bool = Field(..., description="送信に成功したかどうか")


class NotificationLogEntry(BaseModel):
    """
    notification_logs テーブルに書き込む監査ログ 1 行分。
    """

    issue_id: str = Field(..., description="対象となった報告の ID")
    notification_type: str = Field(
        NOTIFICATION_TYPE_TEST_CATEGORY,
        description="通知種別（固定値）",
    )
    sms_sent: bool = Field(..., description="SMS 送信に成功したか")
    email_sent: bool = Field(..., description="Email 送信に成功したか")
    target_phone: str = Field(..., description="SMS の送信先")
    target_email: str = Field(..., description="Email の送信先")
    sent_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="送信処理を終えた時刻（UTC）",
    )


class NotificationDispatchResponse(BaseModel):
    """
    /send-test-notifications の正常レスポンス（HTTP 200）。

    片方のチャンネルが失敗しても success は True のまま、該当する *_sent が False になる。
    """

    success: bool = Field(True, description="リクエスト全体として処理できたか")
    sms_sent: bool = Field(..., description="SMS 送信に成功したか")
    email_sent: bool = Field(..., description="Email 送信に成功したか")
    target_phone: str = Field(..., description="SMS の送信先")
    target_email: str = Field(..., description="Email の送信先")
    message: str = Field(..., description="人間向けのサマリー")


class NotificationErrorResponse(BaseModel):
    """
    /send-test-notifications の異常レスポンス（HTTP 500）。
    """

    success: bool = Field(False, description="常に False")
    error: str = Field(..., description="エラーメッセージ")
    sms_sent: bool = Field(False, description="常に False")
    email_sent: bool = Field(False, description="常に False")
