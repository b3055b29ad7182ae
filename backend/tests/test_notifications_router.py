# backend/tests/test_notifications_router.py

from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.notifications.config import NotificationSettings
from app.notifications.factory import get_notification_dispatcher
from app.notifications.router import get_app_dispatcher
from app.notifications.schemas import NotificationLogEntry
from app.notifications.service import NotificationDispatcher

SETTINGS = NotificationSettings(
    target_phone="+15550000000",
    target_email="ops@example.com",
    sms_delay_seconds=0,
    email_delay_seconds=0,
)

REPORT = {
    "id": "issue-42",
    "title": "Graffiti on bridge",
    "category": "test",
    "description": "Fresh graffiti under the north bridge.",
    "priority": "medium",
    "location": None,
    "created_at": "2025-01-15T10:30:00Z",
    "image_url": "https://cdn.example.com/graffiti.jpg",
}


class RecordingSender:
    def __init__(self, result: bool = True, error: Optional[Exception] = None) -> None:
        self._result = result
        self._error = error
        self.calls: List[tuple] = []

    async def send(self, *args) -> bool:
        self.calls.append(args)
        if self._error is not None:
            raise self._error
        return self._result


class RecordingLogStore:
    def __init__(self, error: Optional[Exception] = None) -> None:
        self._error = error
        self.entries: List[NotificationLogEntry] = []

    async def insert(self, entry: NotificationLogEntry) -> None:
        self.entries.append(entry)
        if self._error is not None:
            raise self._error


def create_test_client(sms=None, email=None, log_store=None) -> TestClient:
    app = create_app()
    dispatcher = NotificationDispatcher(
        sms_sender=sms or RecordingSender(),
        email_sender=email or RecordingSender(),
        log_store=log_store or RecordingLogStore(),
        settings=SETTINGS,
    )
    app.dependency_overrides[get_app_dispatcher] = lambda: dispatcher
    return TestClient(app)


def test_send_test_notifications_success() -> None:
    sms = RecordingSender()
    email = RecordingSender()
    client = create_test_client(sms=sms, email=email)

    resp = client.post("/send-test-notifications", json={"reportData": REPORT})

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"
    assert resp.json() == {
        "success": True,
        "sms_sent": True,
        "email_sent": True,
        "target_phone": "+15550000000",
        "target_email": "ops@example.com",
        "message": "Notifications sent - SMS: SUCCESS, Email: SUCCESS",
    }
    assert "Location: Not specified" in sms.calls[0][1]
    assert "View Image" in email.calls[0][2]


def test_send_test_notifications_partial_failure() -> None:
    """
    片方のチャンネルが失敗してもリクエスト自体は成功扱いになること。
    """
    client = create_test_client(sms=RecordingSender(error=RuntimeError("sms gateway down")))

    resp = client.post("/send-test-notifications", json={"reportData": REPORT})

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["sms_sent"] is False
    assert body["email_sent"] is True
    assert body["message"] == "Notifications sent - SMS: FAILED, Email: SUCCESS"


def test_send_test_notifications_log_failure_does_not_affect_response() -> None:
    client = create_test_client(
        email=RecordingSender(result=False),
        log_store=RecordingLogStore(error=RuntimeError("insert failed")),
    )

    resp = client.post("/send-test-notifications", json={"reportData": REPORT})

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["sms_sent"] is True
    assert body["email_sent"] is False


def test_send_test_notifications_missing_report_data() -> None:
    sms = RecordingSender()
    client = create_test_client(sms=sms)

    for payload in ({}, {"reportData": None}):
        resp = client.post("/send-test-notifications", json=payload)

        assert resp.status_code == 500
        assert resp.headers["access-control-allow-origin"] == "*"
        assert resp.json() == {
            "success": False,
            "error": "Report data is required",
            "sms_sent": False,
            "email_sent": False,
        }

    assert sms.calls == []


def test_send_test_notifications_invalid_json() -> None:
    client = create_test_client()

    resp = client.post(
        "/send-test-notifications",
        content=b"not-json",
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 500
    body = resp.json()
    assert body["success"] is False
    assert body["error"]
    assert body["sms_sent"] is False
    assert body["email_sent"] is False


def test_send_test_notifications_invalid_priority() -> None:
    client = create_test_client()

    resp = client.post(
        "/send-test-notifications",
        json={"reportData": {**REPORT, "priority": "urgent"}},
    )

    assert resp.status_code == 500
    assert resp.json()["success"] is False


def test_send_test_notifications_is_method_agnostic() -> None:
    client = create_test_client()

    resp = client.put("/send-test-notifications", json={"reportData": REPORT})

    assert resp.status_code == 200
    assert resp.json()["success"] is True


def test_preflight_returns_cors_headers_without_dispatch() -> None:
    sms = RecordingSender()
    email = RecordingSender()
    log_store = RecordingLogStore()
    client = create_test_client(sms=sms, email=email, log_store=log_store)

    resp = client.options("/send-test-notifications")

    assert resp.status_code == 200
    assert resp.content == b""
    assert resp.headers["access-control-allow-origin"] == "*"
    assert (
        resp.headers["access-control-allow-headers"]
        == "authorization, x-client-info, apikey, content-type"
    )
    assert sms.calls == []
    assert email.calls == []
    assert log_store.entries == []


def test_default_dispatcher_uses_simulated_senders() -> None:
    """
    依存性を差し替えない場合も（遅延 0 のシミュレーション Sender で）送信できること。
    """
    client = TestClient(create_app())

    resp = client.post("/send-test-notifications", json={"reportData": REPORT})

    assert resp.status_code == 200
    body = resp.json()
    assert body["sms_sent"] is True
    assert body["email_sent"] is True
    assert body["target_phone"] == "+15555550123"
    assert body["target_email"] == "civic-alerts@example.com"


def test_send_test_notifications_accepts_numeric_id() -> None:
    """
    数値の id も文字列として受け付け、SMS 本文と監査ログに反映されること。
    """
    sms = RecordingSender()
    log_store = RecordingLogStore()
    client = create_test_client(sms=sms, log_store=log_store)

    resp = client.post("/send-test-notifications", json={"reportData": {**REPORT, "id": 42}})

    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert "ID: 42" in sms.calls[0][1]
    assert log_store.entries[0].issue_id == "42"


def test_dispatcher_is_built_once_at_startup() -> None:
    app = create_app()

    assert isinstance(app.state.notification_dispatcher, NotificationDispatcher)
    assert app.state.notification_dispatcher is get_notification_dispatcher()


def test_invalid_settings_fail_app_creation(monkeypatch) -> None:
    """
    設定が不正な場合はリクエスト時ではなくアプリ生成時に失敗すること。
    """
    monkeypatch.setenv("NOTIFY_SMS_DELAY_SECONDS", "soon")

    with pytest.raises(RuntimeError):
        create_app()


def test_preflight_with_default_dispatcher() -> None:
    client = TestClient(create_app())

    resp = client.options("/send-test-notifications")

    assert resp.status_code == 200
    assert resp.content == b""
    assert resp.headers["access-control-allow-origin"] == "*"


def test_health() -> None:
    client = TestClient(create_app())

    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
