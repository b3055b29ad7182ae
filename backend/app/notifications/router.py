# backend/app/notifications/router.py

"""
テストカテゴリ通知の FastAPI ルーター定義。

- /send-test-notifications（メソッド非依存。OPTIONS はプリフライトとして扱う）
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from app.reports.schemas import parse_report_payload

from .schemas import NotificationErrorResponse
from .service import NotificationDispatcher

logger = logging.getLogger(__name__)

router = APIRouter(tags=["notifications"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

DEFAULT_ERROR_MESSAGE = "Notification sending failed"


def get_app_dispatcher(request: Request) -> NotificationDispatcher:
    """
    create_app() で起動時に組み立てた NotificationDispatcher を返す。

    テストでは app.dependency_overrides で差し替える。
    """
    return request.app.state.notification_dispatcher


@router.api_route(
    "/send-test-notifications",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    summary="テストカテゴリの報告を SMS / Email で通知",
    description=(
        "`{ reportData: Report }` を受け取り、SMS と Email を並行送信して結果を返す。"
        "片方のチャンネルが失敗しても 200 を返し、該当する *_sent が false になる。"
    ),
)
async def send_test_notifications(
    request: Request,
    dispatcher: NotificationDispatcher = Depends(get_app_dispatcher),
) -> Response:
    """
    報告 1 件分の通知を送信するエンドポイント。

    - OPTIONS → 空ボディ + CORS ヘッダ（送信は行わない）
    - 正常系 → 200 + NotificationDispatchResponse
    - JSON 不正 / reportData 欠落 / 本文生成エラー → 500 + NotificationErrorResponse
    """
    if request.method == "OPTIONS":
        return Response(headers=CORS_HEADERS)

    try:
        body = await request.json()
        report = parse_report_payload(body)
        logger.info("Processing test category notification for report: %s", report.id)
        result = await dispatcher.dispatch(report)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Error in send-test-notifications handler")
        error = NotificationErrorResponse(error=str(exc) or DEFAULT_ERROR_MESSAGE)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error.model_dump(),
            headers=CORS_HEADERS,
        )

    return JSONResponse(content=result.model_dump(), headers=CORS_HEADERS)
