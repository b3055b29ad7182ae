# backend/app/main.py

"""
バックエンドアプリケーションのエントリーポイント。

主な責務:
- /send-test-notifications エンドポイントを公開する
- /health エンドポイントを公開する
"""

from fastapi import FastAPI

from app.notifications.factory import get_notification_dispatcher
from app.notifications.router import router as notifications_router


def create_app() -> FastAPI:
    """
    FastAPI アプリケーションファクトリ。

    - テストカテゴリ通知エンドポイント (/send-test-notifications)
    - ヘルスチェックエンドポイント (/health)

    通知設定は起動時に一度だけ読み込む。設定が不正な場合はここで RuntimeError になる。
    """
    app = FastAPI(title="CivicConnect Notifier")
    app.state.notification_dispatcher = get_notification_dispatcher()

    # ルーター登録
    app.include_router(notifications_router)

    @app.get("/health", tags=["health"])
    def health_check() -> dict:
        """
        簡易ヘルスチェックエンドポイント。
        モニタリングや動作確認用。
        """
        return {"status": "ok"}

    return app


# uvicorn 実行時のエントリーポイント
app = create_app()
