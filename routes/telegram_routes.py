# routes/telegram_routes.py
"""
Telegram webhook route.

Register the webhook with Telegram:
    https://api.telegram.org/bot<TOKEN>/setWebhook?url=https://<host>/telegram/webhook

Add to your app:
    from routes.telegram_routes import router as telegram_router
    app.include_router(telegram_router, prefix="/telegram", tags=["Telegram"])
"""

import json

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from loguru import logger

from services.relay import WebhookHandler

router = APIRouter()


def get_webhook_handler(request: Request) -> WebhookHandler:
    """Handler built at startup and stored on app.state."""
    return request.app.state.webhook_handler


@router.post("/webhook", response_class=PlainTextResponse)
async def telegram_webhook(request: Request):
    """
    Receive one Telegram update.

    Always 200 for updates that were handled (including ignored ones) so
    Telegram does not redeliver them; 500 only on an unexpected fault.
    """
    try:
        update = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("⚠️ Webhook body is not valid JSON, ignoring")
        update = None

    handler = get_webhook_handler(request)
    ack = await handler.acknowledge(update)

    return PlainTextResponse(ack.body, status_code=ack.status_code)
