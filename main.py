# main.py
"""
Telegram bot backed by OpenAI, with conversation history in Firestore.

Run locally:
    python main.py
or:
    uvicorn main:create_app --factory --host 0.0.0.0 --port 8080
"""

import base64
import json
import sys
from typing import Optional

import firebase_admin
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from firebase_admin import credentials
from loguru import logger

from config import Settings
from routes.telegram_routes import router as telegram_router
from services.relay import (
    WebhookHandler,
    create_completion_client,
    create_conversation_store,
    create_notifier,
    load_welcome_message,
)

load_dotenv()

HEALTH_MESSAGE = "Telegram bot with Firestore is up and running!"


# ======================================================
# LOGGING
# ======================================================
def configure_logging(level: str = "INFO"):
    logger.remove()
    logger.add(sys.stdout, level=level)


# ======================================================
# FIREBASE
# ======================================================
def init_firebase(settings: Settings):
    """Initialise the default Firebase app once per process."""
    if firebase_admin._apps:
        return

    if settings.firebase_service_account_b64:
        service_account_json = base64.b64decode(settings.firebase_service_account_b64).decode()
        cred = credentials.Certificate(json.loads(service_account_json))
        logger.info("🔐 Firebase initialised from base64 service account")
    elif settings.firebase_service_account_path:
        cred = credentials.Certificate(settings.firebase_service_account_path)
        logger.info(f"🔐 Firebase initialised from {settings.firebase_service_account_path}")
    else:
        # Application default credentials (e.g. the Cloud Run service account)
        cred = None
        logger.info("🔐 Firebase initialised with application default credentials")

    firebase_admin.initialize_app(cred)


# ======================================================
# WIRING
# ======================================================
def build_webhook_handler(settings: Settings) -> WebhookHandler:
    init_firebase(settings)

    return WebhookHandler(
        store=create_conversation_store(collection=settings.firestore_collection),
        completion_client=create_completion_client(
            openai_api_key=settings.openai_api_key,
            model=settings.openai_model,
            timeout=settings.openai_timeout,
        ),
        notifier=create_notifier(
            bot_token=settings.telegram_bot_token,
            timeout=settings.telegram_timeout,
        ),
        system_prompt=settings.system_prompt,
        welcome_message=load_welcome_message(settings.welcome_message_path),
    )


def create_app(
    settings: Optional[Settings] = None,
    webhook_handler: Optional[WebhookHandler] = None,
) -> FastAPI:
    """
    Application factory.

    Pass `webhook_handler` to run with substitute clients (tests); otherwise
    one is built from `settings`, which default to the environment.
    """
    if webhook_handler is None:
        settings = settings or Settings.from_env()
        configure_logging(settings.log_level)
        webhook_handler = build_webhook_handler(settings)

    app = FastAPI(title="Telegram OpenAI Relay")
    app.state.webhook_handler = webhook_handler
    app.include_router(telegram_router, prefix="/telegram", tags=["Telegram"])

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", response_class=PlainTextResponse)
    def home():
        return HEALTH_MESSAGE

    return app


# ======================================================
# START SERVER
# ======================================================
if __name__ == "__main__":
    import uvicorn

    settings = Settings.from_env()
    app = create_app(settings)
    logger.info(f"🚀 Server is listening on port {settings.port}")
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
