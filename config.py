# config.py
"""
Runtime configuration, read from the environment (.env is loaded by main.py).

Required:
    OPENAI_API_KEY        - completion service credential
    TELEGRAM_BOT_TOKEN    - Telegram delivery credential

Optional:
    SYSTEM_PROMPT, OPENAI_MODEL, OPENAI_TIMEOUT, TELEGRAM_TIMEOUT,
    WELCOME_MESSAGE_PATH, FIRESTORE_COLLECTION, PORT, LOG_LEVEL,
    FIREBASE_SERVICE_ACCOUNT_BASE64 / FIREBASE_SERVICE_ACCOUNT
"""

import os
from dataclasses import dataclass
from typing import Optional

from services.relay.conversation_store import DEFAULT_COLLECTION
from services.relay.completion_client import DEFAULT_MODEL
from services.relay.prompts import DEFAULT_SYSTEM_PROMPT


class ConfigError(RuntimeError):
    """A required setting is missing or invalid."""


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {value!r}")


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}")


@dataclass
class Settings:
    openai_api_key: str
    telegram_bot_token: str
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    openai_model: str = DEFAULT_MODEL
    openai_timeout: float = 60.0
    telegram_timeout: float = 10.0
    welcome_message_path: str = "welcome_message.txt"
    firestore_collection: str = DEFAULT_COLLECTION
    firebase_service_account_b64: Optional[str] = None
    firebase_service_account_path: Optional[str] = None
    port: int = 8080
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        openai_api_key = os.getenv("OPENAI_API_KEY", "")
        telegram_bot_token = os.getenv("TELEGRAM_BOT_TOKEN", "")

        missing = [
            name for name, value in (
                ("OPENAI_API_KEY", openai_api_key),
                ("TELEGRAM_BOT_TOKEN", telegram_bot_token),
            )
            if not value
        ]
        if missing:
            raise ConfigError(f"Missing required settings: {', '.join(missing)}")

        return cls(
            openai_api_key=openai_api_key,
            telegram_bot_token=telegram_bot_token,
            system_prompt=os.getenv("SYSTEM_PROMPT") or DEFAULT_SYSTEM_PROMPT,
            openai_model=os.getenv("OPENAI_MODEL") or DEFAULT_MODEL,
            openai_timeout=_float_env("OPENAI_TIMEOUT", 60.0),
            telegram_timeout=_float_env("TELEGRAM_TIMEOUT", 10.0),
            welcome_message_path=os.getenv("WELCOME_MESSAGE_PATH") or "welcome_message.txt",
            firestore_collection=os.getenv("FIRESTORE_COLLECTION") or DEFAULT_COLLECTION,
            firebase_service_account_b64=os.getenv("FIREBASE_SERVICE_ACCOUNT_BASE64"),
            firebase_service_account_path=os.getenv("FIREBASE_SERVICE_ACCOUNT"),
            port=_int_env("PORT", 8080),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        )
