# services/relay/notifier.py
"""Outbound Notifier - delivers reply text to a Telegram chat."""

import asyncio
from typing import Protocol

import requests
from loguru import logger

from .errors import NotifyError, NotifyResult


TELEGRAM_API_URL = "https://api.telegram.org"


class Notifier(Protocol):
    async def send(self, chat_id: int, text: str) -> NotifyResult: ...


class TelegramNotifier:
    """Sends messages through the Telegram Bot API `sendMessage` method."""

    def __init__(self, bot_token: str, timeout: float = 10.0, session: requests.Session = None):
        self.bot_token = bot_token
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {"Content-Type": "application/json"}

    @property
    def send_message_url(self) -> str:
        return f"{TELEGRAM_API_URL}/bot{self.bot_token}/sendMessage"

    def _post(self, chat_id: int, text: str) -> requests.Response:
        return self.session.post(
            self.send_message_url,
            headers=self.headers,
            json={"chat_id": chat_id, "text": text},
            timeout=self.timeout,
        )

    async def send(self, chat_id: int, text: str) -> NotifyResult:
        """Send `text` to `chat_id`. Failures are logged and returned, never raised."""
        try:
            # requests is blocking; keep the event loop free while it runs
            response = await asyncio.to_thread(self._post, chat_id, text)
        except requests.RequestException as e:
            logger.error(f"❌ Error sending message to Telegram chat {chat_id}: {e}")
            return NotifyResult(delivered=False, error=NotifyError(str(e)))

        if response.status_code != 200:
            logger.error(
                f"❌ Telegram sendMessage failed for chat {chat_id}: "
                f"{response.status_code} {response.text[:200]}"
            )
            return NotifyResult(
                delivered=False,
                error=NotifyError(f"HTTP {response.status_code}"),
            )

        logger.info(f"📤 Sent message to chat {chat_id}")
        return NotifyResult(delivered=True)


def create_notifier(bot_token: str, timeout: float = 10.0) -> TelegramNotifier:
    """Factory function to create a TelegramNotifier."""
    return TelegramNotifier(bot_token=bot_token, timeout=timeout)
