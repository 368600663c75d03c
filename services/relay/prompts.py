# services/relay/prompts.py
"""
Directive and welcome text.

SYSTEM_PROMPT overrides the default directive; the /start welcome text is
read from a file so it can be edited without a deploy of the code.
"""

from pathlib import Path
from typing import Union

from loguru import logger


DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant."

START_COMMAND = "/start"

DEFAULT_WELCOME_MESSAGE = (
    "👋 Hi! I'm an AI assistant.\n\n"
    "Send me any message and I'll reply. I remember our conversation, "
    "so feel free to ask follow-up questions."
)


def load_welcome_message(path: Union[str, Path]) -> str:
    """Read the welcome text, falling back to the built-in default."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8").strip()
    except OSError as e:
        logger.warning(f"⚠️ Welcome message not readable at {path} ({e}), using default")
        return DEFAULT_WELCOME_MESSAGE

    return text or DEFAULT_WELCOME_MESSAGE
