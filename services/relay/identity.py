# services/relay/identity.py
"""Conversation identity derived from a Telegram chat."""

from typing import Optional


def resolve_conversation_id(chat_id: int, username: Optional[str] = None) -> str:
    """
    Stable store key for a chat.

    The numeric chat id keeps the key unique even if the username changes;
    the username, when present, makes the stored document easy to find.

    Examples:
        resolve_conversation_id(42)           -> "42"
        resolve_conversation_id(42, "alice")  -> "@alice-42"
    """
    if username:
        return f"@{username}-{chat_id}"
    return str(chat_id)
