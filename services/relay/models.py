# services/relay/models.py
"""
Data models for the relay.

Message        - one {role, content} entry, replayed verbatim to the model
Conversation   - the ordered history stored under one conversation id
ChatEvent      - the routable part of an inbound Telegram update
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """Single message in a conversation."""
    role: Role
    content: str

    def to_dict(self) -> dict:
        return {"role": Role(self.role).value, "content": self.content}

    @classmethod
    def from_dict(cls, data: dict) -> "Message":
        # Raises ValueError on an unknown role, KeyError on a missing field
        return cls(role=Role(data["role"]), content=str(data["content"]))

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role=Role.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=Role.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role=Role.ASSISTANT, content=content)


@dataclass
class Conversation:
    """A chat's full history, keyed by its conversation id."""
    conversation_id: str
    messages: list[Message] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"messages": [m.to_dict() for m in self.messages]}

    @classmethod
    def from_dict(cls, conversation_id: str, data: dict) -> "Conversation":
        raw = data.get("messages") or []
        if not isinstance(raw, list):
            raise ValueError(f"messages must be a list, got {type(raw).__name__}")
        return cls(
            conversation_id=conversation_id,
            messages=[Message.from_dict(m) for m in raw],
        )


@dataclass
class ChatEvent:
    """Inbound chat message extracted from a Telegram update."""
    chat_id: int
    text: str
    username: Optional[str] = None

    @classmethod
    def from_update(cls, update: Any) -> Optional["ChatEvent"]:
        """
        Parse a Telegram update.

        Returns None for anything that is not a routable text message:
        no `message`, no `chat.id`, or no string `text`.
        """
        if not isinstance(update, dict):
            return None

        message = update.get("message")
        if not isinstance(message, dict):
            return None

        chat = message.get("chat")
        if not isinstance(chat, dict):
            return None

        chat_id = chat.get("id")
        if isinstance(chat_id, bool) or not isinstance(chat_id, int):
            return None

        text = message.get("text")
        if not isinstance(text, str):
            return None

        username = chat.get("username")
        if not isinstance(username, str) or not username:
            username = None

        return cls(chat_id=chat_id, text=text, username=username)
