# services/relay/__init__.py
"""
Telegram ↔ OpenAI relay with Firestore-backed conversation history.

Firestore Path: conversations/{conversation_id}

Usage:
    from services.relay import (
        WebhookHandler,
        create_conversation_store,
        create_completion_client,
        create_notifier,
    )

    handler = WebhookHandler(
        store=create_conversation_store(),
        completion_client=create_completion_client(openai_api_key="sk-..."),
        notifier=create_notifier(bot_token="123:abc"),
        system_prompt="You are a helpful assistant.",
        welcome_message="Hi!",
    )

    ack = await handler.acknowledge(update)   # update = Telegram JSON
    print(ack.status_code)
"""

from .models import (
    Role,
    Message,
    Conversation,
    ChatEvent,
)

from .errors import (
    RelayError,
    StoreReadError,
    StoreWriteError,
    CompletionServiceError,
    NotifyError,
    MalformedPayload,
    LoadResult,
    SaveResult,
    CompletionResult,
    NotifyResult,
)

from .identity import resolve_conversation_id
from .directive import inject_directive

from .conversation_store import (
    ConversationStore,
    FirestoreConversationStore,
    create_conversation_store,
)

from .completion_client import (
    CompletionClient,
    OpenAICompletionClient,
    create_completion_client,
)

from .notifier import (
    Notifier,
    TelegramNotifier,
    create_notifier,
)

from .prompts import (
    DEFAULT_SYSTEM_PROMPT,
    DEFAULT_WELCOME_MESSAGE,
    START_COMMAND,
    load_welcome_message,
)

from .webhook_handler import (
    WebhookHandler,
    TurnState,
    TurnOutcome,
    Acknowledgment,
)

__all__ = [
    # Models
    "Role",
    "Message",
    "Conversation",
    "ChatEvent",

    # Errors and results
    "RelayError",
    "StoreReadError",
    "StoreWriteError",
    "CompletionServiceError",
    "NotifyError",
    "MalformedPayload",
    "LoadResult",
    "SaveResult",
    "CompletionResult",
    "NotifyResult",

    # Pure helpers
    "resolve_conversation_id",
    "inject_directive",

    # Clients
    "ConversationStore",
    "FirestoreConversationStore",
    "create_conversation_store",
    "CompletionClient",
    "OpenAICompletionClient",
    "create_completion_client",
    "Notifier",
    "TelegramNotifier",
    "create_notifier",

    # Prompts
    "DEFAULT_SYSTEM_PROMPT",
    "DEFAULT_WELCOME_MESSAGE",
    "START_COMMAND",
    "load_welcome_message",

    # Handler
    "WebhookHandler",
    "TurnState",
    "TurnOutcome",
    "Acknowledgment",
]
