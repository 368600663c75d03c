# services/relay/conversation_store.py
"""
Conversation Store - persists each chat's message list in Firestore.

Firestore Structure:
└── conversations/{conversation_id}
        messages: [{role, content}, ...]

The whole list is read and rewritten on every turn; there are no partial
updates and no concurrency checks (last writer wins).
"""

from typing import Protocol

from firebase_admin import firestore_async
from loguru import logger

from .errors import LoadResult, SaveResult, StoreReadError, StoreWriteError
from .models import Conversation, Message


DEFAULT_COLLECTION = "conversations"


class ConversationStore(Protocol):
    """Anything the webhook handler can load history from and save it to."""

    async def load(self, conversation_id: str) -> LoadResult: ...

    async def save(self, conversation_id: str, messages: list[Message]) -> SaveResult: ...


class FirestoreConversationStore:
    """ConversationStore backed by a Firestore collection."""

    def __init__(self, db=None, collection: str = DEFAULT_COLLECTION):
        # firestore_async.client() needs an initialised firebase app
        self.db = db if db is not None else firestore_async.client()
        self.collection = collection

    def _doc_ref(self, conversation_id: str):
        return self.db.collection(self.collection).document(conversation_id)

    async def load(self, conversation_id: str) -> LoadResult:
        """
        Load the stored messages for a conversation.

        A missing document is an empty history, not an error. Any failure
        is returned as a StoreReadError with an empty history.
        """
        try:
            doc = await self._doc_ref(conversation_id).get()
            if not doc.exists:
                logger.info(f"🆕 No history yet for {conversation_id}")
                return LoadResult(messages=[])

            conversation = Conversation.from_dict(conversation_id, doc.to_dict() or {})
            logger.debug(f"📂 Loaded {len(conversation.messages)} messages for {conversation_id}")
            return LoadResult(messages=conversation.messages)

        except Exception as e:
            logger.warning(f"⚠️ Failed to load conversation {conversation_id}: {e}")
            return LoadResult(messages=[], error=StoreReadError(str(e)))

    async def save(self, conversation_id: str, messages: list[Message]) -> SaveResult:
        """Overwrite the stored messages for a conversation."""
        conversation = Conversation(conversation_id=conversation_id, messages=list(messages))
        try:
            await self._doc_ref(conversation_id).set(conversation.to_dict())
            logger.info(f"💾 Saved {len(messages)} messages for {conversation_id}")
            return SaveResult(ok=True)

        except Exception as e:
            logger.error(f"❌ Failed to save conversation {conversation_id}: {e}")
            return SaveResult(ok=False, error=StoreWriteError(str(e)))


def create_conversation_store(collection: str = DEFAULT_COLLECTION) -> FirestoreConversationStore:
    """Factory function to create a FirestoreConversationStore."""
    return FirestoreConversationStore(collection=collection)
