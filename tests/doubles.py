# tests/doubles.py
"""In-memory stand-ins for the store, completion client and notifier."""

from services.relay import (
    CompletionResult,
    CompletionServiceError,
    LoadResult,
    Message,
    NotifyError,
    NotifyResult,
    SaveResult,
    StoreReadError,
    StoreWriteError,
)


class InMemoryConversationStore:
    """Keeps records as plain dicts, the way Firestore would return them."""

    def __init__(self):
        self.records: dict[str, dict] = {}
        self.loads: list[str] = []
        self.saves: list[str] = []
        self.fail_load = False
        self.fail_save = False

    async def load(self, conversation_id: str) -> LoadResult:
        self.loads.append(conversation_id)
        if self.fail_load:
            return LoadResult(error=StoreReadError("store unavailable"))
        record = self.records.get(conversation_id)
        if record is None:
            return LoadResult(messages=[])
        return LoadResult(messages=[Message.from_dict(m) for m in record["messages"]])

    async def save(self, conversation_id: str, messages: list[Message]) -> SaveResult:
        self.saves.append(conversation_id)
        if self.fail_save:
            return SaveResult(ok=False, error=StoreWriteError("store unavailable"))
        self.records[conversation_id] = {"messages": [m.to_dict() for m in messages]}
        return SaveResult(ok=True)


class FakeCompletionClient:
    def __init__(self, reply: str = "Hi! How can I help?"):
        self.reply = reply
        self.calls: list[list[Message]] = []
        self.fail = False

    async def complete(self, messages: list[Message]) -> CompletionResult:
        self.calls.append(list(messages))
        if self.fail:
            return CompletionResult(error=CompletionServiceError("service down"))
        return CompletionResult(text=self.reply)


class FakeNotifier:
    def __init__(self):
        self.sent: list[tuple[int, str]] = []
        self.fail = False

    async def send(self, chat_id: int, text: str) -> NotifyResult:
        if self.fail:
            return NotifyResult(delivered=False, error=NotifyError("telegram down"))
        self.sent.append((chat_id, text))
        return NotifyResult(delivered=True)


def make_update(text: str = "Hello", chat_id: int = 42, username: str = None) -> dict:
    chat = {"id": chat_id, "type": "private"}
    if username:
        chat["username"] = username
    return {"update_id": 1, "message": {"message_id": 7, "chat": chat, "text": text}}
