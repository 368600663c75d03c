# services/relay/webhook_handler.py
"""
Webhook Handler - runs one Telegram update through the relay.

Per update:
    RECEIVED → COMMAND_CHECK → IDENTITY_RESOLVED → HISTORY_LOADED
    → DIRECTIVE_INJECTED → TURN_APPENDED → COMPLETION_REQUESTED
    → REPLY_APPENDED → PERSISTED → NOTIFIED → ACKNOWLEDGED

Short circuits:
- no routable message           → ACKNOWLEDGED, nothing else happens
- "/start" (after trimming)     → welcome text sent, history untouched
- completion failure            → turn aborted, nothing saved or sent

Store and delivery failures are logged and the turn carries on. Telegram
always gets a success acknowledgment for handled updates so it does not
redeliver them; only unexpected faults produce a failure acknowledgment.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from loguru import logger

from .completion_client import CompletionClient
from .conversation_store import ConversationStore
from .directive import inject_directive
from .errors import MalformedPayload, RelayError
from .identity import resolve_conversation_id
from .models import ChatEvent, Message
from .notifier import Notifier
from .prompts import START_COMMAND


class TurnState(str, Enum):
    RECEIVED = "received"
    COMMAND_CHECK = "command_check"
    IDENTITY_RESOLVED = "identity_resolved"
    HISTORY_LOADED = "history_loaded"
    DIRECTIVE_INJECTED = "directive_injected"
    TURN_APPENDED = "turn_appended"
    COMPLETION_REQUESTED = "completion_requested"
    REPLY_APPENDED = "reply_appended"
    PERSISTED = "persisted"
    NOTIFIED = "notified"
    ACKNOWLEDGED = "acknowledged"


@dataclass
class TurnOutcome:
    """What happened while handling one update."""
    states: list[TurnState] = field(default_factory=list)
    chat_id: Optional[int] = None
    conversation_id: Optional[str] = None
    reply: Optional[str] = None
    errors: list[RelayError] = field(default_factory=list)

    def enter(self, state: TurnState):
        self.states.append(state)

    @property
    def state(self) -> Optional[TurnState]:
        return self.states[-1] if self.states else None

    @property
    def persisted(self) -> bool:
        return TurnState.PERSISTED in self.states

    def has_error(self, error_type: type) -> bool:
        return any(isinstance(e, error_type) for e in self.errors)


@dataclass
class Acknowledgment:
    """Response owed to Telegram for one webhook call."""
    success: bool
    status_code: int
    body: str
    outcome: Optional[TurnOutcome] = None

    @classmethod
    def ok(cls, outcome: TurnOutcome = None) -> "Acknowledgment":
        return cls(success=True, status_code=200, body="OK", outcome=outcome)

    @classmethod
    def failure(cls) -> "Acknowledgment":
        return cls(success=False, status_code=500, body="Internal Server Error")


class WebhookHandler:
    """Orchestrates store, completion client and notifier for each update."""

    def __init__(
        self,
        store: ConversationStore,
        completion_client: CompletionClient,
        notifier: Notifier,
        system_prompt: str,
        welcome_message: str,
    ):
        self.store = store
        self.completion_client = completion_client
        self.notifier = notifier
        self.system_prompt = system_prompt
        self.welcome_message = welcome_message

    async def acknowledge(self, update: Any) -> Acknowledgment:
        """Handle an update and map the result to an acknowledgment."""
        try:
            outcome = await self.handle(update)
        except Exception:
            event = ChatEvent.from_update(update)
            chat_id = event.chat_id if event else None
            logger.exception(f"❌ Error handling Telegram webhook (chat={chat_id})")
            return Acknowledgment.failure()

        return Acknowledgment.ok(outcome)

    async def handle(self, update: Any) -> TurnOutcome:
        outcome = TurnOutcome()
        outcome.enter(TurnState.RECEIVED)

        event = ChatEvent.from_update(update)
        if event is None:
            logger.info("📭 Update without a text message, ignoring")
            outcome.errors.append(MalformedPayload("no routable message in update"))
            outcome.enter(TurnState.ACKNOWLEDGED)
            return outcome

        outcome.chat_id = event.chat_id
        logger.info(f"📩 Message from chat {event.chat_id}: {event.text[:80]!r}")

        outcome.enter(TurnState.COMMAND_CHECK)
        if event.text.strip() == START_COMMAND:
            await self._send_welcome(event, outcome)
            outcome.enter(TurnState.ACKNOWLEDGED)
            return outcome

        await self._run_turn(event, outcome)
        outcome.enter(TurnState.ACKNOWLEDGED)
        return outcome

    async def _send_welcome(self, event: ChatEvent, outcome: TurnOutcome):
        result = await self.notifier.send(event.chat_id, self.welcome_message)
        if result.error:
            outcome.errors.append(result.error)
        else:
            outcome.reply = self.welcome_message
            outcome.enter(TurnState.NOTIFIED)

    async def _run_turn(self, event: ChatEvent, outcome: TurnOutcome):
        conversation_id = resolve_conversation_id(event.chat_id, event.username)
        outcome.conversation_id = conversation_id
        outcome.enter(TurnState.IDENTITY_RESOLVED)

        loaded = await self.store.load(conversation_id)
        if loaded.error:
            # Degrade to empty history
            logger.warning(f"⚠️ Continuing {conversation_id} with empty history")
            outcome.errors.append(loaded.error)
        outcome.enter(TurnState.HISTORY_LOADED)

        messages = inject_directive(loaded.messages, self.system_prompt)
        outcome.enter(TurnState.DIRECTIVE_INJECTED)

        messages.append(Message.user(event.text))
        outcome.enter(TurnState.TURN_APPENDED)

        completion = await self.completion_client.complete(messages)
        outcome.enter(TurnState.COMPLETION_REQUESTED)
        if not completion.ok:
            logger.error(f"❌ No reply for {conversation_id}, turn aborted")
            if completion.error:
                outcome.errors.append(completion.error)
            return

        reply = completion.text
        messages.append(Message.assistant(reply))
        outcome.reply = reply
        outcome.enter(TurnState.REPLY_APPENDED)

        saved = await self.store.save(conversation_id, messages)
        if saved.ok:
            outcome.enter(TurnState.PERSISTED)
        else:
            logger.error(f"❌ History for {conversation_id} not saved, sending reply anyway")
            if saved.error:
                outcome.errors.append(saved.error)

        notified = await self.notifier.send(event.chat_id, reply)
        if notified.error:
            outcome.errors.append(notified.error)
        else:
            outcome.enter(TurnState.NOTIFIED)

        logger.info(
            f"✅ Turn complete | {conversation_id} | "
            f"messages={len(messages)} persisted={saved.ok} delivered={notified.delivered}"
        )
