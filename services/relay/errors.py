# services/relay/errors.py
"""
Relay error taxonomy and per-operation result values.

Client operations never raise these errors; they return a result object
carrying the error, and the webhook handler decides how to continue.
Anything else that escapes the handler is an unexpected fault.
"""

from dataclasses import dataclass, field
from typing import Optional

from .models import Message


class RelayError(Exception):
    """Base class for every modelled relay failure."""


class StoreReadError(RelayError):
    """History could not be loaded; the turn continues with empty history."""


class StoreWriteError(RelayError):
    """History could not be saved; the reply is still sent."""


class CompletionServiceError(RelayError):
    """The completion service failed; the turn is aborted."""


class NotifyError(RelayError):
    """The reply could not be delivered to the chat."""


class MalformedPayload(RelayError):
    """The inbound update has no routable message body."""


@dataclass
class LoadResult:
    messages: list[Message] = field(default_factory=list)
    error: Optional[StoreReadError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class SaveResult:
    ok: bool = True
    error: Optional[StoreWriteError] = None


@dataclass
class CompletionResult:
    text: Optional[str] = None
    error: Optional[CompletionServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None


@dataclass
class NotifyResult:
    delivered: bool = True
    error: Optional[NotifyError] = None
