# tests/conftest.py
"""Shared fixtures wiring the relay to in-memory doubles."""

import pytest
from fastapi.testclient import TestClient

from main import create_app
from services.relay import WebhookHandler
from tests.doubles import FakeCompletionClient, FakeNotifier, InMemoryConversationStore

SYSTEM_PROMPT = "You are a test assistant."
WELCOME_MESSAGE = "Welcome to the test bot!"


@pytest.fixture
def store() -> InMemoryConversationStore:
    return InMemoryConversationStore()


@pytest.fixture
def completion_client() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def handler(store, completion_client, notifier) -> WebhookHandler:
    return WebhookHandler(
        store=store,
        completion_client=completion_client,
        notifier=notifier,
        system_prompt=SYSTEM_PROMPT,
        welcome_message=WELCOME_MESSAGE,
    )


@pytest.fixture
def client(handler) -> TestClient:
    """Test client for the HTTP surface, wired to the in-memory doubles."""
    return TestClient(create_app(webhook_handler=handler))
