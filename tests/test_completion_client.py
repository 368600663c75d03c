# tests/test_completion_client.py
import asyncio
from types import SimpleNamespace

from openai import OpenAIError

from services.relay import CompletionServiceError, Message, OpenAICompletionClient


class FakeCompletions:
    def __init__(self, content="Sure!", error: Exception = None):
        self.content = content
        self.error = error
        self.requests: list[dict] = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))],
            usage=SimpleNamespace(total_tokens=12),
        )


def make_client(completions: FakeCompletions, model: str = "gpt-4o-mini") -> OpenAICompletionClient:
    fake_openai = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return OpenAICompletionClient(model=model, client=fake_openai)


MESSAGES = [Message.system("Be nice."), Message.user("Hello")]


def test_sends_full_history_and_model():
    completions = FakeCompletions()
    client = make_client(completions, model="gpt-4o")

    result = asyncio.run(client.complete(MESSAGES))

    assert result.ok
    assert result.text == "Sure!"
    assert completions.requests == [{
        "model": "gpt-4o",
        "messages": [
            {"role": "system", "content": "Be nice."},
            {"role": "user", "content": "Hello"},
        ],
    }]


def test_service_error_becomes_result_error():
    client = make_client(FakeCompletions(error=OpenAIError("rate limited")))

    result = asyncio.run(client.complete(MESSAGES))

    assert not result.ok
    assert result.text is None
    assert isinstance(result.error, CompletionServiceError)


def test_empty_reply_is_an_error():
    client = make_client(FakeCompletions(content=None))

    result = asyncio.run(client.complete(MESSAGES))

    assert isinstance(result.error, CompletionServiceError)
