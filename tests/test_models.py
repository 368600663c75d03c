# tests/test_models.py
import pytest

from services.relay import ChatEvent, Conversation, Message, Role

from tests.doubles import make_update


def test_message_dict_roundtrip():
    data = {"role": "assistant", "content": "Hello"}
    message = Message.from_dict(data)

    assert message.role is Role.ASSISTANT
    assert message.to_dict() == data


def test_message_rejects_unknown_role():
    with pytest.raises(ValueError):
        Message.from_dict({"role": "tool", "content": "x"})


def test_conversation_from_record_keeps_order():
    record = {"messages": [
        {"role": "system", "content": "s"},
        {"role": "user", "content": "u"},
        {"role": "assistant", "content": "a"},
    ]}

    conversation = Conversation.from_dict("42", record)

    assert [m.role for m in conversation.messages] == [Role.SYSTEM, Role.USER, Role.ASSISTANT]
    assert conversation.to_dict() == record


def test_conversation_rejects_non_list_messages():
    with pytest.raises(ValueError):
        Conversation.from_dict("42", {"messages": "oops"})


def test_chat_event_from_update():
    event = ChatEvent.from_update(make_update("Hello", chat_id=42, username="alice"))

    assert event == ChatEvent(chat_id=42, text="Hello", username="alice")


def test_chat_event_without_username():
    event = ChatEvent.from_update(make_update("Hello", chat_id=42))

    assert event.username is None


@pytest.mark.parametrize("update", [
    None,
    [],
    {},
    {"update_id": 1},
    {"edited_message": {"chat": {"id": 1}, "text": "x"}},
    {"message": {"text": "no chat"}},
    {"message": {"chat": {"id": "42"}, "text": "string id"}},
    {"message": {"chat": {"id": 42}}},
    {"message": {"chat": {"id": 42}, "photo": [{"file_id": "abc"}]}},
])
def test_unroutable_updates(update):
    assert ChatEvent.from_update(update) is None
