# tests/test_identity.py
from services.relay import resolve_conversation_id


def test_chat_id_only():
    assert resolve_conversation_id(42) == "42"


def test_username_prefixes_chat_id():
    assert resolve_conversation_id(42, "alice") == "@alice-42"


def test_empty_username_is_ignored():
    assert resolve_conversation_id(42, "") == "42"
    assert resolve_conversation_id(42, None) == "42"


def test_negative_group_chat_id():
    assert resolve_conversation_id(-100123) == "-100123"
