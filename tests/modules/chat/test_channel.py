import pytest

from modules.chat.channel import derive_channel_id, normalize_message_text
from modules.chat.exceptions import (
    EmptyMessageError,
    InvalidParticipantError,
    MessageTooLongError,
    SelfConversationError,
)
from shared.exceptions import ValidationError


class TestDeriveChannelId:
    def test_sorted_pair(self):
        """IDs are sorted and joined with the separator."""
        assert derive_channel_id("u2", "u1") == "u1_u2"
        assert derive_channel_id("u1", "u2") == "u1_u2"

    @pytest.mark.parametrize(
        "a, b",
        [
            ("alice", "bob"),
            ("3f1c", "a9e0"),
            ("User", "user"),
            ("b7c2d0e4-1111-4a4a-9999-000000000001", "0a1b2c3d-2222-4b4b-8888-000000000002"),
        ],
    )
    def test_symmetric(self, a, b):
        """Argument order never changes the channel."""
        assert derive_channel_id(a, b) == derive_channel_id(b, a)

    def test_custom_separator(self):
        assert derive_channel_id("b", "a", separator=":") == "a:b"

    def test_self_conversation_rejected(self):
        """A user cannot open a channel with themselves."""
        with pytest.raises(SelfConversationError) as exc_info:
            derive_channel_id("u1", "u1")
        assert isinstance(exc_info.value, ValidationError)

    @pytest.mark.parametrize("a, b", [("", "u1"), ("u1", ""), ("", "")])
    def test_empty_ids_rejected(self, a, b):
        with pytest.raises(InvalidParticipantError):
            derive_channel_id(a, b)

    def test_ids_are_not_trimmed(self):
        """IDs are opaque: whitespace is significant."""
        assert derive_channel_id(" u1", "u1") == " u1_u1"


class TestNormalizeMessageText:
    def test_trims(self):
        assert normalize_message_text("  hello  ") == "hello"

    def test_keeps_inner_whitespace(self):
        assert normalize_message_text(" hello   world\n") == "hello   world"

    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    def test_empty_rejected(self, text):
        with pytest.raises(EmptyMessageError):
            normalize_message_text(text)

    def test_length_bound_after_trim(self):
        """The bound applies to the trimmed text."""
        assert len(normalize_message_text("  " + "x" * 500 + "  ")) == 500

    def test_too_long_rejected(self):
        with pytest.raises(MessageTooLongError) as exc_info:
            normalize_message_text("x" * 501)
        assert exc_info.value.details == {"length": 501, "max_length": 500}

    def test_custom_bound(self):
        with pytest.raises(MessageTooLongError):
            normalize_message_text("abcdef", max_length=5)
