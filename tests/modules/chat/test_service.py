"""Tests for ChatService."""

import pytest
from unittest.mock import AsyncMock

from modules.chat.exceptions import (
    ChannelSubscriptionError,
    EmptyMessageError,
    MessageTooLongError,
    SelfConversationError,
)
from modules.chat.service import ChatService
from modules.profiles.exceptions import NotSignedInError
from modules.profiles.models import Session
from shared.exceptions import ExternalServiceError
from shared.models import AuthenticatedUser
from tests.conftest import make_profile
from tests.modules.chat.conftest import next_snapshot


U1 = AuthenticatedUser(id="u1", email="u1@example.com")
U2 = AuthenticatedUser(id="u2", email="u2@example.com")


@pytest.fixture
def profiles():
    profiles = AsyncMock()
    profiles.get_profile.side_effect = lambda user_id: make_profile(user_id)
    return profiles


@pytest.fixture
def service(store, profiles):
    return ChatService(store, profiles=profiles, separator="_", max_length=500)


class TestAppend:
    @pytest.mark.asyncio
    async def test_trims_and_stores(self, service, store):
        """Text is trimmed before the write."""
        message = await service.append_message("u1_u2", "u1", "u2", "  hello  ")
        assert message.text == "hello"
        assert message.read is False
        assert store.rows[0].text == "hello"

    @pytest.mark.asyncio
    async def test_whitespace_never_reaches_store(self):
        """Rejected text produces no write at all."""
        store = AsyncMock()
        service = ChatService(store, separator="_", max_length=500)
        with pytest.raises(EmptyMessageError):
            await service.append_message("u1_u2", "u1", "u2", "   ")
        store.insert_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_length_bound(self, service, store):
        await service.append_message("u1_u2", "u1", "u2", "x" * 500)
        with pytest.raises(MessageTooLongError):
            await service.append_message("u1_u2", "u1", "u2", "x" * 501)
        assert len(store.rows) == 1

    @pytest.mark.asyncio
    async def test_store_errors_propagate(self):
        """A failed write is reported; nothing is retried."""
        store = AsyncMock()
        store.insert_message.side_effect = ExternalServiceError("down", service="supabase")
        service = ChatService(store, separator="_", max_length=500)
        with pytest.raises(ExternalServiceError):
            await service.append_message("u1_u2", "u1", "u2", "hi")
        store.insert_message.assert_awaited_once()


class TestSessionOperations:
    @pytest.mark.asyncio
    async def test_send_message_derives_channel(self, service, store):
        message = await service.send_message(Session(identity=U2), "u1", "hey")
        assert message.channel_id == "u1_u2"
        assert message.sender_id == "u2"
        assert message.receiver_id == "u1"

    @pytest.mark.asyncio
    async def test_send_requires_identity(self, service):
        with pytest.raises(NotSignedInError):
            await service.send_message(Session(), "u1", "hey")

    @pytest.mark.asyncio
    async def test_send_to_self_rejected(self, service, store):
        with pytest.raises(SelfConversationError):
            await service.send_message(Session(identity=U1), "u1", "hey")
        assert store.rows == []

    @pytest.mark.asyncio
    async def test_both_participants_share_a_channel(self, service):
        """Either side opening the conversation sees the other's writes."""
        stream_1 = await service.open_conversation(Session(identity=U1), "u2")
        stream_2 = await service.open_conversation(Session(identity=U2), "u1")
        try:
            assert stream_1.channel_id == stream_2.channel_id == "u1_u2"
            await next_snapshot(stream_1)
            await next_snapshot(stream_2)

            await service.send_message(Session(identity=U1), "u2", "ping")

            assert [m.text for m in await next_snapshot(stream_2)] == ["ping"]
            assert [m.text for m in await next_snapshot(stream_1)] == ["ping"]
        finally:
            await service.aclose()

    @pytest.mark.asyncio
    async def test_fresh_open_after_append(self, service):
        """A channel opened after an append delivers it last, with a timestamp."""
        await service.send_message(Session(identity=U1), "u2", "first")
        await service.send_message(Session(identity=U2), "u1", "second")

        stream = await service.open_channel("u1_u2")
        try:
            messages = await next_snapshot(stream)
            assert [m.text for m in messages] == ["first", "second"]
            assert messages[-1].timestamp is not None
        finally:
            await service.close_channel(stream)

    @pytest.mark.asyncio
    async def test_get_counterpart(self, service, profiles):
        profile = await service.get_counterpart("u2")
        profiles.get_profile.assert_awaited_once_with("u2")
        assert profile.id == "u2"

    @pytest.mark.asyncio
    async def test_get_messages_snapshot(self, service):
        await service.send_message(Session(identity=U1), "u2", "a")
        await service.send_message(Session(identity=U1), "u2", "b")
        messages = await service.get_messages("u1_u2")
        assert [m.text for m in messages] == ["a", "b"]


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_open_failure_is_not_tracked(self, service, store, failing_subscription):
        store.watch_error = failing_subscription
        with pytest.raises(ChannelSubscriptionError):
            await service.open_channel("u1_u2")
        assert service.open_stream_count == 0

    @pytest.mark.asyncio
    async def test_close_channel_is_idempotent(self, service, store):
        stream = await service.open_channel("u1_u2")
        await service.close_channel(stream)
        await service.close_channel(stream)
        assert store.stop_calls == 1
        assert service.open_stream_count == 0

    @pytest.mark.asyncio
    async def test_aclose_releases_everything(self, service, store):
        """Shutdown closes every stream still open."""
        await service.open_channel("u1_u2")
        await service.open_channel("u1_u3")
        assert service.open_stream_count == 2

        await service.aclose()

        assert service.open_stream_count == 0
        assert store.stop_calls == 2
