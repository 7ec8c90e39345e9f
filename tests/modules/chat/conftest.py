"""
Pytest fixtures for chat module tests.

Provides an in-memory message store that behaves like the Supabase one:
server-assigned, strictly increasing timestamps and a change feed that
fires once per insert.
"""

import asyncio
import itertools
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from modules.chat.exceptions import ChannelSubscriptionError
from modules.chat.models import Message


class InMemoryMessageStore:
    """IMessageStore backed by a list."""

    def __init__(self):
        self.rows: list[Message] = []
        self.watchers: dict[str, list[tuple]] = {}
        self.stop_calls = 0
        self.watch_error: Optional[Exception] = None
        self.list_error: Optional[Exception] = None
        self.stop_error: Optional[Exception] = None
        # Seconds stop() takes, like the leave push of a real channel
        self.stop_delay = 0.0
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)
        self._ids = itertools.count(1)

    async def list_messages(self, channel_id: str) -> list[Message]:
        if self.list_error is not None:
            raise self.list_error
        rows = [m for m in self.rows if m.channel_id == channel_id]
        return sorted(rows, key=lambda m: m.timestamp)

    async def insert_message(self, channel_id, sender_id, receiver_id, text) -> Message:
        self._clock += timedelta(seconds=1)
        message = Message(
            id=str(next(self._ids)),
            channel_id=channel_id,
            text=text,
            sender_id=sender_id,
            receiver_id=receiver_id,
            timestamp=self._clock,
        )
        self.rows.append(message)
        for on_change, _ in list(self.watchers.get(channel_id, [])):
            on_change()
        return message

    async def watch(self, channel_id, on_change, on_error):
        if self.watch_error is not None:
            raise self.watch_error
        entry = (on_change, on_error)
        self.watchers.setdefault(channel_id, []).append(entry)

        async def stop():
            if self.stop_delay:
                await asyncio.sleep(self.stop_delay)
            if self.stop_error is not None:
                raise self.stop_error
            self.stop_calls += 1
            self.watchers[channel_id].remove(entry)

        return stop

    def fail_feed(self, channel_id: str, error: Exception) -> None:
        """Report a feed failure to every watcher of a channel."""
        for _, on_error in list(self.watchers.get(channel_id, [])):
            on_error(error)

    def watcher_count(self, channel_id: str) -> int:
        return len(self.watchers.get(channel_id, []))


async def next_snapshot(stream, timeout: float = 1.0) -> list[Message]:
    """Read one snapshot without hanging the test run."""
    return await asyncio.wait_for(stream.__anext__(), timeout)


@pytest.fixture
def store() -> InMemoryMessageStore:
    return InMemoryMessageStore()


@pytest.fixture
def failing_subscription() -> ChannelSubscriptionError:
    return ChannelSubscriptionError("u1_u2", "refused")
