"""
Live, ordered view of one channel.

MessageStream turns the store's change feed into an async iterator of
full snapshots:

    store change feed ──on_change──▶ changes queue ──pump──▶ snapshots queue ──▶ async for

The feed callbacks only enqueue. A single pump task re-queries the
channel for each queued change, one at a time, so snapshots come out in
the order the backend reported the changes. Every snapshot is the server's
ordering; nothing is merged or reordered here.
"""

import asyncio
import logging
from typing import Optional, Union

from shared.exceptions import BridgeItError

from .exceptions import ChannelSubscriptionError
from .interfaces import IMessageStore, StopWatching
from .models import Message

logger = logging.getLogger(__name__)

# Marker on the changes queue: "the backend reported a change"
_CHANGED = None
# Marker on the snapshots queue: "the stream was closed"
_CLOSED = object()


class MessageStream:
    """
    Cancellable stream of message snapshots for one channel.

    Usage:
        stream = await MessageStream("a_b", store).open()
        async with stream:
            async for messages in stream:
                render(messages)

    The stream never finishes on its own. Iteration stops after close(),
    or raises ChannelSubscriptionError once if the feed fails.
    """

    def __init__(self, channel_id: str, store: IMessageStore):
        self.channel_id = channel_id
        self._store = store
        self._changes: asyncio.Queue[Optional[ChannelSubscriptionError]] = asyncio.Queue()
        self._snapshots: asyncio.Queue[Union[list[Message], ChannelSubscriptionError, object]] = (
            asyncio.Queue()
        )
        self._stop_watching: Optional[StopWatching] = None
        self._pump: Optional[asyncio.Task] = None
        self._release: Optional[asyncio.Future] = None
        self._closed = False
        self._failed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def open(self) -> "MessageStream":
        """
        Establish the change feed and queue the initial snapshot.

        The feed is started before the first query so that no change can
        fall between the initial snapshot and the subscription.

        Raises:
            ChannelSubscriptionError: If the feed cannot be established
        """
        if self._pump is not None or self._closed:
            return self
        self._stop_watching = await self._store.watch(
            self.channel_id,
            on_change=self._on_change,
            on_error=self._on_error,
        )
        self._changes.put_nowait(_CHANGED)
        self._pump = asyncio.create_task(self._run())
        logger.debug(f"Opened stream for channel {self.channel_id}")
        return self

    async def close(self) -> None:
        """
        Release the change feed. Safe to call any number of times.

        The release runs in its own task and is shielded, so a caller that
        is cancelled while closing (a disconnected SSE client) still gets
        the feed released. The caller's cancellation is re-raised.
        """
        if not self._closed:
            self._closed = True
            self._snapshots.put_nowait(_CLOSED)
        if self._release is None or (self._release.done() and self._stop_watching is not None):
            self._release = asyncio.ensure_future(self._release_feed())
        await asyncio.shield(self._release)

    def __aiter__(self) -> "MessageStream":
        return self

    async def __anext__(self) -> list[Message]:
        if self._closed or self._failed:
            raise StopAsyncIteration
        item = await self._snapshots.get()
        if item is _CLOSED:
            raise StopAsyncIteration
        if isinstance(item, ChannelSubscriptionError):
            self._failed = True
            raise item
        return item  # type: ignore[return-value]

    async def __aenter__(self) -> "MessageStream":
        return await self.open()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _on_change(self) -> None:
        if not self._closed:
            self._changes.put_nowait(_CHANGED)

    def _on_error(self, error: Exception) -> None:
        if self._closed:
            return
        if not isinstance(error, ChannelSubscriptionError):
            error = ChannelSubscriptionError(self.channel_id, str(error))
        self._changes.put_nowait(error)

    async def _run(self) -> None:
        while True:
            item = await self._changes.get()
            if item is not _CHANGED:
                self._snapshots.put_nowait(item)
                return
            try:
                messages = await self._store.list_messages(self.channel_id)
            except BridgeItError as e:
                logger.warning(f"Snapshot query failed for channel {self.channel_id}: {e.message}")
                self._snapshots.put_nowait(ChannelSubscriptionError(self.channel_id, e.message))
                return
            self._snapshots.put_nowait(messages)

    async def _release_feed(self) -> None:
        pump, self._pump = self._pump, None
        if pump is not None:
            pump.cancel()
            await asyncio.wait({pump})

        stop = self._stop_watching
        if stop is None:
            return
        try:
            await stop()
        except BridgeItError as e:
            # Kept so a later close() can try again.
            logger.warning(f"Error releasing channel {self.channel_id}: {e.message}")
            return
        self._stop_watching = None
        logger.debug(f"Closed stream for channel {self.channel_id}")
