"""
Message repository for database access.

Encapsulates the Supabase queries and the Realtime subscription for the
messages table. Runs on the async client because Realtime is only
available there.
"""

import asyncio
import logging
from typing import Optional

from realtime import NotConnectedError, RealtimeSubscribeStates
from supabase import AsyncClient

from shared.config import get_settings
from shared.repository import BaseRepository
from .exceptions import ChannelSubscriptionError
from .interfaces import ChangeCallback, ErrorCallback, IMessageStore, StopWatching
from .models import Message

logger = logging.getLogger(__name__)

FAILED_STATES = {
    RealtimeSubscribeStates.CHANNEL_ERROR,
    RealtimeSubscribeStates.TIMED_OUT,
    RealtimeSubscribeStates.CLOSED,
}


class MessageRepository(BaseRepository[Message], IMessageStore):
    """
    Repository for message data access.

    Timestamps are assigned by the database (column default now()), never
    by this process, so ordering always reflects the server.
    """

    def __init__(self, db: AsyncClient, table: Optional[str] = None) -> None:
        super().__init__(db)
        self._table = table or get_settings().messages_table

    async def list_messages(self, channel_id: str) -> list[Message]:
        """Every message in a channel, oldest first."""
        result = await self._aexecute(
            lambda: self._db.table(self._table)
            .select("*")
            .eq("channel_id", channel_id)
            .order("timestamp")
            .execute()
        )
        return [self._map_to_message(row) for row in result.data]

    async def insert_message(
        self,
        channel_id: str,
        sender_id: str,
        receiver_id: str,
        text: str,
    ) -> Message:
        """Insert a message and return the stored row."""
        data = {
            "channel_id": channel_id,
            "text": text,
            "sender_id": sender_id,
            "receiver_id": receiver_id,
            "read": False,
        }
        result = await self._aexecute(
            lambda: self._db.table(self._table).insert(data).execute()
        )
        return self._map_to_message(result.data[0])

    async def watch(
        self,
        channel_id: str,
        on_change: ChangeCallback,
        on_error: ErrorCallback,
    ) -> StopWatching:
        """
        Subscribe to postgres changes on this channel's rows.

        Waits for the server to confirm the join. Failures reported before
        the join are raised; failures after it go to on_error.
        """
        loop = asyncio.get_running_loop()
        joined: asyncio.Future[None] = loop.create_future()

        def on_status(status: RealtimeSubscribeStates, error: Optional[Exception] = None) -> None:
            if status == RealtimeSubscribeStates.SUBSCRIBED:
                if not joined.done():
                    joined.set_result(None)
                return
            if status in FAILED_STATES:
                failure = ChannelSubscriptionError(
                    channel_id,
                    str(error) if error else status.value,
                )
                if not joined.done():
                    joined.set_exception(failure)
                else:
                    on_error(failure)

        channel = self._db.channel(f"{self._table}:{channel_id}")
        channel.on_postgres_changes(
            "*",
            schema="public",
            table=self._table,
            filter=f"channel_id=eq.{channel_id}",
            callback=lambda payload: on_change(),
        )

        try:
            await channel.subscribe(on_status)
            await joined
        except ChannelSubscriptionError:
            await self._db.remove_channel(channel)
            raise
        except (NotConnectedError, OSError) as e:
            await self._db.remove_channel(channel)
            raise ChannelSubscriptionError(channel_id, str(e)) from e

        logger.debug(f"Realtime channel joined for {channel_id}")

        async def stop() -> None:
            await self._db.remove_channel(channel)

        return stop

    def _map_to_message(self, data: dict) -> Message:
        """Map database row to Message model."""
        return Message(
            id=str(data["id"]),
            channel_id=data["channel_id"],
            text=data["text"],
            sender_id=str(data["sender_id"]),
            receiver_id=str(data["receiver_id"]),
            timestamp=data.get("timestamp"),
            read=bool(data.get("read", False)),
        )
