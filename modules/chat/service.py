"""
Chat service implementation.

A conversation is a channel between exactly two identities. The channel
ID is derived from the pair, messages are appended through the store, and
the only path from a write to anything visible is the channel's live
stream: append_message never touches an open stream directly.
"""

import logging
from typing import Optional

from shared.config import get_settings
from modules.profiles.exceptions import NotSignedInError
from modules.profiles.interfaces import IProfileService
from modules.profiles.models import Profile, Session

from .channel import derive_channel_id, normalize_message_text
from .interfaces import IChatService, IMessageStore
from .models import Message
from .stream import MessageStream

logger = logging.getLogger(__name__)


class ChatService(IChatService):
    """
    Conversation channels over an IMessageStore.

    Tracks the streams it opened so they can all be released on shutdown.
    """

    def __init__(
        self,
        store: IMessageStore,
        profiles: Optional[IProfileService] = None,
        separator: Optional[str] = None,
        max_length: Optional[int] = None,
    ):
        settings = get_settings()
        self._store = store
        self._profiles = profiles
        self._separator = separator if separator is not None else settings.channel_id_separator
        self._max_length = max_length if max_length is not None else settings.message_max_length
        self._open_streams: set[MessageStream] = set()

    def derive_channel_id(self, id_a: str, id_b: str) -> str:
        return derive_channel_id(id_a, id_b, self._separator)

    async def open_channel(self, channel_id: str) -> MessageStream:
        """Open a live stream; raises ChannelSubscriptionError if it cannot start."""
        stream = MessageStream(channel_id, self._store)
        await stream.open()
        # Streams closed by their callers directly are dropped here.
        self._open_streams = {s for s in self._open_streams if not s.closed}
        self._open_streams.add(stream)
        return stream

    async def close_channel(self, stream: MessageStream) -> None:
        """Close a stream opened by this service. Idempotent."""
        self._open_streams.discard(stream)
        await stream.close()

    async def append_message(
        self,
        channel_id: str,
        sender_id: str,
        receiver_id: str,
        text: str,
    ) -> Message:
        """
        Validate and insert a message.

        Validation happens before any write. On failure nothing is buffered
        or retried: the caller still holds the text and may resend it.
        """
        trimmed = normalize_message_text(text, self._max_length)
        message = await self._store.insert_message(channel_id, sender_id, receiver_id, trimmed)
        logger.debug(f"Appended message {message.id} to {channel_id}")
        return message

    async def get_messages(self, channel_id: str) -> list[Message]:
        return await self._store.list_messages(channel_id)

    async def get_counterpart(self, other_user_id: str) -> Profile:
        if self._profiles is None:
            from modules.profiles.service import get_profile_service
            self._profiles = get_profile_service()
        return await self._profiles.get_profile(other_user_id)

    async def open_conversation(self, session: Session, other_user_id: str) -> MessageStream:
        channel_id = self.derive_channel_id(self._identity_id(session), other_user_id)
        return await self.open_channel(channel_id)

    async def send_message(self, session: Session, other_user_id: str, text: str) -> Message:
        sender_id = self._identity_id(session)
        channel_id = self.derive_channel_id(sender_id, other_user_id)
        return await self.append_message(channel_id, sender_id, other_user_id, text)

    async def aclose(self) -> None:
        """Close every stream still open (application shutdown)."""
        streams = list(self._open_streams)
        self._open_streams.clear()
        for stream in streams:
            await stream.close()
        if streams:
            logger.info(f"Closed {len(streams)} open chat stream(s)")

    @property
    def open_stream_count(self) -> int:
        return sum(1 for s in self._open_streams if not s.closed)

    def _identity_id(self, session: Session) -> str:
        if session.identity is None:
            raise NotSignedInError()
        return session.identity.id


# Module-level instance getter
_service_instance: Optional[ChatService] = None


async def get_chat_service() -> ChatService:
    """Get the chat service singleton."""
    global _service_instance
    if _service_instance is None:
        from shared.database import get_async_supabase_client
        from .repository import MessageRepository
        _service_instance = ChatService(
            store=MessageRepository(await get_async_supabase_client()),
        )
    return _service_instance


def reset_chat_service() -> None:
    """Reset the chat service singleton (for testing)."""
    global _service_instance
    _service_instance = None
