"""
Chat module interfaces.

IChatService is what the API layer depends on. IMessageStore is the
narrow slice of the backend the core needs: an ordered query, an insert,
and a change feed. The Supabase implementation lives in repository.py.
"""

from typing import Awaitable, Callable, Protocol, runtime_checkable

from modules.profiles.models import Profile, Session
from .models import Message


ChangeCallback = Callable[[], None]
ErrorCallback = Callable[[Exception], None]
StopWatching = Callable[[], Awaitable[None]]


@runtime_checkable
class IMessageStore(Protocol):
    """
    Backend operations used by the conversation channel.
    """

    async def list_messages(self, channel_id: str) -> list[Message]:
        """
        Return every message in a channel, ordered by server timestamp ascending.
        """
        ...

    async def insert_message(
        self,
        channel_id: str,
        sender_id: str,
        receiver_id: str,
        text: str,
    ) -> Message:
        """
        Insert a message; the store assigns ID and timestamp.

        Raises:
            AuthorizationError: If the store refuses the write
            ExternalServiceError: If the store cannot be reached
        """
        ...

    async def watch(
        self,
        channel_id: str,
        on_change: ChangeCallback,
        on_error: ErrorCallback,
    ) -> StopWatching:
        """
        Start a change feed for a channel.

        Returns once the feed is established. on_change is called for every
        change the backend reports, in the order it reports them; on_error
        is called if the feed fails later.

        Returns:
            Coroutine function that stops the feed

        Raises:
            ChannelSubscriptionError: If the feed cannot be established
        """
        ...


@runtime_checkable
class IChatService(Protocol):
    """
    Interface for conversation operations.
    """

    def derive_channel_id(self, id_a: str, id_b: str) -> str:
        """Channel ID for an unordered pair of identities."""
        ...

    async def open_channel(self, channel_id: str) -> "MessageStreamLike":
        """
        Open a live, ordered view of a channel.

        The returned stream yields a full list of messages per change and
        never ends by itself; the caller must close it.

        Raises:
            ChannelSubscriptionError: If the subscription cannot be established
        """
        ...

    async def close_channel(self, stream: "MessageStreamLike") -> None:
        """Close a stream. Closing twice is a no-op."""
        ...

    async def append_message(
        self,
        channel_id: str,
        sender_id: str,
        receiver_id: str,
        text: str,
    ) -> Message:
        """
        Append a message to a channel.

        Raises:
            EmptyMessageError / MessageTooLongError: Before any write
            AuthorizationError / ExternalServiceError: If the write fails
        """
        ...

    async def get_messages(self, channel_id: str) -> list[Message]:
        """One-shot ordered snapshot of a channel."""
        ...

    async def get_counterpart(self, other_user_id: str) -> Profile:
        """
        Load the profile of the other participant.

        Raises:
            ProfileNotFoundError: If the other user has no profile
        """
        ...

    async def open_conversation(self, session: Session, other_user_id: str) -> "MessageStreamLike":
        """Open the channel between the session identity and another user."""
        ...

    async def send_message(self, session: Session, other_user_id: str, text: str) -> Message:
        """Append to the channel between the session identity and another user."""
        ...


@runtime_checkable
class MessageStreamLike(Protocol):
    """What callers of open_channel can rely on."""

    channel_id: str

    def __aiter__(self) -> "MessageStreamLike":
        ...

    async def __anext__(self) -> list[Message]:
        ...

    async def close(self) -> None:
        ...
