"""
Chat module.

Two-party conversation channels with live, ordered message streams.

Public API:
- IChatService: Interface for conversation operations
- IMessageStore: Backend the channels run on
- MessageStream: Cancellable async iterator of message snapshots
- derive_channel_id: Channel ID for a pair of identities
- Message, MessageSnapshot, Conversation: Chat models
"""

from .interfaces import IChatService, IMessageStore, MessageStreamLike
from .channel import derive_channel_id, normalize_message_text
from .models import Conversation, Message, MessageSnapshot, SendMessageRequest
from .stream import MessageStream
from .exceptions import (
    InvalidParticipantError,
    SelfConversationError,
    EmptyMessageError,
    MessageTooLongError,
    ChannelSubscriptionError,
)

__all__ = [
    # Interfaces
    "IChatService",
    "IMessageStore",
    "MessageStreamLike",
    # Channel helpers
    "derive_channel_id",
    "normalize_message_text",
    "MessageStream",
    # Models
    "Conversation",
    "Message",
    "MessageSnapshot",
    "SendMessageRequest",
    # Exceptions
    "InvalidParticipantError",
    "SelfConversationError",
    "EmptyMessageError",
    "MessageTooLongError",
    "ChannelSubscriptionError",
]
