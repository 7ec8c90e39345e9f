"""
Chat module exceptions.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError, ValidationError


class InvalidParticipantError(ValidationError):
    """Raised when a channel participant ID is empty."""

    def __init__(self):
        super().__init__(
            "Both participant IDs must be non-empty",
            code="INVALID_PARTICIPANT",
        )


class SelfConversationError(ValidationError):
    """Raised when both sides of a channel are the same identity."""

    def __init__(self, user_id: str):
        super().__init__(
            "Cannot open a conversation with yourself",
            code="SELF_CONVERSATION",
            details={"user_id": user_id},
        )


class EmptyMessageError(ValidationError):
    """Raised when message text is empty after trimming."""

    def __init__(self):
        super().__init__("Message text cannot be empty", code="EMPTY_MESSAGE")


class MessageTooLongError(ValidationError):
    """Raised when message text exceeds the length bound."""

    def __init__(self, length: int, max_length: int):
        super().__init__(
            f"Message is {length} characters; the limit is {max_length}",
            code="MESSAGE_TOO_LONG",
            details={"length": length, "max_length": max_length},
        )


class ChannelSubscriptionError(ExternalServiceError):
    """
    Raised when a live channel subscription fails.

    Terminal: the stream that raised it delivers nothing further and the
    caller must open a fresh one to resume.
    """

    def __init__(self, channel_id: str, reason: Optional[str] = None):
        super().__init__(
            f"Live updates for channel {channel_id} failed"
            + (f": {reason}" if reason else ""),
            service="supabase-realtime",
            code="CHANNEL_SUBSCRIPTION_FAILED",
            details={"channel_id": channel_id, "reason": reason},
        )
        self.channel_id = channel_id
