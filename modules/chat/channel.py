"""
Channel naming and message text rules.

A channel has no record of its own: its ID is recomputed from the two
participants every time it is needed.
"""

from .exceptions import (
    EmptyMessageError,
    InvalidParticipantError,
    MessageTooLongError,
    SelfConversationError,
)

DEFAULT_SEPARATOR = "_"
DEFAULT_MAX_LENGTH = 500


def derive_channel_id(id_a: str, id_b: str, separator: str = DEFAULT_SEPARATOR) -> str:
    """
    Derive the channel ID for an unordered pair of identities.

    The pair is sorted lexicographically, so the result does not depend on
    argument order: derive_channel_id("u2", "u1") == "u1_u2".

    Raises:
        InvalidParticipantError: If either ID is empty
        SelfConversationError: If both IDs are the same
    """
    if not id_a or not id_b:
        raise InvalidParticipantError()
    if id_a == id_b:
        raise SelfConversationError(id_a)
    first, second = sorted((id_a, id_b))
    return f"{first}{separator}{second}"


def normalize_message_text(text: str, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """
    Trim message text and check it is sendable.

    Raises:
        EmptyMessageError: If nothing is left after trimming
        MessageTooLongError: If the trimmed text exceeds max_length
    """
    trimmed = (text or "").strip()
    if not trimmed:
        raise EmptyMessageError()
    if len(trimmed) > max_length:
        raise MessageTooLongError(len(trimmed), max_length)
    return trimmed
