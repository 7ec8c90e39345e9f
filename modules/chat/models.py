"""
Chat module data models.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from modules.profiles.models import Profile


class Message(BaseModel):
    """
    A message in a two-party channel.

    Messages are append-only: never updated or deleted after the insert.
    """

    id: str = Field(..., description="Message ID")
    channel_id: str = Field(..., description="Channel the message belongs to")
    text: str = Field(..., description="Trimmed message text")
    sender_id: str = Field(..., description="Identity that sent the message")
    receiver_id: str = Field(..., description="Identity the message was sent to")
    timestamp: Optional[datetime] = Field(
        None,
        description="Server-assigned creation time; the canonical order",
    )
    read: bool = Field(
        default=False,
        description="Reserved. Always written false, never updated",
    )


class SendMessageRequest(BaseModel):
    """
    Body of a send-message call.

    Trimming and the length bound are enforced by ChatService, so this
    model only carries the raw text.
    """

    text: str = Field(..., description="Message text")


class MessageSnapshot(BaseModel):
    """
    Full ordered contents of a channel at one point in time.

    Each snapshot replaces the previous one; it is not a diff.
    """

    channel_id: str
    messages: list[Message] = Field(default_factory=list)


class Conversation(BaseModel):
    """
    What a participant sees on opening a conversation: the other
    participant's profile and the channel's current contents.
    """

    channel_id: str
    counterpart: Profile
    messages: list[Message] = Field(default_factory=list)
