"""
Chat API endpoints.

Conversations are addressed by the other participant's user ID; the
channel is derived from the caller's identity and that ID.
"""

import json

from fastapi import APIRouter, Depends
from sse_starlette.sse import EventSourceResponse

from api.middleware.auth import get_current_user
from api.dependencies import get_chat_service
from shared.models import AuthenticatedUser
from modules.profiles.models import Session

from .exceptions import ChannelSubscriptionError
from .interfaces import IChatService, MessageStreamLike
from .models import Conversation, Message, MessageSnapshot, SendMessageRequest

router = APIRouter()


@router.get("/{user_id}", response_model=Conversation)
async def get_conversation(
    user_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IChatService = Depends(get_chat_service),
) -> Conversation:
    """
    Open a conversation with another user.

    Returns the other user's profile and the channel's current messages.
    """
    channel_id = service.derive_channel_id(user.id, user_id)
    counterpart = await service.get_counterpart(user_id)
    messages = await service.get_messages(channel_id)
    return Conversation(channel_id=channel_id, counterpart=counterpart, messages=messages)


@router.get("/{user_id}/messages", response_model=MessageSnapshot)
async def get_messages(
    user_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IChatService = Depends(get_chat_service),
) -> MessageSnapshot:
    """
    One-shot snapshot of the channel, oldest message first.
    """
    channel_id = service.derive_channel_id(user.id, user_id)
    messages = await service.get_messages(channel_id)
    return MessageSnapshot(channel_id=channel_id, messages=messages)


@router.post("/{user_id}/messages", response_model=Message, status_code=201)
async def send_message(
    user_id: str,
    request: SendMessageRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IChatService = Depends(get_chat_service),
) -> Message:
    """
    Send a message to another user.

    The text is trimmed; empty or over-long text is rejected with 422
    and nothing is written.
    """
    return await service.send_message(Session(identity=user), user_id, request.text)


async def snapshot_generator(stream: MessageStreamLike, service: IChatService):
    """
    Generate SSE events for a live channel.

    Yields events in the format:
        event: snapshot
        data: {"channel_id": "...", "messages": [...]}

    A failed subscription ends the stream with a single error event. The
    channel is released when the client disconnects.
    """
    try:
        async for messages in stream:
            snapshot = MessageSnapshot(channel_id=stream.channel_id, messages=messages)
            yield {
                "event": "snapshot",
                "data": snapshot.model_dump_json(),
            }
    except ChannelSubscriptionError as e:
        yield {
            "event": "error",
            "data": json.dumps(e.to_dict()),
        }
    finally:
        await service.close_channel(stream)


@router.get("/{user_id}/stream")
async def stream_messages(
    user_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IChatService = Depends(get_chat_service),
):
    """
    Stream channel snapshots via SSE.

    The first event is the channel's current contents. Each later event
    is the full ordered message list after a change; it replaces the
    previous one.

    Event types:
    - snapshot: Full ordered message list
    - error: Live updates failed; reconnect to resume
    """
    stream = await service.open_conversation(Session(identity=user), user_id)
    return EventSourceResponse(
        snapshot_generator(stream, service),
        media_type="text/event-stream",
    )
