"""Direct messaging endpoints."""

from typing import Optional

from fastapi import (
    APIRouter,
    Query,
    Request,
    status,
)

from skillswap.constants.http import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
)
from skillswap.core.config import settings
from skillswap.core.dependencies import (
    CurrentUser,
    MessageServiceDep,
)
from skillswap.core.limiter import limiter
from skillswap.schemas.messages import (
    ConversationSchema,
    ConversationsResponse,
    MessageListResponse,
    MessageReadResponse,
    MessageSchema,
    SendMessageRequest,
    SendMessageResponse,
    UnreadCountResponse,
)
from skillswap.shared.response_models import (
    BaseResponse,
    PaginationInfo,
)

router = APIRouter()

THREAD_PAGE_SIZE = 50


@router.get("/conversations", response_model=ConversationsResponse)
async def list_conversations(current_user: CurrentUser, message_service: MessageServiceDep):
    """Latest message and unread count per partner, most recent first."""
    conversations = await message_service.list_conversations(current_user.id)
    partners = await message_service.partners_for([c.partner_id for c in conversations])
    return ConversationsResponse(
        conversations=[ConversationSchema.from_domain(c, partners) for c in conversations]
    )


@router.get("/conversation/{user_id}", response_model=MessageListResponse)
async def get_conversation(
    user_id: str,
    current_user: CurrentUser,
    message_service: MessageServiceDep,
    page: int = Query(1, ge=1),
    limit: int = Query(THREAD_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
):
    """Thread with one partner, oldest first. Marks the partner's messages read."""
    result = await message_service.get_conversation(
        current_user.id, user_id, page=page, limit=limit
    )
    return MessageListResponse(
        messages=[MessageSchema.from_entity(m) for m in result.items],
        pagination=PaginationInfo.from_page(result),
    )


@router.post("/send", response_model=SendMessageResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.RATE_LIMIT_ENDPOINTS["messages"][0])
async def send_message(
    request: Request,
    message_data: SendMessageRequest,
    current_user: CurrentUser,
    message_service: MessageServiceDep,
):
    """Send a direct message.

    Args:
        request: The FastAPI request object for rate limiting
        message_data: Recipient, content and type
        current_user: Authenticated sender
        message_service: Message domain service

    Returns:
        SendMessageResponse: The sender's copy of the message
    """
    message = await message_service.send_message(
        current_user.id,
        to_user_id=message_data.to_user_id,
        content=message_data.content,
        message_type=message_data.type,
    )
    return SendMessageResponse(
        message="Message sent successfully",
        message_data=MessageSchema.from_entity(message),
    )


@router.put("/read/{message_id}", response_model=MessageReadResponse)
async def mark_as_read(
    message_id: str,
    current_user: CurrentUser,
    message_service: MessageServiceDep,
):
    message = await message_service.mark_as_read(current_user.id, message_id)
    return MessageReadResponse(
        message="Message marked as read",
        message_data=MessageSchema.from_entity(message),
    )


@router.get("/unread/count", response_model=UnreadCountResponse)
async def unread_count(current_user: CurrentUser, message_service: MessageServiceDep):
    return UnreadCountResponse(unread_count=await message_service.unread_count(current_user.id))


@router.get("/search", response_model=MessageListResponse)
async def search_messages(
    current_user: CurrentUser,
    message_service: MessageServiceDep,
    query: Optional[str] = Query(None, max_length=200),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
):
    """Search the caller's messages by content, newest first."""
    result = await message_service.search_messages(
        current_user.id, query, page=page, limit=limit
    )
    return MessageListResponse(
        messages=[MessageSchema.from_entity(m) for m in result.items],
        pagination=PaginationInfo.from_page(result),
    )


@router.delete("/{message_id}", response_model=BaseResponse)
async def delete_message(
    message_id: str,
    current_user: CurrentUser,
    message_service: MessageServiceDep,
):
    """Delete the caller's copy of a message they sent."""
    await message_service.delete_message(current_user.id, message_id)
    return BaseResponse(message="Message deleted successfully")
