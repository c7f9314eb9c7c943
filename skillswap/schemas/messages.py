"""Messaging schemas for the API."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from skillswap.domain.entities import MessageEntity, MessageType, UserEntity
from skillswap.domain.entities.message_entity import MAX_CONTENT_LENGTH
from skillswap.domain.services.message_service import ConversationSummary
from skillswap.schemas.users import UserSummary
from skillswap.shared.response_models import BaseResponse, PaginationInfo


class SendMessageRequest(BaseModel):
    """Schema for sending a direct message."""

    to_user_id: Optional[str] = Field(None, description="Recipient user ID")
    content: Optional[str] = Field(None, max_length=MAX_CONTENT_LENGTH)
    type: MessageType = Field(MessageType.TEXT, description="text, image or file")


class MessageSchema(BaseModel):
    """One copy of a message."""

    id: str
    from_user_id: str
    to_user_id: str
    content: str
    type: MessageType
    timestamp: datetime
    read: bool
    read_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, message: MessageEntity) -> "MessageSchema":
        return cls(
            id=message.id,
            from_user_id=message.from_user_id,
            to_user_id=message.to_user_id,
            content=message.content,
            type=message.type,
            timestamp=message.timestamp,
            read=message.read,
            read_at=message.read_at,
        )


class ConversationSchema(BaseModel):
    """Derived conversation with one partner."""

    partner_id: str
    partner: Optional[UserSummary] = None
    last_message: MessageSchema
    unread_count: int

    @classmethod
    def from_domain(
        cls, conversation: ConversationSummary, partners: Dict[str, UserEntity]
    ) -> "ConversationSchema":
        partner = partners.get(conversation.partner_id)
        return cls(
            partner_id=conversation.partner_id,
            partner=UserSummary.from_entity(partner) if partner else None,
            last_message=MessageSchema.from_entity(conversation.last_message),
            unread_count=conversation.unread_count,
        )


class ConversationsResponse(BaseResponse):
    conversations: List[ConversationSchema]


class MessageListResponse(BaseResponse):
    """A page of messages, used by the thread view and by search."""

    messages: List[MessageSchema]
    pagination: PaginationInfo


class SendMessageResponse(BaseResponse):
    message_data: MessageSchema


class MessageReadResponse(BaseResponse):
    message_data: MessageSchema


class UnreadCountResponse(BaseResponse):
    unread_count: int
