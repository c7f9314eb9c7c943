"""Message domain service for SkillSwap.

Direct messages are duplicated into the sender's and the receiver's records.
Conversations are not stored; they are derived from a user's own messages on
every request.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from skillswap.core.logging import logger
from skillswap.domain.entities import MessageEntity, MessageType, UserEntity
from skillswap.domain.exceptions import (
    MessageDeleteNotAllowedError,
    MessageNotFoundError,
    SelfTargetingError,
    UserNotFoundError,
    ValidationError,
)
from skillswap.domain.repositories import UserRepositoryInterface
from skillswap.domain.services.pagination import Page, paginate


@dataclass
class ConversationSummary:
    """Latest message and unread count for one conversation partner."""

    partner_id: str
    last_message: MessageEntity
    unread_count: int


class MessageDomainService:
    """Domain service for direct messaging."""

    def __init__(self, user_repository: UserRepositoryInterface):
        """Initialize the message domain service.

        Args:
            user_repository: Repository for user data access
        """
        self.user_repository = user_repository

    async def _get_user(self, user_id: str) -> UserEntity:
        user = await self.user_repository.get_user_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def send_message(
        self,
        sender_id: str,
        to_user_id: Optional[str],
        content: Optional[str],
        message_type: MessageType = MessageType.TEXT,
    ) -> MessageEntity:
        """Send a message, appending one copy to each participant.

        Args:
            sender_id: Sending user
            to_user_id: Receiving user
            content: Message body
            message_type: Kind of payload

        Returns:
            MessageEntity: The sender's copy

        Raises:
            ValidationError: If the recipient or content is missing
            UserNotFoundError: If the recipient does not exist
            SelfTargetingError: If the recipient is the sender
        """
        if not to_user_id or not content or not content.strip():
            raise ValidationError("to_user_id and content are required")

        recipient = await self.user_repository.get_user_by_id(to_user_id)
        if recipient is None:
            raise UserNotFoundError(to_user_id)

        if to_user_id == sender_id:
            raise SelfTargetingError("send messages to")

        sender = await self._get_user(sender_id)

        message = MessageEntity(
            from_user_id=sender_id,
            to_user_id=to_user_id,
            content=content,
            message_type=message_type or MessageType.TEXT,
        )
        sender.messages.append(message)
        await self.user_repository.save_user(sender)

        recipient.messages.append(message.copy())
        await self.user_repository.save_user(recipient)

        logger.info(
            "message_sent",
            from_user_id=sender_id,
            to_user_id=to_user_id,
            message_id=message.id,
            type=message.type.value,
        )
        return message

    async def list_conversations(self, user_id: str) -> List[ConversationSummary]:
        """Group the user's messages by partner, most recent conversation first."""
        user = await self._get_user(user_id)

        conversations: Dict[str, ConversationSummary] = {}
        for message in user.messages:
            partner_id = message.partner_of(user_id)
            summary = conversations.get(partner_id)
            if summary is None:
                summary = conversations[partner_id] = ConversationSummary(
                    partner_id=partner_id, last_message=message, unread_count=0
                )
            elif message.timestamp > summary.last_message.timestamp:
                summary.last_message = message

            if message.is_unread_for(user_id):
                summary.unread_count += 1

        return sorted(
            conversations.values(),
            key=lambda c: c.last_message.timestamp,
            reverse=True,
        )

    async def partners_for(self, partner_ids: List[str]) -> Dict[str, UserEntity]:
        """Load conversation partners keyed by user ID. Deleted partners are omitted."""
        users = await self.user_repository.get_users_by_ids(partner_ids)
        return {u.id: u for u in users}

    async def get_conversation(
        self,
        user_id: str,
        partner_id: str,
        page: int = 1,
        limit: int = 50,
    ) -> Page[MessageEntity]:
        """Return the thread with one partner, oldest first, and mark it read.

        Every unread message the partner sent in this thread is marked read,
        not only the ones on the returned page. The record is saved only when
        something changed.

        Args:
            user_id: Requesting user
            partner_id: The other participant
            page: 1-based page number
            limit: Page size

        Returns:
            Page[MessageEntity]: Requested page of the thread
        """
        user = await self._get_user(user_id)

        thread = sorted(
            (m for m in user.messages if m.is_between(user_id, partner_id)),
            key=lambda m: m.timestamp,
        )
        result = paginate(thread, page, limit)

        unread = [m for m in thread if m.from_user_id == partner_id and m.is_unread_for(user_id)]
        if unread:
            for message in unread:
                message.mark_read()
            await self.user_repository.save_user(user)
            logger.info(
                "conversation_marked_read",
                user_id=user_id,
                partner_id=partner_id,
                marked=len(unread),
            )

        return result

    async def mark_as_read(self, user_id: str, message_id: str) -> MessageEntity:
        """Mark one message read when the requester is its recipient.

        Raises:
            MessageNotFoundError: If the message is not in the requester's list
        """
        user = await self._get_user(user_id)
        message = user.find_message(message_id)
        if message is None:
            raise MessageNotFoundError(message_id)

        if message.is_unread_for(user_id):
            message.mark_read()
            await self.user_repository.save_user(user)
        return message

    async def unread_count(self, user_id: str) -> int:
        user = await self._get_user(user_id)
        return sum(1 for m in user.messages if m.is_unread_for(user_id))

    async def search_messages(
        self,
        user_id: str,
        query: Optional[str],
        page: int = 1,
        limit: int = 20,
    ) -> Page[MessageEntity]:
        """Case-insensitive content search over the user's messages, newest first.

        Raises:
            ValidationError: If the query is missing or blank
        """
        if not query or not query.strip():
            raise ValidationError("Search query is required", field="query")

        user = await self._get_user(user_id)
        needle = query.strip().lower()
        found = sorted(
            (m for m in user.messages if needle in m.content.lower()),
            key=lambda m: m.timestamp,
            reverse=True,
        )
        return paginate(found, page, limit)

    async def delete_message(self, user_id: str, message_id: str) -> None:
        """Delete the sender's own copy of a message.

        The receiver's copy is left untouched.

        Raises:
            MessageNotFoundError: If the message is not in the requester's list
            MessageDeleteNotAllowedError: If the requester did not send it
        """
        user = await self._get_user(user_id)
        message = user.find_message(message_id)
        if message is None:
            raise MessageNotFoundError(message_id)

        if message.from_user_id != user_id:
            raise MessageDeleteNotAllowedError(message_id)

        user.remove_message(message_id)
        await self.user_repository.save_user(user)
        logger.info("message_deleted", user_id=user_id, message_id=message_id)
