"""Message domain entity for SkillSwap.

This module contains the pure domain model for direct messages,
independent of any external dependencies or frameworks.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from skillswap.domain.exceptions import ValidationError
from skillswap.shared.utils.time import (
    ensure_utc,
    utc_now,
)

MAX_CONTENT_LENGTH = 10000


class MessageType(str, Enum):
    """Kind of message payload."""

    TEXT = "text"
    IMAGE = "image"
    FILE = "file"


class MessageEntity:
    """One copy of a direct message.

    Sender and receiver each hold their own copy with its own id; ``read``
    is only meaningful on the receiver's copy.
    """

    def __init__(
        self,
        from_user_id: str,
        to_user_id: str,
        content: str,
        message_type: MessageType = MessageType.TEXT,
        timestamp: Optional[datetime] = None,
        read: bool = False,
        read_at: Optional[datetime] = None,
        message_id: Optional[str] = None,
    ):
        """Initialize a Message entity.

        Args:
            from_user_id: ID of the sender
            to_user_id: ID of the receiver
            content: Message body
            message_type: Kind of payload
            timestamp: When the message was sent
            read: Whether the receiver has read it
            read_at: When it was read
            message_id: Identifier of this copy
        """
        self.id = message_id or uuid.uuid4().hex
        self.from_user_id = from_user_id
        self.to_user_id = to_user_id
        self.content = self._validate_content(content)
        self.type = MessageType(message_type)
        self.timestamp = ensure_utc(timestamp) or utc_now()
        self.read = read
        self.read_at = ensure_utc(read_at)

    @staticmethod
    def _validate_content(content: str) -> str:
        if not content or not content.strip():
            raise ValidationError("Message content cannot be empty", field="content")
        if len(content) > MAX_CONTENT_LENGTH:
            raise ValidationError("Message content exceeds maximum length", field="content")
        if "\0" in content:
            raise ValidationError("Message content contains null bytes", field="content")
        return content

    def copy(self) -> "MessageEntity":
        """Duplicate the message under a fresh id."""
        return MessageEntity(
            from_user_id=self.from_user_id,
            to_user_id=self.to_user_id,
            content=self.content,
            message_type=self.type,
            timestamp=self.timestamp,
            read=self.read,
            read_at=self.read_at,
        )

    def partner_of(self, user_id: str) -> str:
        """Return the participant on the other side from ``user_id``."""
        return self.to_user_id if self.from_user_id == user_id else self.from_user_id

    def is_between(self, user_id: str, partner_id: str) -> bool:
        return (self.from_user_id == user_id and self.to_user_id == partner_id) or (
            self.from_user_id == partner_id and self.to_user_id == user_id
        )

    def is_unread_for(self, user_id: str) -> bool:
        """Unread from the point of view of ``user_id``, who must be the receiver."""
        return self.to_user_id == user_id and not self.read

    def mark_read(self) -> None:
        if not self.read:
            self.read = True
            self.read_at = utc_now()

    def __repr__(self) -> str:
        return (
            f"MessageEntity(id='{self.id}', from='{self.from_user_id}', "
            f"to='{self.to_user_id}', read={self.read})"
        )
