"""Domain entities for SkillSwap.

This module contains pure domain entities that represent
the core business objects without any external dependencies.
"""

from .message_entity import (
    MessageEntity,
    MessageType,
)
from .rating_entity import RatingEntity
from .session_entity import (
    SessionEntity,
    SessionStatus,
)
from .user_entity import (
    Coordinates,
    Location,
    UserEntity,
    UserPreferences,
)

__all__ = [
    # User
    "UserEntity",
    "Location",
    "Coordinates",
    "UserPreferences",
    # Session
    "SessionEntity",
    "SessionStatus",
    # Message
    "MessageEntity",
    "MessageType",
    # Rating
    "RatingEntity",
]
