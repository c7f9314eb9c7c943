"""User domain entity for SkillSwap.

The user record is the unit of storage: it embeds the user's own sessions,
the ratings they received and every message they sent or received.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional

import bcrypt

from skillswap.domain.entities.message_entity import MessageEntity
from skillswap.domain.entities.rating_entity import RatingEntity
from skillswap.domain.entities.session_entity import SessionEntity, SessionStatus
from skillswap.domain.exceptions import ValidationError
from skillswap.shared.utils.time import (
    ensure_utc,
    utc_now,
)

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


@dataclass
class Coordinates:
    """Geographic coordinates."""
    lat: Optional[float] = None
    lng: Optional[float] = None


@dataclass
class Location:
    """Where a user is based."""
    city: Optional[str] = None
    country: Optional[str] = None
    coordinates: Coordinates = field(default_factory=Coordinates)


@dataclass
class UserPreferences:
    """Exchange preferences."""
    availability: Optional[str] = None
    session_length: Optional[str] = None
    communication: Optional[str] = None
    location: Optional[str] = None


def normalize_skills(skills: Optional[Iterable[str]]) -> List[str]:
    """Strip skill names and drop blanks, keeping order."""
    if not skills:
        return []
    return [skill.strip() for skill in skills if skill and skill.strip()]


class UserEntity:
    """Pure domain entity for a SkillSwap user."""

    def __init__(
        self,
        email: str,
        hashed_password: str,
        name: str = "",
        bio: str = "",
        offers: Optional[List[str]] = None,
        seeks: Optional[List[str]] = None,
        location: Optional[Location] = None,
        preferences: Optional[UserPreferences] = None,
        sessions: Optional[List[SessionEntity]] = None,
        ratings: Optional[List[RatingEntity]] = None,
        messages: Optional[List[MessageEntity]] = None,
        is_online: bool = False,
        last_active: Optional[datetime] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        user_id: Optional[str] = None,
    ):
        """Initialize a User entity.

        Args:
            email: User's email address, the identity key
            hashed_password: Bcrypt hashed password
            name: Display name
            bio: Free-text biography
            offers: Skills the user can teach
            seeks: Skills the user wants to learn
            location: City, country and coordinates
            preferences: Exchange preferences
            sessions: The user's copies of their sessions
            ratings: Ratings the user received
            messages: Messages sent or received by the user
            is_online: Whether the user is currently online
            last_active: Last activity timestamp
            created_at: Creation timestamp
            updated_at: Last update timestamp
            user_id: Document identifier
        """
        self.id = user_id
        self.email = self._validate_email(email)
        self.hashed_password = hashed_password
        self.name = name or ""
        self.bio = bio or ""
        self.offers = normalize_skills(offers)
        self.seeks = normalize_skills(seeks)
        self.location = location or Location()
        self.preferences = preferences or UserPreferences()
        self.sessions = sessions or []
        self.ratings = ratings or []
        self.messages = messages or []
        self.is_online = is_online
        self.last_active = ensure_utc(last_active) or utc_now()
        self.created_at = ensure_utc(created_at) or utc_now()
        self.updated_at = ensure_utc(updated_at) or self.created_at

    @staticmethod
    def _validate_email(email: str) -> str:
        """Validate email format."""
        email = (email or "").lower().strip()
        if not EMAIL_PATTERN.match(email):
            raise ValidationError(f"Invalid email format: {email}", field="email")
        return email

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password using bcrypt."""
        if not password or len(password) < 8:
            raise ValidationError("Password must be at least 8 characters long", field="password")

        salt = bcrypt.gensalt()
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""
        if not password:
            return False

        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                self.hashed_password.encode("utf-8"),
            )
        except ValueError:
            return False

    def touch(self) -> None:
        self.updated_at = utc_now()

    def mark_online(self) -> None:
        self.is_online = True
        self.last_active = utc_now()

    def mark_offline(self) -> None:
        self.is_online = False
        self.last_active = utc_now()

    def update_skills(
        self, offers: Optional[List[str]] = None, seeks: Optional[List[str]] = None
    ) -> None:
        if offers is not None:
            self.offers = normalize_skills(offers)
        if seeks is not None:
            self.seeks = normalize_skills(seeks)
        self.touch()

    # Sessions
    def find_session(self, session_id: str) -> Optional[SessionEntity]:
        return next((s for s in self.sessions if s.id == session_id), None)

    def find_mirror_session(
        self,
        session: SessionEntity,
        owner_id: str,
        status: Optional[SessionStatus] = None,
    ) -> Optional[SessionEntity]:
        """Find this user's copy of a session held by ``owner_id``.

        Several copies can share the same (counterpart, date, skill) key. When
        ``status`` is given, a copy in that status is preferred over the others.
        """
        candidates = [s for s in self.sessions if s.is_mirror_of(session, owner_id)]
        if status is not None:
            same_status = [s for s in candidates if s.status == status]
            if same_status:
                return same_status[0]
        return candidates[0] if candidates else None

    def remove_session(self, session_id: str) -> Optional[SessionEntity]:
        session = self.find_session(session_id)
        if session is not None:
            self.sessions.remove(session)
        return session

    def remove_mirror_session(
        self,
        session: SessionEntity,
        owner_id: str,
        status: Optional[SessionStatus] = None,
    ) -> Optional[SessionEntity]:
        """Remove one copy matching ``session`` held by ``owner_id``, chosen as in find_mirror_session."""
        mirror = self.find_mirror_session(session, owner_id, status)
        if mirror is not None:
            self.sessions.remove(mirror)
        return mirror

    # Ratings
    def has_rating_from(self, rater_id: str) -> bool:
        return any(r.from_user_id == rater_id for r in self.ratings)

    # Messages
    def find_message(self, message_id: str) -> Optional[MessageEntity]:
        return next((m for m in self.messages if m.id == message_id), None)

    def remove_message(self, message_id: str) -> Optional[MessageEntity]:
        message = self.find_message(message_id)
        if message is not None:
            self.messages.remove(message)
        return message

    def __str__(self) -> str:
        return f"User(id={self.id}, email='{self.email}')"

    def __repr__(self) -> str:
        return f"UserEntity(id='{self.id}', email='{self.email}', name='{self.name}')"
