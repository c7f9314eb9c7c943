"""Session domain entity for SkillSwap.

A session is an exchange appointment between two users. Each participant
keeps their own copy in their user record; the two copies are tied together
only by (counterpart, date, skill).
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import (
    Dict,
    Optional,
)

from skillswap.domain.exceptions import (
    InvalidSessionStatusError,
    InvalidStatusTransitionError,
)
from skillswap.shared.utils.time import (
    ensure_utc,
    utc_now,
)


class SessionStatus(str, Enum):
    """Session status in the exchange lifecycle."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value) -> "SessionStatus":
        """Parse a raw status value, raising InvalidSessionStatusError on unknown input."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidSessionStatusError(value)


ALLOWED_TRANSITIONS: Dict[SessionStatus, set] = {
    SessionStatus.PENDING: {
        SessionStatus.PENDING,
        SessionStatus.CONFIRMED,
        SessionStatus.CANCELLED,
    },
    SessionStatus.CONFIRMED: {
        SessionStatus.CONFIRMED,
        SessionStatus.COMPLETED,
        SessionStatus.CANCELLED,
    },
    SessionStatus.COMPLETED: {SessionStatus.COMPLETED},
    SessionStatus.CANCELLED: {SessionStatus.CANCELLED},
}

ACTIVE_STATUSES = (SessionStatus.PENDING, SessionStatus.CONFIRMED)


class SessionEntity:
    """One participant's copy of an exchange session."""

    def __init__(
        self,
        with_user_id: str,
        date: datetime,
        skill: str,
        status: SessionStatus = SessionStatus.PENDING,
        notes: str = "",
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        session_id: Optional[str] = None,
    ):
        """Initialize a Session entity.

        Args:
            with_user_id: ID of the other participant
            date: When the session takes place
            skill: Skill being exchanged
            status: Current session status
            notes: Free-text notes
            created_at: Creation timestamp
            updated_at: Last update timestamp
            session_id: Identifier of this copy
        """
        self.id = session_id or uuid.uuid4().hex
        self.with_user_id = with_user_id
        self.date = ensure_utc(date)
        self.skill = skill
        self.status = SessionStatus.parse(status)
        self.notes = notes or ""
        self.created_at = ensure_utc(created_at) or utc_now()
        self.updated_at = ensure_utc(updated_at) or self.created_at

    def can_transition_to(self, status: SessionStatus) -> bool:
        """Check whether the session may move to the given status."""
        return status in ALLOWED_TRANSITIONS[self.status]

    def apply_update(
        self,
        status: Optional[SessionStatus] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Apply a status and/or notes update.

        Args:
            status: New status, or None to keep the current one
            notes: New notes, or None to keep the current ones

        Raises:
            InvalidSessionStatusError: If status is not a known value
            InvalidStatusTransitionError: If the transition is not allowed
        """
        if status is not None:
            status = SessionStatus.parse(status)
            if not self.can_transition_to(status):
                raise InvalidStatusTransitionError(self.status.value, status.value)
            self.status = status
        if notes is not None:
            self.notes = notes
        self.updated_at = utc_now()

    def is_mirror_of(self, other: "SessionEntity", owner_id: str) -> bool:
        """Check whether this copy mirrors ``other``, which is held by ``owner_id``."""
        return (
            self.with_user_id == owner_id
            and self.date == other.date
            and self.skill == other.skill
        )

    def mirror_for(self, owner_id: str) -> "SessionEntity":
        """Build the counterpart's copy of this session."""
        return SessionEntity(
            with_user_id=owner_id,
            date=self.date,
            skill=self.skill,
            status=self.status,
            notes=self.notes,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def is_upcoming(self, now: Optional[datetime] = None) -> bool:
        """Check if session is scheduled in the future and still active."""
        now = now or utc_now()
        return self.date >= now and self.status in ACTIVE_STATUSES

    def __repr__(self) -> str:
        return (
            f"SessionEntity(id='{self.id}', with_user_id='{self.with_user_id}', "
            f"skill='{self.skill}', status={self.status.value})"
        )
