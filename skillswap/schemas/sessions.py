"""Session schemas for the API."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from skillswap.domain.entities import SessionEntity, UserEntity
from skillswap.domain.services.session_service import SessionStatsSummary
from skillswap.schemas.users import UserSummary
from skillswap.shared.response_models import BaseResponse, PaginationInfo


class SessionCreateRequest(BaseModel):
    """Schema for proposing a session to another user.

    Fields are optional here so that missing values are reported by the
    session service with its own message.
    """

    with_user_id: Optional[str] = Field(None, description="The other participant")
    date: Optional[datetime] = Field(None, description="When the session takes place")
    skill: Optional[str] = Field(None, max_length=100, description="Skill being exchanged")
    notes: Optional[str] = Field(None, max_length=2000)


class SessionUpdateRequest(BaseModel):
    """Schema for changing status and/or notes."""

    status: Optional[str] = Field(None, description="pending, confirmed, completed or cancelled")
    notes: Optional[str] = Field(None, max_length=2000)


class SessionSchema(BaseModel):
    """The caller's copy of a session."""

    id: str
    with_user_id: str
    with_user: Optional[UserSummary] = None
    date: datetime
    skill: str
    status: str
    notes: str = ""
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(
        cls, session: SessionEntity, counterparts: Optional[Dict[str, UserEntity]] = None
    ) -> "SessionSchema":
        counterpart = (counterparts or {}).get(session.with_user_id)
        return cls(
            id=session.id,
            with_user_id=session.with_user_id,
            with_user=UserSummary.from_entity(counterpart) if counterpart else None,
            date=session.date,
            skill=session.skill,
            status=session.status.value,
            notes=session.notes,
            created_at=session.created_at,
            updated_at=session.updated_at,
        )


class SessionStatsSchema(BaseModel):
    total: int
    pending: int
    confirmed: int
    completed: int
    cancelled: int
    completion_rate: int
    recent_sessions: int

    @classmethod
    def from_domain(cls, stats: SessionStatsSummary) -> "SessionStatsSchema":
        return cls(
            total=stats.total,
            pending=stats.pending,
            confirmed=stats.confirmed,
            completed=stats.completed,
            cancelled=stats.cancelled,
            completion_rate=stats.completion_rate,
            recent_sessions=stats.recent_sessions,
        )


class SessionListResponse(BaseResponse):
    sessions: List[SessionSchema]
    pagination: PaginationInfo


class UpcomingSessionsResponse(BaseResponse):
    sessions: List[SessionSchema]


class SessionResponse(BaseResponse):
    session: SessionSchema


class SessionStatsResponse(BaseResponse):
    stats: SessionStatsSchema
