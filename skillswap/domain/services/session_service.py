"""Session domain service for SkillSwap.

This module contains the lifecycle of exchange sessions. Every session is
written twice, once into each participant's record. The two writes are
independent: if the second one fails, or the counterpart's copy cannot be
located later, the records drift apart and nothing reconciles them.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from skillswap.core.logging import logger
from skillswap.domain.entities import SessionEntity, SessionStatus, UserEntity
from skillswap.domain.exceptions import (
    SelfTargetingError,
    SessionNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from skillswap.domain.repositories import UserRepositoryInterface
from skillswap.domain.services.pagination import Page, paginate
from skillswap.shared.utils.time import ensure_utc, utc_now

RECENT_WINDOW = timedelta(days=30)


@dataclass
class SessionStatsSummary:
    """Session counts for one user."""

    total: int
    pending: int
    confirmed: int
    completed: int
    cancelled: int
    completion_rate: int
    recent_sessions: int


class SessionDomainService:
    """Domain service for session-related business logic."""

    def __init__(self, user_repository: UserRepositoryInterface):
        """Initialize the session domain service.

        Args:
            user_repository: Repository for user data access
        """
        self.user_repository = user_repository

    async def _get_user(self, user_id: str) -> UserEntity:
        user = await self.user_repository.get_user_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def _get_own_session(self, user: UserEntity, session_id: str) -> SessionEntity:
        session = user.find_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    async def list_sessions(
        self,
        user_id: str,
        status: Optional[SessionStatus] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Page[SessionEntity]:
        """List a user's sessions, newest date first.

        Args:
            user_id: Owner of the sessions
            status: Optional status filter
            page: 1-based page number
            limit: Page size
        """
        user = await self._get_user(user_id)
        sessions = user.sessions
        if status is not None:
            status = SessionStatus.parse(status)
            sessions = [s for s in sessions if s.status == status]

        sessions = sorted(sessions, key=lambda s: s.date, reverse=True)
        return paginate(sessions, page, limit)

    async def counterparts_for(self, sessions: List[SessionEntity]) -> Dict[str, UserEntity]:
        """Load the other participant of each session, keyed by user ID."""
        users = await self.user_repository.get_users_by_ids(s.with_user_id for s in sessions)
        return {u.id: u for u in users}

    async def create_session(
        self,
        user_id: str,
        with_user_id: str,
        date: Optional[datetime],
        skill: Optional[str],
        notes: Optional[str] = None,
    ) -> SessionEntity:
        """Create a pending session on both participants' records.

        Args:
            user_id: Requesting user
            with_user_id: The other participant
            date: When the session takes place
            skill: Skill being exchanged
            notes: Optional notes

        Returns:
            SessionEntity: The requester's copy

        Raises:
            ValidationError: If a required field is missing
            UserNotFoundError: If the counterpart does not exist
            SelfTargetingError: If the counterpart is the requester
        """
        if not with_user_id or date is None or not skill or not skill.strip():
            raise ValidationError("with_user_id, date, and skill are required")

        counterpart = await self.user_repository.get_user_by_id(with_user_id)
        if counterpart is None:
            raise UserNotFoundError(with_user_id)

        if with_user_id == user_id:
            raise SelfTargetingError("create a session with")

        requester = await self._get_user(user_id)

        session = SessionEntity(
            with_user_id=with_user_id,
            date=ensure_utc(date),
            skill=skill.strip(),
            status=SessionStatus.PENDING,
            notes=notes or "",
        )
        requester.sessions.append(session)
        await self.user_repository.save_user(requester)

        counterpart.sessions.append(session.mirror_for(user_id))
        await self.user_repository.save_user(counterpart)

        logger.info(
            "session_created",
            user_id=user_id,
            with_user_id=with_user_id,
            session_id=session.id,
            skill=session.skill,
        )
        return session

    async def update_session(
        self,
        user_id: str,
        session_id: str,
        status: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> SessionEntity:
        """Update status and/or notes on the requester's copy, then on the mirror.

        Args:
            user_id: Requesting user
            session_id: ID of the requester's copy
            status: New status
            notes: New notes

        Returns:
            SessionEntity: The updated requester's copy

        Raises:
            ValidationError: If neither field is given
            InvalidSessionStatusError: If the status is unknown
            InvalidStatusTransitionError: If the lifecycle forbids the change
            SessionNotFoundError: If the session is not on the requester's record
        """
        if status is None and notes is None:
            raise ValidationError("status or notes is required")

        new_status = SessionStatus.parse(status) if status is not None else None

        user = await self._get_user(user_id)
        session = await self._get_own_session(user, session_id)
        previous_status = session.status

        session.apply_update(status=new_status, notes=notes)
        await self.user_repository.save_user(user)

        counterpart = await self.user_repository.get_user_by_id(session.with_user_id)
        mirror = (
            counterpart.find_mirror_session(session, user_id, previous_status)
            if counterpart
            else None
        )
        if mirror is None:
            logger.warning(
                "session_mirror_not_found",
                user_id=user_id,
                session_id=session_id,
                with_user_id=session.with_user_id,
                operation="update",
            )
            return session

        if new_status is not None and not mirror.can_transition_to(new_status):
            logger.warning(
                "session_mirror_transition_skipped",
                user_id=user_id,
                session_id=session_id,
                with_user_id=session.with_user_id,
                mirror_status=mirror.status.value,
                status=new_status.value,
            )
            return session

        mirror.apply_update(status=new_status, notes=notes)
        await self.user_repository.save_user(counterpart)

        logger.info(
            "session_updated",
            user_id=user_id,
            session_id=session_id,
            status=session.status.value,
        )
        return session

    async def delete_session(self, user_id: str, session_id: str) -> bool:
        """Delete the requester's copy and, best effort, the counterpart's mirror.

        Returns:
            bool: True if a mirror was removed as well

        Raises:
            SessionNotFoundError: If the session is not on the requester's record
        """
        user = await self._get_user(user_id)
        session = await self._get_own_session(user, session_id)

        user.remove_session(session_id)
        await self.user_repository.save_user(user)

        counterpart = await self.user_repository.get_user_by_id(session.with_user_id)
        mirror = (
            counterpart.remove_mirror_session(session, user_id, session.status)
            if counterpart
            else None
        )
        if mirror is not None:
            await self.user_repository.save_user(counterpart)
        else:
            logger.warning(
                "session_mirror_not_found",
                user_id=user_id,
                session_id=session_id,
                with_user_id=session.with_user_id,
                operation="delete",
            )

        logger.info(
            "session_deleted",
            user_id=user_id,
            session_id=session_id,
            mirror_removed=mirror is not None,
        )
        return mirror is not None

    async def get_stats(self, user_id: str, now: Optional[datetime] = None) -> SessionStatsSummary:
        """Count a user's sessions by status.

        ``recent_sessions`` counts every session dated on or after thirty
        days ago, future sessions included.
        """
        user = await self._get_user(user_id)
        sessions = user.sessions
        now = now or utc_now()

        counts = {status: 0 for status in SessionStatus}
        for session in sessions:
            counts[session.status] += 1

        total = len(sessions)
        non_cancelled = total - counts[SessionStatus.CANCELLED]
        completion_rate = (
            int(counts[SessionStatus.COMPLETED] / non_cancelled * 100 + 0.5)
            if non_cancelled > 0
            else 0
        )

        window_start = now - RECENT_WINDOW
        return SessionStatsSummary(
            total=total,
            pending=counts[SessionStatus.PENDING],
            confirmed=counts[SessionStatus.CONFIRMED],
            completed=counts[SessionStatus.COMPLETED],
            cancelled=counts[SessionStatus.CANCELLED],
            completion_rate=completion_rate,
            recent_sessions=sum(1 for s in sessions if s.date >= window_start),
        )

    async def upcoming_sessions(
        self, user_id: str, limit: int = 5, now: Optional[datetime] = None
    ) -> List[SessionEntity]:
        """Pending or confirmed sessions from now on, soonest first."""
        if limit < 1:
            raise ValidationError("limit must be at least 1", field="limit")

        user = await self._get_user(user_id)
        now = now or utc_now()
        upcoming = sorted(
            (s for s in user.sessions if s.is_upcoming(now)),
            key=lambda s: s.date,
        )
        return upcoming[:limit]
