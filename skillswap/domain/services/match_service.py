"""Match domain service for SkillSwap.

Finds exchange partners for a user. The listing loads and scores every
candidate in memory before sorting and slicing out the requested page, so
each request is O(n) in the number of users.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional

from skillswap.core.logging import logger
from skillswap.domain.entities import UserEntity
from skillswap.domain.exceptions import UserNotFoundError, ValidationError
from skillswap.domain.repositories import UserRepositoryInterface
from skillswap.domain.services.compatibility import (
    average_rating,
    compatibility_score,
    completed_session_count,
)
from skillswap.domain.services.pagination import Page, paginate

SUGGESTED_MIN_SCORE = 20
ALL_CATEGORIES = "all"


class MatchSortKey(str, Enum):
    """Ordering of match listings."""

    RATING = "rating"
    COMPATIBILITY = "compatibility"
    SESSIONS = "sessions"
    NAME = "name"
    NEWEST = "newest"


@dataclass
class MatchCandidate:
    """A potential partner scored against the requester."""

    user: UserEntity
    compatibility_score: int
    average_rating: float
    completed_sessions: int

    @property
    def created_at(self) -> datetime:
        return self.user.created_at


def score_candidate(requester: UserEntity, candidate: UserEntity) -> MatchCandidate:
    return MatchCandidate(
        user=candidate,
        compatibility_score=compatibility_score(
            requester.offers, requester.seeks, candidate.offers, candidate.seeks
        ),
        average_rating=average_rating(candidate.ratings),
        completed_sessions=completed_session_count(candidate.sessions),
    )


def _contains(haystack: str, needle: str) -> bool:
    return needle in (haystack or "").lower()


def matches_search(user: UserEntity, search: str) -> bool:
    """Case-insensitive substring match against name, offers or seeks."""
    needle = search.strip().lower()
    return (
        _contains(user.name, needle)
        or any(_contains(skill, needle) for skill in user.offers)
        or any(_contains(skill, needle) for skill in user.seeks)
    )


def matches_category(user: UserEntity, category: str) -> bool:
    """Case-insensitive match of ``category`` against the user's offers."""
    needle = category.strip().lower()
    return any(_contains(skill, needle) for skill in user.offers)


def sort_candidates(candidates: List[MatchCandidate], sort_by: MatchSortKey) -> List[MatchCandidate]:
    """Sort descending by rating/compatibility/sessions/newest, ascending by name."""
    match sort_by:
        case MatchSortKey.RATING:
            return sorted(candidates, key=lambda c: c.average_rating, reverse=True)
        case MatchSortKey.COMPATIBILITY:
            return sorted(candidates, key=lambda c: c.compatibility_score, reverse=True)
        case MatchSortKey.SESSIONS:
            return sorted(candidates, key=lambda c: c.completed_sessions, reverse=True)
        case MatchSortKey.NAME:
            return sorted(candidates, key=lambda c: c.user.name.casefold())
        case MatchSortKey.NEWEST:
            return sorted(candidates, key=lambda c: c.created_at, reverse=True)
    return candidates


class MatchDomainService:
    """Domain service for partner discovery."""

    def __init__(self, user_repository: UserRepositoryInterface):
        """Initialize the match domain service.

        Args:
            user_repository: Repository for user data access
        """
        self.user_repository = user_repository

    async def _get_requester(self, user_id: str) -> UserEntity:
        requester = await self.user_repository.get_user_by_id(user_id)
        if requester is None:
            raise UserNotFoundError(user_id)
        return requester

    async def find_matches(
        self,
        user_id: str,
        search: Optional[str] = None,
        category: Optional[str] = None,
        sort_by: MatchSortKey = MatchSortKey.RATING,
        page: int = 1,
        limit: int = 20,
    ) -> Page[MatchCandidate]:
        """List scored candidates for a user.

        Args:
            user_id: Requesting user
            search: Optional free-text filter on name, offers and seeks
            category: Optional skill filter on offers; "All" disables it
            sort_by: Ordering of the results
            page: 1-based page number
            limit: Page size

        Returns:
            Page[MatchCandidate]: Requested page, with the total of the filtered set

        Raises:
            UserNotFoundError: If the requester does not exist
            ValidationError: If page or limit is below 1
        """
        if page < 1 or limit < 1:
            raise ValidationError("page and limit must be at least 1")

        requester = await self._get_requester(user_id)
        candidates = await self.user_repository.list_users(exclude_user_id=user_id)

        if search and search.strip():
            candidates = [c for c in candidates if matches_search(c, search)]

        if category and category.strip() and category.strip().lower() != ALL_CATEGORIES:
            candidates = [c for c in candidates if matches_category(c, category)]

        scored = sort_candidates([score_candidate(requester, c) for c in candidates], sort_by)

        logger.info(
            "matches_listed",
            user_id=user_id,
            candidates=len(scored),
            sort_by=sort_by.value,
            page=page,
        )
        return paginate(scored, page, limit)

    async def suggested_matches(self, user_id: str, limit: int = 5) -> List[MatchCandidate]:
        """Return the best-scoring partners among users sharing an exact skill.

        Args:
            user_id: Requesting user
            limit: Maximum number of suggestions

        Returns:
            List[MatchCandidate]: Candidates scoring above the threshold, best first
        """
        if limit < 1:
            raise ValidationError("limit must be at least 1", field="limit")

        requester = await self._get_requester(user_id)
        if not requester.offers and not requester.seeks:
            return []

        candidates = await self.user_repository.find_users_sharing_skills(
            offers=requester.offers,
            seeks=requester.seeks,
            exclude_user_id=user_id,
            limit=limit * 2,
        )

        scored = [score_candidate(requester, c) for c in candidates]
        suggested = [c for c in scored if c.compatibility_score > SUGGESTED_MIN_SCORE]
        suggested.sort(key=lambda c: c.compatibility_score, reverse=True)
        return suggested[:limit]

    async def get_match(self, user_id: str, match_id: str) -> MatchCandidate:
        """Score a single user against the requester.

        Raises:
            UserNotFoundError: If either user does not exist
        """
        candidate = await self.user_repository.get_user_by_id(match_id)
        if candidate is None:
            raise UserNotFoundError(match_id)
        requester = await self._get_requester(user_id)
        return score_candidate(requester, candidate)

    async def list_categories(self) -> List[str]:
        """All distinct skills offered or sought by any user, sorted."""
        skills = set()
        for user in await self.user_repository.list_users():
            skills.update(user.offers)
            skills.update(user.seeks)
        return sorted(skills)
