"""Match discovery endpoints."""

from typing import Optional

from fastapi import (
    APIRouter,
    Query,
)

from skillswap.constants.http import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
)
from skillswap.core.dependencies import (
    CurrentUser,
    MatchServiceDep,
)
from skillswap.domain.services.match_service import MatchSortKey
from skillswap.schemas.matches import (
    CategoriesResponse,
    MatchDetailResponse,
    MatchDetailSchema,
    MatchListResponse,
    MatchSchema,
    SuggestedMatchesResponse,
)
from skillswap.shared.response_models import PaginationInfo

router = APIRouter()


@router.get("", response_model=MatchListResponse)
async def list_matches(
    current_user: CurrentUser,
    match_service: MatchServiceDep,
    search: Optional[str] = Query(None, max_length=100),
    category: Optional[str] = Query(None, max_length=100),
    sort_by: MatchSortKey = Query(MatchSortKey.RATING),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
):
    """List potential partners with compatibility scores.

    Args:
        current_user: Authenticated user
        match_service: Match domain service
        search: Free-text filter on name and skills
        category: Skill filter on offers; "All" disables it
        sort_by: rating, compatibility, sessions, name or newest
        page: 1-based page number
        limit: Page size

    Returns:
        MatchListResponse: One page of matches and the pagination block
    """
    result = await match_service.find_matches(
        current_user.id,
        search=search,
        category=category,
        sort_by=sort_by,
        page=page,
        limit=limit,
    )
    return MatchListResponse(
        matches=[MatchSchema.from_candidate(c) for c in result.items],
        pagination=PaginationInfo.from_page(result),
    )


@router.get("/suggested", response_model=SuggestedMatchesResponse)
async def suggested_matches(
    current_user: CurrentUser,
    match_service: MatchServiceDep,
    limit: int = Query(5, ge=1, le=MAX_PAGE_SIZE),
):
    """Best-scoring partners among users sharing a skill with the caller."""
    candidates = await match_service.suggested_matches(current_user.id, limit=limit)
    return SuggestedMatchesResponse(matches=[MatchSchema.from_candidate(c) for c in candidates])


@router.get("/categories/list", response_model=CategoriesResponse)
async def list_categories(current_user: CurrentUser, match_service: MatchServiceDep):
    return CategoriesResponse(categories=await match_service.list_categories())


@router.get("/{match_id}", response_model=MatchDetailResponse)
async def get_match(match_id: str, current_user: CurrentUser, match_service: MatchServiceDep):
    """One partner in detail, scored against the caller."""
    candidate = await match_service.get_match(current_user.id, match_id)
    return MatchDetailResponse(match=MatchDetailSchema.from_candidate(candidate))
