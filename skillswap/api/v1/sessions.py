"""Session scheduling endpoints."""

from typing import Optional

from fastapi import (
    APIRouter,
    Query,
    status,
)

from skillswap.constants.http import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
)
from skillswap.core.dependencies import (
    CurrentUser,
    SessionServiceDep,
)
from skillswap.schemas.sessions import (
    SessionCreateRequest,
    SessionListResponse,
    SessionResponse,
    SessionSchema,
    SessionStatsResponse,
    SessionStatsSchema,
    SessionUpdateRequest,
    UpcomingSessionsResponse,
)
from skillswap.shared.response_models import (
    BaseResponse,
    PaginationInfo,
)

router = APIRouter()


@router.get("", response_model=SessionListResponse)
async def list_sessions(
    current_user: CurrentUser,
    session_service: SessionServiceDep,
    status_filter: Optional[str] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
):
    """List the caller's sessions, newest date first."""
    result = await session_service.list_sessions(
        current_user.id, status=status_filter, page=page, limit=limit
    )
    counterparts = await session_service.counterparts_for(result.items)
    return SessionListResponse(
        sessions=[SessionSchema.from_entity(s, counterparts) for s in result.items],
        pagination=PaginationInfo.from_page(result),
    )


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    session_data: SessionCreateRequest,
    current_user: CurrentUser,
    session_service: SessionServiceDep,
):
    """Propose a session; both participants get a pending copy.

    Args:
        session_data: Counterpart, date, skill and notes
        current_user: Authenticated user
        session_service: Session domain service

    Returns:
        SessionResponse: The caller's copy
    """
    session = await session_service.create_session(
        current_user.id,
        with_user_id=session_data.with_user_id,
        date=session_data.date,
        skill=session_data.skill,
        notes=session_data.notes,
    )
    counterparts = await session_service.counterparts_for([session])
    return SessionResponse(
        message="Session created successfully",
        session=SessionSchema.from_entity(session, counterparts),
    )


@router.get("/stats/overview", response_model=SessionStatsResponse)
async def session_stats(current_user: CurrentUser, session_service: SessionServiceDep):
    stats = await session_service.get_stats(current_user.id)
    return SessionStatsResponse(stats=SessionStatsSchema.from_domain(stats))


@router.get("/upcoming", response_model=UpcomingSessionsResponse)
async def upcoming_sessions(
    current_user: CurrentUser,
    session_service: SessionServiceDep,
    limit: int = Query(5, ge=1, le=MAX_PAGE_SIZE),
):
    """Pending and confirmed sessions from now on, soonest first."""
    sessions = await session_service.upcoming_sessions(current_user.id, limit=limit)
    counterparts = await session_service.counterparts_for(sessions)
    return UpcomingSessionsResponse(
        sessions=[SessionSchema.from_entity(s, counterparts) for s in sessions]
    )


@router.put("/{session_id}", response_model=SessionResponse)
async def update_session(
    session_id: str,
    update: SessionUpdateRequest,
    current_user: CurrentUser,
    session_service: SessionServiceDep,
):
    """Change status and/or notes on both copies of a session."""
    session = await session_service.update_session(
        current_user.id, session_id, status=update.status, notes=update.notes
    )
    counterparts = await session_service.counterparts_for([session])
    return SessionResponse(
        message="Session updated successfully",
        session=SessionSchema.from_entity(session, counterparts),
    )


@router.delete("/{session_id}", response_model=BaseResponse)
async def delete_session(
    session_id: str,
    current_user: CurrentUser,
    session_service: SessionServiceDep,
):
    await session_service.delete_session(current_user.id, session_id)
    return BaseResponse(message="Session deleted successfully")
