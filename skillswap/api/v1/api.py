"""API v1 router configuration.

This module sets up the main API router and includes the sub-routers for
authentication, profiles, matching, sessions and messaging.
"""

from fastapi import APIRouter

from skillswap.api.v1.auth import router as auth_router
from skillswap.api.v1.matches import router as matches_router
from skillswap.api.v1.messages import router as messages_router
from skillswap.api.v1.sessions import router as sessions_router
from skillswap.api.v1.users import router as users_router

api_router = APIRouter()

# Include routers
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(users_router, prefix="/users", tags=["users"])
api_router.include_router(matches_router, prefix="/matches", tags=["matches"])
api_router.include_router(sessions_router, prefix="/sessions", tags=["sessions"])
api_router.include_router(messages_router, prefix="/messages", tags=["messages"])
