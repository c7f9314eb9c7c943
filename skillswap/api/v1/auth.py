"""Authentication endpoints for the API.

This module provides endpoints for user registration, login, logout and
token verification.
"""

from fastapi import (
    APIRouter,
    Request,
    status,
)

from skillswap.core.config import settings
from skillswap.core.dependencies import (
    CurrentUser,
    UserServiceDep,
)
from skillswap.core.limiter import limiter
from skillswap.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
)
from skillswap.schemas.users import UserProfile, UserResponse
from skillswap.shared.response_models import BaseResponse
from skillswap.shared.utils.auth import create_access_token

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.RATE_LIMIT_ENDPOINTS["register"][0])
async def register(request: Request, user_data: RegisterRequest, user_service: UserServiceDep):
    """Register a new user.

    Args:
        request: The FastAPI request object for rate limiting.
        user_data: Registration details.
        user_service: User domain service.

    Returns:
        AuthResponse: The access token and the new profile.
    """
    user = await user_service.register_user(
        email=user_data.email,
        password=user_data.password,
        name=user_data.name,
        bio=user_data.bio,
        offers=user_data.offers,
        seeks=user_data.seeks,
        location=user_data.location.to_domain() if user_data.location else None,
    )
    token = create_access_token(user.id)

    return AuthResponse(
        message="User registered successfully",
        token=token.access_token,
        expires_at=token.expires_at,
        user=UserProfile.from_entity(user),
    )


@router.post("/login", response_model=AuthResponse)
@limiter.limit(settings.RATE_LIMIT_ENDPOINTS["login"][0])
async def login(request: Request, credentials: LoginRequest, user_service: UserServiceDep):
    """Login a user.

    Args:
        request: The FastAPI request object for rate limiting.
        credentials: Email and password.
        user_service: User domain service.

    Returns:
        AuthResponse: The access token and the profile.
    """
    user = await user_service.authenticate_user(credentials.email, credentials.password)
    token = create_access_token(user.id)

    return AuthResponse(
        message="Login successful",
        token=token.access_token,
        expires_at=token.expires_at,
        user=UserProfile.from_entity(user),
    )


@router.get("/verify", response_model=UserResponse)
async def verify(current_user: CurrentUser):
    """Return the profile behind the bearer token."""
    return UserResponse(user=UserProfile.from_entity(current_user))


@router.post("/logout", response_model=BaseResponse)
async def logout(current_user: CurrentUser, user_service: UserServiceDep):
    """Mark the caller offline. The token itself stays valid until it expires."""
    await user_service.logout_user(current_user.id)
    return BaseResponse(message="Logged out successfully")
