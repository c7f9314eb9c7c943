"""Authentication schemas for the API."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from skillswap.constants.auth import (
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    TOKEN_TYPE_BEARER,
)
from skillswap.schemas.users import LocationSchema, UserProfile
from skillswap.shared.response_models import BaseResponse


class Token(BaseModel):
    """Access token with its expiry."""

    access_token: str = Field(..., description="The JWT access token")
    token_type: str = Field(default=TOKEN_TYPE_BEARER, description="The type of token")
    expires_at: datetime = Field(..., description="The token expiration timestamp")


class RegisterRequest(BaseModel):
    """Schema for creating an account."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(
        ...,
        description="User password",
        min_length=PASSWORD_MIN_LENGTH,
        max_length=PASSWORD_MAX_LENGTH,
    )
    name: str = Field(..., description="Display name", min_length=1, max_length=100)
    bio: Optional[str] = Field(None, max_length=500)
    offers: List[str] = Field(default_factory=list, description="Skills the user can teach")
    seeks: List[str] = Field(default_factory=list, description="Skills the user wants to learn")
    location: Optional[LocationSchema] = None


class LoginRequest(BaseModel):
    """Schema for logging in with email and password."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LENGTH)


class AuthResponse(BaseResponse):
    """Response returned by register and login."""

    token: str = Field(..., description="Bearer access token")
    expires_at: datetime
    user: UserProfile
