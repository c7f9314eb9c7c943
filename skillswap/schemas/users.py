"""User and profile schemas for the API.

This module provides schemas for profile reads and edits, skill updates,
public statistics and ratings.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from skillswap.domain.entities import (
    Coordinates,
    Location,
    RatingEntity,
    UserEntity,
    UserPreferences,
)
from skillswap.domain.services.user_service import UserStats
from skillswap.shared.response_models import BaseResponse


class CoordinatesSchema(BaseModel):
    """Latitude/longitude pair."""

    lat: Optional[float] = Field(None, ge=-90, le=90)
    lng: Optional[float] = Field(None, ge=-180, le=180)


class LocationSchema(BaseModel):
    """Where a user is based."""

    city: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    coordinates: CoordinatesSchema = Field(default_factory=CoordinatesSchema)

    def to_domain(self) -> Location:
        return Location(
            city=self.city,
            country=self.country,
            coordinates=Coordinates(lat=self.coordinates.lat, lng=self.coordinates.lng),
        )

    @classmethod
    def from_domain(cls, location: Location) -> "LocationSchema":
        return cls(
            city=location.city,
            country=location.country,
            coordinates=CoordinatesSchema(
                lat=location.coordinates.lat, lng=location.coordinates.lng
            ),
        )


class PreferencesSchema(BaseModel):
    """Exchange preferences."""

    availability: Optional[str] = Field(None, max_length=100)
    session_length: Optional[str] = Field(None, max_length=50)
    communication: Optional[str] = Field(None, max_length=50)
    location: Optional[str] = Field(None, description="online, in-person or both", max_length=50)

    def to_domain(self) -> UserPreferences:
        return UserPreferences(**self.model_dump())

    @classmethod
    def from_domain(cls, preferences: UserPreferences) -> "PreferencesSchema":
        return cls(
            availability=preferences.availability,
            session_length=preferences.session_length,
            communication=preferences.communication,
            location=preferences.location,
        )


class RatingSchema(BaseModel):
    """A rating received by a user."""

    id: str
    from_user_id: str
    score: int
    comment: str = ""
    created_at: datetime

    @classmethod
    def from_entity(cls, rating: RatingEntity) -> "RatingSchema":
        return cls(
            id=rating.id,
            from_user_id=rating.from_user_id,
            score=rating.score,
            comment=rating.comment,
            created_at=rating.created_at,
        )


class UserProfile(BaseModel):
    """User profile as returned by the API. Never includes the password hash."""

    id: str
    email: str
    name: str
    bio: str = ""
    offers: List[str] = Field(default_factory=list)
    seeks: List[str] = Field(default_factory=list)
    location: LocationSchema = Field(default_factory=LocationSchema)
    preferences: PreferencesSchema = Field(default_factory=PreferencesSchema)
    ratings: List[RatingSchema] = Field(default_factory=list)
    is_online: bool = False
    last_active: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, user: UserEntity) -> "UserProfile":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            bio=user.bio,
            offers=user.offers,
            seeks=user.seeks,
            location=LocationSchema.from_domain(user.location),
            preferences=PreferencesSchema.from_domain(user.preferences),
            ratings=[RatingSchema.from_entity(r) for r in user.ratings],
            is_online=user.is_online,
            last_active=user.last_active,
            created_at=user.created_at,
        )


class UserSummary(BaseModel):
    """Minimal identity of another user, embedded in sessions and conversations."""

    id: str
    name: str
    email: str

    @classmethod
    def from_entity(cls, user: UserEntity) -> "UserSummary":
        return cls(id=user.id, name=user.name, email=user.email)


class ProfileUpdateRequest(BaseModel):
    """Schema for editing the caller's profile. Omitted fields are left unchanged."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    bio: Optional[str] = Field(None, max_length=500)
    location: Optional[LocationSchema] = None
    preferences: Optional[PreferencesSchema] = None


class SkillsUpdateRequest(BaseModel):
    """Schema for replacing the caller's offers and/or seeks."""

    offers: Optional[List[str]] = Field(None, max_length=50)
    seeks: Optional[List[str]] = Field(None, max_length=50)


class RateUserRequest(BaseModel):
    """Schema for rating another user."""

    user_id: str = Field(..., min_length=1, description="ID of the user being rated")
    score: int = Field(..., ge=1, le=5, description="Score from 1 to 5")
    comment: Optional[str] = Field(None, max_length=1000)


class UserStatsSchema(BaseModel):
    """Public activity figures."""

    skills_offered: int
    skills_seeking: int
    sessions_completed: int
    average_rating: float
    total_ratings: int

    @classmethod
    def from_domain(cls, stats: UserStats) -> "UserStatsSchema":
        return cls(
            skills_offered=stats.skills_offered,
            skills_seeking=stats.skills_seeking,
            sessions_completed=stats.completed_sessions,
            average_rating=stats.average_rating,
            total_ratings=stats.total_ratings,
        )


class UserResponse(BaseResponse):
    """Response carrying one user profile."""

    user: UserProfile


class UserStatsResponse(BaseResponse):
    """Response carrying a user's public statistics."""

    stats: UserStatsSchema


class RatingResponse(BaseResponse):
    """Response for a submitted rating."""

    rating: RatingSchema
