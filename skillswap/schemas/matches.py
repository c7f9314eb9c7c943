"""Match schemas for the API."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from skillswap.domain.services.match_service import MatchCandidate
from skillswap.schemas.users import LocationSchema, RatingSchema
from skillswap.shared.response_models import BaseResponse, PaginationInfo


class MatchSchema(BaseModel):
    """A potential partner scored against the caller."""

    id: str
    name: str
    email: str
    bio: str = ""
    offers: List[str] = Field(default_factory=list)
    seeks: List[str] = Field(default_factory=list)
    location: LocationSchema = Field(default_factory=LocationSchema)
    average_rating: float
    completed_sessions: int
    compatibility_score: int = Field(..., ge=0, le=100)
    is_online: bool = False
    created_at: datetime

    @classmethod
    def from_candidate(cls, candidate: MatchCandidate) -> "MatchSchema":
        user = candidate.user
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            bio=user.bio,
            offers=user.offers,
            seeks=user.seeks,
            location=LocationSchema.from_domain(user.location),
            average_rating=candidate.average_rating,
            completed_sessions=candidate.completed_sessions,
            compatibility_score=candidate.compatibility_score,
            is_online=user.is_online,
            created_at=user.created_at,
        )


class MatchDetailSchema(MatchSchema):
    """Match plus the ratings the partner has received."""

    ratings: List[RatingSchema] = Field(default_factory=list)

    @classmethod
    def from_candidate(cls, candidate: MatchCandidate) -> "MatchDetailSchema":
        base = MatchSchema.from_candidate(candidate).model_dump()
        return cls(
            **base,
            ratings=[RatingSchema.from_entity(r) for r in candidate.user.ratings],
        )


class MatchListResponse(BaseResponse):
    """Paginated match listing."""

    matches: List[MatchSchema]
    pagination: PaginationInfo


class SuggestedMatchesResponse(BaseResponse):
    """Top suggested partners."""

    matches: List[MatchSchema]


class MatchDetailResponse(BaseResponse):
    """One match in detail."""

    match: MatchDetailSchema


class CategoriesResponse(BaseResponse):
    """Every distinct skill on the platform."""

    categories: List[str]
