"""User profile endpoints.

This module provides profile reads and edits, skill updates, public
profiles, statistics and ratings.
"""

from fastapi import (
    APIRouter,
    status,
)

from skillswap.core.dependencies import (
    CurrentUser,
    UserServiceDep,
)
from skillswap.schemas.users import (
    ProfileUpdateRequest,
    RateUserRequest,
    RatingResponse,
    RatingSchema,
    SkillsUpdateRequest,
    UserProfile,
    UserResponse,
    UserStatsResponse,
    UserStatsSchema,
)

router = APIRouter()


@router.get("/profile", response_model=UserResponse)
async def get_profile(current_user: CurrentUser):
    """Get the caller's own profile."""
    return UserResponse(user=UserProfile.from_entity(current_user))


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    profile_data: ProfileUpdateRequest,
    current_user: CurrentUser,
    user_service: UserServiceDep,
):
    """Update name, bio, location and preferences.

    Args:
        profile_data: Fields to change; omitted fields are kept
        current_user: Authenticated user
        user_service: User domain service

    Returns:
        UserResponse: Updated profile
    """
    user = await user_service.update_profile(
        current_user.id,
        name=profile_data.name,
        bio=profile_data.bio,
        location=profile_data.location.to_domain() if profile_data.location else None,
        preferences=profile_data.preferences.to_domain() if profile_data.preferences else None,
    )
    return UserResponse(message="Profile updated successfully", user=UserProfile.from_entity(user))


@router.put("/skills", response_model=UserResponse)
async def update_skills(
    skills: SkillsUpdateRequest,
    current_user: CurrentUser,
    user_service: UserServiceDep,
):
    """Replace the caller's offers and/or seeks."""
    user = await user_service.update_skills(
        current_user.id, offers=skills.offers, seeks=skills.seeks
    )
    return UserResponse(message="Skills updated successfully", user=UserProfile.from_entity(user))


@router.post("/rate", response_model=RatingResponse, status_code=status.HTTP_201_CREATED)
async def rate_user(
    rating_data: RateUserRequest,
    current_user: CurrentUser,
    user_service: UserServiceDep,
):
    """Rate another user once.

    Args:
        rating_data: Target user, score and comment
        current_user: Authenticated user leaving the rating
        user_service: User domain service

    Returns:
        RatingResponse: The stored rating
    """
    rating = await user_service.rate_user(
        rater_id=current_user.id,
        ratee_id=rating_data.user_id,
        score=rating_data.score,
        comment=rating_data.comment,
    )
    return RatingResponse(
        message="Rating submitted successfully",
        rating=RatingSchema.from_entity(rating),
    )


@router.get("/stats/{user_id}", response_model=UserStatsResponse)
async def get_user_stats(user_id: str, current_user: CurrentUser, user_service: UserServiceDep):
    """Public activity figures for any user."""
    stats = await user_service.get_stats(user_id)
    return UserStatsResponse(stats=UserStatsSchema.from_domain(stats))


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, current_user: CurrentUser, user_service: UserServiceDep):
    """View another user's profile."""
    user = await user_service.get_user(user_id)
    return UserResponse(user=UserProfile.from_entity(user))
