"""User domain service for SkillSwap.

This module contains business logic for accounts, profiles and ratings.
"""

from dataclasses import dataclass
from typing import List, Optional

from skillswap.core.logging import logger
from skillswap.domain.entities import (
    Location,
    RatingEntity,
    UserEntity,
    UserPreferences,
)
from skillswap.domain.exceptions import (
    DuplicateRatingError,
    InvalidUserCredentialsError,
    SelfRatingError,
    UserAlreadyExistsError,
    UserNotFoundError,
    ValidationError,
)
from skillswap.domain.repositories import UserRepositoryInterface
from skillswap.domain.services.compatibility import average_rating, completed_session_count


@dataclass
class UserStats:
    """Public activity figures for a user."""

    skills_offered: int
    skills_seeking: int
    completed_sessions: int
    average_rating: float
    total_ratings: int


class UserDomainService:
    """Domain service for user-related business logic.

    Coordinates registration, authentication, profile edits and ratings.
    """

    def __init__(self, user_repository: UserRepositoryInterface):
        """Initialize the user domain service.

        Args:
            user_repository: Repository for user data access
        """
        self.user_repository = user_repository

    async def get_user(self, user_id: str) -> UserEntity:
        """Get a user by ID.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        user = await self.user_repository.get_user_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def register_user(
        self,
        email: str,
        password: str,
        name: str,
        bio: Optional[str] = None,
        offers: Optional[List[str]] = None,
        seeks: Optional[List[str]] = None,
        location: Optional[Location] = None,
    ) -> UserEntity:
        """Register a new user.

        Args:
            email: User email address
            password: Plain text password
            name: Display name
            bio: Optional biography
            offers: Skills the user can teach
            seeks: Skills the user wants to learn
            location: Optional location

        Returns:
            UserEntity: Newly created user, marked online

        Raises:
            UserAlreadyExistsError: If the email is taken
            ValidationError: If the email or password is invalid
        """
        if not name or not name.strip():
            raise ValidationError("Name is required", field="name")

        if await self.user_repository.email_exists(email):
            raise UserAlreadyExistsError(email.lower().strip())

        user = UserEntity(
            email=email,
            hashed_password=UserEntity.hash_password(password),
            name=name.strip(),
            bio=bio or "",
            offers=offers,
            seeks=seeks,
            location=location,
            is_online=True,
        )
        created_user = await self.user_repository.create_user(user)

        logger.info("user_registered", user_id=created_user.id, email=created_user.email)
        return created_user

    async def authenticate_user(self, email: str, password: str) -> UserEntity:
        """Authenticate a user with credentials and mark them online.

        Raises:
            InvalidUserCredentialsError: If the email is unknown or the password is wrong
        """
        user = await self.user_repository.get_user_by_email(email)
        if user is None or not user.verify_password(password):
            logger.warning("login_failed", email=(email or "").lower().strip())
            raise InvalidUserCredentialsError()

        user.mark_online()
        await self.user_repository.save_user(user)

        logger.info("user_logged_in", user_id=user.id)
        return user

    async def logout_user(self, user_id: str) -> None:
        user = await self.get_user(user_id)
        user.mark_offline()
        await self.user_repository.save_user(user)
        logger.info("user_logged_out", user_id=user_id)

    async def update_profile(
        self,
        user_id: str,
        name: Optional[str] = None,
        bio: Optional[str] = None,
        location: Optional[Location] = None,
        preferences: Optional[UserPreferences] = None,
    ) -> UserEntity:
        """Update the editable profile fields that were provided."""
        user = await self.get_user(user_id)

        if name is not None:
            if not name.strip():
                raise ValidationError("Name cannot be empty", field="name")
            user.name = name.strip()
        if bio is not None:
            user.bio = bio
        if location is not None:
            user.location = location
        if preferences is not None:
            user.preferences = preferences

        user.touch()
        await self.user_repository.save_user(user)
        logger.info("profile_updated", user_id=user_id)
        return user

    async def update_skills(
        self,
        user_id: str,
        offers: Optional[List[str]] = None,
        seeks: Optional[List[str]] = None,
    ) -> UserEntity:
        """Replace the user's offers and/or seeks."""
        if offers is None and seeks is None:
            raise ValidationError("offers or seeks is required")

        user = await self.get_user(user_id)
        user.update_skills(offers=offers, seeks=seeks)
        await self.user_repository.save_user(user)

        logger.info(
            "skills_updated",
            user_id=user_id,
            offers=len(user.offers),
            seeks=len(user.seeks),
        )
        return user

    async def get_stats(self, user_id: str) -> UserStats:
        user = await self.get_user(user_id)
        return UserStats(
            skills_offered=len(user.offers),
            skills_seeking=len(user.seeks),
            completed_sessions=completed_session_count(user.sessions),
            average_rating=average_rating(user.ratings),
            total_ratings=len(user.ratings),
        )

    async def rate_user(
        self,
        rater_id: str,
        ratee_id: str,
        score: int,
        comment: Optional[str] = None,
    ) -> RatingEntity:
        """Record a rating on the rated user's record.

        The duplicate check and the append are not atomic; two concurrent
        ratings from the same rater can both pass the check.

        Args:
            rater_id: User leaving the rating
            ratee_id: User being rated
            score: Integer score from 1 to 5
            comment: Optional comment

        Returns:
            RatingEntity: The stored rating

        Raises:
            UserNotFoundError: If the rated user does not exist
            SelfRatingError: If a user rates themselves
            DuplicateRatingError: If the rater already rated this user
            ValidationError: If the score is out of range
        """
        if not ratee_id:
            raise ValidationError("user_id is required", field="user_id")

        ratee = await self.get_user(ratee_id)

        if ratee_id == rater_id:
            raise SelfRatingError()

        if ratee.has_rating_from(rater_id):
            raise DuplicateRatingError(rater_id, ratee_id)

        rating = RatingEntity(from_user_id=rater_id, score=score, comment=comment or "")
        ratee.ratings.append(rating)
        await self.user_repository.save_user(ratee)

        logger.info("user_rated", rater_id=rater_id, ratee_id=ratee_id, score=score)
        return rating
