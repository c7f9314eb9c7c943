"""User repository interface for SkillSwap.

This module defines the contract for user data access operations
without specifying implementation details. A user is stored as one
document together with its embedded sessions, ratings and messages, so
saving a user persists all of them at once.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from skillswap.domain.entities import UserEntity


class UserRepositoryInterface(ABC):
    """Abstract repository interface for User operations."""

    @abstractmethod
    async def create_user(self, user: UserEntity) -> UserEntity:
        """Create a new user.

        Args:
            user: User entity to create

        Returns:
            UserEntity: Created user with assigned ID

        Raises:
            RepositoryError: If creation fails
        """
        pass

    @abstractmethod
    async def get_user_by_id(self, user_id: str) -> Optional[UserEntity]:
        """Get user by ID.

        Args:
            user_id: User ID to lookup

        Returns:
            UserEntity or None if not found
        """
        pass

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[UserEntity]:
        """Get user by email address.

        Args:
            email: Email to lookup (already normalized)

        Returns:
            UserEntity or None if not found
        """
        pass

    @abstractmethod
    async def get_users_by_ids(self, user_ids: Iterable[str]) -> List[UserEntity]:
        """Get every existing user among the given IDs.

        Args:
            user_ids: IDs to lookup; unknown IDs are skipped

        Returns:
            List[UserEntity]: Users found
        """
        pass

    @abstractmethod
    async def save_user(self, user: UserEntity) -> UserEntity:
        """Persist the whole user document, embedded lists included.

        Args:
            user: User entity with updated data

        Returns:
            UserEntity: Saved user

        Raises:
            RepositoryError: If the write fails
        """
        pass

    @abstractmethod
    async def list_users(self, exclude_user_id: Optional[str] = None) -> List[UserEntity]:
        """Load every user.

        Args:
            exclude_user_id: Optional user to leave out of the result

        Returns:
            List[UserEntity]: All users
        """
        pass

    @abstractmethod
    async def find_users_sharing_skills(
        self,
        offers: List[str],
        seeks: List[str],
        exclude_user_id: Optional[str] = None,
        limit: int = 10,
    ) -> List[UserEntity]:
        """Find users whose offers contain one of ``seeks`` or whose seeks contain one of ``offers``.

        Membership is exact, as evaluated by the store.

        Args:
            offers: Skills offered by the requester
            seeks: Skills sought by the requester
            exclude_user_id: Optional user to leave out of the result
            limit: Maximum number of users to return

        Returns:
            List[UserEntity]: Matching users
        """
        pass

    @abstractmethod
    async def email_exists(self, email: str) -> bool:
        """Check if email exists.

        Args:
            email: Email address

        Returns:
            bool: True if a user with that email exists
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check that the underlying store is reachable."""
        pass
