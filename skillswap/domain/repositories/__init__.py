"""Repository interfaces for SkillSwap.

This module contains abstract repository interfaces that define
the contracts for data access without specifying implementation details.
"""

from .user_repository import UserRepositoryInterface

__all__ = [
    "UserRepositoryInterface",
]
