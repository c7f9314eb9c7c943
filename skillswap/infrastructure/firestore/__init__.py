"""Firestore repository implementations."""

from .base_repository import BaseFirestoreRepository
from .user_repository import FirestoreUserRepository

__all__ = [
    "BaseFirestoreRepository",
    "FirestoreUserRepository",
]
