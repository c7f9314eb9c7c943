"""Firestore User Repository.

Each user is a single Firestore document. Sessions, ratings and messages are
stored inside it as arrays of maps and are written back together with the
rest of the document.
"""

from typing import (
    Any,
    Dict,
    Iterable,
    List,
    Optional,
)

from google.cloud.firestore import Client

from skillswap.core.config import settings
from skillswap.domain.entities import (
    Coordinates,
    Location,
    MessageEntity,
    RatingEntity,
    SessionEntity,
    UserEntity,
    UserPreferences,
)
from skillswap.domain.repositories import UserRepositoryInterface
from skillswap.infrastructure.firestore.base_repository import BaseFirestoreRepository

# Firestore caps the number of values in an array-contains-any filter.
ARRAY_CONTAINS_ANY_MAX_VALUES = 30


def _chunks(values: List[str], size: int) -> Iterable[List[str]]:
    for start in range(0, len(values), size):
        yield values[start:start + size]


class FirestoreUserRepository(BaseFirestoreRepository, UserRepositoryInterface):
    """Firestore implementation of User Repository."""

    def __init__(self, client: Optional[Client] = None, collection_name: Optional[str] = None):
        """Initialize Firestore User Repository."""
        super().__init__(collection_name or settings.FIRESTORE_USERS_COLLECTION, client)

    async def create_user(self, user: UserEntity) -> UserEntity:
        """Create a new user.

        Args:
            user: User entity to create

        Returns:
            UserEntity: Created user entity
        """
        data = self.from_entity(user)
        user.id = await self.create(data, user.id)
        user.updated_at = data["updated_at"]
        return user

    async def get_user_by_id(self, user_id: str) -> Optional[UserEntity]:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            Optional[UserEntity]: User entity or None if not found
        """
        data = await self.get_by_id(user_id)
        if data:
            return self.to_entity(data)
        return None

    async def get_user_by_email(self, email: str) -> Optional[UserEntity]:
        """Get user by email address.

        Args:
            email: User email address

        Returns:
            Optional[UserEntity]: User entity or None if not found
        """
        users = await self.find_by_field("email", "==", email.lower().strip(), limit=1)
        if users:
            return self.to_entity(users[0])
        return None

    async def get_users_by_ids(self, user_ids: Iterable[str]) -> List[UserEntity]:
        users = []
        for user_id in dict.fromkeys(user_ids):
            user = await self.get_user_by_id(user_id)
            if user is not None:
                users.append(user)
        return users

    async def save_user(self, user: UserEntity) -> UserEntity:
        """Overwrite the stored document with the entity state.

        Args:
            user: User entity to save

        Returns:
            UserEntity: Saved user entity
        """
        data = self.from_entity(user)
        await self.set(user.id, data)
        user.updated_at = data["updated_at"]
        return user

    async def list_users(self, exclude_user_id: Optional[str] = None) -> List[UserEntity]:
        return [
            self.to_entity(data)
            for data in await self.list_all()
            if data["id"] != exclude_user_id
        ]

    async def find_users_sharing_skills(
        self,
        offers: List[str],
        seeks: List[str],
        exclude_user_id: Optional[str] = None,
        limit: int = 10,
    ) -> List[UserEntity]:
        """Find users offering something in ``seeks`` or seeking something in ``offers``.

        Firestore cannot OR across two array fields, so each side is queried
        separately and the results are merged by document ID.
        """
        found: Dict[str, Dict[str, Any]] = {}
        for field, values in (("offers", seeks), ("seeks", offers)):
            for chunk in _chunks(list(dict.fromkeys(values)), ARRAY_CONTAINS_ANY_MAX_VALUES):
                for data in await self.find_by_field(
                    field, "array_contains_any", chunk, limit=limit + 1
                ):
                    if data["id"] != exclude_user_id:
                        found.setdefault(data["id"], data)

        return [self.to_entity(data) for data in list(found.values())[:limit]]

    async def email_exists(self, email: str) -> bool:
        """Check if email exists.

        Args:
            email: Email address

        Returns:
            bool: True if email exists
        """
        users = await self.find_by_field("email", "==", email.lower().strip(), limit=1)
        return len(users) > 0

    def to_entity(self, data: Dict[str, Any]) -> UserEntity:
        """Convert Firestore document to UserEntity.

        Args:
            data: Firestore document data

        Returns:
            UserEntity: User entity
        """
        location_data = data.get("location") or {}
        coordinates_data = location_data.get("coordinates") or {}
        preferences_data = data.get("preferences") or {}

        return UserEntity(
            user_id=data.get("id"),
            email=data["email"],
            hashed_password=data.get("hashed_password", ""),
            name=data.get("name", ""),
            bio=data.get("bio", ""),
            offers=data.get("offers", []),
            seeks=data.get("seeks", []),
            location=Location(
                city=location_data.get("city"),
                country=location_data.get("country"),
                coordinates=Coordinates(
                    lat=coordinates_data.get("lat"),
                    lng=coordinates_data.get("lng"),
                ),
            ),
            preferences=UserPreferences(
                availability=preferences_data.get("availability"),
                session_length=preferences_data.get("session_length"),
                communication=preferences_data.get("communication"),
                location=preferences_data.get("location"),
            ),
            sessions=[
                SessionEntity(
                    session_id=s.get("id"),
                    with_user_id=s["with_user_id"],
                    date=s["date"],
                    skill=s["skill"],
                    status=s.get("status", "pending"),
                    notes=s.get("notes", ""),
                    created_at=s.get("created_at"),
                    updated_at=s.get("updated_at"),
                )
                for s in data.get("sessions", [])
            ],
            ratings=[
                RatingEntity(
                    rating_id=r.get("id"),
                    from_user_id=r["from_user_id"],
                    score=r["score"],
                    comment=r.get("comment", ""),
                    created_at=r.get("created_at"),
                )
                for r in data.get("ratings", [])
            ],
            messages=[
                MessageEntity(
                    message_id=m.get("id"),
                    from_user_id=m["from_user_id"],
                    to_user_id=m["to_user_id"],
                    content=m["content"],
                    message_type=m.get("type", "text"),
                    timestamp=m.get("timestamp"),
                    read=m.get("read", False),
                    read_at=m.get("read_at"),
                )
                for m in data.get("messages", [])
            ],
            is_online=data.get("is_online", False),
            last_active=data.get("last_active"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    def from_entity(self, entity: UserEntity) -> Dict[str, Any]:
        """Convert UserEntity to Firestore document.

        Args:
            entity: User entity

        Returns:
            Dict[str, Any]: Firestore document data
        """
        return {
            "email": entity.email,
            "hashed_password": entity.hashed_password,
            "name": entity.name,
            "bio": entity.bio,
            "offers": list(entity.offers),
            "seeks": list(entity.seeks),
            "location": {
                "city": entity.location.city,
                "country": entity.location.country,
                "coordinates": {
                    "lat": entity.location.coordinates.lat,
                    "lng": entity.location.coordinates.lng,
                },
            },
            "preferences": {
                "availability": entity.preferences.availability,
                "session_length": entity.preferences.session_length,
                "communication": entity.preferences.communication,
                "location": entity.preferences.location,
            },
            "sessions": [
                {
                    "id": s.id,
                    "with_user_id": s.with_user_id,
                    "date": s.date,
                    "skill": s.skill,
                    "status": s.status.value,
                    "notes": s.notes,
                    "created_at": s.created_at,
                    "updated_at": s.updated_at,
                }
                for s in entity.sessions
            ],
            "ratings": [
                {
                    "id": r.id,
                    "from_user_id": r.from_user_id,
                    "score": r.score,
                    "comment": r.comment,
                    "created_at": r.created_at,
                }
                for r in entity.ratings
            ],
            "messages": [
                {
                    "id": m.id,
                    "from_user_id": m.from_user_id,
                    "to_user_id": m.to_user_id,
                    "content": m.content,
                    "type": m.type.value,
                    "timestamp": m.timestamp,
                    "read": m.read,
                    "read_at": m.read_at,
                }
                for m in entity.messages
            ],
            "is_online": entity.is_online,
            "last_active": entity.last_active,
            "created_at": entity.created_at,
        }
