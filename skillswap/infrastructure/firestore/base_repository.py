"""Base Firestore repository.

This module provides base functionality for Firestore repositories with common
CRUD operations and query patterns.
"""

from abc import (
    ABC,
    abstractmethod,
)
from typing import (
    Any,
    Dict,
    List,
    Optional,
)

from google.api_core.exceptions import GoogleAPIError
from google.cloud.firestore import (
    Client,
    CollectionReference,
)

from skillswap.core.firebase import get_firestore
from skillswap.core.logging import logger
from skillswap.domain.exceptions import RepositoryError
from skillswap.shared.utils.time import utc_now


class BaseFirestoreRepository(ABC):
    """Base class for Firestore repositories."""

    def __init__(self, collection_name: str, client: Optional[Client] = None):
        """Initialize base Firestore repository.

        Args:
            collection_name: Name of the Firestore collection
            client: Firestore client; resolved from the Firebase app when omitted
        """
        self.collection_name = collection_name
        self._db: Optional[Client] = client
        self._collection: Optional[CollectionReference] = None

    @property
    def db(self) -> Client:
        """Get Firestore client."""
        if self._db is None:
            self._db = get_firestore()
            if self._db is None:
                raise RepositoryError("connect", "Firestore client is not available")
        return self._db

    @property
    def collection(self) -> CollectionReference:
        """Get collection reference."""
        if self._collection is None:
            self._collection = self.db.collection(self.collection_name)
        return self._collection

    @staticmethod
    def _snapshot_to_dict(doc) -> Dict[str, Any]:
        data = doc.to_dict() or {}
        data["id"] = doc.id
        return data

    async def create(self, data: Dict[str, Any], doc_id: Optional[str] = None) -> str:
        """Create a new document.

        Args:
            data: Document data
            doc_id: Optional document ID (auto-generated if not provided)

        Returns:
            str: Document ID
        """
        now = utc_now()
        data.setdefault("created_at", now)
        data["updated_at"] = now
        data.pop("id", None)

        try:
            if doc_id:
                self.collection.document(doc_id).set(data)
                return doc_id
            _, doc_ref = self.collection.add(data)
            return doc_ref.id
        except GoogleAPIError as e:
            logger.error("firestore_create_failed", collection=self.collection_name, error=str(e))
            raise RepositoryError("create", str(e)) from e

    async def get_by_id(self, doc_id: str) -> Optional[Dict[str, Any]]:
        """Get document by ID.

        Args:
            doc_id: Document ID

        Returns:
            Optional[Dict[str, Any]]: Document data or None if not found
        """
        if not doc_id:
            return None
        try:
            doc = self.collection.document(doc_id).get()
        except GoogleAPIError as e:
            logger.error(
                "firestore_get_failed", collection=self.collection_name, doc_id=doc_id, error=str(e)
            )
            raise RepositoryError("get", str(e)) from e

        if doc.exists:
            return self._snapshot_to_dict(doc)
        return None

    async def set(self, doc_id: str, data: Dict[str, Any]) -> None:
        """Overwrite a document with ``data``.

        Args:
            doc_id: Document ID
            data: Full document data
        """
        data["updated_at"] = utc_now()
        data.pop("id", None)
        try:
            self.collection.document(doc_id).set(data)
        except GoogleAPIError as e:
            logger.error(
                "firestore_set_failed", collection=self.collection_name, doc_id=doc_id, error=str(e)
            )
            raise RepositoryError("set", str(e)) from e

    async def list_all(self) -> List[Dict[str, Any]]:
        """List all documents in collection.

        Returns:
            List[Dict[str, Any]]: List of documents
        """
        try:
            return [self._snapshot_to_dict(doc) for doc in self.collection.stream()]
        except GoogleAPIError as e:
            logger.error("firestore_list_failed", collection=self.collection_name, error=str(e))
            raise RepositoryError("list", str(e)) from e

    async def find_by_field(
        self, field: str, op: str, value: Any, limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """Find documents by a single field condition.

        Args:
            field: Field name
            op: Firestore comparison operator, e.g. ``==`` or ``array_contains_any``
            value: Value to compare against
            limit: Maximum number of documents to return

        Returns:
            List[Dict[str, Any]]: List of matching documents
        """
        query = self.collection.where(field, op, value)

        if limit:
            query = query.limit(limit)

        try:
            return [self._snapshot_to_dict(doc) for doc in query.stream()]
        except GoogleAPIError as e:
            logger.error(
                "firestore_query_failed",
                collection=self.collection_name,
                field=field,
                op=op,
                error=str(e),
            )
            raise RepositoryError("query", str(e)) from e

    async def health_check(self) -> bool:
        """Check that the collection can be read."""
        try:
            list(self.collection.limit(1).stream())
        except (GoogleAPIError, RepositoryError) as e:
            logger.error("firestore_health_check_failed", collection=self.collection_name, error=str(e))
            return False
        return True

    @abstractmethod
    def to_entity(self, data: Dict[str, Any]) -> Any:
        """Convert Firestore document to domain entity.

        Args:
            data: Document data from Firestore

        Returns:
            Any: Domain entity instance
        """
        pass

    @abstractmethod
    def from_entity(self, entity: Any) -> Dict[str, Any]:
        """Convert domain entity to Firestore document.

        Args:
            entity: Domain entity instance

        Returns:
            Dict[str, Any]: Document data for Firestore
        """
        pass
