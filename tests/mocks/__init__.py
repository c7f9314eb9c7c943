"""Mock services for testing.

This package contains an in-memory stand-in for the Firestore client so the
repositories can be exercised without a Firebase project or emulator.
Only the calls the repositories make are implemented.
"""

import copy
import uuid
from datetime import UTC, datetime
from typing import Any, Dict, Iterator, List, Optional, Tuple

from google.api_core.exceptions import ServiceUnavailable


class MockFirestore:
    """Mock Firestore database for testing."""

    def __init__(self):
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.fail_reads = False

    def collection(self, name: str) -> "MockCollection":
        """Get or create a collection."""
        if name not in self.collections:
            self.collections[name] = {}
        return MockCollection(self, self.collections[name])

    def raw(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """Stored document data, for assertions."""
        return self.collections.get(collection, {}).get(doc_id)


class MockDocumentSnapshot:
    """Mock Firestore document snapshot."""

    def __init__(self, doc_id: str, data: Optional[Dict[str, Any]]):
        self.id = doc_id
        self._data = copy.deepcopy(data)

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self._data)


class MockDocument:
    """Mock Firestore document reference."""

    def __init__(self, collection_data: Dict[str, Dict[str, Any]], doc_id: str):
        self.collection_data = collection_data
        self.id = doc_id

    def set(self, data: Dict[str, Any]) -> None:
        self.collection_data[self.id] = copy.deepcopy(data)

    def get(self) -> MockDocumentSnapshot:
        return MockDocumentSnapshot(self.id, self.collection_data.get(self.id))

    def delete(self) -> None:
        self.collection_data.pop(self.id, None)


def _matches(data: Dict[str, Any], field: str, op: str, value: Any) -> bool:
    actual = data.get(field)
    if op == "==":
        return actual == value
    if op == "array_contains_any":
        return any(item in value for item in actual or [])
    raise NotImplementedError(f"Operator {op} is not supported by MockFirestore")


class MockQuery:
    """Mock Firestore query supporting where/limit/stream."""

    def __init__(
        self,
        db: MockFirestore,
        collection_data: Dict[str, Dict[str, Any]],
        filters: Optional[List[Tuple[str, str, Any]]] = None,
        limit: Optional[int] = None,
    ):
        self._db = db
        self._collection_data = collection_data
        self._filters = filters or []
        self._limit = limit

    def where(self, field: str, op: str, value: Any) -> "MockQuery":
        return MockQuery(
            self._db, self._collection_data, self._filters + [(field, op, value)], self._limit
        )

    def limit(self, count: int) -> "MockQuery":
        return MockQuery(self._db, self._collection_data, self._filters, count)

    def stream(self) -> Iterator[MockDocumentSnapshot]:
        if self._db.fail_reads:
            raise ServiceUnavailable("Firestore unavailable")

        returned = 0
        for doc_id, data in list(self._collection_data.items()):
            if all(_matches(data, *f) for f in self._filters):
                if self._limit is not None and returned >= self._limit:
                    return
                returned += 1
                yield MockDocumentSnapshot(doc_id, data)


class MockCollection(MockQuery):
    """Mock Firestore collection."""

    def document(self, doc_id: Optional[str] = None) -> MockDocument:
        return MockDocument(self._collection_data, doc_id or uuid.uuid4().hex)

    def add(self, data: Dict[str, Any]) -> Tuple[datetime, MockDocument]:
        """Add a document with an auto-generated ID."""
        ref = self.document()
        ref.set(data)
        return datetime.now(UTC), ref
