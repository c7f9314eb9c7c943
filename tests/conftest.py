"""Configuration for pytest tests.

This file contains fixtures and setup configuration for all tests.
"""

import os
from typing import Callable, Dict, Generator, List, Optional

import bcrypt
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Set test environment
os.environ["APP_ENV"] = "test"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

# Import app after setting environment
from skillswap.core.dependencies import get_user_repository  # noqa: E402
from skillswap.domain.entities import UserEntity  # noqa: E402
from skillswap.infrastructure.firestore import FirestoreUserRepository  # noqa: E402
from skillswap.main import app  # noqa: E402
from skillswap.shared.utils.auth import create_access_token  # noqa: E402
from tests.mocks import MockFirestore  # noqa: E402

TEST_PASSWORD = "password123"
# Low cost factor keeps fixture users fast to create
TEST_PASSWORD_HASH = bcrypt.hashpw(TEST_PASSWORD.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode(
    "utf-8"
)


@pytest.fixture
def firestore_client() -> MockFirestore:
    """In-memory Firestore client."""
    return MockFirestore()


@pytest.fixture
def user_repository(firestore_client: MockFirestore) -> FirestoreUserRepository:
    """User repository backed by the in-memory client."""
    return FirestoreUserRepository(client=firestore_client)


@pytest_asyncio.fixture
async def make_user(user_repository: FirestoreUserRepository) -> Callable:
    """Factory that stores a user and returns the entity."""

    async def _make(
        email: str,
        name: str = "Test User",
        offers: Optional[List[str]] = None,
        seeks: Optional[List[str]] = None,
        **kwargs,
    ) -> UserEntity:
        user = UserEntity(
            email=email,
            hashed_password=TEST_PASSWORD_HASH,
            name=name,
            offers=offers,
            seeks=seeks,
            **kwargs,
        )
        return await user_repository.create_user(user)

    return _make


@pytest.fixture
def client(user_repository: FirestoreUserRepository) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI app wired to the in-memory store."""
    app.dependency_overrides[get_user_repository] = lambda: user_repository
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def auth_headers(user_id: str) -> Dict[str, str]:
    """Bearer header for a user."""
    token = create_access_token(user_id)
    return {"Authorization": f"Bearer {token.access_token}"}


@pytest.fixture
def register(client: TestClient) -> Callable:
    """Register a user through the API and return ``(user_id, headers)``."""

    def _register(
        email: str,
        name: str = "Test User",
        offers: Optional[List[str]] = None,
        seeks: Optional[List[str]] = None,
    ):
        response = client.post(
            "/api/auth/register",
            json={
                "email": email,
                "password": TEST_PASSWORD,
                "name": name,
                "offers": offers or [],
                "seeks": seeks or [],
            },
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"]["id"], {"Authorization": f"Bearer {body['token']}"}

    return _register
