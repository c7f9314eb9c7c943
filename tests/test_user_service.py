"""Tests for the user domain service."""

import pytest

from skillswap.domain.entities import Location, SessionEntity, SessionStatus, UserPreferences
from skillswap.domain.exceptions import (
    DuplicateRatingError,
    InvalidUserCredentialsError,
    SelfRatingError,
    UserAlreadyExistsError,
    UserNotFoundError,
    ValidationError,
)
from skillswap.domain.services import UserDomainService
from skillswap.shared.utils.time import utc_now
from tests.conftest import TEST_PASSWORD


@pytest.fixture
def user_service(user_repository) -> UserDomainService:
    return UserDomainService(user_repository)


class TestRegistration:
    """Test suite for registration and login."""

    async def test_register(self, user_service, user_repository):
        user = await user_service.register_user(
            "New@Example.com", "password123", " New User ", offers=["Guitar"]
        )

        assert user.id
        assert user.email == "new@example.com"
        assert user.name == "New User"
        assert user.is_online
        assert user.hashed_password != "password123"
        assert await user_repository.email_exists("new@example.com")

    async def test_register_duplicate(self, user_service, make_user):
        await make_user("taken@example.com")
        with pytest.raises(UserAlreadyExistsError):
            await user_service.register_user("TAKEN@example.com", "password123", "Someone")

    async def test_register_requires_name(self, user_service):
        with pytest.raises(ValidationError):
            await user_service.register_user("a@example.com", "password123", "  ")

    async def test_authenticate(self, user_service, make_user):
        created = await make_user("alice@example.com")

        user = await user_service.authenticate_user("ALICE@example.com", TEST_PASSWORD)

        assert user.id == created.id
        assert user.is_online

    async def test_authenticate_wrong_password(self, user_service, make_user):
        await make_user("alice@example.com")
        with pytest.raises(InvalidUserCredentialsError):
            await user_service.authenticate_user("alice@example.com", "not-the-password")

    async def test_logout(self, user_service, user_repository, make_user):
        user = await make_user("alice@example.com", is_online=True)

        await user_service.logout_user(user.id)

        assert not (await user_repository.get_user_by_id(user.id)).is_online


class TestProfile:
    """Test suite for profile and skills edits."""

    async def test_update_profile(self, user_service, make_user):
        user = await make_user("alice@example.com", name="Alice", bio="Old bio")

        updated = await user_service.update_profile(
            user.id,
            bio="New bio",
            location=Location(city="Lisbon", country="Portugal"),
            preferences=UserPreferences(availability="weekends"),
        )

        assert updated.name == "Alice"
        assert updated.bio == "New bio"
        assert updated.location.city == "Lisbon"
        assert updated.preferences.availability == "weekends"

    async def test_update_profile_blank_name(self, user_service, make_user):
        user = await make_user("alice@example.com")
        with pytest.raises(ValidationError):
            await user_service.update_profile(user.id, name=" ")

    async def test_update_skills(self, user_service, user_repository, make_user):
        user = await make_user("alice@example.com", offers=["Guitar"], seeks=["Spanish"])

        await user_service.update_skills(user.id, seeks=["French", " "])

        stored = await user_repository.get_user_by_id(user.id)
        assert stored.offers == ["Guitar"]
        assert stored.seeks == ["French"]

    async def test_update_skills_requires_a_side(self, user_service, make_user):
        user = await make_user("alice@example.com")
        with pytest.raises(ValidationError):
            await user_service.update_skills(user.id)

    async def test_unknown_user(self, user_service):
        with pytest.raises(UserNotFoundError):
            await user_service.get_user("missing")


class TestRatings:
    """Test suite for rating users."""

    async def test_rate_user(self, user_service, user_repository, make_user):
        rater = await make_user("rater@example.com")
        ratee = await make_user("ratee@example.com")

        rating = await user_service.rate_user(rater.id, ratee.id, 5, "Great tutor")

        stored = await user_repository.get_user_by_id(ratee.id)
        assert [r.id for r in stored.ratings] == [rating.id]
        assert stored.ratings[0].comment == "Great tutor"
        assert (await user_repository.get_user_by_id(rater.id)).ratings == []

    async def test_rate_twice(self, user_service, make_user):
        rater = await make_user("rater@example.com")
        ratee = await make_user("ratee@example.com")
        await user_service.rate_user(rater.id, ratee.id, 5)

        with pytest.raises(DuplicateRatingError):
            await user_service.rate_user(rater.id, ratee.id, 1)

    async def test_other_rater_can_still_rate(self, user_service, make_user):
        first = await make_user("first@example.com")
        second = await make_user("second@example.com")
        ratee = await make_user("ratee@example.com")
        await user_service.rate_user(first.id, ratee.id, 5)

        await user_service.rate_user(second.id, ratee.id, 3)

        stats = await user_service.get_stats(ratee.id)
        assert stats.total_ratings == 2
        assert stats.average_rating == 4.0

    async def test_rate_self(self, user_service, make_user):
        user = await make_user("alice@example.com")
        with pytest.raises(SelfRatingError):
            await user_service.rate_user(user.id, user.id, 5)

    async def test_rate_missing_user(self, user_service, make_user):
        rater = await make_user("rater@example.com")
        with pytest.raises(UserNotFoundError):
            await user_service.rate_user(rater.id, "missing", 5)

    @pytest.mark.parametrize("score", [0, 6])
    async def test_score_out_of_range(self, user_service, make_user, score):
        rater = await make_user("rater@example.com")
        ratee = await make_user("ratee@example.com")
        with pytest.raises(ValidationError):
            await user_service.rate_user(rater.id, ratee.id, score)


class TestUserStats:
    async def test_stats(self, user_service, make_user):
        now = utc_now()
        user = await make_user(
            "alice@example.com",
            offers=["Guitar", "Piano"],
            seeks=["Spanish"],
            sessions=[
                SessionEntity("x", now, "Guitar", status=SessionStatus.COMPLETED),
                SessionEntity("x", now, "Piano", status=SessionStatus.PENDING),
            ],
        )

        stats = await user_service.get_stats(user.id)

        assert stats.skills_offered == 2
        assert stats.skills_seeking == 1
        assert stats.completed_sessions == 1
        assert stats.average_rating == 0
        assert stats.total_ratings == 0
