"""Tests for the session domain service."""

from datetime import timedelta

import pytest
import pytest_asyncio

from skillswap.domain.entities import SessionEntity, SessionStatus
from skillswap.domain.exceptions import (
    InvalidSessionStatusError,
    InvalidStatusTransitionError,
    SelfTargetingError,
    SessionNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from skillswap.domain.services import SessionDomainService
from skillswap.shared.utils.time import utc_now


@pytest.fixture
def session_service(user_repository) -> SessionDomainService:
    return SessionDomainService(user_repository)


@pytest_asyncio.fixture
async def pair(make_user):
    alice = await make_user("alice@example.com", name="Alice", offers=["Guitar"])
    bob = await make_user("bob@example.com", name="Bob", offers=["Spanish"])
    return alice, bob


class TestCreateSession:
    """Test suite for session creation."""

    async def test_creates_mirrored_copies(self, session_service, user_repository, pair):
        alice, bob = pair
        date = utc_now() + timedelta(days=3)

        session = await session_service.create_session(alice.id, bob.id, date, "Guitar", "First lesson")

        stored_alice = await user_repository.get_user_by_id(alice.id)
        stored_bob = await user_repository.get_user_by_id(bob.id)
        assert len(stored_alice.sessions) == 1
        assert len(stored_bob.sessions) == 1

        own, mirror = stored_alice.sessions[0], stored_bob.sessions[0]
        assert own.id == session.id
        assert own.with_user_id == bob.id
        assert mirror.with_user_id == alice.id
        assert mirror.id != own.id
        assert own.status == mirror.status == SessionStatus.PENDING
        assert mirror.date == own.date
        assert mirror.skill == "Guitar"
        assert mirror.notes == "First lesson"

    async def test_cannot_book_self(self, session_service, pair):
        alice, _ = pair
        with pytest.raises(SelfTargetingError):
            await session_service.create_session(alice.id, alice.id, utc_now(), "Guitar")

    async def test_unknown_counterpart(self, session_service, pair):
        alice, _ = pair
        with pytest.raises(UserNotFoundError):
            await session_service.create_session(alice.id, "missing", utc_now(), "Guitar")

    @pytest.mark.parametrize("field", ["with_user_id", "date", "skill"])
    async def test_missing_field(self, session_service, pair, field):
        alice, bob = pair
        kwargs = {"with_user_id": bob.id, "date": utc_now(), "skill": "Guitar"}
        kwargs[field] = None

        with pytest.raises(ValidationError):
            await session_service.create_session(alice.id, **kwargs)


class TestUpdateSession:
    """Test suite for session updates."""

    async def test_update_propagates_to_mirror(self, session_service, user_repository, pair):
        alice, bob = pair
        session = await session_service.create_session(
            alice.id, bob.id, utc_now() + timedelta(days=1), "Guitar"
        )

        updated = await session_service.update_session(
            alice.id, session.id, status="confirmed", notes="See you there"
        )

        assert updated.status == SessionStatus.CONFIRMED
        mirror = (await user_repository.get_user_by_id(bob.id)).sessions[0]
        assert mirror.status == SessionStatus.CONFIRMED
        assert mirror.notes == "See you there"

    async def test_counterpart_can_update_from_their_side(self, session_service, user_repository, pair):
        alice, bob = pair
        await session_service.create_session(alice.id, bob.id, utc_now() + timedelta(days=1), "Guitar")
        bob_copy = (await user_repository.get_user_by_id(bob.id)).sessions[0]

        await session_service.update_session(bob.id, bob_copy.id, status="cancelled")

        alice_copy = (await user_repository.get_user_by_id(alice.id)).sessions[0]
        assert alice_copy.status == SessionStatus.CANCELLED

    async def test_illegal_transition(self, session_service, user_repository, pair):
        alice, bob = pair
        session = await session_service.create_session(alice.id, bob.id, utc_now(), "Guitar")

        with pytest.raises(InvalidStatusTransitionError):
            await session_service.update_session(alice.id, session.id, status="completed")

        stored = (await user_repository.get_user_by_id(alice.id)).sessions[0]
        assert stored.status == SessionStatus.PENDING

    async def test_unknown_status(self, session_service, pair):
        alice, bob = pair
        session = await session_service.create_session(alice.id, bob.id, utc_now(), "Guitar")

        with pytest.raises(InvalidSessionStatusError):
            await session_service.update_session(alice.id, session.id, status="archived")

    async def test_nothing_to_update(self, session_service, pair):
        alice, bob = pair
        session = await session_service.create_session(alice.id, bob.id, utc_now(), "Guitar")

        with pytest.raises(ValidationError):
            await session_service.update_session(alice.id, session.id)

    async def test_session_of_another_user(self, session_service, user_repository, pair):
        alice, bob = pair
        await session_service.create_session(alice.id, bob.id, utc_now(), "Guitar")
        alice_copy = (await user_repository.get_user_by_id(alice.id)).sessions[0]

        with pytest.raises(SessionNotFoundError):
            await session_service.update_session(bob.id, alice_copy.id, notes="x")

    async def test_missing_mirror_still_updates_own_copy(self, session_service, user_repository, pair):
        alice, bob = pair
        session = await session_service.create_session(alice.id, bob.id, utc_now(), "Guitar")
        stored_bob = await user_repository.get_user_by_id(bob.id)
        stored_bob.sessions = []
        await user_repository.save_user(stored_bob)

        updated = await session_service.update_session(alice.id, session.id, status="confirmed")

        assert updated.status == SessionStatus.CONFIRMED
        stored_alice = await user_repository.get_user_by_id(alice.id)
        assert stored_alice.sessions[0].status == SessionStatus.CONFIRMED

    async def test_duplicate_sessions_update_their_own_mirrors(
        self, session_service, user_repository, pair
    ):
        alice, bob = pair
        date = utc_now() + timedelta(days=1)
        first = await session_service.create_session(alice.id, bob.id, date, "Guitar")
        second = await session_service.create_session(alice.id, bob.id, date, "Guitar")

        await session_service.update_session(alice.id, first.id, status="confirmed")
        await session_service.update_session(alice.id, first.id, status="completed")
        await session_service.update_session(alice.id, second.id, status="cancelled")

        stored_alice = await user_repository.get_user_by_id(alice.id)
        stored_bob = await user_repository.get_user_by_id(bob.id)
        assert sorted(s.status.value for s in stored_alice.sessions) == ["cancelled", "completed"]
        assert sorted(s.status.value for s in stored_bob.sessions) == ["cancelled", "completed"]

    async def test_mirror_is_not_moved_out_of_a_final_status(
        self, session_service, user_repository, make_user
    ):
        date = utc_now() + timedelta(days=1)
        bob = await make_user("bob@example.com", name="Bob")
        alice = await make_user(
            "alice@example.com",
            name="Alice",
            sessions=[SessionEntity(bob.id, date, "Guitar", status=SessionStatus.CONFIRMED)],
        )
        bob.sessions = [SessionEntity(alice.id, date, "Guitar", status=SessionStatus.COMPLETED)]
        await user_repository.save_user(bob)

        updated = await session_service.update_session(
            alice.id, alice.sessions[0].id, status="cancelled"
        )

        assert updated.status == SessionStatus.CANCELLED
        stored_bob = await user_repository.get_user_by_id(bob.id)
        assert stored_bob.sessions[0].status == SessionStatus.COMPLETED


class TestDeleteSession:
    """Test suite for session deletion."""

    async def test_delete_removes_both_copies(self, session_service, user_repository, pair):
        alice, bob = pair
        session = await session_service.create_session(alice.id, bob.id, utc_now(), "Guitar")

        assert await session_service.delete_session(alice.id, session.id) is True

        assert (await user_repository.get_user_by_id(alice.id)).sessions == []
        assert (await user_repository.get_user_by_id(bob.id)).sessions == []

    async def test_delete_with_missing_mirror(self, session_service, user_repository, pair):
        alice, bob = pair
        session = await session_service.create_session(alice.id, bob.id, utc_now(), "Guitar")
        stored_bob = await user_repository.get_user_by_id(bob.id)
        stored_bob.sessions = []
        await user_repository.save_user(stored_bob)

        assert await session_service.delete_session(alice.id, session.id) is False
        assert (await user_repository.get_user_by_id(alice.id)).sessions == []

    async def test_delete_removes_one_of_duplicate_mirrors(
        self, session_service, user_repository, pair
    ):
        alice, bob = pair
        date = utc_now() + timedelta(days=1)
        first = await session_service.create_session(alice.id, bob.id, date, "Guitar")
        second = await session_service.create_session(alice.id, bob.id, date, "Guitar")
        await session_service.update_session(alice.id, second.id, status="confirmed")

        assert await session_service.delete_session(alice.id, first.id) is True

        stored_alice = await user_repository.get_user_by_id(alice.id)
        stored_bob = await user_repository.get_user_by_id(bob.id)
        assert [s.id for s in stored_alice.sessions] == [second.id]
        assert [s.status for s in stored_bob.sessions] == [SessionStatus.CONFIRMED]

    async def test_delete_unknown_session(self, session_service, pair):
        alice, _ = pair
        with pytest.raises(SessionNotFoundError):
            await session_service.delete_session(alice.id, "missing")


class TestSessionQueries:
    """Test suite for listing, stats and upcoming sessions."""

    async def test_list_newest_first_with_filter(self, session_service, pair):
        alice, bob = pair
        now = utc_now()
        older = await session_service.create_session(alice.id, bob.id, now + timedelta(days=1), "Guitar")
        newer = await session_service.create_session(alice.id, bob.id, now + timedelta(days=2), "Guitar")
        await session_service.update_session(alice.id, older.id, status="confirmed")

        page = await session_service.list_sessions(alice.id)
        assert [s.id for s in page.items] == [newer.id, older.id]

        confirmed = await session_service.list_sessions(alice.id, status="confirmed")
        assert [s.id for s in confirmed.items] == [older.id]
        assert confirmed.total == 1

    async def test_counterparts(self, session_service, pair):
        alice, bob = pair
        session = await session_service.create_session(alice.id, bob.id, utc_now(), "Guitar")

        counterparts = await session_service.counterparts_for([session])

        assert counterparts[bob.id].name == "Bob"

    async def test_stats(self, session_service, make_user):
        now = utc_now()
        user = await make_user(
            "stats@example.com",
            sessions=[
                SessionEntity("x", now - timedelta(days=60), "a", status=SessionStatus.COMPLETED),
                SessionEntity("x", now - timedelta(days=5), "b", status=SessionStatus.COMPLETED),
                SessionEntity("x", now + timedelta(days=5), "c", status=SessionStatus.PENDING),
                SessionEntity("x", now - timedelta(days=1), "d", status=SessionStatus.CANCELLED),
            ],
        )

        stats = await session_service.get_stats(user.id, now=now)

        assert stats.total == 4
        assert stats.completed == 2
        assert stats.pending == 1
        assert stats.confirmed == 0
        assert stats.cancelled == 1
        # 2 completed out of 3 non-cancelled
        assert stats.completion_rate == 67
        assert stats.recent_sessions == 3

    async def test_stats_without_sessions(self, session_service, make_user):
        user = await make_user("empty@example.com")

        stats = await session_service.get_stats(user.id)

        assert stats.total == 0
        assert stats.completion_rate == 0

    async def test_upcoming(self, session_service, make_user):
        now = utc_now()
        user = await make_user(
            "upcoming@example.com",
            sessions=[
                SessionEntity("x", now + timedelta(days=3), "later"),
                SessionEntity("x", now + timedelta(days=1), "soon", status=SessionStatus.CONFIRMED),
                SessionEntity("x", now - timedelta(days=1), "past"),
                SessionEntity("x", now + timedelta(days=2), "cancelled", status=SessionStatus.CANCELLED),
                SessionEntity("x", now + timedelta(days=4), "latest"),
            ],
        )

        upcoming = await session_service.upcoming_sessions(user.id, limit=2, now=now)

        assert [s.skill for s in upcoming] == ["soon", "later"]
