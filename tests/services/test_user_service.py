"""User service tests: creation, profile updates, deletion and aggregates."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from zyscope.db.models import Review, User, Visit
from zyscope.errors import DuplicateUsernameError, UserNotFoundError, ValidationError
from zyscope.reviews.service import record_review
from zyscope.users.service import (
    create_user,
    delete_user,
    get_or_create_user,
    get_user,
    get_user_average_rating,
    get_user_by_username,
    get_user_stats_batch,
    get_user_visit_count,
    list_users,
    update_user_profile,
)
from zyscope.visits.service import get_visits, record_visit


class TestCreateUser:
    async def test_new_user_starts_at_level_1(self, db_session):
        user = await create_user(db_session, "  bob  ")
        await db_session.commit()
        assert user.id is not None
        assert user.username == "bob"
        assert user.level == 1
        assert user.points == 0

    async def test_blank_username_rejected(self, db_session):
        with pytest.raises(ValidationError):
            await create_user(db_session, "   ")

    async def test_duplicate_username_leaves_first_row_alone(self, db_session, alice):
        with pytest.raises(DuplicateUsernameError):
            await create_user(db_session, "alice")

        count = await db_session.scalar(select(func.count()).select_from(User))
        assert count == 1
        existing = await get_user_by_username(db_session, "alice")
        assert existing.id == alice.id
        assert existing.points == 0

    async def test_usernames_are_case_sensitive(self, db_session, alice):
        other = await create_user(db_session, "Alice")
        assert other.id != alice.id

    async def test_get_or_create_returns_existing(self, db_session, alice):
        user, created = await get_or_create_user(db_session, "alice")
        assert created is False
        assert user.id == alice.id

    async def test_get_or_create_creates(self, db_session):
        user, created = await get_or_create_user(db_session, "carol")
        assert created is True
        assert user.username == "carol"


class TestLookups:
    async def test_missing_user_is_none(self, db_session):
        assert await get_user(db_session, 999) is None
        assert await get_user_by_username(db_session, "nobody") is None

    async def test_list_users_in_id_order(self, db_session, make_user):
        first = await make_user("zed")
        second = await make_user("amy")
        users = await list_users(db_session)
        assert [u.id for u in users] == [first.id, second.id]


class TestUpdateProfile:
    async def test_replaces_all_fields_and_keeps_points(self, db_session, alice):
        await record_visit(db_session, alice.id, "Japan")
        await db_session.commit()

        user = await update_user_profile(
            db_session,
            alice.id,
            username="alice2",
            email="a@example.com",
            bio="Backpacker",
            profile_pic="https://img.example/a.png",
        )
        await db_session.commit()

        assert user.username == "alice2"
        assert user.email == "a@example.com"
        assert user.bio == "Backpacker"
        assert user.profile_pic == "https://img.example/a.png"
        assert user.points == 25
        assert user.level == 1

    async def test_keeping_own_username_is_allowed(self, db_session, alice):
        user = await update_user_profile(db_session, alice.id, username="alice", bio="hi")
        assert user.username == "alice"
        assert user.bio == "hi"

    async def test_username_of_another_user_conflicts(self, db_session, alice, make_user):
        bob = await make_user("bob")
        with pytest.raises(DuplicateUsernameError):
            await update_user_profile(db_session, bob.id, username="alice")

    async def test_unknown_user(self, db_session):
        with pytest.raises(UserNotFoundError):
            await update_user_profile(db_session, 4242, username="ghost")

    async def test_blank_username(self, db_session, alice):
        with pytest.raises(ValidationError):
            await update_user_profile(db_session, alice.id, username=" ")


class TestDeleteUser:
    async def test_cascades_to_visits_and_reviews(self, db_session, alice):
        await record_visit(db_session, alice.id, "Japan")
        await record_review(db_session, alice.id, "Japan", 5, "great")
        await db_session.commit()

        await delete_user(db_session, alice.id)
        await db_session.commit()
        db_session.expunge_all()

        assert await get_visits(db_session, alice.id) == []
        assert await get_user(db_session, alice.id) is None
        reviews = await db_session.scalar(
            select(func.count()).select_from(Review).where(Review.user_id == alice.id)
        )
        assert reviews == 0

    async def test_unknown_id_is_a_no_op(self, db_session):
        await delete_user(db_session, 31337)
        await db_session.commit()


class TestAggregates:
    async def test_counts_and_average(self, db_session, alice):
        await record_visit(db_session, alice.id, "Japan")
        await record_visit(db_session, alice.id, "France")
        await record_review(db_session, alice.id, "Japan", 5)
        await record_review(db_session, alice.id, "France", 4)
        await record_review(db_session, alice.id, "Peru", 4)
        await db_session.commit()

        assert await get_user_visit_count(db_session, alice.id) == 2
        assert await get_user_average_rating(db_session, alice.id) == 4.33

    async def test_average_is_none_without_reviews(self, db_session, alice):
        assert await get_user_average_rating(db_session, alice.id) is None

    async def test_batch_stats(self, db_session, alice, make_user):
        bob = await make_user("bob")
        await record_visit(db_session, alice.id, "Japan")
        await record_review(db_session, bob.id, "Japan", 3)
        await db_session.commit()

        stats = await get_user_stats_batch(db_session, [alice.id, bob.id])
        assert stats[alice.id] == {"visits": 1, "avg_rating": None}
        assert stats[bob.id] == {"visits": 0, "avg_rating": 3.0}

    async def test_batch_stats_empty(self, db_session):
        assert await get_user_stats_batch(db_session, []) == {}
        count = await db_session.scalar(select(func.count()).select_from(Visit))
        assert count == 0
