"""Review recording and feed tests."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from zyscope.db.models import Review
from zyscope.errors import UserNotFoundError, ValidationError
from zyscope.reviews.service import (
    get_recent_reviews,
    get_recent_reviews_with_reviewers,
    get_reviews_for_location,
    record_review,
)


class TestRecordReview:
    async def test_stores_review_without_xp(self, db_session, alice):
        review = await record_review(db_session, alice.id, "Japan", 5, "great")
        await db_session.commit()
        await db_session.refresh(alice)

        assert review.id is not None
        assert review.rating == 5
        assert review.comment == "great"
        assert review.created_at is not None
        assert alice.points == 0

    async def test_rating_out_of_range_inserts_nothing(self, db_session, alice):
        with pytest.raises(ValidationError):
            await record_review(db_session, alice.id, "Japan", 6, "great")

        count = await db_session.scalar(select(func.count()).select_from(Review))
        assert count == 0

    async def test_bool_rating_rejected(self, db_session, alice):
        with pytest.raises(ValidationError):
            await record_review(db_session, alice.id, "Japan", True)

    async def test_unknown_user(self, db_session):
        with pytest.raises(UserNotFoundError):
            await record_review(db_session, 777, "Japan", 4)

    async def test_blank_location(self, db_session, alice):
        with pytest.raises(ValidationError):
            await record_review(db_session, alice.id, "  ", 4)

    async def test_empty_comment_stored_as_null(self, db_session, alice):
        review = await record_review(db_session, alice.id, "Japan", 3, "")
        assert review.comment is None


class TestFeeds:
    async def test_location_match_ignores_case(self, db_session, alice):
        await record_review(db_session, alice.id, "Japan", 5)
        await record_review(db_session, alice.id, "France", 2)
        await db_session.commit()

        reviews = await get_reviews_for_location(db_session, "jApAn")
        assert [r.location for r in reviews] == ["Japan"]

    async def test_location_feed_newest_first(self, db_session, alice):
        first = await record_review(db_session, alice.id, "Japan", 5)
        second = await record_review(db_session, alice.id, "Japan", 3)
        await db_session.commit()

        reviews = await get_reviews_for_location(db_session, "Japan")
        assert [r.id for r in reviews] == [second.id, first.id]

    async def test_recent_respects_limit(self, db_session, alice):
        for rating in (1, 2, 3, 4):
            await record_review(db_session, alice.id, "Peru", rating)
        await db_session.commit()

        recent = await get_recent_reviews(db_session, 2)
        assert [r.rating for r in recent] == [4, 3]

    async def test_recent_invalid_limit_uses_default(self, db_session, alice):
        for _ in range(12):
            await record_review(db_session, alice.id, "Peru", 4)
        await db_session.commit()

        assert len(await get_recent_reviews(db_session, 0)) == 10
        assert len(await get_recent_reviews(db_session, "x")) == 10

    async def test_recent_with_reviewers(self, db_session, alice, make_user):
        bob = await make_user("bob")
        await record_review(db_session, alice.id, "Japan", 5)
        await record_review(db_session, bob.id, "Peru", 2)
        await record_review(db_session, alice.id, "Iceland", 4)
        await db_session.commit()

        rows = await get_recent_reviews_with_reviewers(db_session, 10)
        assert [(r.location, u.username) for r, u in rows] == [
            ("Iceland", "alice"),
            ("Peru", "bob"),
            ("Japan", "alice"),
        ]

    async def test_recent_with_reviewers_empty(self, db_session):
        assert await get_recent_reviews_with_reviewers(db_session) == []
