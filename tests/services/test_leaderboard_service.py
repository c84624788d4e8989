"""Leaderboard ordering tests."""

from __future__ import annotations

from sqlalchemy import update

from zyscope.db.models import User
from zyscope.leaderboard.service import get_leaderboard, get_leaderboard_with_stats
from zyscope.reviews.service import record_review
from zyscope.visits.service import record_visit


async def _set_progress(db, user_id: int, points: int, level: int) -> None:
    await db.execute(update(User).where(User.id == user_id).values(points=points, level=level))


class TestLeaderboard:
    async def test_ordering_and_limit(self, db_session, make_user):
        a = await make_user("a")
        b = await make_user("b")
        c = await make_user("c")
        d = await make_user("d")
        await _set_progress(db_session, a.id, 100, 1)
        await _set_progress(db_session, b.id, 300, 2)
        # c and d tie on points; level breaks the tie, then id
        await _set_progress(db_session, c.id, 300, 3)
        await _set_progress(db_session, d.id, 100, 1)
        await db_session.commit()

        top = await get_leaderboard(db_session, 3)
        assert [u.username for u in top] == ["c", "b", "a"]

        everyone = await get_leaderboard(db_session, 10)
        assert [u.username for u in everyone] == ["c", "b", "a", "d"]

    async def test_stable_across_calls(self, db_session, make_user):
        for name in ("x", "y", "z"):
            await make_user(name)

        first = [u.id for u in await get_leaderboard(db_session, 3)]
        second = [u.id for u in await get_leaderboard(db_session, 3)]
        assert first == second
        assert first == sorted(first)

    async def test_invalid_limit_uses_default(self, db_session, make_user):
        for i in range(12):
            await make_user(f"user{i}")
        assert len(await get_leaderboard(db_session, -3)) == 10

    async def test_rows_carry_rank_and_stats(self, db_session, alice, make_user):
        bob = await make_user("bob")
        await record_visit(db_session, alice.id, "Japan")
        await record_review(db_session, alice.id, "Japan", 4)
        await db_session.commit()

        rows = await get_leaderboard_with_stats(db_session, 5)
        assert rows[0] == {
            "rank": 1,
            "id": alice.id,
            "username": "alice",
            "level": 1,
            "points": 25,
            "visits": 1,
            "avg_rating": 4.0,
        }
        assert rows[1]["id"] == bob.id
        assert rows[1]["rank"] == 2
        assert rows[1]["visits"] == 0
        assert rows[1]["avg_rating"] is None
