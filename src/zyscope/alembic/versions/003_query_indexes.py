"""Indexes for the per-user visit list and review feeds.

Revision ID: 003_query_indexes
Revises: 002_profile_columns
Create Date: 2026-10-19
"""

from collections.abc import Sequence

from alembic import op

revision: str = "003_query_indexes"
down_revision: str | None = "002_profile_columns"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_visits_user_visited
        ON visits (user_id, visited_at)
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_reviews_location_lower
        ON reviews (lower(location))
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_reviews_created
        ON reviews (created_at)
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_reviews_user
        ON reviews (user_id)
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_users_leaderboard
        ON users (points DESC, level DESC, id)
    """)


def downgrade() -> None:
    for name in (
        "idx_users_leaderboard",
        "idx_reviews_user",
        "idx_reviews_created",
        "idx_reviews_location_lower",
        "idx_visits_user_visited",
    ):
        op.execute(f"DROP INDEX IF EXISTS {name}")
