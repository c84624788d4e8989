"""Profile columns on users: email, bio, profile_pic.

Each column is added only when the inspector reports it missing, so tables
created with the columns already present are left alone.

Revision ID: 002_profile_columns
Revises: 001_core_tables
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "002_profile_columns"
down_revision: str | None = "001_core_tables"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

PROFILE_COLUMNS = ("email", "bio", "profile_pic")


def _existing_columns() -> set[str]:
    inspector = sa.inspect(op.get_bind())
    return {col["name"] for col in inspector.get_columns("users")}


def upgrade() -> None:
    existing = _existing_columns()
    for name in PROFILE_COLUMNS:
        if name not in existing:
            op.add_column("users", sa.Column(name, sa.Text(), nullable=True))


def downgrade() -> None:
    existing = _existing_columns()
    with op.batch_alter_table("users") as batch_op:
        for name in PROFILE_COLUMNS:
            if name in existing:
                batch_op.drop_column(name)
