"""ORM models matching the schema created by the Alembic chain.

The tables are owned by the migrations in ``zyscope/alembic/versions``;
these mappings must stay in step with them.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    Text,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from zyscope.db.base import Base


def utcnow() -> datetime:
    """Naive UTC timestamp; SQLite stores DATETIME without an offset."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class User(Base):
    """Maps to the 'users' table."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(Text, unique=True)
    level: Mapped[int] = mapped_column(Integer, default=1, server_default=text("1"))
    points: Mapped[int] = mapped_column(Integer, default=0, server_default=text("0"))
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    profile_pic: Mapped[str | None] = mapped_column(Text, nullable=True)

    # --- Relationships (rows are removed by ON DELETE CASCADE) ---
    visits: Mapped[list[Visit]] = relationship(
        "Visit", back_populates="user", passive_deletes=True
    )
    reviews: Mapped[list[Review]] = relationship(
        "Review", back_populates="user", passive_deletes=True
    )


# ---------------------------------------------------------------------------
# Visits
# ---------------------------------------------------------------------------


class Visit(Base):
    """A location a user marked as explored."""

    __tablename__ = "visits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    location: Mapped[str] = mapped_column(Text, nullable=False)
    visited_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, server_default=text("CURRENT_TIMESTAMP")
    )

    user: Mapped[User] = relationship("User", back_populates="visits")


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------


class Review(Base):
    """A 1-5 rating with an optional comment on a location."""

    __tablename__ = "reviews"
    __table_args__ = (CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    location: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, server_default=text("CURRENT_TIMESTAMP")
    )

    user: Mapped[User] = relationship("User", back_populates="reviews")
