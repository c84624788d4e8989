"""Programmatic Alembic upgrade on a shared connection."""

from __future__ import annotations

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy.engine import Connection

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "alembic"


def build_alembic_config(connection: Connection | None = None) -> Config:
    """Alembic config pointing at the bundled migration scripts."""
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    if connection is not None:
        config.attributes["connection"] = connection
    return config


def upgrade_to_head(connection: Connection) -> None:
    """Apply every pending revision. A no-op when already at head.

    Runs inside ``AsyncConnection.run_sync`` so the caller's transaction
    covers the whole upgrade.
    """
    command.upgrade(build_alembic_config(connection), "head")
