"""Declarative base shared by all ORM models."""

from sqlalchemy.orm import DeclarativeBase

# SQLite INTEGER is signed 64-bit; larger Python ints cannot be bound.
MAX_INTEGER = 2**63 - 1


class Base(DeclarativeBase):
    pass
