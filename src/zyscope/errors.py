"""Domain error taxonomy.

Lookups return ``None`` for missing rows; only mutating operations raise
:class:`NotFoundError`. The HTTP status for each error lives on the class so
the global handlers in :mod:`zyscope.middleware.error_handler` stay generic.
"""

from __future__ import annotations


class ZyscopeError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ZyscopeError):
    """Malformed or missing input. The caller's fault; never retried."""

    status_code = 400
    default_message = "Invalid input"


class NotFoundError(ZyscopeError):
    """A referenced entity does not exist."""

    status_code = 404
    default_message = "Not found"


class UserNotFoundError(NotFoundError):
    default_message = "User not found."


class LocationNotFoundError(NotFoundError):
    default_message = "Country not found."


class DuplicateUsernameError(ZyscopeError):
    """Unique constraint on ``users.username`` would be violated."""

    status_code = 409
    default_message = "Username already exists."


class StoreError(ZyscopeError):
    """Any store failure other than a constraint violation."""

    status_code = 500
    default_message = "Internal server error"


class StoreUnavailableError(StoreError):
    """The store could not be opened or migrated. Fatal at startup."""

    default_message = "Database unavailable"
