"""Repository error taxonomy.

Every failure a repository reports is a RepositoryError subclass carrying an
ErrorKind.  Provider exceptions (SQLAlchemy / DBAPI) are wrapped, never
swallowed: the original stays reachable through ``cause`` and ``__cause__``.

Absence of a record on lookup is not an error; only operations that require
prior existence raise NotFound.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    CONNECTION = "connection"
    CONSTRAINT = "constraint"
    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"


class RepositoryError(Exception):
    """Base class for all data-access failures."""

    kind: ErrorKind

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class StoreConnectionError(RepositoryError, ConnectionError):
    """The store is unreachable or the operation timed out."""

    kind = ErrorKind.CONNECTION


class ConstraintViolation(RepositoryError):
    """A uniqueness or referential rule was broken by the write."""

    kind = ErrorKind.CONSTRAINT


class InvalidArgument(RepositoryError, ValueError):
    """Malformed pagination or sort input."""

    kind = ErrorKind.INVALID_ARGUMENT


class NotFound(RepositoryError, LookupError):
    """A referenced record is absent where existence was required."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, key: Any, cause: BaseException | None = None) -> None:
        super().__init__(f"{entity} {key!r} not found", cause)
        self.entity = entity
        self.key = key
