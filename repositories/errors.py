"""
repositories/errors.py
----------------------
Error taxonomy shared by all repositories, and the `Result` wrapper
every repository operation returns.

Callers pick their own handling style:

    if repo.save(student):              # boolean style
        ...
    repo.save(student).unwrap()         # raise style
    repo.find_by_primary_key(1).value_or(None)   # optional style
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

import psycopg2

T = TypeVar("T")


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    CONSTRAINT_VIOLATION = "constraint_violation"
    CONNECTION = "connection"
    QUERY = "query"


class RepositoryError(Exception):
    """Base class for every failure a repository reports."""

    kind: ErrorKind = ErrorKind.QUERY

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(RepositoryError):
    """No row matched the given key."""
    kind = ErrorKind.NOT_FOUND


class ConstraintViolationError(RepositoryError):
    """The database rejected the statement (duplicate key, NOT NULL, ...)."""
    kind = ErrorKind.CONSTRAINT_VIOLATION


class DatabaseConnectionError(RepositoryError):
    """The connection is closed or was lost while running the statement."""
    kind = ErrorKind.CONNECTION


class QueryError(RepositoryError):
    """Any other failure while preparing or executing a statement."""
    kind = ErrorKind.QUERY


def _driver_class(conn, name: str):
    # DB-API optional extension: drivers expose their exception classes on the connection.
    return getattr(conn, name, None) or getattr(psycopg2, name)


def classify_db_error(conn, exc: Exception, message: str, connection_lost: bool = False) -> RepositoryError:
    """
    Translate a driver exception into the repository taxonomy.

    `connection_lost` is set by callers whose rollback also failed, which
    is how a closed sqlite3 connection shows up (it has no `closed` flag).
    The driver exception is kept as ``__cause__`` of the returned error.
    """
    if isinstance(exc, _driver_class(conn, "IntegrityError")):
        error: RepositoryError = ConstraintViolationError(message)
    elif connection_lost or isinstance(exc, _driver_class(conn, "InterfaceError")):
        error = DatabaseConnectionError(message)
    elif isinstance(exc, _driver_class(conn, "OperationalError")) and getattr(conn, "closed", False):
        error = DatabaseConnectionError(message)
    else:
        error = QueryError(message)
    error.__cause__ = exc
    return error


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a repository operation: either a value or a RepositoryError.

    Truthy iff the operation succeeded.
    """
    value: Optional[T] = None
    error: Optional[RepositoryError] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: RepositoryError) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> T:
        """Return the value, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value

    def value_or(self, default):
        return self.value if self.error is None else default

    def __bool__(self) -> bool:
        return self.ok
