"""
Classification of database constraint violations.

This is the only place that looks inside driver exceptions. PostgreSQL drivers
expose the SQLSTATE (psycopg2 as ``pgcode``, psycopg 3 as ``sqlstate``);
SQLite only reports a message, so it is matched on that.
"""

from typing import Optional, Type

from sqlalchemy.exc import DBAPIError

from app.exceptions import AppError, InternalServerError

FOREIGN_KEY_VIOLATION = "23503"
UNIQUE_VIOLATION = "23505"

_SQLITE_FOREIGN_KEY_MESSAGE = "FOREIGN KEY constraint failed"
_SQLITE_UNIQUE_MESSAGE = "UNIQUE constraint failed"


def _driver_error(exc: BaseException) -> BaseException:
    return getattr(exc, "orig", None) or exc


def _sqlstate(exc: BaseException) -> Optional[str]:
    orig = _driver_error(exc)
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def is_foreign_key_violation(exc: BaseException) -> bool:
    state = _sqlstate(exc)
    if state is not None:
        return state == FOREIGN_KEY_VIOLATION
    return _SQLITE_FOREIGN_KEY_MESSAGE in str(_driver_error(exc))


def is_unique_violation(exc: BaseException) -> bool:
    state = _sqlstate(exc)
    if state is not None:
        return state == UNIQUE_VIOLATION
    return _SQLITE_UNIQUE_MESSAGE in str(_driver_error(exc))


def map_database_error(
    exc: DBAPIError,
    on_foreign_key: Optional[Type[AppError]] = None,
    on_unique: Optional[Type[AppError]] = None,
) -> AppError:
    """
    Translate a database error into a domain error.

    Args:
        exc: error raised by SQLAlchemy while executing a statement
        on_foreign_key: error class for a foreign-key violation
        on_unique: error class for a unique/primary-key violation

    Returns:
        An instance of the matching class, or InternalServerError for anything
        not covered by the arguments
    """
    if on_foreign_key is not None and is_foreign_key_violation(exc):
        return on_foreign_key()
    if on_unique is not None and is_unique_violation(exc):
        return on_unique()
    return InternalServerError()
