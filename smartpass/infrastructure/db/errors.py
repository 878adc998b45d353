"""
Name: Store Error Translation

Responsibilities:
  - Map psycopg / pool failures onto internal exception types
"""

from psycopg import errors as pg_errors
from psycopg_pool import PoolTimeout

from ...exceptions import DatabaseError, DuplicateKeyError, StoreTimeoutError


def translate_store_error(exc: Exception, action: str) -> DatabaseError:
    """
    R: Wrap a driver exception; message stays free of driver detail.

    Args:
        exc: Exception raised by psycopg or the pool
        action: Short description, e.g. "list employees"
    """
    if isinstance(exc, DatabaseError):
        return exc
    if isinstance(exc, (pg_errors.QueryCanceled, PoolTimeout)):
        return StoreTimeoutError(f"Timed out trying to {action}", original_error=exc)
    if isinstance(exc, pg_errors.UniqueViolation):
        return DuplicateKeyError(f"Duplicate key on {action}", original_error=exc)
    return DatabaseError(f"Failed to {action}", original_error=exc)
