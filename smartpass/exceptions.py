"""
Name: Internal Exceptions

Responsibilities:
  - Typed errors raised by infrastructure adapters
  - Carry a stable error_code and an error_id for log correlation

Collaborators:
  - exception_handlers.py: maps these to RFC 7807 responses
  - infrastructure.repositories: raise DatabaseError / StoreTimeoutError

Constraints:
  - message is safe for clients; driver details stay in original_error
"""

from uuid import uuid4


class SmartPassError(Exception):
    """R: Base for internal system errors."""

    error_code: str = "SMARTPASS_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(SmartPassError):
    """R: Store failure (connection, query, constraint we did not expect)."""

    error_code: str = "DATABASE_ERROR"


class StoreTimeoutError(DatabaseError):
    """R: Store call exceeded its statement or pool acquisition timeout."""

    error_code: str = "STORE_TIMEOUT"


class DuplicateKeyError(DatabaseError):
    """R: A unique constraint rejected the write (e.g. users.email)."""

    error_code: str = "DUPLICATE_KEY"
