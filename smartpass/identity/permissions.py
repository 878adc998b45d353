"""
Name: Permission Model

Responsibilities:
  - Decide whether a user holds a capability
  - FastAPI dependencies enforcing a capability per route

Collaborators:
  - domain.access_policy: authorize
  - domain.entities: Capability, User
  - identity/guard.py: require_user_id
  - container.py: get_user_repository

Constraints:
  - Administrators hold every capability
  - A verified token whose user no longer exists is rejected with 401
"""

from typing import Callable

from fastapi import Depends

from ..container import get_user_repository
from ..domain.access_policy import authorize
from ..domain.entities import Capability, User
from ..domain.repositories import UserRepository
from ..error_responses import forbidden, unauthorized
from ..logger import logger
from .guard import require_user_id

__all__ = [
    "authorize",
    "ensure",
    "require_capability",
    "require_current_user",
]


def ensure(user: User, capability: Capability) -> None:
    """R: Raise 403 unless authorize() holds."""
    if not authorize(user, capability):
        logger.warning(
            "Capability denied",
            extra={"capability": Capability(capability).value},
        )
        raise forbidden()


def require_current_user(
    user_id: str = Depends(require_user_id),
    users: UserRepository = Depends(get_user_repository),
) -> User:
    """R: Resolve the authenticated subject to a stored user."""
    user = users.get_user(user_id)
    if user is None:
        raise unauthorized("User not found")
    return user


def require_capability(capability: Capability) -> Callable:
    """R: FastAPI dependency that requires the user to hold capability."""

    def dependency(user: User = Depends(require_current_user)) -> User:
        ensure(user, capability)
        return user

    return dependency
