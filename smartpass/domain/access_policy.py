"""
Name: Access Policy

Responsibilities:
  - Decide whether a user holds a capability

Constraints:
  - Pure function, no I/O (shared by route dependencies and use cases)
  - Administrators hold every capability
"""

from .entities import Capability, Role, User


def authorize(user: User, capability: Capability) -> bool:
    """R: True if user may perform the capability."""
    if user.role == Role.ADMINISTRATOR:
        return True
    return user.permissions.allows(capability)
