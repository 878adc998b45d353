"""
Name: Authentication Use Cases

Responsibilities:
  - Exchange email + password for a bearer token
  - Resolve the authenticated user
  - Change the caller's own password

Collaborators:
  - domain.repositories.UserRepository
  - domain.services.PasswordHasher, TokenIssuer
  - application.activity_log: record_activity

Constraints:
  - Unknown email and wrong password produce the same error, and an unknown
    email still pays for one hash comparison
"""

from dataclasses import dataclass, replace

from ...domain.entities import ActivityAction
from ...domain.repositories import ActivityRepository, UserRepository
from ...domain.services import PasswordHasher, TokenIssuer
from ...logger import logger
from ..activity_log import record_activity
from .results import (
    LoginResult,
    ServiceError,
    ServiceErrorCode,
    UserResult,
    not_found,
)

INVALID_CREDENTIALS = "Invalid credentials"


@dataclass
class LoginInput:
    email: str | None
    password: str | None


class LoginUseCase:
    """R: Verify credentials and issue a token."""

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenIssuer,
    ):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    def execute(self, input_data: LoginInput) -> LoginResult:
        email = (input_data.email or "").strip().lower()
        password = input_data.password or ""
        if not email or not password:
            return LoginResult(
                error=ServiceError(
                    code=ServiceErrorCode.VALIDATION_ERROR,
                    message="Email and password required",
                )
            )

        user = self.users.get_user_by_email(email)
        if user is None:
            self.hasher.dummy_compare(password)
            logger.info("Login failed")
            return LoginResult(error=self._invalid())

        if not self.hasher.compare(password, user.password_hash):
            logger.info("Login failed")
            return LoginResult(error=self._invalid())

        logger.info("Login succeeded", extra={"subject": user.id})
        return LoginResult(token=self.tokens.issue(user.id))

    @staticmethod
    def _invalid() -> ServiceError:
        return ServiceError(
            code=ServiceErrorCode.UNAUTHORIZED, message=INVALID_CREDENTIALS
        )


class GetCurrentUserUseCase:
    """R: Load the authenticated user (may have been deleted since login)."""

    def __init__(self, users: UserRepository):
        self.users = users

    def execute(self, user_id: str) -> UserResult:
        user = self.users.get_user(user_id)
        if user is None:
            return UserResult(error=not_found("User"))
        return UserResult(user=user)


@dataclass
class ChangePasswordInput:
    user_id: str
    current_password: str | None
    new_password: str | None


class ChangePasswordUseCase:
    """R: Replace the caller's password and clear force_password_change."""

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        activities: ActivityRepository | None = None,
    ):
        self.users = users
        self.hasher = hasher
        self.activities = activities

    def execute(self, input_data: ChangePasswordInput) -> UserResult:
        if not input_data.current_password or not input_data.new_password:
            return UserResult(
                error=ServiceError(
                    code=ServiceErrorCode.VALIDATION_ERROR,
                    message="Current and new password are required",
                )
            )

        user = self.users.get_user(input_data.user_id)
        if user is None:
            return UserResult(error=not_found("User"))

        if not self.hasher.compare(input_data.current_password, user.password_hash):
            return UserResult(
                error=ServiceError(
                    code=ServiceErrorCode.UNAUTHORIZED,
                    message="Current password is incorrect",
                )
            )

        updated = replace(
            user,
            password_hash=self.hasher.hash(input_data.new_password),
            force_password_change=False,
        )
        if not self.users.update_user(updated):
            return UserResult(error=not_found("User"))

        record_activity(
            self.activities,
            actor_id=user.id,
            action=ActivityAction.PASSWORD_CHANGED,
            target=user.name,
            target_id=user.id,
        )
        return UserResult(user=updated)
