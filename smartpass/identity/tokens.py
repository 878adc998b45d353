"""
Name: Token Service (JWT)

Responsibilities:
  - Issue signed bearer tokens carrying the subject id
  - Verify signature, required claims and expiry

Collaborators:
  - config.py: JWT_SECRET, JWT_EXPIRES_DAYS
  - identity/guard.py: verifies tokens on every protected request
  - application.use_cases.auth: issues tokens on login

Constraints:
  - HS256 only; the secret comes from settings (no fallback)
  - No refresh or rotation

Notes:
  - Expiry is compared against an injectable clock instead of PyJWT's own
    wall-clock check so the lifetime boundary can be exercised in tests
"""

from datetime import datetime, timedelta
from typing import Callable

import jwt

from ..domain.entities import utcnow

JWT_ALGORITHM = "HS256"
REQUIRED_CLAIMS = ["sub", "iat", "exp"]


class InvalidToken(Exception):
    """Token is malformed, tampered with, or expired."""


class TokenService:
    def __init__(
        self,
        secret: str,
        expires_days: int = 7,
        clock: Callable[[], datetime] = utcnow,
    ):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self._ttl = timedelta(days=expires_days)
        self._clock = clock

    def issue(self, subject_id: str) -> str:
        """R: Sign a token for subject_id valid for the configured lifetime."""
        now = self._clock()
        payload = {
            "sub": str(subject_id),
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> str:
        """
        R: Return the subject id of a valid token.

        Raises:
            InvalidToken: bad signature, malformed, missing claims, or expired
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"verify_exp": False, "verify_iat": False, "require": REQUIRED_CLAIMS},
            )
        except jwt.InvalidTokenError as exc:
            raise InvalidToken(str(exc)) from exc

        subject = payload.get("sub")
        exp = payload.get("exp")
        if not isinstance(subject, str) or not subject:
            raise InvalidToken("Token subject missing")
        if not isinstance(exp, (int, float)):
            raise InvalidToken("Token expiry malformed")
        if self._clock().timestamp() >= exp:
            raise InvalidToken("Token expired")
        return subject
