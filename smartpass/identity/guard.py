"""
Name: Access Guard

Responsibilities:
  - Extract the bearer token from the Authorization header
  - Verify it through the TokenService
  - Bind the subject id to request.state and the logging context

Collaborators:
  - identity/tokens.py: TokenService.verify
  - container.py: get_token_service
  - context.py: user_id_var

Constraints:
  - One guard for every protected route group
  - No session is persisted
"""

from fastapi import Depends, Header, Request

from ..container import get_token_service
from ..context import user_id_var
from ..error_responses import unauthorized
from .tokens import InvalidToken, TokenService

MISSING_TOKEN_MESSAGE = "No token, authorization denied"
INVALID_TOKEN_MESSAGE = "Token is not valid or expired"


def extract_bearer_token(authorization: str | None) -> str | None:
    """R: Accept "<token>" or "Bearer <token>" (scheme in any case)."""
    if not authorization:
        return None
    value = authorization.strip()
    scheme, _, rest = value.partition(" ")
    if rest and scheme.lower() == "bearer":
        value = rest.strip()
    elif value.lower() == "bearer":
        return None
    return value or None


def require_user_id(
    request: Request,
    authorization: str | None = Header(None, alias="Authorization"),
    tokens: TokenService = Depends(get_token_service),
) -> str:
    """R: FastAPI dependency returning the verified subject id."""
    token = extract_bearer_token(authorization)
    if not token:
        raise unauthorized(MISSING_TOKEN_MESSAGE)

    try:
        user_id = tokens.verify(token)
    except InvalidToken as exc:
        raise unauthorized(INVALID_TOKEN_MESSAGE) from exc

    request.state.user_id = user_id
    user_id_var.set(user_id)
    return user_id


def optional_user_id(
    request: Request,
    authorization: str | None = Header(None, alias="Authorization"),
    tokens: TokenService = Depends(get_token_service),
) -> str | None:
    """R: Like require_user_id, but anonymous requests resolve to None.

    A token that is present but invalid is still rejected.
    """
    if not extract_bearer_token(authorization):
        return None
    return require_user_id(request, authorization, tokens)
