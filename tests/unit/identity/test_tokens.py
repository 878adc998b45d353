"""
Name: Token Service Tests

Responsibilities:
  - issue/verify round trip
  - Lifetime boundary (accepted at T+6d, rejected at T+8d)
  - Tampered, foreign-secret and malformed tokens
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from smartpass.identity.tokens import JWT_ALGORITHM, InvalidToken, TokenService

pytestmark = pytest.mark.unit

SECRET = "unit-test-secret-0123456789abcdef"


def test_verify_returns_subject(fixed_clock):
    service = TokenService(SECRET, clock=fixed_clock)
    assert service.verify(service.issue("abc123")) == "abc123"


def test_accepted_six_days_later(fixed_clock):
    service = TokenService(SECRET, clock=fixed_clock)
    token = service.issue("abc123")

    fixed_clock.advance(days=6)

    assert service.verify(token) == "abc123"


def test_rejected_eight_days_later(fixed_clock):
    service = TokenService(SECRET, clock=fixed_clock)
    token = service.issue("abc123")

    fixed_clock.advance(days=8)

    with pytest.raises(InvalidToken):
        service.verify(token)


def test_lifetime_is_configurable(fixed_clock):
    service = TokenService(SECRET, expires_days=1, clock=fixed_clock)
    token = service.issue("abc123")

    fixed_clock.advance(days=1)

    with pytest.raises(InvalidToken):
        service.verify(token)


def test_claims(fixed_clock):
    token = TokenService(SECRET, clock=fixed_clock).issue("abc123")
    payload = jwt.decode(
        token, SECRET, algorithms=[JWT_ALGORITHM], options={"verify_exp": False}
    )

    assert payload["sub"] == "abc123"
    assert payload["exp"] - payload["iat"] == int(timedelta(days=7).total_seconds())


def test_foreign_secret_rejected(fixed_clock):
    token = TokenService("another-secret-value", clock=fixed_clock).issue("abc123")

    with pytest.raises(InvalidToken):
        TokenService(SECRET, clock=fixed_clock).verify(token)


def test_tampered_token_rejected(fixed_clock):
    service = TokenService(SECRET, clock=fixed_clock)
    header, _, signature = service.issue("abc123").split(".")
    forged = service.issue("someone-else").split(".")[1]
    tampered = ".".join([header, forged, signature])

    with pytest.raises(InvalidToken):
        service.verify(tampered)


@pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c"])
def test_malformed_token_rejected(token):
    with pytest.raises(InvalidToken):
        TokenService(SECRET).verify(token)


def test_missing_subject_rejected():
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"iat": int(now.timestamp()), "exp": int((now + timedelta(days=1)).timestamp())},
        SECRET,
        algorithm=JWT_ALGORITHM,
    )

    with pytest.raises(InvalidToken):
        TokenService(SECRET).verify(token)


def test_empty_secret_not_allowed():
    with pytest.raises(ValueError):
        TokenService("")
