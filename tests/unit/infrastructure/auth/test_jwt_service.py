"""Unit tests for the JWT service."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from playerpath.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    JWTService,
    TokenExpiredError,
    TokenIdentity,
)

SECRET = "test-secret-key-with-at-least-32-bytes!"


@pytest.fixture
def service() -> JWTService:
    return JWTService(secret_key=SECRET)


def encode(claims: dict) -> str:
    now = datetime.now(timezone.utc)
    defaults = {"iss": "playerpath", "sub": "uid_1", "exp": now + timedelta(minutes=5), "type": "access"}
    return jwt.encode({**defaults, **claims}, SECRET, algorithm="HS256")


def test_access_token_round_trip(service: JWTService) -> None:
    token = service.create_access_token(uid="uid_athlete_1", email="alex@example.com")

    assert service.verify_access_token(token) == TokenIdentity(
        uid="uid_athlete_1", email="alex@example.com"
    )


def test_token_claims(service: JWTService) -> None:
    token = service.create_access_token(uid="uid_athlete_1")

    claims = jwt.decode(token, SECRET, algorithms=["HS256"], issuer="playerpath")

    assert claims["sub"] == "uid_athlete_1"
    assert claims["type"] == "access"
    assert "email" not in claims


def test_expired_token(service: JWTService) -> None:
    token = service.create_access_token(uid="uid_1", expires_delta=timedelta(seconds=-5))

    with pytest.raises(TokenExpiredError):
        service.verify_access_token(token)


def test_token_signed_with_other_secret(service: JWTService) -> None:
    token = JWTService(secret_key="another-secret-key-with-32-bytes!!").create_access_token("uid_1")

    with pytest.raises(InvalidTokenError):
        service.verify_access_token(token)


@pytest.mark.parametrize(
    "claims",
    [
        {"iss": "someone-else"},
        {"type": "refresh"},
    ],
)
def test_rejected_claims(service: JWTService, claims: dict) -> None:
    with pytest.raises(InvalidTokenError):
        service.verify_access_token(encode(claims))


def test_missing_subject(service: JWTService) -> None:
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"iss": "playerpath", "exp": now + timedelta(minutes=5), "type": "access"},
        SECRET,
        algorithm="HS256",
    )

    with pytest.raises(InvalidTokenError):
        service.verify_access_token(token)


def test_expired_is_an_invalid_token() -> None:
    assert issubclass(TokenExpiredError, InvalidTokenError)


def test_garbage_token(service: JWTService) -> None:
    with pytest.raises(InvalidTokenError):
        service.verify_access_token("not-a-jwt")
