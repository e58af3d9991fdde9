"""Caller authentication."""

from playerpath.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    JWTService,
    TokenExpiredError,
    TokenIdentity,
    jwt_service,
)

__all__ = [
    "InvalidTokenError",
    "JWTService",
    "TokenExpiredError",
    "TokenIdentity",
    "jwt_service",
]
