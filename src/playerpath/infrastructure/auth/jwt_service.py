"""Caller identity tokens.

Clients authenticate with an HS256 bearer token whose subject is their uid,
the same identifier stored as `athleteID` on the invitations they create.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from playerpath.core.config import get_settings


class InvalidTokenError(Exception):
    """The token is malformed, badly signed or not an access token."""


class TokenExpiredError(InvalidTokenError):
    """The token was valid but has expired."""


@dataclass(frozen=True)
class TokenIdentity:
    """Identity carried by a verified token."""

    uid: str
    email: str | None = None


class JWTService:
    """Issues and verifies access tokens."""

    ALGORITHM = "HS256"
    ISSUER = "playerpath"
    TOKEN_TYPE = "access"

    def __init__(self, secret_key: str | None = None) -> None:
        # Falls back to the configured key, read on every use
        self._secret_key = secret_key

    @property
    def secret_key(self) -> str:
        return self._secret_key or get_settings().secret_key

    def create_access_token(
        self,
        uid: str,
        email: str | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Issue a token for `uid`.

        Production tokens come from the identity provider sharing the same
        secret; this is used by tooling and tests.
        """
        issued_at = datetime.now(timezone.utc)
        lifetime = expires_delta or timedelta(minutes=get_settings().access_token_expire_minutes)
        claims = {
            "iss": self.ISSUER,
            "sub": uid,
            "iat": issued_at,
            "exp": issued_at + lifetime,
            "type": self.TOKEN_TYPE,
        }
        if email:
            claims["email"] = email
        return jwt.encode(claims, self.secret_key, algorithm=self.ALGORITHM)

    def verify_access_token(self, token: str) -> TokenIdentity:
        """Verify signature, issuer, expiry and token type.

        Raises:
            TokenExpiredError: The token has expired.
            InvalidTokenError: Any other verification failure.
        """
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self.ISSUER,
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

        if claims.get("type") != self.TOKEN_TYPE:
            raise InvalidTokenError("Not an access token")
        return TokenIdentity(uid=claims["sub"], email=claims.get("email"))


jwt_service = JWTService()
