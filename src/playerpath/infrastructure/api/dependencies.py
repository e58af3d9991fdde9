"""FastAPI dependencies for authentication and service access."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status

from playerpath.core.hooks import HookRegistry
from playerpath.core.logging import get_logger
from playerpath.domain.services.invitation_notifier import InvitationNotifier
from playerpath.infrastructure.auth import InvalidTokenError, TokenExpiredError, jwt_service
from playerpath.infrastructure.persistence.database import get_db_session

logger = get_logger(__name__)

__all__ = [
    "AuthenticatedUser",
    "CurrentUser",
    "OptionalUser",
    "get_current_user",
    "get_db_session",
    "get_hook_registry",
    "get_notifier",
    "get_optional_user",
]


@dataclass
class CurrentUser:
    """The authenticated caller, extracted from a valid access token."""

    uid: str
    email: str | None = None


async def get_optional_user(
    authorization: Annotated[str | None, Header()] = None,
) -> CurrentUser | None:
    """Resolve the caller from the Authorization header.

    Returns:
        CurrentUser, or None when the header is missing, malformed,
        expired or invalid.
    """
    if authorization is None:
        return None

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.info("Authentication failed: invalid Authorization header format")
        return None

    try:
        identity = jwt_service.verify_access_token(parts[1])
    except TokenExpiredError:
        logger.info("Authentication failed: token expired")
        return None
    except InvalidTokenError as e:
        logger.info("Authentication failed: invalid token", error=str(e))
        return None

    return CurrentUser(uid=identity.uid, email=identity.email)


async def get_current_user(
    user: Annotated[CurrentUser | None, Depends(get_optional_user)],
) -> CurrentUser:
    """Require an authenticated caller.

    Raises:
        HTTPException: 401 if the caller is not authenticated.
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


AuthenticatedUser = Annotated[CurrentUser, Depends(get_current_user)]
OptionalUser = Annotated[CurrentUser | None, Depends(get_optional_user)]


def get_notifier(request: Request) -> InvitationNotifier:
    """The process-wide notifier built at application startup."""
    return request.app.state.notifier


def get_hook_registry(request: Request) -> HookRegistry:
    """The application's hook registry."""
    return request.app.state.hook_registry
