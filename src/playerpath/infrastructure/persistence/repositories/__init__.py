"""Persistence repositories for database operations."""

from playerpath.infrastructure.persistence.repositories.invitation_repository import (
    InvitationRepository,
)

__all__ = ["InvitationRepository"]
