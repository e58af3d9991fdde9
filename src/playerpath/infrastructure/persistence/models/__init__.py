"""SQLAlchemy models for the notifier's document store."""

from playerpath.infrastructure.persistence.models.invitation import CoachInvitationModel

__all__ = ["CoachInvitationModel"]
