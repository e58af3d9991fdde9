"""Invitation repository for database operations."""

from datetime import datetime
from typing import Literal

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from playerpath.infrastructure.persistence.models import CoachInvitationModel

TimestampField = Literal["email_sent_at", "email_resent_at"]


class InvitationRepository:
    """Repository for coach invitation database operations.

    Delivery-status writes are single UPDATE statements, so a reader never
    sees a half-applied status.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, invitation: CoachInvitationModel) -> CoachInvitationModel:
        """Add a new invitation and flush it."""
        self.session.add(invitation)
        await self.session.flush()
        return invitation

    async def get_by_id(self, invitation_id: str) -> CoachInvitationModel | None:
        """Get an invitation by ID.

        Returns:
            Invitation model if found, None otherwise.
        """
        result = await self.session.execute(
            select(CoachInvitationModel).where(CoachInvitationModel.id == invitation_id)
        )
        return result.scalar_one_or_none()

    async def list_by_athlete(self, athlete_id: str) -> list[CoachInvitationModel]:
        """List an athlete's invitations, newest first."""
        result = await self.session.execute(
            select(CoachInvitationModel)
            .where(CoachInvitationModel.athlete_id == athlete_id)
            .order_by(CoachInvitationModel.created_at.desc())
        )
        return list(result.scalars().all())

    async def mark_email_sent(
        self,
        invitation_id: str,
        timestamp_field: TimestampField,
        sent_at: datetime,
    ) -> bool:
        """Record a successful send and clear any previous error.

        Args:
            invitation_id: Invitation to update.
            timestamp_field: "email_sent_at" for the automatic send,
                "email_resent_at" for a manual resend.
            sent_at: Time of the send.

        Returns:
            True if a row was updated.
        """
        result = await self.session.execute(
            update(CoachInvitationModel)
            .where(CoachInvitationModel.id == invitation_id)
            .values({"email_sent": True, "email_error": None, timestamp_field: sent_at})
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    async def mark_email_failed(self, invitation_id: str, error: str) -> bool:
        """Record a failed send attempt.

        Returns:
            True if a row was updated.
        """
        result = await self.session.execute(
            update(CoachInvitationModel)
            .where(CoachInvitationModel.id == invitation_id)
            .values(email_sent=False, email_error=error)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0
