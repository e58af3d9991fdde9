"""SQLAlchemy model for the coach_invitations table.

Each row is one coach invitation document. Permission flags are stored as
three boolean columns; delivery-status columns stay NULL until the notifier
makes its first send attempt.
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from playerpath.domain.entities.invitation import CoachInvitation, InvitationPermissions
from playerpath.infrastructure.persistence.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CoachInvitationModel(Base):
    """SQLAlchemy model for the coach_invitations table."""

    __tablename__ = "coach_invitations"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        comment="Invitation ID",
    )
    athlete_id: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        index=True,
        comment="Identity of the inviting athlete",
    )
    athlete_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    coach_email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    folder_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    folder_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    can_upload: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_comment: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_delete: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="pending")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    # Delivery status, written only by the notifier
    email_sent: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    email_sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    email_resent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    email_error: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_coach_invitations_athlete_created", "athlete_id", "created_at"),
    )

    @classmethod
    def from_entity(cls, invitation: CoachInvitation) -> "CoachInvitationModel":
        return cls(
            id=invitation.id,
            athlete_id=invitation.athlete_id,
            athlete_name=invitation.athlete_name,
            coach_email=invitation.coach_email,
            folder_id=invitation.folder_id,
            folder_name=invitation.folder_name,
            can_upload=invitation.permissions.can_upload,
            can_comment=invitation.permissions.can_comment,
            can_delete=invitation.permissions.can_delete,
            status=invitation.status,
            created_at=invitation.created_at or _utcnow(),
            email_sent=invitation.email_sent,
            email_sent_at=invitation.email_sent_at,
            email_resent_at=invitation.email_resent_at,
            email_error=invitation.email_error,
        )

    def to_entity(self) -> CoachInvitation:
        return CoachInvitation(
            id=self.id,
            athlete_id=self.athlete_id,
            athlete_name=self.athlete_name,
            coach_email=self.coach_email,
            folder_id=self.folder_id,
            folder_name=self.folder_name,
            permissions=InvitationPermissions(
                can_upload=bool(self.can_upload),
                can_comment=bool(self.can_comment),
                can_delete=bool(self.can_delete),
            ),
            status=self.status,
            created_at=self.created_at,
            email_sent=self.email_sent,
            email_sent_at=self.email_sent_at,
            email_resent_at=self.email_resent_at,
            email_error=self.email_error,
        )

    def __repr__(self) -> str:
        return f"<CoachInvitation(id={self.id}, coach_email={self.coach_email}, email_sent={self.email_sent})>"
