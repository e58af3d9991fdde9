"""Coach invitation entity.

An athlete invites a coach, identified by email, to a shared folder. The
notifier owns only the delivery-status fields; every other field is written
by the inviting client when the document is created.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class DeliveryState(str, Enum):
    """Delivery state of the invitation email, derived from emailSent."""

    NO_ATTEMPT = "no_attempt"
    SENT = "sent"
    FAILED = "failed"


@dataclass(frozen=True)
class InvitationPermissions:
    """Permissions the coach receives on the shared folder."""

    can_upload: bool = False
    can_comment: bool = False
    can_delete: bool = False

    @classmethod
    def from_document(cls, data: Any) -> "InvitationPermissions":
        if not isinstance(data, dict):
            data = {}
        return cls(
            can_upload=bool(data.get("canUpload", False)),
            can_comment=bool(data.get("canComment", False)),
            can_delete=bool(data.get("canDelete", False)),
        )

    def to_document(self) -> dict[str, bool]:
        return {
            "canUpload": self.can_upload,
            "canComment": self.can_comment,
            "canDelete": self.can_delete,
        }


# Required for an invitation email to be deliverable, keyed by document field
REQUIRED_EMAIL_FIELDS = {
    "coachEmail": "coach_email",
    "athleteName": "athlete_name",
    "folderName": "folder_name",
}


@dataclass
class CoachInvitation:
    """Coach invitation entity.

    Attributes:
        id: Unique identifier, stable for the record's lifetime.
        athlete_id: Identifier of the inviting athlete; the only identity
            allowed to request a resend.
        athlete_name: Display name of the inviting athlete.
        coach_email: Delivery address of the invited coach.
        folder_name: Display name of the shared folder.
        folder_id: Identifier of the shared folder, if known.
        permissions: Folder permissions granted to the coach.
        status: Acceptance lifecycle of the invitation, owned by the clients.
        created_at: Timestamp when the invitation was created.
        email_sent: None until the first send attempt, then the outcome of
            the most recent attempt.
        email_sent_at: Timestamp of the last successful automatic send.
        email_resent_at: Timestamp of the last successful manual resend.
        email_error: Error message of the most recent attempt, if it failed.
    """

    id: str
    athlete_id: str | None = None
    athlete_name: str | None = None
    coach_email: str | None = None
    folder_name: str | None = None
    folder_id: str | None = None
    permissions: InvitationPermissions = field(default_factory=InvitationPermissions)
    status: str = "pending"
    created_at: datetime | None = None
    email_sent: bool | None = None
    email_sent_at: datetime | None = None
    email_resent_at: datetime | None = None
    email_error: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Invitation ID is required")

    @classmethod
    def from_document(cls, invitation_id: str, data: dict[str, Any]) -> "CoachInvitation":
        """Build an invitation from a document payload (camelCase fields)."""
        return cls(
            id=invitation_id,
            athlete_id=data.get("athleteID"),
            athlete_name=data.get("athleteName"),
            coach_email=data.get("coachEmail"),
            folder_name=data.get("folderName"),
            folder_id=data.get("folderID"),
            permissions=InvitationPermissions.from_document(data.get("permissions")),
            status=data.get("status") or "pending",
            created_at=data.get("createdAt"),
            email_sent=data.get("emailSent"),
            email_sent_at=data.get("emailSentAt"),
            email_resent_at=data.get("emailResentAt"),
            email_error=data.get("emailError"),
        )

    def to_document(self) -> dict[str, Any]:
        """Serialize to a document payload; delivery fields appear only once set."""
        document: dict[str, Any] = {
            "id": self.id,
            "athleteID": self.athlete_id,
            "athleteName": self.athlete_name,
            "coachEmail": self.coach_email,
            "folderID": self.folder_id,
            "folderName": self.folder_name,
            "permissions": self.permissions.to_document(),
            "status": self.status,
            "createdAt": self.created_at,
        }
        if self.email_sent is not None:
            document["emailSent"] = self.email_sent
        if self.email_sent_at is not None:
            document["emailSentAt"] = self.email_sent_at
        if self.email_resent_at is not None:
            document["emailResentAt"] = self.email_resent_at
        if self.email_error is not None:
            document["emailError"] = self.email_error
        return document

    @property
    def missing_email_fields(self) -> list[str]:
        """Document names of required fields that are absent, blank or not strings."""
        missing = []
        for document_name, attribute in REQUIRED_EMAIL_FIELDS.items():
            value = getattr(self, attribute)
            if not isinstance(value, str) or not value.strip():
                missing.append(document_name)
        return missing

    @property
    def delivery_state(self) -> DeliveryState:
        if self.email_sent is None:
            return DeliveryState.NO_ATTEMPT
        return DeliveryState.SENT if self.email_sent else DeliveryState.FAILED
