"""Pydantic schemas for invitation API endpoints.

Field names on the wire match the mobile clients' document fields
(camelCase, e.g. `athleteID`, `coachEmail`).
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from playerpath.domain.entities.invitation import CoachInvitation, InvitationPermissions


class PermissionsSchema(BaseModel):
    """Folder permissions granted to the coach."""

    model_config = ConfigDict(populate_by_name=True)

    can_upload: bool = Field(False, alias="canUpload")
    can_comment: bool = Field(False, alias="canComment")
    can_delete: bool = Field(False, alias="canDelete")

    def to_entity(self) -> InvitationPermissions:
        return InvitationPermissions(
            can_upload=self.can_upload,
            can_comment=self.can_comment,
            can_delete=self.can_delete,
        )


class InvitationCreateRequest(BaseModel):
    """Request schema for creating a coach invitation."""

    model_config = ConfigDict(populate_by_name=True)

    athlete_name: str = Field(..., min_length=1, max_length=255, alias="athleteName")
    coach_email: EmailStr = Field(..., alias="coachEmail", description="Email of the coach to invite")
    folder_name: str = Field(..., min_length=1, max_length=255, alias="folderName")
    folder_id: str | None = Field(None, max_length=128, alias="folderID")
    permissions: PermissionsSchema = Field(default_factory=PermissionsSchema)


class InvitationResponse(BaseModel):
    """Response schema for a coach invitation document."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Invitation ID")
    athlete_id: str = Field(..., alias="athleteID")
    athlete_name: str | None = Field(None, alias="athleteName")
    coach_email: str | None = Field(None, alias="coachEmail")
    folder_id: str | None = Field(None, alias="folderID")
    folder_name: str | None = Field(None, alias="folderName")
    permissions: PermissionsSchema
    status: str = "pending"
    created_at: datetime | None = Field(None, alias="createdAt")
    email_sent: bool | None = Field(None, alias="emailSent")
    email_sent_at: datetime | None = Field(None, alias="emailSentAt")
    email_resent_at: datetime | None = Field(None, alias="emailResentAt")
    email_error: str | None = Field(None, alias="emailError")

    @classmethod
    def from_entity(cls, invitation: CoachInvitation) -> "InvitationResponse":
        return cls.model_validate(invitation.to_document())


class InvitationListResponse(BaseModel):
    """Response schema for listing invitations."""

    invitations: list[InvitationResponse]
    total: int


class ResendInvitationRequest(BaseModel):
    """Request schema for the resend callable."""

    model_config = ConfigDict(populate_by_name=True)

    invitation_id: str | None = Field(None, alias="invitationId")


class ResendInvitationResponse(BaseModel):
    """Successful resend result."""

    success: bool
    message: str


class CallableErrorResponse(BaseModel):
    """Structured error returned by callable operations."""

    error: str = Field(..., description="Error category, e.g. 'not-found'")
    message: str
