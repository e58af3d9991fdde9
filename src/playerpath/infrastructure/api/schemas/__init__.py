"""API request and response schemas."""

from playerpath.infrastructure.api.schemas.invitation_schemas import (
    CallableErrorResponse,
    InvitationCreateRequest,
    InvitationListResponse,
    InvitationResponse,
    PermissionsSchema,
    ResendInvitationRequest,
    ResendInvitationResponse,
)

__all__ = [
    "CallableErrorResponse",
    "InvitationCreateRequest",
    "InvitationListResponse",
    "InvitationResponse",
    "PermissionsSchema",
    "ResendInvitationRequest",
    "ResendInvitationResponse",
]
