"""Domain entities for the invitation notifier."""

from playerpath.domain.entities.hook_context import HookContext, HookResult
from playerpath.domain.entities.invitation import (
    REQUIRED_EMAIL_FIELDS,
    CoachInvitation,
    DeliveryState,
    InvitationPermissions,
)

__all__ = [
    "CoachInvitation",
    "DeliveryState",
    "HookContext",
    "HookResult",
    "InvitationPermissions",
    "REQUIRED_EMAIL_FIELDS",
]
