"""Domain services for the invitation notifier.

The notifier itself lives in
`playerpath.domain.services.invitation_notifier`; it depends on the
infrastructure layer and is imported from there directly.
"""

from playerpath.domain.services.callable_error import CallableError, ErrorCategory
from playerpath.domain.services.invitation_links import InvitationLinks, build_invitation_links

__all__ = [
    "CallableError",
    "ErrorCategory",
    "InvitationLinks",
    "build_invitation_links",
]
