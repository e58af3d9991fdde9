"""Outbound links embedded in invitation emails."""

from dataclasses import dataclass


@dataclass(frozen=True)
class InvitationLinks:
    """Links that open an invitation.

    Attributes:
        deep_link: Opens the native app directly on the invitation.
        web_link: Fallback for clients that cannot follow the deep link.
    """

    deep_link: str
    web_link: str


def build_invitation_links(
    invitation_id: str,
    scheme: str = "playerpath",
    web_domain: str = "playerpath.app",
) -> InvitationLinks:
    """Build the deep link and web link for an invitation.

    Args:
        invitation_id: Invitation identifier, embedded verbatim.
        scheme: URL scheme registered by the mobile app.
        web_domain: Domain serving the web fallback.

    Returns:
        InvitationLinks of the form `<scheme>://invitation/<id>` and
        `https://<web_domain>/invitation/<id>`.

    Raises:
        ValueError: If invitation_id is empty.
    """
    if not invitation_id:
        raise ValueError("Invitation ID is required to build links")

    return InvitationLinks(
        deep_link=f"{scheme}://invitation/{invitation_id}",
        web_link=f"https://{web_domain}/invitation/{invitation_id}",
    )
