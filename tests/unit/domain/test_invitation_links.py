"""Unit tests for invitation link construction."""

import pytest

from playerpath.domain.services.invitation_links import InvitationLinks, build_invitation_links


def test_builds_deep_link_and_web_link() -> None:
    links = build_invitation_links("inv_001")

    assert links == InvitationLinks(
        deep_link="playerpath://invitation/inv_001",
        web_link="https://playerpath.app/invitation/inv_001",
    )


def test_custom_scheme_and_domain() -> None:
    links = build_invitation_links("abc", scheme="pp-staging", web_domain="staging.playerpath.app")

    assert links.deep_link == "pp-staging://invitation/abc"
    assert links.web_link == "https://staging.playerpath.app/invitation/abc"


def test_links_differ_per_invitation() -> None:
    assert build_invitation_links("a") != build_invitation_links("b")


@pytest.mark.parametrize("invitation_id", ["", None])
def test_empty_id_is_rejected(invitation_id) -> None:
    with pytest.raises(ValueError):
        build_invitation_links(invitation_id)
