"""Unit tests for resending an invitation email."""

import unittest.mock as mock
from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

from playerpath.domain.services.callable_error import CallableError, ErrorCategory
from playerpath.domain.services.invitation_notifier import InvitationNotifier, ResendResult
from playerpath.infrastructure.persistence.repositories import InvitationRepository

RESENT_AT = datetime(2025, 3, 2, 9, 30, tzinfo=timezone.utc)
OWNER = "uid_athlete_1"


@pytest.fixture
def notifier(session_factory, dispatch_client) -> InvitationNotifier:
    return InvitationNotifier(
        session_factory=session_factory,
        dispatch_client=dispatch_client,
        clock=lambda: RESENT_AT,
    )


async def assert_rejected(notifier, caller_uid, invitation_id, category, message) -> None:
    with pytest.raises(CallableError) as exc_info:
        await notifier.resend_invitation_email(caller_uid, invitation_id)

    assert exc_info.value.category == category
    assert exc_info.value.message == message


@pytest.mark.asyncio
@pytest.mark.parametrize("caller_uid", [None, ""])
async def test_unauthenticated(notifier, email_provider, seed_invitation, caller_uid) -> None:
    await seed_invitation("inv_001")

    await assert_rejected(
        notifier, caller_uid, "inv_001", ErrorCategory.UNAUTHENTICATED, "Must be authenticated"
    )
    assert email_provider.sent == []


@pytest.mark.asyncio
@pytest.mark.parametrize("invitation_id", [None, ""])
async def test_missing_invitation_id(notifier, email_provider, invitation_id) -> None:
    await assert_rejected(
        notifier, OWNER, invitation_id, ErrorCategory.INVALID_ARGUMENT, "Missing invitationId"
    )
    assert email_provider.sent == []


@pytest.mark.asyncio
async def test_not_found(notifier, email_provider) -> None:
    await assert_rejected(
        notifier, OWNER, "inv_missing", ErrorCategory.NOT_FOUND, "Invitation not found"
    )
    assert email_provider.sent == []


@pytest.mark.asyncio
async def test_only_creator_may_resend(
    notifier, email_provider, seed_invitation, load_invitation
) -> None:
    await seed_invitation("inv_001", email_sent=False, email_error="Earlier failure")

    await assert_rejected(
        notifier, "uid_intruder", "inv_001", ErrorCategory.PERMISSION_DENIED, "Not authorized"
    )

    assert email_provider.sent == []
    model = await load_invitation("inv_001")
    assert model.email_sent is False
    assert model.email_error == "Earlier failure"


@pytest.mark.asyncio
async def test_missing_required_fields(notifier, email_provider, seed_invitation) -> None:
    await seed_invitation("inv_001", coach_email=None)

    await assert_rejected(
        notifier,
        OWNER,
        "inv_001",
        ErrorCategory.INVALID_ARGUMENT,
        "Invitation is missing required fields: coachEmail",
    )
    assert email_provider.sent == []


@pytest.mark.asyncio
async def test_resend_after_failure_records_success(
    notifier, email_provider, seed_invitation, load_invitation
) -> None:
    await seed_invitation("inv_001", email_sent=False, email_error="Rate limit exceeded")

    result = await notifier.resend_invitation_email(OWNER, "inv_001")

    assert result == ResendResult(success=True, message="Email resent successfully")
    assert result.to_dict() == {"success": True, "message": "Email resent successfully"}
    assert len(email_provider.sent) == 1
    assert email_provider.sent[0]["to"] == "coach@example.com"

    model = await load_invitation("inv_001")
    assert model.email_sent is True
    assert model.email_error is None
    assert model.email_resent_at.replace(tzinfo=None) == RESENT_AT.replace(tzinfo=None)
    assert model.email_sent_at is None


@pytest.mark.asyncio
async def test_resend_dispatch_failure(
    notifier, email_provider, seed_invitation, load_invitation
) -> None:
    await seed_invitation("inv_001", email_sent=True)
    email_provider.error = Exception("Internal server error")

    await assert_rejected(
        notifier, OWNER, "inv_001", ErrorCategory.INTERNAL, "Failed to resend email"
    )

    model = await load_invitation("inv_001")
    assert model.email_sent is False
    assert model.email_error == "Internal server error"
    assert model.email_resent_at is None


@pytest.mark.asyncio
async def test_resend_write_back_failure(notifier, email_provider, seed_invitation) -> None:
    await seed_invitation("inv_001")

    with mock.patch.object(
        InvitationRepository,
        "mark_email_sent",
        side_effect=OperationalError("UPDATE", {}, Exception("database is locked")),
    ):
        await assert_rejected(
            notifier, OWNER, "inv_001", ErrorCategory.INTERNAL, "Failed to resend email"
        )

    assert len(email_provider.sent) == 1


@pytest.mark.asyncio
async def test_resend_load_failure(notifier, email_provider) -> None:
    with mock.patch.object(
        InvitationRepository,
        "get_by_id",
        side_effect=OperationalError("SELECT", {}, Exception("no such table")),
    ):
        await assert_rejected(
            notifier, OWNER, "inv_001", ErrorCategory.INTERNAL, "Failed to resend email"
        )

    assert email_provider.sent == []


def test_callable_error_to_dict() -> None:
    error = CallableError(ErrorCategory.PERMISSION_DENIED, "Not authorized")

    assert error.to_dict() == {"error": "permission-denied", "message": "Not authorized"}
