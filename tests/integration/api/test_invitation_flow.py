"""End-to-end invitation flow through the hook registry."""

import pytest
from fastapi import FastAPI

from playerpath.domain.entities.hook_context import HookContext
from playerpath.infrastructure.hooks import publish_record_created


@pytest.mark.asyncio
async def test_created_invitation_is_emailed_and_recorded(
    app: FastAPI, seed_invitation, load_invitation, email_provider
) -> None:
    await seed_invitation("inv_001", folder_name="Spring Highlights")
    document = {
        "id": "inv_001",
        "athleteID": "uid_athlete_1",
        "athleteName": "Alex Rivera",
        "coachEmail": "coach@example.com",
        "folderName": "Spring Highlights",
        "permissions": {"canUpload": True, "canComment": True, "canDelete": False},
    }

    result = await publish_record_created(
        app.state.hook_registry,
        "coach_invitations",
        document,
        HookContext(app=app, user_id="uid_athlete_1"),
    )

    assert result.success is True
    assert len(email_provider.sent) == 1
    email = email_provider.sent[0]
    assert email["subject"] == "Alex Rivera invited you to collaborate on PlayerPath"
    assert "✓ Upload videos" in email["text"]
    assert "✓ Add comments and feedback" in email["text"]
    assert "Manage videos" not in email["text"]
    assert "Manage videos" not in email["html"]

    model = await load_invitation("inv_001")
    assert model.email_sent is True
    assert model.email_sent_at is not None


@pytest.mark.asyncio
async def test_other_collections_do_not_trigger_email(app: FastAPI, email_provider) -> None:
    result = await publish_record_created(
        app.state.hook_registry,
        "folders",
        {"id": "folder_1", "coachEmail": "coach@example.com"},
    )

    assert result.success is True
    assert email_provider.sent == []


@pytest.mark.asyncio
async def test_invalid_document_does_not_fail_the_publisher(
    app: FastAPI, load_invitation, seed_invitation, email_provider
) -> None:
    await seed_invitation("inv_001", coach_email=None)

    result = await publish_record_created(
        app.state.hook_registry,
        "coach_invitations",
        {"id": "inv_001", "athleteName": "Alex Rivera", "folderName": "Spring Highlights"},
    )

    assert result.success is True
    assert email_provider.sent == []
    model = await load_invitation("inv_001")
    assert model.email_sent is None
