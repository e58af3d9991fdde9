"""Unit tests for building the process-wide email provider."""

import pytest

from playerpath.core.config import Settings
from playerpath.infrastructure.services.email import (
    UnconfiguredEmailProvider,
    build_dispatch_client,
    build_email_provider,
)
from playerpath.infrastructure.services.email.resend_provider import ResendProvider


def test_missing_api_key_selects_unconfigured_provider() -> None:
    settings = Settings(email_api_key=None)

    provider = build_email_provider(settings)

    assert isinstance(provider, UnconfiguredEmailProvider)


def test_blank_api_key_is_treated_as_missing() -> None:
    settings = Settings(email_api_key="   ")

    assert settings.email_configured is False
    assert isinstance(build_email_provider(settings), UnconfiguredEmailProvider)


def test_api_key_selects_resend_provider() -> None:
    settings = Settings(email_api_key="re_test_key", email_from_name="PlayerPath")

    provider = build_email_provider(settings)

    assert isinstance(provider, ResendProvider)
    assert provider.settings.api_key == "re_test_key"
    assert provider.settings.from_name == "PlayerPath"


def test_dispatch_client_uses_configured_sender() -> None:
    settings = Settings(
        email_api_key=None,
        email_from_address="invites@playerpath.app",
        email_from_name="PlayerPath Invites",
        email_reply_to="support@playerpath.app",
    )

    client = build_dispatch_client(settings)

    assert isinstance(client.provider, UnconfiguredEmailProvider)
    assert client.from_email == "invites@playerpath.app"
    assert client.from_name == "PlayerPath Invites"
    assert client.reply_to == "support@playerpath.app"


@pytest.mark.asyncio
async def test_unconfigured_provider_connection_check() -> None:
    success, message = await UnconfiguredEmailProvider().test_connection()

    assert success is False
    assert "PLAYERPATH_EMAIL_API_KEY" in message
