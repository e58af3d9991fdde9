"""Unit tests for the email dispatch client."""

import pytest

from playerpath.infrastructure.services.email import (
    DispatchErrorCategory,
    DispatchResult,
    EmailDispatchClient,
    UnconfiguredEmailProvider,
    classify_dispatch_error,
)


class ProviderError(Exception):
    """Mimics an SDK error carrying an HTTP status code."""

    def __init__(self, message: str, code: int) -> None:
        super().__init__(message)
        self.code = code


async def dispatch(client: EmailDispatchClient, to: str = "coach@example.com") -> DispatchResult:
    return await client.dispatch(
        to=to,
        subject="Subject",
        text_body="Text",
        html_body="<p>HTML</p>",
    )


@pytest.mark.asyncio
async def test_dispatch_success(dispatch_client: EmailDispatchClient, email_provider) -> None:
    result = await dispatch(dispatch_client)

    assert result == DispatchResult(success=True)
    assert len(email_provider.sent) == 1
    sent = email_provider.sent[0]
    assert sent["to"] == "coach@example.com"
    assert sent["from_email"] == "noreply@playerpath.app"
    assert sent["from_name"] == "PlayerPath"
    assert sent["html"] == "<p>HTML</p>"
    assert sent["text"] == "Text"


@pytest.mark.asyncio
async def test_dispatch_passes_reply_to(email_provider) -> None:
    client = EmailDispatchClient(
        provider=email_provider,
        from_email="noreply@playerpath.app",
        from_name="PlayerPath",
        reply_to="support@playerpath.app",
    )

    await dispatch(client)

    assert email_provider.sent[0]["reply_to"] == "support@playerpath.app"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "category"),
    [
        (ProviderError("API key is invalid", 401), DispatchErrorCategory.AUTHENTICATION),
        (ProviderError("Too many requests", 429), DispatchErrorCategory.RATE_LIMITED),
        (Exception("Invalid `to` field"), DispatchErrorCategory.INVALID_RECIPIENT),
        (ConnectionError("Connection reset by peer"), DispatchErrorCategory.NETWORK),
        (TimeoutError("timed out"), DispatchErrorCategory.NETWORK),
        (Exception("Internal server error"), DispatchErrorCategory.PROVIDER),
    ],
)
async def test_dispatch_failure_is_reported_not_raised(
    dispatch_client: EmailDispatchClient, email_provider, error, category
) -> None:
    email_provider.error = error

    result = await dispatch(dispatch_client)

    assert result.success is False
    assert result.category == category
    assert result.error == str(error)


@pytest.mark.asyncio
async def test_dispatch_declined_by_provider(
    dispatch_client: EmailDispatchClient, email_provider
) -> None:
    email_provider.accept = False

    result = await dispatch(dispatch_client)

    assert result.success is False
    assert result.category == DispatchErrorCategory.PROVIDER
    assert result.error


@pytest.mark.asyncio
async def test_dispatch_without_configuration() -> None:
    client = EmailDispatchClient(
        provider=UnconfiguredEmailProvider(),
        from_email="noreply@playerpath.app",
        from_name="PlayerPath",
    )

    result = await dispatch(client)

    assert isinstance(client.provider, UnconfiguredEmailProvider)
    assert result.success is False
    assert result.category == DispatchErrorCategory.NOT_CONFIGURED
    assert "not configured" in result.error


@pytest.mark.asyncio
@pytest.mark.parametrize("to", ["", "   "])
async def test_dispatch_rejects_empty_recipient(
    dispatch_client: EmailDispatchClient, email_provider, to: str
) -> None:
    with pytest.raises(ValueError):
        await dispatch(dispatch_client, to=to)

    assert email_provider.sent == []


@pytest.mark.asyncio
async def test_check_provider_reports_missing_configuration() -> None:
    client = EmailDispatchClient(
        provider=UnconfiguredEmailProvider(),
        from_email="noreply@playerpath.app",
        from_name="PlayerPath",
    )

    ok, message = await client.check_provider()

    assert ok is False
    assert "PLAYERPATH_EMAIL_API_KEY" in message


@pytest.mark.asyncio
async def test_check_provider_sends_nothing(dispatch_client: EmailDispatchClient, email_provider) -> None:
    ok, _ = await dispatch_client.check_provider()

    assert ok is True
    assert email_provider.sent == []


class TestClassifyDispatchError:
    def test_message_markers_without_code(self) -> None:
        assert (
            classify_dispatch_error(Exception("Invalid API key"))
            == DispatchErrorCategory.AUTHENTICATION
        )
        assert (
            classify_dispatch_error(Exception("Rate limit exceeded"))
            == DispatchErrorCategory.RATE_LIMITED
        )

    def test_code_takes_precedence_over_message(self) -> None:
        error = ProviderError("Something about a recipient", 403)
        assert classify_dispatch_error(error) == DispatchErrorCategory.AUTHENTICATION

    def test_string_status_code(self) -> None:
        error = ProviderError("slow down", 429)
        error.code = "429"
        assert classify_dispatch_error(error) == DispatchErrorCategory.RATE_LIMITED
