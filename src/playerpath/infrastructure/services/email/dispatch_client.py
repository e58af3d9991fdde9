"""Email dispatch client.

Wraps an EmailProvider behind a single call that makes exactly one send
attempt and reports the outcome as a value instead of raising. Retrying is
left to the caller.
"""

from dataclasses import dataclass
from enum import Enum

from playerpath.core.config import Settings
from playerpath.core.logging import get_logger
from playerpath.infrastructure.services.email.email_provider import (
    EmailProvider,
    EmailProviderNotConfiguredError,
    UnconfiguredEmailProvider,
)
from playerpath.infrastructure.services.email.resend_provider import (
    ResendProvider,
    ResendSettings,
)

logger = get_logger(__name__)


class DispatchErrorCategory(str, Enum):
    """Why a dispatch failed."""

    NOT_CONFIGURED = "not_configured"
    AUTHENTICATION = "authentication"
    INVALID_RECIPIENT = "invalid_recipient"
    RATE_LIMITED = "rate_limited"
    NETWORK = "network"
    PROVIDER = "provider"


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of a single dispatch attempt.

    Attributes:
        success: Whether the provider accepted the email.
        error: Human-readable failure message, suitable for persisting.
        category: Failure category, None on success.
    """

    success: bool
    error: str | None = None
    category: DispatchErrorCategory | None = None

    @classmethod
    def sent(cls) -> "DispatchResult":
        return cls(success=True)

    @classmethod
    def failed(cls, category: DispatchErrorCategory, error: str) -> "DispatchResult":
        return cls(success=False, error=error, category=category)


_AUTH_MARKERS = ("invalid api key", "unauthorized", "api key is invalid", "missing api key", "restricted_api_key")
_RATE_LIMIT_MARKERS = ("rate limit", "too many requests")
_RECIPIENT_MARKERS = ("invalid `to`", "invalid to", "recipient", "email address")


def classify_dispatch_error(error: Exception) -> DispatchErrorCategory:
    """Map a provider exception onto a DispatchErrorCategory.

    Checks the exception type first, then an HTTP-like `code` attribute,
    then well-known fragments of the provider's error message.
    """
    if isinstance(error, EmailProviderNotConfiguredError):
        return DispatchErrorCategory.NOT_CONFIGURED
    # requests' connection and timeout errors derive from OSError
    if isinstance(error, OSError):
        return DispatchErrorCategory.NETWORK

    code = getattr(error, "code", None)
    if code in (401, 403, "401", "403"):
        return DispatchErrorCategory.AUTHENTICATION
    if code in (429, "429"):
        return DispatchErrorCategory.RATE_LIMITED

    message = str(error).lower()
    if any(marker in message for marker in _AUTH_MARKERS):
        return DispatchErrorCategory.AUTHENTICATION
    if any(marker in message for marker in _RATE_LIMIT_MARKERS):
        return DispatchErrorCategory.RATE_LIMITED
    if any(marker in message for marker in _RECIPIENT_MARKERS):
        return DispatchErrorCategory.INVALID_RECIPIENT
    return DispatchErrorCategory.PROVIDER


class EmailDispatchClient:
    """Sends one email through a provider with a fixed sender identity."""

    def __init__(
        self,
        provider: EmailProvider,
        from_email: str,
        from_name: str,
        reply_to: str | None = None,
    ) -> None:
        self.provider = provider
        self.from_email = from_email
        self.from_name = from_name
        self.reply_to = reply_to

    async def check_provider(self) -> tuple[bool, str | None]:
        """Verify the provider credentials without sending anything."""
        return await self.provider.test_connection()

    async def dispatch(
        self,
        to: str,
        subject: str,
        text_body: str,
        html_body: str,
    ) -> DispatchResult:
        """Attempt exactly one send.

        Args:
            to: Recipient email address.
            subject: Email subject line.
            text_body: Plain text body.
            html_body: HTML body.

        Returns:
            DispatchResult describing the outcome. Provider failures are
            reported here, never raised.

        Raises:
            ValueError: If the recipient is empty.
        """
        if not to or not to.strip():
            raise ValueError("Recipient email address is required")

        try:
            accepted = await self.provider.send_email(
                to=to,
                subject=subject,
                html_body=html_body,
                text_body=text_body,
                from_email=self.from_email,
                from_name=self.from_name,
                reply_to=self.reply_to,
            )
        except Exception as e:
            category = classify_dispatch_error(e)
            error_message = str(e) or type(e).__name__
            logger.error(
                "Email dispatch failed",
                to=to,
                category=category.value,
                error=error_message,
                provider=type(self.provider).__name__,
            )
            return DispatchResult.failed(category, error_message)

        if not accepted:
            logger.error("Email provider did not accept the message", to=to)
            return DispatchResult.failed(
                DispatchErrorCategory.PROVIDER, "Email provider did not accept the message"
            )

        return DispatchResult.sent()


def build_email_provider(settings: Settings) -> EmailProvider:
    """Build the provider for this process.

    Never raises: without an API key, an UnconfiguredEmailProvider is
    returned so every dispatch fails explicitly.
    """
    if not settings.email_configured:
        logger.warning("Email API key not set; invitation emails will not be sent")
        return UnconfiguredEmailProvider()

    return ResendProvider(
        ResendSettings(
            api_key=settings.email_api_key,
            from_email=settings.email_from_address,
            from_name=settings.email_from_name,
            reply_to=settings.email_reply_to,
        )
    )


def build_dispatch_client(settings: Settings, provider: EmailProvider | None = None) -> EmailDispatchClient:
    """Build a dispatch client with the configured sender identity."""
    return EmailDispatchClient(
        provider=provider or build_email_provider(settings),
        from_email=settings.email_from_address,
        from_name=settings.email_from_name,
        reply_to=settings.email_reply_to,
    )
