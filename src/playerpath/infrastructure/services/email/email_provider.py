"""Provider interface used by the dispatch client."""

from abc import ABC, abstractmethod


class EmailProviderNotConfiguredError(RuntimeError):
    """Raised when a send is attempted without provider credentials."""


class EmailProvider(ABC):
    """Sends one message through a transactional email service."""

    @abstractmethod
    async def send_email(
        self,
        to: str,
        subject: str,
        html_body: str,
        text_body: str,
        from_email: str,
        from_name: str,
        reply_to: str | None = None,
    ) -> bool:
        """Hand one message to the provider.

        `from_email` and `from_name` form the sender; `reply_to` is optional.

        Returns:
            True if the provider accepted the message.

        Raises:
            Exception: Whatever the provider SDK raises; the dispatch
                client classifies it.
        """

    @abstractmethod
    async def test_connection(self) -> tuple[bool, str | None]:
        """Check credentials without sending anything.

        Returns:
            (ok, message) where message explains a failure.
        """


class UnconfiguredEmailProvider(EmailProvider):
    """Stand-in provider used when no API key is configured.

    Every send fails fast with EmailProviderNotConfiguredError so the
    failure is reported as "not configured" instead of a generic send error.
    """

    message = "Email provider is not configured: set PLAYERPATH_EMAIL_API_KEY"

    async def send_email(
        self,
        to: str,
        subject: str,
        html_body: str,
        text_body: str,
        from_email: str,
        from_name: str,
        reply_to: str | None = None,
    ) -> bool:
        raise EmailProviderNotConfiguredError(self.message)

    async def test_connection(self) -> tuple[bool, str | None]:
        return False, self.message
