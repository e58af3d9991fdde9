"""Resend email provider.

The Resend SDK is synchronous and keeps its API key in module state, so a
single provider is built per process and each send runs in a worker thread.
"""

import asyncio
from typing import Any

import resend
from pydantic import BaseModel

from playerpath.core.logging import get_logger
from playerpath.infrastructure.services.email.email_provider import EmailProvider

logger = get_logger(__name__)


class ResendSettings(BaseModel):
    """Credentials and default sender for Resend."""

    api_key: str
    from_email: str
    from_name: str = "PlayerPath"
    reply_to: str | None = None


class ResendProvider(EmailProvider):
    """Sends email through the Resend API."""

    def __init__(self, settings: ResendSettings) -> None:
        self.settings = settings
        resend.api_key = settings.api_key

    def _message_params(
        self,
        to: str,
        subject: str,
        html_body: str,
        text_body: str,
        from_email: str,
        from_name: str,
        reply_to: str | None,
    ) -> dict[str, Any]:
        sender_name = from_name or self.settings.from_name
        sender_email = from_email or self.settings.from_email
        params: dict[str, Any] = {
            "from": f"{sender_name} <{sender_email}>",
            "to": [to],
            "subject": subject,
            "html": html_body,
            "text": text_body,
        }
        if reply_to or self.settings.reply_to:
            params["reply_to"] = reply_to or self.settings.reply_to
        return params

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
        """Send one email. SDK errors propagate for the caller to classify."""
        params = self._message_params(
            to, subject, html_body, text_body, from_email, from_name, reply_to
        )
        response = await asyncio.to_thread(resend.Emails.send, params)

        message_id = response.get("id") if isinstance(response, dict) else None
        logger.info("Email accepted by Resend", to=to, message_id=message_id)
        return True

    async def test_connection(self) -> tuple[bool, str | None]:
        """Check the API key by listing sending domains."""
        try:
            await asyncio.to_thread(resend.Domains.list)
        except Exception as e:
            logger.warning("Resend connection check failed", error=str(e))
            reason = "Invalid API key" if "api key" in str(e).lower() else str(e)
            return False, f"Resend connection failed: {reason}"
        return True, "Resend connection successful"
