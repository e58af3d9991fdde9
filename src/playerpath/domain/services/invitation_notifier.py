"""Invitation notifier: sends coach invitation emails and records the outcome.

Two entry points share one render -> dispatch -> write-back path:

- handle_invitation_created runs for every newly created invitation
  document. It never raises; every failure ends in a logged, best-effort
  write-back.
- resend_invitation_email is called by the invitation's creator and raises
  CallableError so the client can display what went wrong.

The created event may be delivered more than once. Status bookkeeping is
idempotent (each write-back replaces the whole status in one statement),
but a redelivered event sends another email; duplicates are not suppressed.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from playerpath.core.logging import LoggingContext, get_logger
from playerpath.domain.entities.invitation import CoachInvitation
from playerpath.domain.services.callable_error import CallableError, ErrorCategory
from playerpath.domain.services.invitation_links import build_invitation_links
from playerpath.infrastructure.persistence.repositories import InvitationRepository
from playerpath.infrastructure.persistence.repositories.invitation_repository import (
    TimestampField,
)
from playerpath.infrastructure.services.email.dispatch_client import (
    DispatchErrorCategory,
    DispatchResult,
    EmailDispatchClient,
)
from playerpath.infrastructure.services.email.template_renderer import (
    TemplateRenderer,
    get_template_renderer,
)

logger = get_logger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DeliveryOutcome:
    """Result of one automatic delivery attempt.

    Attributes:
        invitation_id: Invitation the attempt was for.
        sent: Whether the provider accepted the email.
        skipped: True when validation failed and nothing was sent.
        error: Failure or validation message.
        category: Dispatch failure category, if the dispatch failed.
        recorded: Whether the status write-back was persisted.
    """

    invitation_id: str
    sent: bool
    skipped: bool = False
    error: str | None = None
    category: DispatchErrorCategory | None = None
    recorded: bool = False


@dataclass(frozen=True)
class ResendResult:
    """Successful result of a resend."""

    success: bool
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success, "message": self.message}


class InvitationNotifier:
    """Renders, dispatches and records coach invitation emails.

    Holds no per-invitation state: every call opens its own session.
    """

    def __init__(
        self,
        session_factory: SessionFactory,
        dispatch_client: EmailDispatchClient,
        renderer: TemplateRenderer | None = None,
        link_scheme: str = "playerpath",
        web_domain: str = "playerpath.app",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the notifier.

        Args:
            session_factory: Returns an async context manager yielding a
                session, e.g. an async_sessionmaker.
            dispatch_client: Client used for the single send per attempt.
            renderer: Template renderer. Defaults to the shared renderer.
            link_scheme: URL scheme of the app deep link.
            web_domain: Domain of the fallback web link.
            clock: Source of write-back timestamps.
        """
        self.session_factory = session_factory
        self.dispatch_client = dispatch_client
        self.renderer = renderer or get_template_renderer()
        self.link_scheme = link_scheme
        self.web_domain = web_domain
        self.clock = clock

    async def handle_invitation_created(
        self, invitation_id: str, document: dict[str, Any]
    ) -> DeliveryOutcome:
        """Send the invitation email for a newly created document.

        Args:
            invitation_id: ID of the created document.
            document: The document payload (camelCase fields).

        Returns:
            DeliveryOutcome describing what happened.
        """
        if not invitation_id:
            logger.error("Invitation created event without an invitation ID")
            return DeliveryOutcome(invitation_id="", sent=False, skipped=True, error="Missing invitation ID")

        with LoggingContext(invitation_id=invitation_id):
            if not isinstance(document, dict):
                logger.error("Invitation document is not a mapping", document_type=type(document).__name__)
                return DeliveryOutcome(
                    invitation_id=invitation_id,
                    sent=False,
                    skipped=True,
                    error="Invitation document is not a mapping",
                )
            invitation = CoachInvitation.from_document(invitation_id, document)

            missing = invitation.missing_email_fields
            if missing:
                # Upstream data defect, not a delivery failure: nothing is written
                logger.error("Missing required invitation fields", missing_fields=missing)
                return DeliveryOutcome(
                    invitation_id=invitation_id,
                    sent=False,
                    skipped=True,
                    error=f"Missing required invitation fields: {', '.join(missing)}",
                )

            result = await self._deliver(invitation)

            try:
                recorded = await self._record(invitation_id, result, "email_sent_at")
            except Exception as e:
                logger.error(
                    "Failed to record invitation email status",
                    email_sent=result.success,
                    error=str(e),
                )
                recorded = False

            if result.success:
                logger.info("Invitation email sent", to=invitation.coach_email)

            return DeliveryOutcome(
                invitation_id=invitation_id,
                sent=result.success,
                error=result.error,
                category=result.category,
                recorded=recorded,
            )

    async def resend_invitation_email(
        self, caller_uid: str | None, invitation_id: str | None
    ) -> ResendResult:
        """Resend the invitation email on behalf of its creator.

        Args:
            caller_uid: Authenticated identity of the caller, None if anonymous.
            invitation_id: ID of the invitation to resend.

        Returns:
            ResendResult on success.

        Raises:
            CallableError: unauthenticated, invalid-argument, not-found,
                permission-denied, or internal.
        """
        if not caller_uid:
            raise CallableError(ErrorCategory.UNAUTHENTICATED, "Must be authenticated")
        if not invitation_id:
            raise CallableError(ErrorCategory.INVALID_ARGUMENT, "Missing invitationId")

        with LoggingContext(invitation_id=invitation_id, caller_uid=caller_uid):
            try:
                async with self.session_factory() as session:
                    model = await InvitationRepository(session).get_by_id(invitation_id)
                    invitation = model.to_entity() if model is not None else None
            except SQLAlchemyError as e:
                logger.error("Failed to load invitation for resend", error=str(e))
                raise CallableError(ErrorCategory.INTERNAL, "Failed to resend email") from e

            if invitation is None:
                raise CallableError(ErrorCategory.NOT_FOUND, "Invitation not found")

            if invitation.athlete_id != caller_uid:
                logger.warning("Resend denied: caller does not own invitation")
                raise CallableError(ErrorCategory.PERMISSION_DENIED, "Not authorized")

            missing = invitation.missing_email_fields
            if missing:
                raise CallableError(
                    ErrorCategory.INVALID_ARGUMENT,
                    f"Invitation is missing required fields: {', '.join(missing)}",
                )

            result = await self._deliver(invitation)

            try:
                await self._record(invitation_id, result, "email_resent_at")
            except SQLAlchemyError as e:
                logger.error("Failed to record resend status", email_sent=result.success, error=str(e))
                raise CallableError(ErrorCategory.INTERNAL, "Failed to resend email") from e

            if not result.success:
                raise CallableError(ErrorCategory.INTERNAL, "Failed to resend email")

            logger.info("Invitation email resent", to=invitation.coach_email)
            return ResendResult(success=True, message="Email resent successfully")

    async def _deliver(self, invitation: CoachInvitation) -> DispatchResult:
        """Render and dispatch once; rendering problems count as failures."""
        try:
            links = build_invitation_links(invitation.id, self.link_scheme, self.web_domain)
            email = self.renderer.render_invitation_email(invitation, links)
        except Exception as e:
            logger.error("Failed to render invitation email", error=str(e))
            return DispatchResult(success=False, error=f"Failed to render invitation email: {e}")

        return await self.dispatch_client.dispatch(
            to=invitation.coach_email,
            subject=email.subject,
            text_body=email.text,
            html_body=email.html,
        )

    async def _record(
        self, invitation_id: str, result: DispatchResult, timestamp_field: TimestampField
    ) -> bool:
        """Write the outcome of a dispatch back onto the invitation."""
        async with self.session_factory() as session:
            repo = InvitationRepository(session)
            if result.success:
                updated = await repo.mark_email_sent(invitation_id, timestamp_field, self.clock())
            else:
                updated = await repo.mark_email_failed(
                    invitation_id, result.error or "Unknown error"
                )
            await session.commit()

        if not updated:
            logger.warning("Invitation no longer exists, status not recorded")
        return updated
