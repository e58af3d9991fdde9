"""Invitation-created trigger.

Connects the document store's record events to the notifier: every
committed coach invitation document is published as an
on_record_after_create event, and the registered hook sends its email.
"""

from typing import Any, Optional

from playerpath.core.config import Settings
from playerpath.core.hooks import HookDecorator, HookEvent, HookRegistry
from playerpath.core.logging import get_logger
from playerpath.domain.entities.hook_context import HookContext, HookResult
from playerpath.domain.services.invitation_notifier import InvitationNotifier
from playerpath.infrastructure.persistence.database import get_db_manager
from playerpath.infrastructure.services.email import build_dispatch_client

logger = get_logger(__name__)


def build_notifier(settings: Settings) -> InvitationNotifier:
    """Notifier backed by the shared database manager and configured provider."""
    return InvitationNotifier(
        session_factory=lambda: get_db_manager().session(),
        dispatch_client=build_dispatch_client(settings),
        link_scheme=settings.invitation_link_scheme,
        web_domain=settings.invitation_web_domain,
    )


def register_invitation_hooks(
    registry: HookRegistry,
    notifier: InvitationNotifier,
    collection: str = "coach_invitations",
) -> None:
    """Subscribe the notifier to invitation creations and server start.

    On serve the provider credentials are checked once, so a bad API key
    shows up in the startup logs instead of on the first invitation.
    """
    hook = HookDecorator(registry)

    @hook.on_record_after_create(collection)
    async def send_invitation_email_on_create(
        event: str,
        data: Optional[dict[str, Any]],
        context: Optional[HookContext],
    ) -> None:
        document = data if isinstance(data, dict) else {}
        await notifier.handle_invitation_created(document.get("id", ""), document)

    @hook.on_serve()
    async def check_email_provider(
        event: str,
        data: Optional[dict[str, Any]],
        context: Optional[HookContext],
    ) -> None:
        ok, message = await notifier.dispatch_client.check_provider()
        if ok:
            logger.info("Email provider verified", detail=message)
        else:
            logger.warning("Email provider check failed, invitation emails will fail", reason=message)

    logger.info("Invitation hooks registered", collection=collection)


async def publish_record_created(
    registry: HookRegistry,
    collection: str,
    document: dict[str, Any],
    context: Optional[HookContext] = None,
) -> HookResult:
    """Publish a committed document to the record-created hooks."""
    logger.debug("Publishing record created event", collection=collection, record_id=document.get("id"))
    return await registry.trigger(
        event=HookEvent.ON_RECORD_AFTER_CREATE,
        data=document,
        context=context,
        filters={"collection": collection},
    )
