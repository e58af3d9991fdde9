"""Infrastructure hooks: the invitation-created trigger."""

from playerpath.infrastructure.hooks.invitation_hooks import (
    build_notifier,
    publish_record_created,
    register_invitation_hooks,
)

__all__ = ["build_notifier", "publish_record_created", "register_invitation_hooks"]
