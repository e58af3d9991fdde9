"""Events that hooks can subscribe to."""

from enum import Enum


class HookEvent(str, Enum):
    """Hook event names.

    Lifecycle events are published by the application lifespan. Record
    events are published by the document store once a write is committed.
    """

    ON_BOOTSTRAP = "on_bootstrap"
    ON_SERVE = "on_serve"
    ON_TERMINATE = "on_terminate"

    ON_RECORD_AFTER_CREATE = "on_record_after_create"

    @property
    def is_record_event(self) -> bool:
        return self.value.startswith("on_record_")
