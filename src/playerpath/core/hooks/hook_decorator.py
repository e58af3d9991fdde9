"""Decorator syntax for hook registration.

    hook = HookDecorator(registry)

    @hook.on_record_after_create("coach_invitations")
    async def send_invitation(event, data, context):
        ...
"""

from typing import Any, Callable, Optional, TypeVar

from playerpath.core.hooks.hook_events import HookEvent
from playerpath.core.hooks.hook_registry import HookRegistry

F = TypeVar("F", bound=Callable[..., Any])


class HookDecorator:
    """Registers decorated functions with a HookRegistry."""

    def __init__(self, registry: HookRegistry) -> None:
        self.registry = registry

    def on(
        self,
        event: HookEvent,
        collection: Optional[str] = None,
        priority: int = 0,
        stop_on_error: bool = False,
    ) -> Callable[[F], F]:
        """Subscribe the decorated function to `event`.

        Args:
            event: Event to subscribe to.
            collection: For record events, only fire for this collection.
            priority: Higher runs earlier.
            stop_on_error: Abort the rest of the chain if the function raises.
        """
        if collection and not event.is_record_event:
            raise ValueError(f"{event.value} does not carry a collection")

        def decorator(func: F) -> F:
            self.registry.register(
                event=event,
                callback=func,
                filters={"collection": collection} if collection else None,
                priority=priority,
                stop_on_error=stop_on_error,
            )
            return func

        return decorator

    def on_serve(self, priority: int = 0) -> Callable[[F], F]:
        return self.on(HookEvent.ON_SERVE, priority=priority)

    def on_record_after_create(
        self,
        collection: Optional[str] = None,
        priority: int = 0,
        stop_on_error: bool = False,
    ) -> Callable[[F], F]:
        """Subscribe to committed document creations.

        Delivery is at-least-once, so handlers must tolerate running twice
        for the same document.
        """
        return self.on(HookEvent.ON_RECORD_AFTER_CREATE, collection, priority, stop_on_error)
