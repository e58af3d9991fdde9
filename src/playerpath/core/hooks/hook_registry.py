"""Hook registry.

Handlers subscribe to an event, optionally scoped by filters such as
`{"collection": "coach_invitations"}`, and are awaited one at a time when the
event is published. A handler that raises is logged and reported in the
returned HookResult; the exception never reaches the publisher.
"""

import inspect
import itertools
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from playerpath.core.logging import get_logger
from playerpath.domain.entities.hook_context import HookContext, HookResult

logger = get_logger(__name__)

HookCallback = Callable[[str, Optional[dict[str, Any]], Optional[HookContext]], Any]


@dataclass
class RegisteredHook:
    """A handler subscribed to one event."""

    id: str
    event: str
    callback: HookCallback
    filters: dict[str, Any] = field(default_factory=dict)
    priority: int = 0
    stop_on_error: bool = False
    sequence: int = 0

    def matches(self, filters: Optional[dict[str, Any]]) -> bool:
        """Whether this hook fires for a trigger carrying `filters`.

        An unfiltered trigger reaches every hook; otherwise each of the
        hook's own filters must be present with the same value.
        """
        if not filters:
            return True
        return all(
            filters.get(key) is not None and filters[key] == expected
            for key, expected in self.filters.items()
        )

    @property
    def sort_key(self) -> tuple[int, int]:
        # Higher priority first, then registration order
        return (-self.priority, self.sequence)


class HookRegistry:
    """Subscribes handlers to events and dispatches events to them.

    Example:
        registry = HookRegistry()
        registry.register(
            HookEvent.ON_RECORD_AFTER_CREATE,
            on_invitation_created,
            filters={"collection": "coach_invitations"},
        )
        await registry.trigger(
            HookEvent.ON_RECORD_AFTER_CREATE,
            data=document,
            filters={"collection": "coach_invitations"},
        )
    """

    def __init__(self) -> None:
        self._hooks: dict[str, RegisteredHook] = {}
        self._sequence = itertools.count(1)

    def register(
        self,
        event: str,
        callback: HookCallback,
        filters: Optional[dict[str, Any]] = None,
        priority: int = 0,
        stop_on_error: bool = False,
    ) -> str:
        """Subscribe a callback to an event.

        Args:
            event: Event name, usually a HookEvent.
            callback: Called with (event, data, context). May be async.
            filters: Only fire for triggers whose filters match these.
            priority: Higher runs earlier.
            stop_on_error: Abort the rest of the chain if this hook raises.

        Returns:
            Hook ID, usable with unregister().
        """
        hook = RegisteredHook(
            id=f"hook_{uuid.uuid4().hex[:12]}",
            event=event,
            callback=callback,
            filters=dict(filters or {}),
            priority=priority,
            stop_on_error=stop_on_error,
            sequence=next(self._sequence),
        )
        self._hooks[hook.id] = hook
        logger.debug(
            "Hook registered",
            hook_id=hook.id,
            hook_event=event,
            filters=hook.filters,
            priority=priority,
        )
        return hook.id

    def unregister(self, hook_id: str) -> bool:
        """Remove a hook. Returns False if it was not registered."""
        if self._hooks.pop(hook_id, None) is None:
            logger.warning("Hook not found for unregister", hook_id=hook_id)
            return False
        return True

    def hooks_for(
        self, event: str, filters: Optional[dict[str, Any]] = None
    ) -> list[RegisteredHook]:
        """Hooks that a trigger of `event` with `filters` would run, in order."""
        matching = [
            hook for hook in self._hooks.values() if hook.event == event and hook.matches(filters)
        ]
        return sorted(matching, key=lambda hook: hook.sort_key)

    async def trigger(
        self,
        event: str,
        data: Optional[dict[str, Any]] = None,
        context: Optional[HookContext] = None,
        filters: Optional[dict[str, Any]] = None,
    ) -> HookResult:
        """Run every matching hook for an event.

        Returns:
            HookResult; `success` is False if any hook raised.
        """
        result = HookResult(data=data)
        hooks = self.hooks_for(event, filters)
        if hooks:
            logger.debug("Triggering hooks", hook_event=event, hook_count=len(hooks))

        for hook in hooks:
            try:
                outcome = hook.callback(event, data, context)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception as e:
                logger.error(
                    "Hook execution failed",
                    hook_id=hook.id,
                    hook_event=event,
                    error=str(e),
                )
                result.errors.append(f"Hook {hook.id} failed: {e}")
                if hook.stop_on_error:
                    break

        result.success = not result.errors
        return result

    def clear(self) -> int:
        """Remove all hooks and return how many there were."""
        count = len(self._hooks)
        self._hooks.clear()
        return count
