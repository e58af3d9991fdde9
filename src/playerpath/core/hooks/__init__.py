"""Hook system.

Hooks are the trigger surface of the notifier: the document store publishes
record events and handlers registered here react to them.
"""

from playerpath.core.hooks.hook_decorator import HookDecorator
from playerpath.core.hooks.hook_events import HookEvent
from playerpath.core.hooks.hook_registry import HookRegistry, RegisteredHook

__all__ = [
    "HookDecorator",
    "HookEvent",
    "HookRegistry",
    "RegisteredHook",
]
