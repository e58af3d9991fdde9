"""Values passed to and returned from hook dispatch."""

import uuid
from dataclasses import dataclass, field
from typing import Any, Optional


def _request_id() -> str:
    return f"hk_{uuid.uuid4().hex[:12]}"


@dataclass
class HookContext:
    """Who and what published an event.

    `app` is the FastAPI application when the event comes from the server,
    `user_id` the caller whose write published it.
    """

    app: Any = None
    user_id: Optional[str] = None
    request_id: str = field(default_factory=_request_id)


@dataclass
class HookResult:
    """Outcome of one trigger: the payload and any hook failures."""

    success: bool = True
    errors: list[str] = field(default_factory=list)
    data: Optional[dict[str, Any]] = None
