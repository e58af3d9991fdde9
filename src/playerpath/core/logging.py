"""Structured logging.

structlog renders JSON in production and colored console output in
development. Every entry carries a correlation ID: the HTTP middleware binds
the request's, and entries logged outside a request get a fresh one. Use
LoggingContext to attach fields, such as the invitation being processed, to
everything logged inside a block.
"""

import logging
import sys
import uuid
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from playerpath.core.config import Settings, get_settings


def ensure_correlation_id(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("correlation_id", f"cid_{uuid.uuid4().hex[:12]}")
    return event_dict


def add_logger_name(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    # PrintLogger has no name; structlog.stdlib.add_logger_name needs one
    event_dict["logger"] = getattr(logger, "name", None) or "playerpath"
    return event_dict


def event_to_message(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def _renderer(settings: Settings) -> Processor:
    if settings.is_development or settings.log_format == "console":
        return structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )
    return structlog.processors.JSONRenderer()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the stdlib loggers used by uvicorn and SQLAlchemy."""
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level)
    renderer = _renderer(settings)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            ensure_correlation_id,
            event_to_message,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=isinstance(renderer, structlog.processors.JSONRenderer),
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        logging.getLogger(name).setLevel(level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name or "playerpath")


class LoggingContext:
    """Bind fields to every entry logged inside a `with` block.

    Previous values are restored on exit, so contexts can nest.

    Example:
        with LoggingContext(invitation_id="inv_001"):
            logger.info("Dispatching invitation email")
    """

    def __init__(self, **fields: Any) -> None:
        self.fields = fields
        self._tokens: dict[str, Any] = {}

    def __enter__(self) -> "LoggingContext":
        self._tokens = structlog.contextvars.bind_contextvars(**self.fields)
        return self

    def __exit__(self, *exc_info: Any) -> None:
        structlog.contextvars.reset_contextvars(**self._tokens)


def bind_correlation_id(correlation_id: str) -> None:
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
