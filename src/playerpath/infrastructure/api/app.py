"""ASGI application for the invitation notifier.

`create_app` wires settings, the hook registry, the notifier and the HTTP
routes together. The module-level `app` is what uvicorn serves.
"""

import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from playerpath.core.config import Settings, get_settings
from playerpath.core.hooks import HookEvent, HookRegistry
from playerpath.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)
from playerpath.domain.entities.hook_context import HookContext
from playerpath.domain.services.invitation_notifier import InvitationNotifier
from playerpath.infrastructure.hooks import build_notifier, register_invitation_hooks
from playerpath.infrastructure.persistence.database import (
    close_database,
    get_db_manager,
    init_database,
)

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings = get_settings()
    configure_logging(settings)
    logger.info(
        "Notifier starting",
        environment=settings.environment,
        version=settings.app_version,
        email_configured=settings.email_configured,
    )

    await init_database()

    registry: HookRegistry = app.state.hook_registry
    for event in (HookEvent.ON_BOOTSTRAP, HookEvent.ON_SERVE):
        await registry.trigger(event=event, context=HookContext(app=app))

    try:
        yield
    finally:
        logger.info("Notifier stopping")
        await registry.trigger(event=HookEvent.ON_TERMINATE, context=HookContext(app=app))
        await close_database()


def create_app(notifier: InvitationNotifier | None = None) -> FastAPI:
    """Build the application.

    Args:
        notifier: Notifier subscribed to invitation created events.
            Tests pass one wired to an in-memory store.
    """
    settings = get_settings()
    docs_enabled = settings.is_development

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Coach invitation email notifications for PlayerPath",
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )

    registry = HookRegistry()
    app.state.hook_registry = registry
    app.state.notifier = notifier or build_notifier(settings)
    register_invitation_hooks(registry, app.state.notifier, settings.invitations_collection)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    _add_request_logging(app)
    _add_error_handler(app, settings)
    _add_health_routes(app, settings)
    _add_api_routes(app, settings)
    return app


def _add_health_routes(app: FastAPI, settings: Settings) -> None:
    @app.get("/health", tags=["health"])
    async def health():
        """Liveness: answers as long as the process is serving requests."""
        return {"status": "healthy", "service": settings.app_name, "version": settings.app_version}

    @app.get("/ready", tags=["health"])
    async def ready():
        """Readiness: requires the database; reports email configuration."""
        body = {
            "service": settings.app_name,
            "version": settings.app_version,
            "email": "configured" if settings.email_configured else "not_configured",
        }
        if await get_db_manager().is_reachable():
            return {"status": "ready", "database": "connected", **body}
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "database": "disconnected", **body},
        )


def _add_api_routes(app: FastAPI, settings: Settings) -> None:
    from playerpath.infrastructure.api.routes import functions_router, invitations_router

    app.include_router(
        invitations_router, prefix=f"{settings.api_prefix}/invitations", tags=["invitations"]
    )
    app.include_router(
        functions_router, prefix=f"{settings.api_prefix}/functions", tags=["functions"]
    )


def _add_error_handler(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error",
            method=request.method,
            path=request.url.path,
            exc_type=type(exc).__name__,
            error=str(exc),
        )
        message = str(exc) if settings.debug else "An unexpected error occurred"
        return JSONResponse(status_code=500, content={"error": "internal", "message": message})


def _add_request_logging(app: FastAPI) -> None:
    @app.middleware("http")
    async def correlate_requests(request: Request, call_next):
        correlation_id = request.headers.get(CORRELATION_HEADER) or f"cid_{uuid.uuid4().hex[:12]}"
        bind_correlation_id(correlation_id)
        try:
            response = await call_next(request)
            logger.info(
                "Request handled",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
            )
            response.headers[CORRELATION_HEADER] = correlation_id
            return response
        finally:
            clear_context()


app = create_app()
