"""API routers."""

from playerpath.infrastructure.api.routes.functions_router import router as functions_router
from playerpath.infrastructure.api.routes.invitations_router import router as invitations_router

__all__ = ["functions_router", "invitations_router"]
