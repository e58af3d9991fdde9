"""Email rendering and dispatch."""

from playerpath.infrastructure.services.email.dispatch_client import (
    DispatchErrorCategory,
    DispatchResult,
    EmailDispatchClient,
    build_dispatch_client,
    build_email_provider,
    classify_dispatch_error,
)
from playerpath.infrastructure.services.email.email_provider import (
    EmailProvider,
    EmailProviderNotConfiguredError,
    UnconfiguredEmailProvider,
)
from playerpath.infrastructure.services.email.template_renderer import (
    RenderedEmail,
    TemplateRenderer,
    get_template_renderer,
    render_invitation_email,
)

__all__ = [
    "DispatchErrorCategory",
    "DispatchResult",
    "EmailDispatchClient",
    "EmailProvider",
    "EmailProviderNotConfiguredError",
    "RenderedEmail",
    "TemplateRenderer",
    "UnconfiguredEmailProvider",
    "build_dispatch_client",
    "build_email_provider",
    "classify_dispatch_error",
    "get_template_renderer",
    "render_invitation_email",
]
