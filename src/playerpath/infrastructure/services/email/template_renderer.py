"""Jinja2 template renderer for email templates.

Renders the invitation email as a subject line, a plain-text body and an
HTML body. Rendering is pure: the output depends only on the invitation
fields and links passed in.
"""

from dataclasses import dataclass
from typing import Any

from jinja2 import Template, TemplateSyntaxError, UndefinedError
from jinja2.sandbox import SandboxedEnvironment

from playerpath.core.logging import get_logger
from playerpath.domain.entities.invitation import CoachInvitation, InvitationPermissions
from playerpath.domain.services.invitation_links import InvitationLinks
from playerpath.infrastructure.services.email.invitation_templates import (
    HTML_TEMPLATE,
    SUBJECT_TEMPLATE,
    TEXT_TEMPLATE,
)

logger = get_logger(__name__)

PERMISSION_LABELS = (
    ("can_upload", "Upload videos"),
    ("can_comment", "Add comments and feedback"),
    ("can_delete", "Manage videos"),
)


@dataclass(frozen=True)
class RenderedEmail:
    """A fully rendered email, ready for dispatch."""

    subject: str
    text: str
    html: str


def permission_labels(permissions: InvitationPermissions) -> list[str]:
    """Labels for the granted permissions, in a fixed order."""
    return [label for attribute, label in PERMISSION_LABELS if getattr(permissions, attribute)]


class TemplateRenderer:
    """Jinja2 template renderer with security features.

    Uses sandboxed environments to prevent code execution in templates.
    HTML output is autoescaped; plain-text output is not.
    """

    def __init__(self) -> None:
        self.html_env = SandboxedEnvironment(
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.text_env = SandboxedEnvironment(
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._compiled: dict[tuple[bool, str], Template] = {}

    def render(self, template_string: str, variables: dict[str, Any], html: bool = True) -> str:
        """Render a template string with variables.

        Args:
            template_string: Jinja2 template string.
            variables: Dictionary of variables to substitute.
            html: Autoescape variables for HTML output.

        Returns:
            Rendered template string.

        Raises:
            TemplateSyntaxError: If template syntax is invalid.
            UndefinedError: If a variable is used in an unsupported way.
        """
        try:
            template = self._get_template(template_string, html)
            return template.render(**variables)
        except TemplateSyntaxError as e:
            logger.error("Template syntax error", error=str(e), line=e.lineno)
            raise
        except UndefinedError as e:
            logger.error("Undefined variable in template", error=str(e))
            raise

    def render_invitation_email(
        self, invitation: CoachInvitation, links: InvitationLinks
    ) -> RenderedEmail:
        """Render the coach invitation email.

        Args:
            invitation: Invitation with athlete name, folder name and coach
                email populated.
            links: Deep link and web link for the invitation.

        Returns:
            RenderedEmail with subject, text and HTML bodies.
        """
        variables = {
            "athlete_name": invitation.athlete_name or "",
            "folder_name": invitation.folder_name or "",
            "coach_email": invitation.coach_email or "",
            "permissions": permission_labels(invitation.permissions),
            "deep_link": links.deep_link,
            "web_link": links.web_link,
        }

        subject = self.render(SUBJECT_TEMPLATE, variables, html=False)
        rendered = RenderedEmail(
            # Header values must stay on a single line
            subject=" ".join(subject.split()),
            text=self.render(TEXT_TEMPLATE, variables, html=False),
            html=self.render(HTML_TEMPLATE, variables, html=True),
        )
        logger.debug(
            "Invitation email rendered",
            invitation_id=invitation.id,
            permission_count=len(variables["permissions"]),
        )
        return rendered

    def _get_template(self, template_string: str, html: bool) -> Template:
        key = (html, template_string)
        template = self._compiled.get(key)
        if template is None:
            env = self.html_env if html else self.text_env
            template = env.from_string(template_string)
            self._compiled[key] = template
        return template


# Global template renderer instance
_template_renderer: TemplateRenderer | None = None


def get_template_renderer() -> TemplateRenderer:
    """Get the global template renderer instance."""
    global _template_renderer
    if _template_renderer is None:
        _template_renderer = TemplateRenderer()
    return _template_renderer


def render_invitation_email(invitation: CoachInvitation, links: InvitationLinks) -> RenderedEmail:
    """Render the invitation email with the shared renderer."""
    return get_template_renderer().render_invitation_email(invitation, links)
