"""Template renderer collaborator.

Defines the interface the communicator uses to render template strings and
a Jinja2-based implementation.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from jinja2 import (
    BaseLoader,
    Environment,
    TemplateError,
    Undefined,
    select_autoescape,
)

from infrastructure.logging import get_module_logger

logger = get_module_logger()


class TemplateRenderError(Exception):
    """Raised when a template string cannot be compiled or rendered."""


class TemplateRenderer(ABC):
    """Interface for rendering a template against a context."""

    @abstractmethod
    def render_template(self, template: str, context: Mapping[str, Any]) -> str:
        """Render ``template`` with ``context`` and return the text."""


class Jinja2TemplateRenderer(TemplateRenderer):
    """Renders template strings with Jinja2.

    Undefined variables render as empty strings, so a partially filled
    context still produces a message.

    Attributes:
        env: The Jinja2 environment used to compile templates.
    """

    def __init__(
        self,
        loader: Optional[BaseLoader] = None,
        autoescape: bool = False,
        undefined: type[Undefined] = Undefined,
    ):
        """Initialize the renderer.

        Args:
            loader: Optional loader so templates can {% include %} or
                {% extends %} named templates.
            autoescape: Escape HTML in rendered template strings. When a
                loader is given, included templates are escaped by file
                extension.
            undefined: Jinja2 undefined type (e.g. StrictUndefined to fail
                on missing variables).
        """
        self.env = Environment(
            loader=loader,
            autoescape=(
                select_autoescape(["html", "xml"], default_for_string=autoescape)
                if loader
                else autoescape
            ),
            undefined=undefined,
            keep_trailing_newline=True,
        )

    def render_template(self, template: str, context: Mapping[str, Any]) -> str:
        """Render a template string.

        Args:
            template: Jinja2 template source (e.g. "Hi {{ name }}").
            context: Variables available to the template.

        Returns:
            Rendered text.

        Raises:
            TemplateRenderError: If the template fails to compile or render.
        """
        try:
            return self.env.from_string(template).render(context)
        except TemplateError as e:
            logger.error("template_render_failed", template=template, error=str(e))
            raise TemplateRenderError(f"Failed to render template: {e}") from e
