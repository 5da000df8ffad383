"""Templating - rendering template strings inside configuration trees.

Main components:
- renderer: TemplateRenderer interface and Jinja2TemplateRenderer
- tree: render_tree and the template-identifier exemption
"""

from infrastructure.templating.renderer import (
    Jinja2TemplateRenderer,
    TemplateRenderError,
    TemplateRenderer,
)
from infrastructure.templating.tree import (
    DEFAULT_EXEMPT_KEYS,
    is_exempt_key,
    render_tree,
)

__all__ = [
    "TemplateRenderer",
    "Jinja2TemplateRenderer",
    "TemplateRenderError",
    "DEFAULT_EXEMPT_KEYS",
    "is_exempt_key",
    "render_tree",
]
