"""Recursive template evaluation of configuration trees."""

from typing import Any, Collection, Mapping

from infrastructure.templating.renderer import TemplateRenderer

# Keys whose value names a template instead of being one
DEFAULT_EXEMPT_KEYS = frozenset({"template_ident"})


def is_exempt_key(
    key: Any, exempt_keys: Collection[str] = DEFAULT_EXEMPT_KEYS
) -> bool:
    """True if the value stored under ``key`` must not be rendered."""
    return key in exempt_keys


def render_tree(
    node: Any,
    context: Mapping[str, Any],
    renderer: TemplateRenderer,
    exempt_keys: Collection[str] = DEFAULT_EXEMPT_KEYS,
) -> Any:
    """Render every string leaf of ``node`` as a template.

    Traversal is depth-first in insertion order. Values stored under an
    exempt key pass through unrendered at any depth, as do non-string
    leaves (numbers, booleans, None).

    Args:
        node: Translated configuration tree.
        context: Render context passed to the renderer for every leaf.
        renderer: Template renderer collaborator.
        exempt_keys: Keys whose values are never rendered.

    Returns:
        A new tree with rendered strings.
    """
    if isinstance(node, str):
        return renderer.render_template(node, context)

    if isinstance(node, Mapping):
        rendered = {}
        for key, value in node.items():
            if is_exempt_key(key, exempt_keys):
                rendered[key] = _copy_tree(value)
            else:
                rendered[key] = render_tree(value, context, renderer, exempt_keys)
        return rendered

    if isinstance(node, (list, tuple)):
        return [render_tree(item, context, renderer, exempt_keys) for item in node]

    return node


def _copy_tree(node: Any) -> Any:
    if isinstance(node, Mapping):
        return {key: _copy_tree(value) for key, value in node.items()}
    if isinstance(node, (list, tuple)):
        return [_copy_tree(item) for item in node]
    return node
