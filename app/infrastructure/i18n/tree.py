"""Recursive translation of configuration trees."""

from typing import Any, Collection, Mapping

from infrastructure.i18n.models import LOCALIZED_TAG, LocalizedText
from infrastructure.i18n.resolvers import is_locale_keyed_node
from infrastructure.i18n.translator import Translator


def _is_sequence(node: Any) -> bool:
    return isinstance(node, (list, tuple))


def tag_localized_values(
    node: Any, valid_locales: Collection[str], infer: bool = True
) -> Any:
    """Replace localized mappings in ``node`` with LocalizedText values.

    A mapping becomes LocalizedText when it is tagged explicitly
    (``{"@localized": {...}}``) or, with ``infer`` enabled, when it is a
    non-empty mapping keyed only by valid locale codes.

    Args:
        node: Configuration tree.
        valid_locales: Locale codes accepted by the translator.
        infer: Detect localized mappings from their keys.

    Returns:
        A new tree; the input is left untouched.
    """
    if isinstance(node, LocalizedText):
        return node

    if isinstance(node, Mapping):
        if len(node) == 1 and LOCALIZED_TAG in node:
            tagged = node[LOCALIZED_TAG]
            if not isinstance(tagged, Mapping):
                raise ValueError(f"'{LOCALIZED_TAG}' must map locale codes to values")
            node = tagged
        elif not (infer and is_locale_keyed_node(node, valid_locales)):
            return {
                key: tag_localized_values(value, valid_locales, infer)
                for key, value in node.items()
            }
        return LocalizedText(
            {
                locale: tag_localized_values(value, valid_locales, infer)
                for locale, value in node.items()
            }
        )

    if _is_sequence(node):
        return [tag_localized_values(item, valid_locales, infer) for item in node]

    return node


def translate_tree(node: Any, translator: Translator, infer: bool = True) -> Any:
    """Collapse every localized value in ``node`` to the active locale.

    - LocalizedText values are resolved by the translator.
    - Mappings keyed only by valid locale codes are resolved too, unless
      ``infer`` is disabled.
    - Other mappings and sequences are rebuilt from their translated
      children, preserving keys and order.
    - Scalars pass through unchanged.

    Pure: the result shares no mutable container with the input.

    Args:
        node: Configuration tree.
        translator: Provides the active locale and valid locale codes.
        infer: Detect localized mappings from their keys.

    Returns:
        The translated tree.
    """
    if isinstance(node, LocalizedText) or (
        infer
        and isinstance(node, Mapping)
        and is_locale_keyed_node(node, translator.available_locales())
    ):
        # Values may themselves hold localized data
        return translate_tree(translator.translate(node), translator, infer)

    if isinstance(node, Mapping):
        return {
            key: translate_tree(value, translator, infer)
            for key, value in node.items()
        }

    if _is_sequence(node):
        return [translate_tree(item, translator, infer) for item in node]

    return node
