"""i18n system - localized values in configuration trees.

Main components:
- models: LocalizedText, the explicit tag for per-locale values
- resolvers: is_locale_keyed_node, resolve_locale, LanguageNegotiator
- translator: Translator interface and LocaleTranslator
- tree: tag_localized_values and translate_tree
"""

from infrastructure.i18n.models import LOCALIZED_TAG, LocalizedText
from infrastructure.i18n.resolvers import (
    LanguageNegotiator,
    is_locale_keyed_node,
    resolve_locale,
)
from infrastructure.i18n.translator import LocaleTranslator, Translator
from infrastructure.i18n.tree import tag_localized_values, translate_tree

__all__ = [
    "LOCALIZED_TAG",
    "LocalizedText",
    "LanguageNegotiator",
    "is_locale_keyed_node",
    "resolve_locale",
    "Translator",
    "LocaleTranslator",
    "tag_localized_values",
    "translate_tree",
]
