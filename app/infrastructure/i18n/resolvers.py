"""Locale detection and resolution for configuration trees.

Decides whether a nested mapping is a translatable value (keyed by locale
codes) or ordinary nested data, and extracts the value for a locale.
"""

from typing import Any, Collection, Iterable, Mapping, Optional, Union

from infrastructure.i18n.models import LocalizedText
from infrastructure.logging import get_module_logger

logger = get_module_logger()


def is_locale_keyed_node(node: Any, valid_locales: Collection[str]) -> bool:
    """Check whether ``node`` is a mapping keyed only by locale codes.

    The empty mapping is never locale-keyed.

    Args:
        node: Any configuration value.
        valid_locales: Locale codes currently accepted by the translator.

    Returns:
        True if node is a non-empty mapping whose every key is a valid locale.
    """
    if isinstance(node, LocalizedText):
        return True
    if not isinstance(node, Mapping) or not node:
        return False
    return all(key in valid_locales for key in node.keys())


def resolve_locale(
    node: Union[LocalizedText, Mapping[str, Any]],
    active_locale: str,
    fallback_locale: Optional[str] = None,
) -> Any:
    """Extract the value for ``active_locale`` from a locale-keyed node.

    Resolution order:
    1. Exact active locale
    2. Language-only match (e.g. "en-CA" finds "en", "fr" finds "fr-CA")
    3. Fallback locale
    4. Empty string

    Args:
        node: LocalizedText or locale-keyed mapping.
        active_locale: Locale to resolve.
        fallback_locale: Locale used when the active one is missing.

    Returns:
        The resolved value, or "" if no locale matched.
    """
    values = node.values if isinstance(node, LocalizedText) else node

    if active_locale in values:
        return values[active_locale]

    match = LanguageNegotiator.find_best_match([active_locale], list(values.keys()))
    if match is not None:
        return values[match]

    if fallback_locale is not None and fallback_locale in values:
        logger.debug(
            "used_fallback_locale",
            requested_locale=active_locale,
            fallback_locale=fallback_locale,
        )
        return values[fallback_locale]

    logger.debug(
        "locale_value_missing",
        requested_locale=active_locale,
        available=list(values.keys()),
    )
    return ""


class LanguageNegotiator:
    """Performs language negotiation between locale tags.

    Implements RFC 4647 style range matching for the common cases
    (e.g. a value keyed "fr" for an active locale "fr-CA").
    """

    @staticmethod
    def matches_language(
        requested: str,
        available: str,
        strict: bool = False,
    ) -> bool:
        """Check if available language matches requested language.

        Args:
            requested: Requested language tag (e.g., "en-US").
            available: Available language tag (e.g., "en").
            strict: If True, requires exact match. If False, allows language-only match.

        Returns:
            True if languages match.
        """
        if requested.lower() == available.lower():
            return True

        if strict:
            return False

        requested_lang = requested.split("-")[0].lower()
        available_lang = available.split("-")[0].lower()
        return requested_lang == available_lang

    @staticmethod
    def find_best_match(
        requested: Iterable[str],
        available: list,
        default: Optional[str] = None,
    ) -> Optional[str]:
        """Find best matching language from available options.

        Args:
            requested: Requested language tags in preference order.
            available: Available language tags.
            default: Default if no match found.

        Returns:
            Best matching language from available, or default if no match.
        """
        for req_lang in requested:
            for avail_lang in available:
                if LanguageNegotiator.matches_language(
                    req_lang, avail_lang, strict=True
                ):
                    return avail_lang

            for avail_lang in available:
                if LanguageNegotiator.matches_language(
                    req_lang, avail_lang, strict=False
                ):
                    return avail_lang

        return default
