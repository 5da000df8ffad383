"""Translator collaborator for the communicator.

Defines the interface the communicator needs from a translation service
and provides a configurable default implementation.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Mapping, Optional, Union

from infrastructure.i18n.models import LocalizedText
from infrastructure.i18n.resolvers import resolve_locale
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class Translator(ABC):
    """Interface for resolving localized values.

    Implementations expose the active locale, the set of valid locale codes
    and a way to collapse a locale-keyed value to the active locale.
    """

    @abstractmethod
    def get_locale(self) -> str:
        """Active locale code."""

    @abstractmethod
    def available_locales(self) -> List[str]:
        """Every locale code considered valid."""

    @abstractmethod
    def translate(self, localized: Union[LocalizedText, Mapping[str, Any]]) -> Any:
        """Return the value of ``localized`` for the active locale."""


class LocaleTranslator(Translator):
    """Translator backed by a fixed set of locales.

    Attributes:
        locale: Active locale code.
        fallback_locale: Locale used when a value has no entry for the
            active locale.
    """

    def __init__(
        self,
        locale: str = "en",
        available_locales: Iterable[str] = ("en", "fr"),
        fallback_locale: Optional[str] = "en",
    ):
        """Initialize LocaleTranslator.

        Args:
            locale: Active locale code; must be one of available_locales.
            available_locales: Valid locale codes, in preference order.
            fallback_locale: Locale to use when a value is missing for the
                active locale (default: en).

        Raises:
            ValueError: If locale is not an available locale.
        """
        self._available = list(dict.fromkeys(available_locales))
        if not self._available:
            raise ValueError("At least one locale must be available")
        self.fallback_locale = fallback_locale
        self.locale = self._validate(locale)
        logger.info(
            "initialized_translator",
            locale=self.locale,
            available_locales=self._available,
            fallback_locale=fallback_locale,
        )

    def _validate(self, locale: str) -> str:
        if locale not in self._available:
            raise ValueError(f"Unsupported locale: {locale}")
        return locale

    def get_locale(self) -> str:
        return self.locale

    def set_locale(self, locale: str) -> None:
        """Change the active locale.

        Raises:
            ValueError: If locale is not an available locale.
        """
        self.locale = self._validate(locale)

    def available_locales(self) -> List[str]:
        return list(self._available)

    def translate(self, localized: Union[LocalizedText, Mapping[str, Any]]) -> Any:
        """Resolve a locale-keyed value for the active locale.

        Args:
            localized: LocalizedText or mapping keyed by locale code.

        Returns:
            The value for the active locale, the fallback locale's value,
            or "" when neither exists.
        """
        return resolve_locale(localized, self.locale, self.fallback_locale)
