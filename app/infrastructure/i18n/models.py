"""Localized value models for the i18n system.

A configuration tree mixes ordinary nested data with values that exist once
per locale. ``LocalizedText`` tags the latter explicitly so the distinction
is made once, when configuration is registered, instead of being guessed
from key names every time a payload is built.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping

# Explicit tag for a localized mapping: {"@localized": {"en": "...", "fr": "..."}}
LOCALIZED_TAG = "@localized"


@dataclass(frozen=True, eq=True)
class LocalizedText:
    """A value keyed by locale code.

    Frozen; the per-locale mapping is copied into a read-only view on
    construction.

    Attributes:
        values: Mapping of locale code to the value for that locale.

    Example:
        subject = LocalizedText({"en": "Welcome", "fr": "Bienvenue"})
        subject.get("fr")  # "Bienvenue"
    """

    values: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    @property
    def locales(self) -> frozenset:
        """Locale codes that have a value."""
        return frozenset(self.values.keys())

    def get(self, locale: str, default: Any = None) -> Any:
        return self.values.get(locale, default)

    def __contains__(self, locale: object) -> bool:
        return locale in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def items(self):
        return self.values.items()

    def to_dict(self) -> dict:
        return dict(self.values)
