"""Feature-level fixtures for i18n system tests.

Provides translators and configuration trees mixing localized values with
ordinary nested data.
"""

import pytest

from infrastructure.i18n import LocaleTranslator


@pytest.fixture
def valid_locales():
    return ["en", "fr"]


@pytest.fixture
def translator(valid_locales):
    """English translator with English fallback."""
    return LocaleTranslator(locale="en", available_locales=valid_locales)


@pytest.fixture
def french_translator(valid_locales):
    """French translator with English fallback."""
    return LocaleTranslator(locale="fr", available_locales=valid_locales)


@pytest.fixture
def mixed_tree():
    """Configuration tree with localized leaves at several depths."""
    return {
        "subject": {"en": "Welcome", "fr": "Bienvenue"},
        "template_ident": "welcome-tpl",
        "priority": 3,
        "template_data": {
            "cta": {"en": "Start", "fr": "Commencer"},
            "links": [
                {"label": {"en": "Help", "fr": "Aide"}, "url": "/help"},
                "/static",
            ],
        },
    }
