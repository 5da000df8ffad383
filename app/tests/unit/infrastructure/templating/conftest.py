"""Fixtures for infrastructure.templating tests."""

from unittest.mock import MagicMock

import pytest

from infrastructure.templating import Jinja2TemplateRenderer, TemplateRenderer


@pytest.fixture
def renderer():
    return Jinja2TemplateRenderer()


@pytest.fixture
def mock_renderer():
    """Renderer that upper-cases every template and records its calls."""
    mock = MagicMock(spec=TemplateRenderer)
    mock.render_template.side_effect = lambda template, context: template.upper()
    return mock
