"""Fixtures for infrastructure.communicator tests."""

from unittest.mock import MagicMock

import pytest

from infrastructure.communicator import (
    ChannelRegistry,
    Communicator,
    Message,
    MessageFactory,
)
from infrastructure.i18n import LocaleTranslator
from infrastructure.notifications import EmailFactory, InMemoryTransport
from infrastructure.templating import Jinja2TemplateRenderer, TemplateRenderer


@pytest.fixture
def translator():
    return LocaleTranslator(locale="en", available_locales=["en", "fr"])


@pytest.fixture
def renderer():
    return Jinja2TemplateRenderer()


@pytest.fixture
def mock_renderer():
    """Renderer returning templates unchanged while recording calls."""
    mock = MagicMock(spec=TemplateRenderer)
    mock.render_template.side_effect = lambda template, context: template
    return mock


@pytest.fixture
def transport():
    return InMemoryTransport()


@pytest.fixture
def email_factory(transport):
    return EmailFactory(transport)


@pytest.fixture
def mock_message():
    message = MagicMock(spec=Message)
    message.set_data.return_value = message
    message.send.return_value = True
    return message


@pytest.fixture
def mock_message_factory(mock_message):
    factory = MagicMock(spec=MessageFactory)
    factory.create.return_value = mock_message
    return factory


@pytest.fixture
def registry():
    return ChannelRegistry(valid_locales=["en", "fr"])


@pytest.fixture
def communicator(email_factory, translator, renderer, channels):
    """Communicator delivering to an in-memory outbox."""
    communicator = Communicator(
        message_factory=email_factory,
        translator=translator,
        renderer=renderer,
    )
    communicator.add_channels(channels)
    communicator.set_default_from("Support <support@example.com>")
    return communicator


@pytest.fixture
def mock_communicator(mock_message_factory, translator, mock_renderer, channels):
    """Communicator with mocked renderer and message factory."""
    communicator = Communicator(
        message_factory=mock_message_factory,
        translator=translator,
        renderer=mock_renderer,
    )
    communicator.add_channels(channels)
    return communicator
