import pytest
import structlog

from infrastructure.logging import configure_logging
from infrastructure.services import (
    get_communicator,
    get_message_transport,
    get_settings,
)
from tests.factories.communicator import make_channels


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    """Configure structlog once; output is suppressed under pytest."""
    configure_logging()


@pytest.fixture(autouse=True)
def clear_logging_context():
    """Start and finish every test with an empty structlog context."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture(autouse=True)
def clear_provider_caches():
    """Drop cached providers so environment overrides take effect."""
    providers = (get_settings, get_message_transport, get_communicator)
    for provider in providers:
        provider.cache_clear()
    yield
    for provider in providers:
        provider.cache_clear()


@pytest.fixture
def channels():
    """Channel definitions shared by communicator and factory tests."""
    return make_channels()
