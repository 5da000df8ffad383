"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache

from infrastructure.communicator import Communicator, create_communicator
from infrastructure.configuration import Settings
from infrastructure.notifications import EmailFactory, InMemoryTransport
from infrastructure.notifications.transports import MessageTransport


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    This is the single source of truth for settings across the entire application.
    The @lru_cache decorator ensures only ONE instance is created per process,
    even if called from multiple packages.

    Usage:
        from infrastructure.services.providers import get_settings
        settings = get_settings()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_message_transport() -> MessageTransport:
    """Provider for the transport that delivers communicator messages.

    Messages are kept in an in-memory outbox; swap the provider (or call
    create_communicator directly) to deliver through a real service.
    """
    return InMemoryTransport()


@lru_cache
def get_communicator() -> Communicator:
    """
    Get application-scoped communicator singleton.

    Built from get_settings(): locales, default sender and recipients, and
    channels loaded from COMMUNICATOR_CHANNELS_PATH when it is set.

    Usage:
        from infrastructure.services import get_communicator

        get_communicator().dispatch("welcome", "user", {"name": "Ada"})

    Returns:
        Communicator: Cached communicator writing to get_message_transport().
    """
    return create_communicator(
        get_settings(),
        EmailFactory(get_message_transport()),
    )
