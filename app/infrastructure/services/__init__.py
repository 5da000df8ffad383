"""
Dependency injection services.

Provides provider functions for application-scoped singletons.
"""

from infrastructure.services.providers import (
    get_communicator,
    get_message_transport,
    get_settings,
)

__all__ = [
    "get_settings",
    "get_message_transport",
    "get_communicator",
]
