"""Message transport implementations."""

from infrastructure.notifications.transports.base import MessageTransport
from infrastructure.notifications.transports.memory import InMemoryTransport

__all__ = ["MessageTransport", "InMemoryTransport"]
