"""Messages and delivery transports for communicator payloads.

Usage:
    from infrastructure.notifications import EmailFactory, InMemoryTransport

    transport = InMemoryTransport()
    communicator = Communicator(
        message_factory=EmailFactory(transport),
        translator=translator,
        renderer=renderer,
    )
    communicator.dispatch("welcome", "user", {"name": "Ada"})
    transport.outbox[0].subject
"""

from infrastructure.notifications.models import EmailEnvelope
from infrastructure.notifications.message import EmailMessage
from infrastructure.notifications.factory import EmailFactory
from infrastructure.notifications.transports import (
    InMemoryTransport,
    MessageTransport,
)

__all__ = [
    "EmailEnvelope",
    "EmailMessage",
    "EmailFactory",
    "MessageTransport",
    "InMemoryTransport",
]
