"""Message collaborator interfaces.

The communicator builds payloads; turning a payload into a message and
delivering it belongs to implementations of these interfaces (see
infrastructure.notifications).
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping


class Message(ABC):
    """A message that can be populated from a payload and sent."""

    @abstractmethod
    def set_data(self, payload: Mapping[str, Any]) -> "Message":
        """Populate the message from a prepared payload.

        Returns:
            self, so calls can be chained.
        """

    @abstractmethod
    def send(self) -> bool:
        """Deliver the message.

        Returns:
            True if the transport accepted the message.
        """


class MessageFactory(ABC):
    """Creates empty messages for the communicator to populate."""

    @abstractmethod
    def create(self) -> Message:
        """Return a new, empty message."""
