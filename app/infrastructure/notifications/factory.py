"""Message factory handing EmailMessages to the communicator."""

from infrastructure.communicator.base import MessageFactory
from infrastructure.notifications.message import EmailMessage
from infrastructure.notifications.transports.base import MessageTransport


class EmailFactory(MessageFactory):
    """Creates EmailMessages bound to one transport."""

    def __init__(self, transport: MessageTransport):
        self.transport = transport

    def create(self) -> EmailMessage:
        return EmailMessage(self.transport)
