"""Message transport abstract base class.

Transports perform the actual delivery (SMTP, an email API, a queue).
Retrying, timeouts and rate limiting are the transport's concern.
"""

from abc import ABC, abstractmethod

from infrastructure.notifications.models import EmailEnvelope
from infrastructure.operations import OperationResult


class MessageTransport(ABC):
    """Abstract base class for message transports.

    Example Implementation:
        class SmtpTransport(MessageTransport):

            @property
            def transport_name(self) -> str:
                return "smtp"

            def deliver(self, envelope: EmailEnvelope) -> OperationResult:
                ...
    """

    @property
    @abstractmethod
    def transport_name(self) -> str:
        """Transport identifier for routing and logging."""
        pass

    @abstractmethod
    def deliver(self, envelope: EmailEnvelope) -> OperationResult:
        """Deliver one message.

        Must report failures through the returned OperationResult rather
        than raising.

        Args:
            envelope: Validated message to deliver

        Returns:
            OperationResult
            - Success: OperationResult(status=SUCCESS, data={"message_id": "..."})
            - Failure: OperationResult(status=TRANSIENT_ERROR | PERMANENT_ERROR)
        """
        pass
