"""In-memory transport.

Keeps delivered envelopes in an outbox instead of sending them. Used in
development and tests.
"""

import threading
import uuid
from typing import List, Optional

from infrastructure.logging import get_module_logger
from infrastructure.notifications.models import EmailEnvelope
from infrastructure.notifications.transports.base import MessageTransport
from infrastructure.operations import OperationResult

logger = get_module_logger()


class InMemoryTransport(MessageTransport):
    """Transport that records messages in an outbox.

    Attributes:
        outbox: Delivered envelopes, oldest first.
        failure: When set, every delivery fails with this result.
    """

    def __init__(self, failure: Optional[OperationResult] = None):
        self.outbox: List[EmailEnvelope] = []
        self.failure = failure
        self._lock = threading.Lock()

    @property
    def transport_name(self) -> str:
        return "memory"

    def deliver(self, envelope: EmailEnvelope) -> OperationResult:
        if self.failure is not None:
            logger.warning(
                "memory_delivery_failed",
                subject=envelope.subject,
                error=self.failure.message,
            )
            return self.failure

        message_id = str(uuid.uuid4())
        with self._lock:
            self.outbox.append(envelope)

        logger.info(
            "memory_delivery_recorded",
            message_id=message_id,
            recipient_count=len(envelope.recipients),
            subject=envelope.subject,
        )
        return OperationResult.success(
            data={"message_id": message_id}, message="Message stored in outbox"
        )

    def clear(self) -> None:
        """Empty the outbox."""
        with self._lock:
            self.outbox.clear()
