"""Email message built from a communicator payload."""

from typing import Any, Mapping, Optional

from pydantic import ValidationError

from infrastructure.communicator.base import Message
from infrastructure.communicator.errors import InvalidInputError
from infrastructure.logging import get_module_logger
from infrastructure.notifications.models import EmailEnvelope
from infrastructure.notifications.transports.base import MessageTransport
from infrastructure.operations import OperationResult

logger = get_module_logger()


class EmailMessage(Message):
    """Email populated from a payload and sent through a transport.

    Attributes:
        transport: Transport used by send()
        envelope: Validated message, set by set_data()
        last_result: Result of the latest send() call
    """

    def __init__(self, transport: MessageTransport):
        self.transport = transport
        self.envelope: Optional[EmailEnvelope] = None
        self.last_result: Optional[OperationResult] = None

    def set_data(self, payload: Mapping[str, Any]) -> "EmailMessage":
        """Validate a payload into the message envelope.

        Args:
            payload: Payload from Communicator.prepare()

        Returns:
            self

        Raises:
            InvalidInputError: If the payload lacks a valid sender or recipients.
        """
        try:
            self.envelope = EmailEnvelope.model_validate(dict(payload))
        except ValidationError as e:
            logger.error(
                "invalid_message_payload", errors=e.errors(include_input=False)
            )
            raise InvalidInputError(f"Invalid message payload: {e}") from e
        return self

    def send(self) -> bool:
        """Deliver the message through the transport.

        Returns:
            True if the transport reported success.

        Raises:
            InvalidInputError: If set_data() was never called.
        """
        if self.envelope is None:
            raise InvalidInputError("Message has no data; call set_data() first")

        result = self.transport.deliver(self.envelope)
        self.last_result = result

        if result.is_success:
            logger.info(
                "message_sent",
                transport=self.transport.transport_name,
                subject=self.envelope.subject,
                recipient_count=len(self.envelope.recipients),
                external_id=(result.data or {}).get("message_id"),
            )
        else:
            logger.error(
                "message_send_failed",
                transport=self.transport.transport_name,
                subject=self.envelope.subject,
                status=result.status.value,
                error=result.message,
                error_code=result.error_code,
            )
        return result.is_success
