"""Notification message models.

The communicator produces a loosely structured payload; ``EmailEnvelope``
validates it into the shape transports deliver.

Uses Pydantic BaseModel for:
- Runtime validation of sender and recipients
- Keeping extra scenario fields (msg_html, msg_txt, campaign, ...) intact
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from infrastructure.communicator.address import (
    Address,
    parse_address,
    parse_addresses,
)


class EmailEnvelope(BaseModel):
    """A fully resolved email, ready for delivery.

    Attributes:
        sender: Sender address (payload key "from")
        recipients: Recipient addresses (payload key "to", minimum 1)
        subject: Subject line
        template_ident: Identifier of the template used for the body
        template_data: Data for the body template
        msg_html: Optional HTML body
        msg_txt: Optional plain text body
        attachments: Attachment paths or descriptors

    Example:
        envelope = EmailEnvelope.model_validate({
            "from": "noreply@example.com",
            "to": ["ada@example.com"],
            "subject": "Welcome",
        })
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    sender: Address = Field(..., alias="from")
    recipients: List[Address] = Field(..., alias="to", min_length=1)
    subject: str = ""
    template_ident: Optional[str] = None
    template_data: Dict[str, Any] = Field(default_factory=dict)
    msg_html: Optional[str] = None
    msg_txt: Optional[str] = None
    attachments: List[Any] = Field(default_factory=list)

    @field_validator("sender", mode="before")
    @classmethod
    def validate_sender(cls, v: Any) -> Address:
        """Accept any address form."""
        return parse_address(v)

    @field_validator("recipients", mode="before")
    @classmethod
    def validate_recipients(cls, v: Any) -> List[Address]:
        """Accept one address or a list of them."""
        return parse_addresses(v)
