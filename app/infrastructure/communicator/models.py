"""Communicator configuration models."""

from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from infrastructure.communicator.address import (
    Address,
    parse_address,
    parse_addresses,
)


class DeliveryDefaults(BaseModel):
    """Default sender and recipients applied to every payload.

    Frozen: the communicator replaces the whole instance when a default
    changes, so a payload always sees one consistent pair.

    Attributes:
        default_from: Sender used when none is set explicitly (optional)
        default_to: Recipients merged into every payload (may be empty)

    Example:
        defaults = DeliveryDefaults(
            default_from="Support <support@example.com>",
            default_to=["ops@example.com"],
        )
    """

    model_config = ConfigDict(frozen=True)

    default_from: Optional[Address] = None
    default_to: Tuple[Address, ...] = ()

    @field_validator("default_from", mode="before")
    @classmethod
    def validate_default_from(cls, v: Any) -> Optional[Address]:
        if v is None:
            return None
        return parse_address(v)

    @field_validator("default_to", mode="before")
    @classmethod
    def validate_default_to(cls, v: Any) -> Tuple[Address, ...]:
        if v is None:
            return ()
        return tuple(parse_addresses(v))
