"""Sender and recipient addresses.

Addresses may be configured as a bare email string, as "Name <email>", or
as a structured mapping with "name" and "email" keys. All of them are
normalized to ``Address``.
"""

import re
from typing import Any, Dict, List, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from infrastructure.communicator.errors import InvalidInputError

_NAMED_ADDRESS = re.compile(r"^\s*(?P<name>.*?)\s*<(?P<email>[^<>]+)>\s*$")


class Address(BaseModel):
    """A sender or recipient.

    Attributes:
        name: Display name (may be empty, or keyed by locale code)
        email: Email address (required, non-empty)

    Example:
        address = Address(name="Ada Lovelace", email="ada@example.com")
        address.to_payload()  # {"name": "Ada Lovelace", "email": "ada@example.com"}
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    name: Union[str, Dict[str, str]] = ""
    email: str = Field(..., min_length=1)

    def to_payload(self) -> dict:
        """Serialize for inclusion in a message payload."""
        return self.model_dump()

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>" if self.name else self.email


def parse_address(value: Any) -> Address:
    """Normalize one address.

    Args:
        value: Email string, "Name <email>" string, mapping with an
            "email" key, or an Address.

    Returns:
        Address instance.

    Raises:
        InvalidInputError: If value is not a recognized address form or the
            email is empty.
    """
    if isinstance(value, Address):
        return value

    try:
        if isinstance(value, str):
            match = _NAMED_ADDRESS.match(value)
            if match:
                return Address(
                    name=match.group("name").strip("\"' "),
                    email=match.group("email").strip(),
                )
            return Address(name="", email=value.strip())

        if isinstance(value, Mapping) and "email" in value:
            data = dict(value)
            if data.get("name") is None:
                data["name"] = ""
            return Address(**data)
    except ValidationError as e:
        raise InvalidInputError(f"Invalid email address: {value!r}") from e

    raise InvalidInputError(
        "Expected email address as a string or structured address"
    )


def is_single_address(value: Any) -> bool:
    """True if ``value`` denotes one address rather than a list of them."""
    return (
        isinstance(value, (str, Address))
        or isinstance(value, Mapping)
        and "email" in value
    )


def parse_addresses(value: Any) -> List[Address]:
    """Normalize one or many addresses to a list.

    Args:
        value: A single address (any form accepted by parse_address) or a
            sequence of them.

    Returns:
        List of Address, even for a single value.

    Raises:
        InvalidInputError: If value or any item is not an address.
    """
    if is_single_address(value):
        return [parse_address(value)]

    if isinstance(value, (list, tuple)):
        return [parse_address(item) for item in value]

    raise InvalidInputError(
        "Expected one or many email addresses as strings or structured addresses"
    )
