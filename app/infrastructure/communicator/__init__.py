"""Communicator - channel scenarios turned into localized, rendered messages.

Main components:
- registry: ChannelRegistry storing channels and their scenarios
- service: Communicator building payloads and dispatching messages
- merge: merge_recursive used to combine payload fragments
- address: Address parsing for senders and recipients
- factory: create_communicator wiring everything from settings

Usage:
    from infrastructure.communicator import create_communicator
    from infrastructure.notifications import EmailFactory, InMemoryTransport
    from infrastructure.services import get_settings

    communicator = create_communicator(
        get_settings(),
        EmailFactory(InMemoryTransport()),
        channels={"user": {"welcome": {"subject": "Hi {{ name }}"}}},
    )
    communicator.set_to("ada@example.com")
    communicator.dispatch("welcome", "user", {"name": "Ada"})
"""

from infrastructure.communicator.errors import (
    ChannelNotFoundError,
    CommunicatorError,
    InvalidInputError,
    NotFoundError,
    ScenarioNotFoundError,
)
from infrastructure.communicator.address import (
    Address,
    is_single_address,
    parse_address,
    parse_addresses,
)
from infrastructure.communicator.base import Message, MessageFactory
from infrastructure.communicator.models import DeliveryDefaults
from infrastructure.communicator.merge import merge_recursive, merge_values
from infrastructure.communicator.registry import ChannelRegistry
from infrastructure.communicator.loader import load_channels
from infrastructure.communicator.service import Communicator
from infrastructure.communicator.factory import create_communicator

__all__ = [
    # Errors
    "CommunicatorError",
    "InvalidInputError",
    "NotFoundError",
    "ChannelNotFoundError",
    "ScenarioNotFoundError",
    # Addresses
    "Address",
    "is_single_address",
    "parse_address",
    "parse_addresses",
    # Collaborators
    "Message",
    "MessageFactory",
    # Core
    "DeliveryDefaults",
    "merge_recursive",
    "merge_values",
    "ChannelRegistry",
    "load_channels",
    "Communicator",
    "create_communicator",
]
