"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.communicator import (
    CommunicatorSettings,
    EmailSettings,
)

__all__ = [
    "CommunicatorSettings",
    "EmailSettings",
]
