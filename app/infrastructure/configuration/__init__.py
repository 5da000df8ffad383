"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the
communicator using Pydantic BaseSettings with domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    CommunicatorSettings: Communicator feature settings class
    EmailSettings: Application-wide email defaults

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    locale = settings.communicator.LOCALE
    fallback_sender = settings.email.DEFAULT_FROM

    if settings.is_production:
        # Production-specific logic...
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.features import CommunicatorSettings, EmailSettings

__all__ = ["Settings", "CommunicatorSettings", "EmailSettings"]
