"""Communicator feature settings."""

from typing import Dict, List, Optional, Union

from pydantic import Field

from infrastructure.configuration.base import FeatureSettings

AddressSetting = Union[str, Dict[str, str]]


class CommunicatorSettings(FeatureSettings):
    """Communicator configuration.

    Environment Variables:
        COMMUNICATOR_DEFAULT_FROM: Default sender, as "email", "Name <email>"
            or a JSON object with "name" and "email" keys
        COMMUNICATOR_DEFAULT_TO: Default recipient(s), one address or a JSON list
        COMMUNICATOR_LOCALE: Active locale code (default: en)
        COMMUNICATOR_FALLBACK_LOCALE: Locale used when a value has no entry
            for the active locale (default: en)
        COMMUNICATOR_AVAILABLE_LOCALES: JSON list of valid locale codes
        COMMUNICATOR_INFER_LOCALE_KEYS: Treat mappings keyed only by locale
            codes as localized values (default: true)
        COMMUNICATOR_EXEMPT_KEYS: JSON list of keys never rendered as templates
        COMMUNICATOR_CHANNELS_PATH: YAML file or directory of channel
            definitions (optional)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        locale = settings.communicator.LOCALE
        sender = settings.communicator.DEFAULT_FROM
        ```
    """

    DEFAULT_FROM: Optional[AddressSetting] = Field(
        default=None, alias="COMMUNICATOR_DEFAULT_FROM"
    )
    DEFAULT_TO: Optional[Union[AddressSetting, List[AddressSetting]]] = Field(
        default=None, alias="COMMUNICATOR_DEFAULT_TO"
    )
    LOCALE: str = Field(default="en", alias="COMMUNICATOR_LOCALE")
    FALLBACK_LOCALE: Optional[str] = Field(
        default="en", alias="COMMUNICATOR_FALLBACK_LOCALE"
    )
    AVAILABLE_LOCALES: List[str] = Field(
        default_factory=lambda: ["en", "fr"], alias="COMMUNICATOR_AVAILABLE_LOCALES"
    )
    INFER_LOCALE_KEYS: bool = Field(
        default=True, alias="COMMUNICATOR_INFER_LOCALE_KEYS"
    )
    EXEMPT_KEYS: List[str] = Field(
        default_factory=lambda: ["template_ident"], alias="COMMUNICATOR_EXEMPT_KEYS"
    )
    CHANNELS_PATH: Optional[str] = Field(
        default=None, alias="COMMUNICATOR_CHANNELS_PATH"
    )


class EmailSettings(FeatureSettings):
    """Application-wide email defaults.

    Used by the communicator when no communicator-specific sender or
    recipients are configured.

    Environment Variables:
        EMAIL_DEFAULT_FROM: Default sender for all outgoing email
        EMAIL_DEFAULT_TO: Default recipient(s) for all outgoing email
    """

    DEFAULT_FROM: Optional[AddressSetting] = Field(
        default=None, alias="EMAIL_DEFAULT_FROM"
    )
    DEFAULT_TO: Optional[Union[AddressSetting, List[AddressSetting]]] = Field(
        default=None, alias="EMAIL_DEFAULT_TO"
    )
