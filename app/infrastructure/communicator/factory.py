"""Factory functions for creating the communicator.

Wires a Communicator from application settings: locales, default sender
and recipients, exempt keys and channel definitions.
"""

from typing import Any, Mapping, Optional

from pydantic import ValidationError

from infrastructure.communicator.base import MessageFactory
from infrastructure.communicator.errors import InvalidInputError
from infrastructure.communicator.loader import load_channels
from infrastructure.communicator.models import DeliveryDefaults
from infrastructure.communicator.service import Communicator
from infrastructure.configuration import Settings
from infrastructure.i18n import LocaleTranslator, Translator
from infrastructure.logging import get_module_logger
from infrastructure.templating import Jinja2TemplateRenderer, TemplateRenderer

logger = get_module_logger()


def create_communicator(
    settings: Settings,
    message_factory: MessageFactory,
    renderer: Optional[TemplateRenderer] = None,
    translator: Optional[Translator] = None,
    channels: Optional[Mapping[str, Any]] = None,
) -> Communicator:
    """Create and configure a Communicator instance.

    Communicator-specific defaults take precedence over the application-wide
    email defaults.

    Args:
        settings: Application settings.
        message_factory: Factory for the messages the communicator creates.
        renderer: Template renderer (default: Jinja2TemplateRenderer).
        translator: Translator (default: LocaleTranslator from settings).
        channels: Channel definitions. When omitted, they are loaded from
            COMMUNICATOR_CHANNELS_PATH if that is set.

    Returns:
        Communicator: Configured communicator instance

    Raises:
        InvalidInputError: If a configured address or channel is malformed.

    Usage:
        from infrastructure.services import get_settings

        communicator = create_communicator(
            get_settings(),
            EmailFactory(InMemoryTransport()),
        )
    """
    config = settings.communicator

    if translator is None:
        translator = LocaleTranslator(
            locale=config.LOCALE,
            available_locales=config.AVAILABLE_LOCALES,
            fallback_locale=config.FALLBACK_LOCALE,
        )

    try:
        defaults = DeliveryDefaults(
            default_from=config.DEFAULT_FROM or settings.email.DEFAULT_FROM,
            default_to=config.DEFAULT_TO or settings.email.DEFAULT_TO,
        )
    except ValidationError as e:
        logger.error("invalid_delivery_defaults", errors=e.errors(include_input=False))
        raise InvalidInputError(f"Invalid default sender or recipients: {e}") from e

    communicator = Communicator(
        message_factory=message_factory,
        translator=translator,
        renderer=renderer or Jinja2TemplateRenderer(),
        defaults=defaults,
        exempt_keys=config.EXEMPT_KEYS,
        infer_locale_keys=config.INFER_LOCALE_KEYS,
    )

    if channels is None and config.CHANNELS_PATH:
        channels = load_channels(config.CHANNELS_PATH)

    if channels:
        communicator.add_channels(channels)

    logger.info(
        "communicator_created",
        locale=translator.get_locale(),
        channel_count=len(communicator.registry.list_channels()),
    )
    return communicator
