"""Communicator service: scenario resolution and payload building.

Resolves a (scenario, channel) pair into a message payload:

1. Look up the scenario in the channel registry
2. Collapse localized values to the active locale
3. Render every string of the scenario as a template
4. Merge defaults, language data, scenario and caller data
5. Apply explicit sender, recipients and attachments

Usage Example:
    from infrastructure.communicator import Communicator
    from infrastructure.i18n import LocaleTranslator
    from infrastructure.notifications import EmailFactory, InMemoryTransport
    from infrastructure.templating import Jinja2TemplateRenderer

    communicator = Communicator(
        message_factory=EmailFactory(InMemoryTransport()),
        translator=LocaleTranslator(locale="en", available_locales=["en", "fr"]),
        renderer=Jinja2TemplateRenderer(),
    )
    communicator.set_default_from("Support <support@example.com>")
    communicator.add_channel("user", {
        "welcome": {
            "subject": {"en": "Hi {{ name }}", "fr": "Salut {{ name }}"},
            "template_ident": "welcome-tpl",
        },
    })

    communicator.set_to("ada@example.com")
    sent = communicator.dispatch("welcome", "user", {"name": "Ada"})
"""

import os
import threading
from typing import Any, Collection, Dict, List, Mapping, Optional, Sequence

from infrastructure.communicator.address import (
    Address,
    parse_address,
    parse_addresses,
)
from infrastructure.communicator.base import Message, MessageFactory
from infrastructure.communicator.errors import InvalidInputError
from infrastructure.communicator.merge import merge_recursive
from infrastructure.communicator.models import DeliveryDefaults
from infrastructure.communicator.registry import ChannelRegistry
from infrastructure.i18n import Translator, translate_tree
from infrastructure.logging import bind_dispatch_context, get_module_logger
from infrastructure.templating import (
    DEFAULT_EXEMPT_KEYS,
    TemplateRenderer,
    render_tree,
)

logger = get_module_logger()


class Communicator:
    """Builds and sends messages from channel scenarios.

    Collaborators are injected at construction. Shared state (registry,
    defaults, explicit sender and recipients, form data) is only read by
    prepare(); every setter swaps in a new value under a lock, so prepare()
    calls can run concurrently with each other.

    Attributes:
        message_factory: Creates messages from payloads
        translator: Active locale and localized value resolution
        renderer: Renders template strings
        registry: Channel and scenario storage
    """

    def __init__(
        self,
        message_factory: MessageFactory,
        translator: Translator,
        renderer: TemplateRenderer,
        registry: Optional[ChannelRegistry] = None,
        defaults: Optional[DeliveryDefaults] = None,
        exempt_keys: Collection[str] = DEFAULT_EXEMPT_KEYS,
        infer_locale_keys: bool = True,
    ):
        """Initialize the communicator.

        Args:
            message_factory: Factory for the messages built by create().
            translator: Translator collaborator.
            renderer: Template renderer collaborator.
            registry: Optional pre-populated registry. A new one using the
                translator's locales is created if not provided.
            defaults: Default sender and recipients.
            exempt_keys: Scenario keys whose values are never rendered.
            infer_locale_keys: Treat mappings keyed only by locale codes as
                localized values.
        """
        self.message_factory = message_factory
        self.translator = translator
        self.renderer = renderer
        self.registry = registry or ChannelRegistry(
            valid_locales=translator.available_locales(),
            infer_locale_keys=infer_locale_keys,
        )
        self.exempt_keys = frozenset(exempt_keys)
        self.infer_locale_keys = infer_locale_keys

        self._defaults = defaults or DeliveryDefaults()
        self._from: Optional[Address] = None
        self._to: tuple = ()
        self._form_data: Any = {}
        self._lock = threading.Lock()

        logger.info(
            "initialized_communicator",
            locale=translator.get_locale(),
            exempt_keys=sorted(self.exempt_keys),
            has_default_from=self._defaults.default_from is not None,
            default_to_count=len(self._defaults.default_to),
        )

    # Channels

    def add_channels(
        self, channels: Mapping[str, Mapping[str, Any]]
    ) -> "Communicator":
        """Add channels, replacing any previously defined ones of the same name."""
        self.registry.add_channels(channels)
        return self

    def add_channel(self, name: str, data: Mapping[str, Any]) -> "Communicator":
        """Add a channel, replacing any previously defined one of the same name."""
        self.registry.add_channel(name, data)
        return self

    def has_channel(self, name: str) -> bool:
        return self.registry.has_channel(name)

    def get_channel(self, name: str) -> Mapping[str, Any]:
        return self.registry.get_channel(name)

    def has_scenario(self, scenario: str, channel: str) -> bool:
        return self.registry.has_scenario(scenario, channel)

    def get_scenario(self, scenario: str, channel: str) -> Any:
        return self.registry.get_scenario(scenario, channel)

    # Defaults

    @property
    def defaults(self) -> DeliveryDefaults:
        return self._defaults

    def set_default_from(self, email: Any) -> "Communicator":
        """Set the default sender.

        Args:
            email: An address as a string, "Name <email>" or mapping.

        Raises:
            InvalidInputError: If the address is invalid.
        """
        address = parse_address(email)
        with self._lock:
            self._defaults = self._defaults.model_copy(
                update={"default_from": address}
            )
        return self

    def get_default_from(self) -> Optional[Address]:
        return self._defaults.default_from

    def set_default_to(self, emails: Any) -> "Communicator":
        """Replace the default recipients.

        Args:
            emails: One address or a list of addresses.

        Raises:
            InvalidInputError: If any address is invalid.
        """
        addresses = tuple(parse_addresses(emails))
        with self._lock:
            self._defaults = self._defaults.model_copy(
                update={"default_to": addresses}
            )
        return self

    def add_default_to(self, email: Any) -> "Communicator":
        """Append a default recipient."""
        address = parse_address(email)
        with self._lock:
            default_to = self._defaults.default_to + (address,)
            self._defaults = self._defaults.model_copy(
                update={"default_to": default_to}
            )
        return self

    def get_default_to(self) -> List[Address]:
        return list(self._defaults.default_to)

    # Explicit sender and recipients

    def set_from(self, email: Any) -> "Communicator":
        """Set the sender, overriding defaults and scenario configuration."""
        address = parse_address(email)
        with self._lock:
            self._from = address
        return self

    def get_from(self) -> Optional[Address]:
        return self._from

    def set_to(self, emails: Any) -> "Communicator":
        """Set the recipients, overriding defaults and scenario configuration.

        Args:
            emails: One address or a list of addresses. An empty list clears
                the explicit recipients.
        """
        addresses = tuple(parse_addresses(emails))
        with self._lock:
            self._to = addresses
        return self

    def add_to(self, email: Any) -> "Communicator":
        """Append an explicit recipient."""
        address = parse_address(email)
        with self._lock:
            self._to = self._to + (address,)
        return self

    def get_to(self) -> List[Address]:
        return list(self._to)

    # Form data

    def set_form_data(self, data: Any) -> "Communicator":
        """Set the submitted form data exposed to templates as ``form_data``."""
        with self._lock:
            self._form_data = dict(data) if isinstance(data, Mapping) else data
        return self

    def get_form_data(self) -> Any:
        return self._form_data

    # Payloads

    def prepare(
        self,
        scenario: str,
        channel: str,
        custom_data: Optional[Mapping[str, Any]] = None,
        attachments: Optional[Sequence[Any]] = None,
    ) -> Dict[str, Any]:
        """Prepare message data for a scenario of a channel.

        Args:
            scenario: The scenario name.
            channel: The channel name.
            custom_data: Message or template data. Without a "template_data"
                key, the whole mapping is used as the template data.
            attachments: Attachments to add to the message. A single path or
                descriptor is treated as a one-item list.

        Returns:
            The payload: "from", "to", "template_data" (with
            "currentLanguage"), the rendered scenario fields and, when given,
            "attachments".

        Raises:
            ScenarioNotFoundError: If the scenario or channel is not defined.
            InvalidInputError: If custom_data is not a mapping or the
                scenario does not resolve to a mapping.
        """
        with bind_dispatch_context(channel=channel, scenario=scenario):
            scenario_data = self.registry.get_scenario(scenario, channel)

            with self._lock:
                defaults = self._defaults
                sender = self._from
                recipients = self._to
                form_data = self._form_data

            scenario_data = self._translate(scenario_data)
            if not isinstance(scenario_data, Mapping):
                raise InvalidInputError(
                    f"Communicator scenario [{scenario}] on channel [{channel}] "
                    "must resolve to a map of message fields"
                )

            default_from = {}
            if defaults.default_from is not None:
                default_from = self._translate(
                    {"from": defaults.default_from.to_payload()}
                )
            default_to = self._translate(
                {"to": [address.to_payload() for address in defaults.default_to]}
            )

            language_data = {
                "template_data": {
                    "currentLanguage": self.translator.get_locale(),
                },
            }

            custom_data = self._normalize_custom_data(custom_data)
            render_data = self._build_render_context(custom_data, form_data)

            scenario_data = render_tree(
                scenario_data, render_data, self.renderer, self.exempt_keys
            )

            payload = merge_recursive(
                default_from,
                default_to,
                language_data,
                scenario_data,
                custom_data,
            )

            if sender is not None:
                payload["from"] = sender.to_payload()

            if recipients:
                payload["to"] = [address.to_payload() for address in recipients]

            if attachments:
                payload["attachments"] = self._normalize_attachments(attachments)

            logger.info(
                "payload_prepared",
                fields=sorted(payload.keys()),
                recipient_count=len(payload.get("to") or []),
                attachment_count=len(payload.get("attachments") or []),
                explicit_from=sender is not None,
                explicit_to=bool(recipients),
            )
            return payload

    def create(
        self,
        scenario: str,
        channel: str,
        custom_data: Optional[Mapping[str, Any]] = None,
        attachments: Optional[Sequence[Any]] = None,
    ) -> Message:
        """Create a message populated with the prepared payload."""
        payload = self.prepare(scenario, channel, custom_data, attachments)
        return self.message_factory.create().set_data(payload)

    def dispatch(
        self,
        scenario: str,
        channel: str,
        custom_data: Optional[Mapping[str, Any]] = None,
        attachments: Optional[Sequence[Any]] = None,
    ) -> bool:
        """Create, prepare and send a message.

        Failures while preparing propagate; delivery failures are reported
        by the returned flag.

        Returns:
            True if the transport accepted the message.
        """
        message = self.create(scenario, channel, custom_data, attachments)
        with bind_dispatch_context(channel=channel, scenario=scenario):
            sent = message.send()
            logger.info("scenario_dispatched", sent=sent)
        return sent

    send = dispatch

    def _translate(self, node: Any) -> Any:
        return translate_tree(
            node, self.translator, infer=self.infer_locale_keys
        )

    @staticmethod
    def _normalize_custom_data(custom_data: Any) -> Dict[str, Any]:
        if custom_data is None:
            custom_data = {}

        if not isinstance(custom_data, Mapping):
            raise InvalidInputError(
                "Template data cannot be scalar; expected a mapping, "
                f"got {type(custom_data).__name__}"
            )

        if "template_data" not in custom_data:
            return {"template_data": dict(custom_data)}

        return dict(custom_data)

    @staticmethod
    def _normalize_attachments(attachments: Any) -> List[Any]:
        """Wrap a single attachment (path, bytes or descriptor) in a list."""
        if isinstance(attachments, (str, bytes, os.PathLike, Mapping)):
            return [attachments]
        return list(attachments)

    @staticmethod
    def _build_render_context(
        custom_data: Mapping[str, Any], form_data: Any
    ) -> Dict[str, Any]:
        """Merge custom data and form data into the template context.

        Template data entries are also available as top-level variables, so
        "{{ name }}" and "{{ template_data.name }}" both work.
        """
        render_data = merge_recursive(custom_data, {"form_data": form_data})

        template_data = render_data.get("template_data")
        if isinstance(template_data, Mapping):
            return {**template_data, **render_data}

        return render_data
