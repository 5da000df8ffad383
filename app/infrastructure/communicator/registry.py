"""Channel and scenario registry.

A channel is a named set of scenarios; a scenario is the nested
configuration of one kind of message. Registered data is stored as a
read-only snapshot so that resolving a scenario can never change it.
"""

import threading
from types import MappingProxyType
from typing import Any, Collection, List, Mapping, Optional

from infrastructure.communicator.errors import (
    ChannelNotFoundError,
    InvalidInputError,
    ScenarioNotFoundError,
)
from infrastructure.i18n import LocalizedText, tag_localized_values
from infrastructure.logging import get_module_logger

logger = get_module_logger()


def freeze(node: Any) -> Any:
    """Return a read-only deep copy of a configuration tree."""
    if isinstance(node, LocalizedText):
        frozen = {locale: freeze(value) for locale, value in node.items()}
        return LocalizedText(frozen)
    if isinstance(node, Mapping):
        return MappingProxyType({key: freeze(value) for key, value in node.items()})
    if isinstance(node, (list, tuple)):
        return tuple(freeze(item) for item in node)
    return node


class ChannelRegistry:
    """Stores channels and resolves (scenario, channel) pairs.

    Writers are serialized with a lock. Each write swaps in a new channel
    map, so readers never observe a partially applied update.

    Attributes:
        valid_locales: Locale codes used to tag localized values on
            registration. When empty, only explicitly tagged values are
            localized.
        infer_locale_keys: Detect localized mappings from their keys.

    Example:
        registry = ChannelRegistry(valid_locales=["en", "fr"])
        registry.add_channel("user", {
            "welcome": {
                "subject": {"en": "Hi {{ name }}", "fr": "Salut {{ name }}"},
                "template_ident": "welcome-tpl",
            },
        })
        scenario = registry.get_scenario("welcome", "user")
    """

    def __init__(
        self,
        valid_locales: Optional[Collection[str]] = None,
        infer_locale_keys: bool = True,
    ):
        self.valid_locales = frozenset(valid_locales or ())
        self.infer_locale_keys = infer_locale_keys
        self._channels: Mapping[str, Mapping[str, Any]] = MappingProxyType({})
        self._lock = threading.Lock()

    def add_channels(
        self, channels: Mapping[str, Mapping[str, Any]]
    ) -> "ChannelRegistry":
        """Add one or more channels.

        Replaces any previously defined channel of the same name.

        Args:
            channels: A map of channel names and their scenarios.

        Returns:
            self
        """
        if not isinstance(channels, Mapping):
            raise InvalidInputError("Expected a map of channel names and details")

        for name, data in channels.items():
            self.add_channel(name, data)

        return self

    def add_channel(self, name: str, data: Mapping[str, Any]) -> "ChannelRegistry":
        """Add a channel.

        Replaces any previously defined channel of the same name; the old
        and new scenarios are not merged.

        Args:
            name: The channel name.
            data: Map of scenario names to scenario configuration.

        Returns:
            self

        Raises:
            InvalidInputError: If data is not a mapping or holds a malformed
                localized value.
        """
        if not isinstance(data, Mapping):
            raise InvalidInputError(
                f"Communicator channel [{name}] must map scenario names to details"
            )

        try:
            tagged = {
                scenario: tag_localized_values(
                    details, self.valid_locales, infer=self.infer_locale_keys
                )
                for scenario, details in data.items()
            }
        except ValueError as e:
            raise InvalidInputError(
                f"Communicator channel [{name}] is malformed: {e}"
            ) from e

        snapshot = freeze(tagged)

        with self._lock:
            replaced = name in self._channels
            channels = dict(self._channels)
            channels[name] = snapshot
            self._channels = MappingProxyType(channels)

        logger.info(
            "channel_registered",
            channel=name,
            scenario_count=len(snapshot),
            replaced=replaced,
        )
        return self

    def has_channel(self, name: str) -> bool:
        """Determine if a channel is defined."""
        return name in self._channels

    def get_channel(self, name: str) -> Mapping[str, Any]:
        """Retrieve a channel.

        Args:
            name: The channel name.

        Returns:
            Read-only map of scenario names to scenarios.

        Raises:
            ChannelNotFoundError: If the channel is not defined.
        """
        channel = self._channels.get(name)
        if channel is None:
            logger.warning("channel_not_found", channel=name)
            raise ChannelNotFoundError(name)
        return channel

    def has_scenario(self, scenario: str, channel: str) -> bool:
        """Determine if a scenario is defined on a channel."""
        data = self._channels.get(channel)
        return data is not None and scenario in data

    def get_scenario(self, scenario: str, channel: str) -> Any:
        """Retrieve a scenario from a channel.

        Args:
            scenario: The scenario name.
            channel: The channel name.

        Returns:
            The read-only scenario configuration.

        Raises:
            ScenarioNotFoundError: If the channel or the scenario is not defined.
        """
        data = self._channels.get(channel)
        if data is None or scenario not in data:
            logger.warning(
                "scenario_not_found",
                scenario=scenario,
                channel=channel,
                channel_exists=data is not None,
            )
            raise ScenarioNotFoundError(scenario, channel)
        return data[scenario]

    def list_channels(self) -> List[str]:
        """List registered channel names in registration order."""
        return list(self._channels.keys())

    def list_scenarios(self, channel: str) -> List[str]:
        """List scenario names of a channel.

        Raises:
            ChannelNotFoundError: If the channel is not defined.
        """
        return list(self.get_channel(channel).keys())

