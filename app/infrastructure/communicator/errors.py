"""Custom exceptions for the communicator.

Both kinds are configuration or programming errors: they are raised
synchronously to the caller of prepare()/dispatch() and never retried.
"""


class CommunicatorError(Exception):
    """Base exception for all communicator errors.

    Example:
        try:
            communicator.dispatch("welcome", "user", data)
        except CommunicatorError as e:
            logger.error("communicator_error", error=str(e))
    """

    pass


class InvalidInputError(CommunicatorError, ValueError):
    """Raised for malformed input.

    Covers addresses that are neither a string nor a structured address,
    and template data that is a scalar where a mapping is required.

    Example:
        >>> parse_address(42)
        Traceback (most recent call last):
        ...
        InvalidInputError: Expected email address as a string or structured address
    """

    pass


class NotFoundError(CommunicatorError, LookupError):
    """Raised when a channel or scenario is not registered."""

    pass


class ChannelNotFoundError(NotFoundError):
    """Raised when a requested channel is not registered.

    Example:
        >>> registry.get_channel("nonexistent")
        Traceback (most recent call last):
        ...
        ChannelNotFoundError: Communicator channel [nonexistent] does not exist
    """

    def __init__(self, channel: str):
        self.channel = channel
        super().__init__(f"Communicator channel [{channel}] does not exist")


class ScenarioNotFoundError(NotFoundError):
    """Raised when a scenario is missing, or its channel is.

    Example:
        >>> registry.get_scenario("reset", "user")
        Traceback (most recent call last):
        ...
        ScenarioNotFoundError: Communicator scenario [reset] does not exist on channel [user]
    """

    def __init__(self, scenario: str, channel: str):
        self.scenario = scenario
        self.channel = channel
        super().__init__(
            f"Communicator scenario [{scenario}] does not exist on channel [{channel}]"
        )
