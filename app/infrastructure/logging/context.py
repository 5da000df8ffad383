"""Dispatch context binding for structured logging.

Binds the channel and scenario being resolved to every log entry emitted
while a payload is prepared or a message is sent.

Usage:
    from infrastructure.logging import bind_dispatch_context

    with bind_dispatch_context(channel="user", scenario="password-reset"):
        logger.info("payload_prepared")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_dispatch_context(
    channel: Optional[str] = None,
    scenario: Optional[str] = None,
    correlation_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind dispatch-scoped context to all logs within the context manager.

    Keys already bound by an enclosing context (e.g. a correlation ID set
    by the caller's request handling) are preserved and restored on exit.

    Args:
        channel: Channel name being resolved.
        scenario: Scenario name being resolved.
        correlation_id: Unique dispatch identifier. Reuses the enclosing one,
            or generates a new one when neither is available.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        None - context is bound to structlog's context vars.
    """
    context: dict[str, Any] = {}

    context["correlation_id"] = (
        correlation_id or get_correlation_id() or str(uuid.uuid4())
    )

    if channel is not None:
        context["channel"] = channel

    if scenario is not None:
        context["scenario"] = scenario

    context.update(extra_context)

    tokens = structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.reset_contextvars(**tokens)


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context.

    Returns:
        The correlation ID if set, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")
