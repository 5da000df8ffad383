"""Structured logging infrastructure.

This package provides centralized logging configuration and utilities
for the communicator using structlog.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_logger(): Get a logger instance with a specific name
    - get_module_logger(): Get a logger for the calling module
    - bind_dispatch_context(): Context manager for dispatch-scoped logging
    - get_correlation_id(): Get current correlation ID from context

Formatters:
    - mask_sensitive_data(): Processor to redact sensitive fields
    - truncate_large_values(): Processor to limit string lengths

Example:
    from infrastructure.logging import (
        configure_logging,
        get_module_logger,
        bind_dispatch_context,
    )

    configure_logging()

    logger = get_module_logger()
    with bind_dispatch_context(channel="user", scenario="welcome"):
        logger.info("payload_prepared")
"""

from infrastructure.logging.setup import (
    configure_logging,
    get_logger,
    get_module_logger,
)

from infrastructure.logging.context import (
    bind_dispatch_context,
    get_correlation_id,
)

from infrastructure.logging.formatters import (
    mask_sensitive_data,
    truncate_large_values,
    SENSITIVE_PATTERNS,
)

__all__ = [
    # Setup
    "configure_logging",
    "get_logger",
    "get_module_logger",
    # Context
    "bind_dispatch_context",
    "get_correlation_id",
    # Formatters
    "mask_sensitive_data",
    "truncate_large_values",
    "SENSITIVE_PATTERNS",
]
