"""Structured logging infrastructure.

This package provides centralized logging configuration and utilities
for the application using structlog.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_logger(): Get a logger instance with a specific name
    - get_module_logger(): Get a logger for the calling module
    - bind_request_context(): Context manager for invocation-scoped logging

Formatters:
    - truncate_large_values(): Processor to limit string lengths

Example:
    from infrastructure.logging import (
        configure_logging,
        get_module_logger,
        bind_request_context,
    )

    # At application startup
    configure_logging()

    # In a module
    logger = get_module_logger()
    logger.info("module_initialized")

    # While resolving a command's arguments
    with bind_request_context(correlation_id=message.id, user_id=message.author_id):
        logger.info("argument_collection_started")
"""

from infrastructure.logging.setup import (
    configure_logging,
    get_logger,
    get_module_logger,
)

from infrastructure.logging.context import bind_request_context

from infrastructure.logging.formatters import truncate_large_values

__all__ = [
    # Setup
    "configure_logging",
    "get_logger",
    "get_module_logger",
    # Context
    "bind_request_context",
    # Formatters
    "truncate_large_values",
]
