"""Logging for the gateway."""

from gateway.logging.structured import (
    configure_structlog,
    get_logger,
    bind_context,
    clear_context,
)

__all__ = [
    "configure_structlog",
    "get_logger",
    "bind_context",
    "clear_context",
]
