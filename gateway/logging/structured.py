"""Structured logging with structlog.

Provides:
- JSON-formatted log output for production
- Request-scoped context (request_id, user_id) via contextvars
- Factory function for creating loggers
"""

import logging
import sys
from typing import Optional
from uuid import UUID

import structlog
from structlog.types import EventDict, WrappedLogger

SERVICE_NAME = "docuhero-gateway"


def add_service_info(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add service information to log entries."""
    event_dict["service"] = SERVICE_NAME
    return event_dict


def configure_structlog(
    json_format: bool = True,
    log_level: str = "INFO",
) -> None:
    """Configure structlog for the application.

    Args:
        json_format: If True, output JSON logs (for production).
                     If False, output human-readable logs (for development).
        log_level: The minimum log level to output (DEBUG, INFO, WARNING, ERROR).
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    # Set up stdlib logging so plain logging.getLogger() users share the stream
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_service_info,
    ]

    if json_format:
        renderer = [
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderer = [
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=shared_processors + renderer,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger with the given name.

    Args:
        name: Logger name, typically __name__ of the calling module.

    Returns:
        A structlog BoundLogger instance.

    Example:
        logger = get_logger(__name__)
        logger.info("user_synced", user_id=str(user.id))
    """
    return structlog.get_logger(name)


def bind_context(
    request_id: Optional[str] = None,
    user_id: Optional[UUID | str] = None,
) -> None:
    """Bind context variables for the current request scope.

    Values live in a contextvar, so concurrent requests never see each
    other's context.

    Args:
        request_id: Unique identifier for the current request.
        user_id: ID of the authenticated user.
    """
    values = {}
    if request_id:
        values["request_id"] = request_id
    if user_id:
        values["user_id"] = str(user_id)
    if values:
        structlog.contextvars.bind_contextvars(**values)


def clear_context() -> None:
    """Clear all bound context variables.

    Should be called at the end of request processing.
    """
    structlog.contextvars.clear_contextvars()
