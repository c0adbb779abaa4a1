"""Tests for structured logging setup."""

import structlog
from structlog.testing import capture_logs

from gateway.logging import bind_context, clear_context, configure_structlog, get_logger
from gateway.logging.structured import SERVICE_NAME, add_service_info


def test_add_service_info():
    event = add_service_info(None, "info", {"event": "x"})
    assert event["service"] == SERVICE_NAME


def test_bound_context_is_merged():
    clear_context()
    bind_context(request_id="req-1", user_id="user-9")
    try:
        context = structlog.contextvars.get_contextvars()
        assert context == {"request_id": "req-1", "user_id": "user-9"}
    finally:
        clear_context()

    assert structlog.contextvars.get_contextvars() == {}


def test_bind_context_skips_empty_values():
    clear_context()
    bind_context(request_id=None, user_id="")
    assert structlog.contextvars.get_contextvars() == {}


def test_logger_emits_key_values():
    configure_structlog(json_format=False, log_level="DEBUG")
    logger = get_logger("tests.logging")

    with capture_logs() as logs:
        logger.info("user_synced", user_id="u-1")

    assert logs == [{"event": "user_synced", "user_id": "u-1", "log_level": "info"}]
