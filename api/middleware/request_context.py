"""Request context middleware.

Assigns every request an id (honouring an inbound ``X-Request-ID``),
binds it into the structlog context and writes one access log line per
request.
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from gateway.logging import bind_context, clear_context, get_logger

REQUEST_ID_HEADER = "X-Request-ID"

logger = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a request id to the log context and log each request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        clear_context()
        bind_context(request_id=request_id)
        start = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request_failed",
                method=request.method,
                path=request.url.path,
            )
            raise
        else:
            response.headers[REQUEST_ID_HEADER] = request_id
            # The route runs in a child task; its context binds don't reach here
            identity = getattr(request.state, "identity", None)
            logger.info(
                "request_completed",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                client_ip=request.client.host if request.client else None,
                user_id=identity.user_id if identity else None,
            )
            return response
        finally:
            clear_context()
