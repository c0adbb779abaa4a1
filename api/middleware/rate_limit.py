"""Per-IP rate limiting for the /api routes."""

from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from api.exceptions import RateLimitError
from gateway.logging import get_logger
from gateway.resilience import ClientRateLimiter

logger = get_logger(__name__)

RATE_LIMITED_PREFIX = "/api"


def is_rate_limited_path(path: str) -> bool:
    """True for /api and everything below it (not /apiary)."""
    return path == RATE_LIMITED_PREFIX or path.startswith(RATE_LIMITED_PREFIX + "/")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Reject /api requests once a client IP has used up its allowance.

    The limiter lives on ``app.state.rate_limiter`` so each app instance
    (and each test) gets its own buckets.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not is_rate_limited_path(request.url.path):
            return await call_next(request)

        limiter: ClientRateLimiter = request.app.state.rate_limiter
        client_ip = request.client.host if request.client else "unknown"

        allowed, retry_after = await limiter.hit(client_ip)
        if not allowed:
            logger.warning("rate_limited", client_ip=client_ip, retry_after=retry_after)
            # Exceptions raised here would bypass the app's exception handlers
            exc = RateLimitError(details={"retry_after": retry_after})
            return JSONResponse(
                status_code=exc.status_code,
                content={"error": exc.to_dict()},
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)
