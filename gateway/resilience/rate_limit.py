"""Rate limiting for inbound requests.

Implements per-client token bucket rate limiting. Unlike an outbound
limiter, callers never wait: a request that finds its bucket empty is
rejected immediately.

Usage:
    limiter = ClientRateLimiter(requests=100, window_seconds=900)

    allowed, retry_after = await limiter.hit(client_ip)
    if not allowed:
        raise RateLimitError(...)
"""

import asyncio
import logging
import math
import time
from typing import Callable

logger = logging.getLogger(__name__)


class TokenBucket:
    """Token bucket rate limiter.

    Allows bursting up to bucket capacity, then enforces the refill rate.
    """

    def __init__(
        self,
        capacity: int,
        refill_rate: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize token bucket.

        Args:
            capacity: Maximum tokens in bucket
            refill_rate: Tokens added per second
            clock: Monotonic time source in seconds
        """
        self.capacity = capacity
        self.refill_rate = refill_rate
        self.tokens = float(capacity)
        self._clock = clock
        self.last_refill = clock()

    def try_acquire(self, tokens: int = 1) -> float:
        """Take tokens if available.

        Args:
            tokens: Number of tokens to take

        Returns:
            0.0 if the tokens were taken, otherwise the seconds until
            enough tokens will have refilled
        """
        self._refill()

        if self.tokens >= tokens:
            self.tokens -= tokens
            return 0.0

        tokens_needed = tokens - self.tokens
        return tokens_needed / self.refill_rate

    @property
    def is_full(self) -> bool:
        self._refill()
        return self.tokens >= self.capacity

    def _refill(self) -> None:
        """Refill tokens based on elapsed time."""
        now = self._clock()
        elapsed = now - self.last_refill
        refill = elapsed * self.refill_rate

        self.tokens = min(self.capacity, self.tokens + refill)
        self.last_refill = now


class ClientRateLimiter:
    """Per-client request limiter.

    Each client key (normally the remote IP) gets its own bucket holding
    ``requests`` tokens that refill evenly over ``window_seconds``.
    """

    # Idle buckets are swept once the table grows past this size
    SWEEP_THRESHOLD = 10_000

    def __init__(
        self,
        requests: int,
        window_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.requests = requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._buckets: dict[str, TokenBucket] = {}
        self._lock = asyncio.Lock()

    async def hit(self, key: str) -> tuple[bool, int]:
        """Record one request for ``key``.

        Returns:
            (allowed, retry_after_seconds)
        """
        async with self._lock:
            bucket = self._buckets.get(key)
            if bucket is None:
                if len(self._buckets) >= self.SWEEP_THRESHOLD:
                    self._sweep()
                bucket = TokenBucket(
                    capacity=self.requests,
                    refill_rate=self.requests / float(self.window_seconds),
                    clock=self._clock,
                )
                self._buckets[key] = bucket

            wait = bucket.try_acquire(1)

        if wait > 0:
            logger.debug("Rate limited %s: retry in %.1fs", key, wait)
            # Round first so float noise (30.000000000000004) does not add a second
            return False, max(1, math.ceil(round(wait, 6)))
        return True, 0

    def reset(self) -> None:
        """Forget all clients."""
        self._buckets.clear()

    def _sweep(self) -> None:
        """Drop buckets that have fully refilled; they carry no state."""
        full = [key for key, bucket in self._buckets.items() if bucket.is_full]
        for key in full:
            del self._buckets[key]
