"""Resilience primitives."""

from gateway.resilience.rate_limit import ClientRateLimiter, TokenBucket

__all__ = ["ClientRateLimiter", "TokenBucket"]
