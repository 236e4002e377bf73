"""Resilience components for the HTB client."""

from htb.resilience.rate_limiter import RateLimiter, TokenBucket

__all__ = [
    "RateLimiter",
    "TokenBucket",
]
