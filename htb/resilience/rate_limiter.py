"""Shared token bucket rate limiter.

One bucket is shared by every call made through the same client, across all
services and handles.

Key behaviors:
- acquire() blocks (async sleep) until a token is available or the caller's
  context is cancelled or expires
- wrap() admits the caller and returns a child context for the network call
- a cancelled wait never consumes a token
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass

from htb.context import Context

logger = logging.getLogger(__name__)


@dataclass
class TokenBucket:
    """Token bucket state."""

    tokens: float
    max_tokens: int
    refill_rate: float  # tokens per second
    last_refill: float  # time.monotonic()


class RateLimiter:
    """Token bucket rate limiter shared by all calls on one client.

    Args:
        tokens: Bucket capacity (burst size).
        interval_seconds: Time to refill a full bucket.
    """

    def __init__(self, tokens: int = 5, interval_seconds: float = 1.0) -> None:
        if tokens < 1:
            raise ValueError("tokens must be >= 1")
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")

        self._bucket = TokenBucket(
            tokens=float(tokens),
            max_tokens=tokens,
            refill_rate=tokens / interval_seconds,
            last_refill=time.monotonic(),
        )
        self._lock = asyncio.Lock()

    def _refill(self) -> None:
        """Refill tokens based on elapsed time since last refill."""
        bucket = self._bucket
        now = time.monotonic()
        elapsed = now - bucket.last_refill

        if elapsed <= 0:
            return

        bucket.tokens = min(bucket.tokens + elapsed * bucket.refill_rate, float(bucket.max_tokens))
        bucket.last_refill = now

    async def acquire(self, ctx: Context) -> None:
        """Block until a token is available.

        Raises
        ------
        RequestCancelledError
            If ``ctx`` is cancelled or expires before a token is granted.
        """
        while True:
            ctx.raise_if_done()

            async with self._lock:
                self._refill()

                if self._bucket.tokens >= 1.0:
                    self._bucket.tokens -= 1.0
                    return

                wait_time = (1.0 - self._bucket.tokens) / self._bucket.refill_rate

            logger.debug("Rate limit reached, waiting %.3fs for admission", wait_time)

            # Sleep outside the lock so other callers can be admitted
            if await ctx.wait(wait_time):
                raise ctx.error()

    async def _release(self) -> None:
        async with self._lock:
            self._refill()
            self._bucket.tokens = min(self._bucket.tokens + 1.0, float(self._bucket.max_tokens))

    async def wrap(self, ctx: Context) -> Context:
        """Admit the caller and return a child context for the network call.

        A token granted to a context that was cancelled in the meantime is
        handed back before the cancellation is raised.
        """
        await self.acquire(ctx)
        if ctx.done:
            await self._release()
            raise ctx.error()
        return ctx.with_cancel()

    def get_stats(self) -> dict:
        """Current limiter stats: current_tokens, max_tokens, refill_rate."""
        self._refill()
        return {
            "current_tokens": self._bucket.tokens,
            "max_tokens": self._bucket.max_tokens,
            "refill_rate": self._bucket.refill_rate,
        }
