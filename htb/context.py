"""Explicit cancellation and deadline token for API calls.

A Context is passed as the first argument to every suspending call in the
client. Rate-limit admission and network I/O both observe it:

- cancel() wakes every waiter and cancels all derived child contexts
- a child's deadline is the earlier of its own and its parent's
- guard() races an awaitable against cancellation and the deadline
"""

from __future__ import annotations

import asyncio
import contextlib
import time
import weakref
from collections.abc import Awaitable
from typing import TypeVar

from htb.errors import RequestCancelledError

T = TypeVar("T")


class Context:
    """Cancellation token with an optional monotonic deadline."""

    def __init__(
        self,
        parent: Context | None = None,
        deadline: float | None = None,
    ) -> None:
        self._parent = parent
        self._own_deadline = deadline
        self._cancelled = False
        self._event = asyncio.Event()
        self._children: weakref.WeakSet[Context] = weakref.WeakSet()

        if parent is not None:
            if parent.cancelled:
                self._mark_cancelled()
            else:
                parent._children.add(self)

    @classmethod
    def background(cls) -> Context:
        """Root context: never cancelled, no deadline."""
        return cls()

    def with_cancel(self) -> Context:
        return Context(parent=self)

    def with_timeout(self, seconds: float) -> Context:
        return Context(parent=self, deadline=time.monotonic() + seconds)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def deadline(self) -> float | None:
        """Effective monotonic deadline, inherited from ancestors."""
        parent_deadline = self._parent.deadline if self._parent is not None else None
        candidates = [d for d in (self._own_deadline, parent_deadline) if d is not None]
        return min(candidates) if candidates else None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def deadline_exceeded(self) -> bool:
        deadline = self.deadline
        return not self._cancelled and deadline is not None and time.monotonic() >= deadline

    @property
    def done(self) -> bool:
        return self._cancelled or self.deadline_exceeded

    def remaining(self) -> float | None:
        """Seconds left before the deadline (never negative), or None."""
        deadline = self.deadline
        if deadline is None:
            return None
        return max(0.0, deadline - time.monotonic())

    def error(self) -> RequestCancelledError:
        if self._cancelled:
            return RequestCancelledError("Context cancelled", reason="cancelled")
        return RequestCancelledError("Context deadline exceeded", reason="deadline_exceeded")

    def raise_if_done(self) -> None:
        if self.done:
            raise self.error()

    # ------------------------------------------------------------------
    # Cancellation
    # ------------------------------------------------------------------

    def cancel(self) -> None:
        """Cancel this context and every context derived from it."""
        self._mark_cancelled()

    def _mark_cancelled(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        self._event.set()
        for child in list(self._children):
            child._mark_cancelled()

    # ------------------------------------------------------------------
    # Waiting
    # ------------------------------------------------------------------

    async def wait(self, timeout: float | None = None) -> bool:
        """Wait up to ``timeout`` seconds for the context to finish.

        Returns True if it was cancelled or hit its deadline in that time.
        """
        if self.done:
            return True

        remaining = self.remaining()
        if timeout is None:
            effective = remaining
        elif remaining is None:
            effective = timeout
        else:
            effective = min(timeout, remaining)

        with contextlib.suppress(asyncio.TimeoutError):
            await asyncio.wait_for(self._event.wait(), effective)
        return self.done

    async def guard(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` unless the context finishes first.

        On cancellation or deadline the pending work is cancelled and
        awaited before RequestCancelledError is raised.
        """
        if self.done:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise self.error()

        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter},
                timeout=self.remaining(),
                return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            waiter.cancel()

        if task in done:
            return task.result()

        task.cancel()
        await asyncio.wait({task})
        if not task.cancelled():
            # Finished while being cancelled; the context still wins.
            task.exception()
        raise self.error()
