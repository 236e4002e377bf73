"""Shared plumbing for API services and resource handles.

Services and handles hold a reference to one shared client; they never copy
its transport or rate limiter.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, TypeVar

import httpx

from htb.context import Context
from htb.models.common import Envelope
from htb.pipeline import RawCall, data_decoder, execute
from htb.resilience.rate_limiter import RateLimiter
from htb.v4.client import V4Client
from htb.v4.parse import ParsedResponse

E = TypeVar("E", bound=Envelope)


class ServiceClient(Protocol):
    """What services need from the client: the v4 operations and the limiter."""

    @property
    def v4(self) -> V4Client: ...

    @property
    def limiter(self) -> RateLimiter: ...


async def request(
    client: ServiceClient,
    ctx: Context | None,
    raw_call: RawCall,
    parse_fn: Callable[[httpx.Response], ParsedResponse],
    envelope_cls: type[E],
    *,
    operation: str,
) -> E:
    """Run ``raw_call`` through the envelope pipeline on the client's limiter."""
    return await execute(
        ctx if ctx is not None else Context.background(),
        client.limiter,
        raw_call,
        data_decoder(parse_fn),
        envelope_cls,
        operation=operation,
    )


class BaseService:
    """Base for services bound to a shared client."""

    def __init__(self, client: ServiceClient) -> None:
        self.client = client
