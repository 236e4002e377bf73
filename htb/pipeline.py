"""Request envelope pipeline shared by every API operation.

Each call runs the same four steps, strictly in order:

1. admission   - ``limiter.wrap(ctx)`` blocks until a permit is granted
2. invocation  - the raw network call runs under the admitted context
3. decoding    - the raw response is parsed into (data, ResponseMeta)
4. assembly    - the typed envelope is built and returned

Failures raise RequestCancelledError, TransportError or DecodeError. The
error carries the call's envelope with ``data=None`` and whatever metadata
was gathered. Nothing is retried.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeVar

import httpx

from htb.context import Context
from htb.errors import (
    DecodeError,
    HTBError,
    RequestCancelledError,
    TransportError,
    UnexpectedStatusError,
)
from htb.models.common import Envelope, ResponseMeta
from htb.v4.parse import ParsedResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E", bound=Envelope)

RawCall = Callable[[Context], Awaitable[httpx.Response]]
Decode = Callable[[httpx.Response], tuple[Any, ResponseMeta]]


class Limiter(Protocol):
    async def wrap(self, ctx: Context) -> Context: ...


def parse_response(
    response: httpx.Response,
    parse_fn: Callable[[httpx.Response], ParsedResponse[T]],
) -> tuple[ParsedResponse[T], ResponseMeta]:
    """Run an endpoint's parse function and require a decodable 200 payload.

    Raises
    ------
    UnexpectedStatusError
        If the status is not 200. ``meta`` holds status, headers and body.
    DecodeError
        If the body is malformed or does not match the endpoint schema.
    """
    meta = ResponseMeta.from_response(response)

    try:
        parsed = parse_fn(response)
    except ValueError as exc:
        raise DecodeError(f"Malformed response body: {exc}", meta=meta) from exc

    if parsed.json200 is None:
        if response.status_code != 200:
            raise UnexpectedStatusError(
                f"Unexpected status {response.status_code} from {meta.url or 'API'}",
                meta=meta,
            )
        raise DecodeError("Response body is not JSON", meta=meta)

    return parsed, meta


def data_decoder(
    parse_fn: Callable[[httpx.Response], ParsedResponse[T]],
) -> Callable[[httpx.Response], tuple[T, ResponseMeta]]:
    """Build a decode step that extracts the ``data`` member of the payload."""

    def decode(response: httpx.Response) -> tuple[T, ResponseMeta]:
        parsed, meta = parse_response(response, parse_fn)
        return parsed.json200.data, meta  # type: ignore[union-attr]

    return decode


def _fail(exc: HTBError, envelope_cls: type[E], operation: str, started: float) -> HTBError:
    exc.envelope = envelope_cls(meta=exc.meta)
    logger.warning(
        "%s failed: %s",
        operation,
        exc.message,
        extra={
            "operation": operation,
            "request_id": exc.meta.request_id,
            "status_code": exc.meta.status_code,
            "duration_ms": round((time.monotonic() - started) * 1000, 2),
            "error_reason": type(exc).__name__,
        },
    )
    return exc


async def execute(
    ctx: Context,
    limiter: Limiter,
    raw_call: RawCall,
    decode: Decode,
    envelope_cls: type[E],
    *,
    operation: str = "request",
) -> E:
    """Run one rate-limited request and return its typed envelope."""
    started = time.monotonic()

    # 1. Admission
    try:
        admitted = await limiter.wrap(ctx)
    except RequestCancelledError as exc:
        _fail(exc, envelope_cls, operation, started)
        raise

    # 2. Network invocation
    try:
        raw = await admitted.guard(raw_call(admitted))
    except RequestCancelledError as exc:
        _fail(exc, envelope_cls, operation, started)
        raise
    except (httpx.HTTPError, OSError) as exc:
        error = TransportError(f"{operation}: {exc}")
        raise _fail(error, envelope_cls, operation, started) from exc

    # 3. Decoding
    try:
        data, meta = decode(raw)
    except DecodeError as exc:
        _fail(exc, envelope_cls, operation, started)
        raise

    # 4. Assembly
    envelope = envelope_cls(data=data, meta=meta)
    logger.debug(
        "%s completed with status %d",
        operation,
        meta.status_code,
        extra={
            "operation": operation,
            "request_id": meta.request_id,
            "status_code": meta.status_code,
            "duration_ms": round((time.monotonic() - started) * 1000, 2),
        },
    )
    return envelope
