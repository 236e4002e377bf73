"""HTTP stubs shared across the test suite."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx

BASE_URL = "https://labs.test/api"


def json_response(status_code: int, payload: object, **kwargs: object) -> httpx.Response:
    """Build a JSON response the way the API sends it."""
    return httpx.Response(
        status_code,
        content=json.dumps(payload).encode("utf-8"),
        headers={"content-type": "application/json"},
        **kwargs,
    )


class StubRoutes:
    """httpx MockTransport handler that serves canned responses by path.

    Every request is recorded in ``requests``. Paths are relative to the API
    base (e.g. ``/v4/season/list``).
    """

    def __init__(self) -> None:
        self.routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, path: str, status_code: int = 200, payload: object = None) -> None:
        self.routes[path] = lambda _request: json_response(status_code, payload)

    def add_handler(self, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[path] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")
        handler = self.routes.get(path)
        if handler is None:
            return json_response(404, {"message": "not found"})
        return handler(request)


class StubCall:
    """Raw network call stub that counts invocations.

    Returns ``response`` or raises ``error``; optionally waits on ``gate``
    first so tests can hold a call in flight.
    """

    def __init__(
        self,
        response: httpx.Response | None = None,
        error: Exception | None = None,
        gate: object | None = None,
    ) -> None:
        self.response = response
        self.error = error
        self.gate = gate
        self.calls = 0
        self.contexts: list[object] = []

    async def __call__(self, ctx: object) -> httpx.Response:
        self.calls += 1
        self.contexts.append(ctx)
        if self.gate is not None:
            await self.gate.wait()  # type: ignore[attr-defined]
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response
