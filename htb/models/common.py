"""Response metadata and the generic result envelope.

Every API call resolves to one envelope:
{ data: T | None, meta: ResponseMeta }
"""

from __future__ import annotations

from typing import Generic, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict

T = TypeVar("T")

REQUEST_ID_HEADER = "X-Request-ID"


class ResponseMeta(BaseModel):
    """Diagnostic metadata about one HTTP exchange.

    The default instance is the empty value: no response was received.
    """

    model_config = ConfigDict(frozen=True)

    status_code: int = 0
    # (lower-cased name, value) pairs; repeated headers are joined with ", "
    headers: tuple[tuple[str, str], ...] = ()
    raw: bytes = b""
    url: str = ""
    request_id: str | None = None

    @property
    def is_empty(self) -> bool:
        return self == ResponseMeta()

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def header(self, name: str) -> str | None:
        wanted = name.lower()
        for key, value in self.headers:
            if key == wanted:
                return value
        return None

    @classmethod
    def from_response(cls, response: httpx.Response) -> ResponseMeta:
        """Build metadata from a received response, whatever its status."""
        try:
            url = str(response.request.url)
            request_id = response.request.headers.get(REQUEST_ID_HEADER)
        except RuntimeError:
            # Response constructed without a request
            url = ""
            request_id = None
        return cls(
            status_code=response.status_code,
            headers=tuple(
                (key, ", ".join(response.headers.get_list(key)))
                for key in dict.fromkeys(k.lower() for k in response.headers.keys())
            ),
            raw=response.content,
            url=url,
            request_id=request_id,
        )


class Envelope(BaseModel, Generic[T]):
    """Typed result of a single API call."""

    model_config = ConfigDict(frozen=True)

    data: T | None = None
    meta: ResponseMeta = ResponseMeta()
