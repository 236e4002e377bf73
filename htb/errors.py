"""Error hierarchy for the HTB client.

All client errors extend HTBError. Every error raised out of a service call
carries the ``ResponseMeta`` gathered before the failure (empty when no
response was received) and the zero-data envelope of the failed call.
"""

from __future__ import annotations

from htb.models.common import Envelope, ResponseMeta


class HTBError(Exception):
    """Base error for all HTB client errors."""

    message: str = "HTB client error"

    def __init__(
        self,
        message: str | None = None,
        *,
        meta: ResponseMeta | None = None,
        **kwargs: object,
    ) -> None:
        self.message = message or self.__class__.message
        self.details = kwargs
        self.meta: ResponseMeta = meta if meta is not None else ResponseMeta()
        self.envelope: Envelope | None = None
        super().__init__(self.message)


class ConfigurationError(HTBError):
    """Settings are missing or invalid."""

    message = "Invalid client configuration"


class RequestCancelledError(HTBError):
    """The caller's context was cancelled or expired.

    ``reason`` is ``"cancelled"`` or ``"deadline_exceeded"``.
    """

    message = "Request cancelled"

    def __init__(
        self,
        message: str | None = None,
        *,
        reason: str = "cancelled",
        meta: ResponseMeta | None = None,
        **kwargs: object,
    ) -> None:
        super().__init__(message, meta=meta, **kwargs)
        self.reason = reason


class TransportError(HTBError):
    """The network call failed before a response was received."""

    message = "Transport error"


class DecodeError(HTBError):
    """A response was received but could not be decoded."""

    message = "Failed to decode response"


class UnexpectedStatusError(DecodeError):
    """The response status code has no decodable payload."""

    message = "Unexpected response status"

    @property
    def status_code(self) -> int:
        return self.meta.status_code
