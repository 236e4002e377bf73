"""htb: typed async client for the Hack The Box v4 API.

Public API:
    - HTBClient: shared client exposing ``client.seasons``
    - Context: explicit cancellation/deadline token passed to every call
    - HTBSettings / load_settings: configuration
    - HTBError and subclasses: failures, each carrying response metadata
"""

from __future__ import annotations

import logging

from htb.client import HTBClient
from htb.config import HTBSettings, load_settings
from htb.context import Context
from htb.errors import (
    ConfigurationError,
    DecodeError,
    HTBError,
    RequestCancelledError,
    TransportError,
    UnexpectedStatusError,
)
from htb.models import Envelope, ResponseMeta
from htb.resilience import RateLimiter

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("htb").addHandler(logging.NullHandler())

__all__ = [
    "ConfigurationError",
    "Context",
    "DecodeError",
    "Envelope",
    "HTBClient",
    "HTBError",
    "HTBSettings",
    "RateLimiter",
    "RequestCancelledError",
    "ResponseMeta",
    "TransportError",
    "UnexpectedStatusError",
    "load_settings",
]
