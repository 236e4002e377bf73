"""HTB API client: owns the transport, the rate limiter and the services.

One HTBClient is shared by reference by every service and handle built from
it, so all calls go through a single httpx connection pool and a single rate
limiter.
"""

from __future__ import annotations

import logging
from types import TracebackType

import httpx

from htb.config.settings import HTBSettings, load_settings
from htb.errors import ConfigurationError
from htb.resilience.rate_limiter import RateLimiter
from htb.services.seasons import SeasonsService
from htb.v4.client import V4Client

logger = logging.getLogger(__name__)


class HTBClient:
    """Async client for the Hack The Box v4 API.

    Parameters
    ----------
    settings:
        Client configuration. Loaded from ``HTB_*`` environment variables
        when omitted.
    token:
        API token; overrides ``settings.api_token``.
    transport:
        Optional httpx transport (e.g. ``httpx.MockTransport`` in tests).
    limiter:
        Optional shared rate limiter; built from settings when omitted.
    """

    def __init__(
        self,
        settings: HTBSettings | None = None,
        *,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        limiter: RateLimiter | None = None,
    ) -> None:
        if settings is None:
            settings = load_settings(api_token=token) if token else load_settings()
        elif token:
            settings = settings.model_copy(update={"api_token": token})

        if not settings.api_token:
            raise ConfigurationError("An API token is required (set HTB_API_TOKEN)")

        self._settings = settings
        self._http = httpx.AsyncClient(
            base_url=settings.base_url,
            headers={
                "Authorization": f"Bearer {settings.api_token}",
                "User-Agent": settings.user_agent,
                "Accept": "application/json",
            },
            timeout=settings.timeout_seconds,
            transport=transport,
        )
        self._limiter = limiter or RateLimiter(
            tokens=settings.rate_limit_tokens,
            interval_seconds=settings.rate_limit_interval_seconds,
        )
        self._v4 = V4Client(self._http, timeout_seconds=settings.timeout_seconds)

        self.seasons = SeasonsService(self)

        logger.debug("HTB client created for %s", settings.base_url)

    @property
    def settings(self) -> HTBSettings:
        return self._settings

    @property
    def v4(self) -> V4Client:
        return self._v4

    @property
    def limiter(self) -> RateLimiter:
        return self._limiter

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def __aenter__(self) -> HTBClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
