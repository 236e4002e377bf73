"""Low-level HTTP operations for the Hack The Box v4 API.

One coroutine per remote endpoint. Each takes the caller's Context first and
returns the raw ``httpx.Response`` without inspecting its status; decoding is
left to the matching function in ``htb.v4.parse``.

SECURITY: The Authorization header is set on the shared httpx client and is
never logged here.
"""

from __future__ import annotations

import logging
import uuid

import httpx

from htb.context import Context
from htb.models.common import REQUEST_ID_HEADER

logger = logging.getLogger(__name__)


class V4Client:
    """Raw v4 endpoint set over a shared ``httpx.AsyncClient``.

    Parameters
    ----------
    http:
        Client configured with the API base URL and auth headers.
    timeout_seconds:
        Upper bound for a single request; a shorter context deadline wins.
    """

    def __init__(self, http: httpx.AsyncClient, timeout_seconds: float = 30.0) -> None:
        self._http = http
        self._timeout_seconds = timeout_seconds

    def _timeout_for(self, ctx: Context) -> float:
        remaining = ctx.remaining()
        if remaining is None:
            return self._timeout_seconds
        return min(self._timeout_seconds, remaining)

    async def _get(self, ctx: Context, path: str) -> httpx.Response:
        request_id = str(uuid.uuid4())
        logger.debug("GET %s", path, extra={"request_id": request_id, "url": path})
        return await self._http.get(
            path,
            headers={REQUEST_ID_HEADER: request_id},
            timeout=self._timeout_for(ctx),
        )

    # ------------------------------------------------------------------
    # Seasons
    # ------------------------------------------------------------------

    async def get_season_list(self, ctx: Context) -> httpx.Response:
        return await self._get(ctx, "/v4/season/list")

    async def get_season_rewards(self, ctx: Context, season_id: int) -> httpx.Response:
        return await self._get(ctx, f"/v4/season/rewards/{season_id}")

    async def get_season_user_rank(self, ctx: Context, season_id: int) -> httpx.Response:
        return await self._get(ctx, f"/v4/season/user/rank/{season_id}")

    async def get_season_user_followers(self, ctx: Context, season_id: int) -> httpx.Response:
        return await self._get(ctx, f"/v4/season/user/followers/{season_id}")

    async def get_season_machines(self, ctx: Context) -> httpx.Response:
        return await self._get(ctx, "/v4/season/machines")

    async def get_season_machine_active(self, ctx: Context) -> httpx.Response:
        return await self._get(ctx, "/v4/season/machine/active")
