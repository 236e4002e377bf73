"""Season endpoints: the season list, season machines and per-season handles."""

from __future__ import annotations

from dataclasses import dataclass, field

from htb.context import Context
from htb.models.seasons import (
    ActiveMachineResponse,
    ListResponse,
    MachinesResponse,
    RewardsResponse,
    UserFollowersResponse,
    UserRankResponse,
)
from htb.services.base import BaseService, ServiceClient, request
from htb.v4.parse import (
    parse_get_season_list_response,
    parse_get_season_machine_active_response,
    parse_get_season_machines_response,
    parse_get_season_rewards_response,
    parse_get_season_user_followers_response,
    parse_get_season_user_rank_response,
)


@dataclass(frozen=True)
class SeasonHandle:
    """Operations scoped to one season.

    Created by :meth:`SeasonsService.season`. Holds only the season ID and a
    reference to the shared client.
    """

    client: ServiceClient = field(repr=False, compare=False)
    id: int

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int) or self.id < 1:
            raise ValueError(f"season id must be a positive integer, got {self.id!r}")

    async def rewards(self, ctx: Context | None = None) -> RewardsResponse:
        """Rewards (prizes, achievements) that can be earned in the season.

        Example::

            rewards = await client.seasons.season(123).rewards(ctx)
            for reward in rewards.data:
                print(f"Reward: {reward.name} (Points: {reward.points})")
        """
        return await request(
            self.client,
            ctx,
            lambda c: self.client.v4.get_season_rewards(c, self.id),
            parse_get_season_rewards_response,
            RewardsResponse,
            operation="seasons.rewards",
        )

    async def user_rank(self, ctx: Context | None = None) -> UserRankResponse:
        """The authenticated user's rank, league and points in the season."""
        return await request(
            self.client,
            ctx,
            lambda c: self.client.v4.get_season_user_rank(c, self.id),
            parse_get_season_user_rank_response,
            UserRankResponse,
            operation="seasons.user_rank",
        )

    async def user_followers(self, ctx: Context | None = None) -> UserFollowersResponse:
        """Users following the authenticated user during the season."""
        return await request(
            self.client,
            ctx,
            lambda c: self.client.v4.get_season_user_followers(c, self.id),
            parse_get_season_user_followers_response,
            UserFollowersResponse,
            operation="seasons.user_followers",
        )


class SeasonsService(BaseService):
    """Season-wide endpoints and the factory for per-season handles."""

    def season(self, id: int) -> SeasonHandle:
        """Return a handle for the season with the given ID."""
        return SeasonHandle(client=self.client, id=id)

    async def list(self, ctx: Context | None = None) -> ListResponse:
        """All seasons, current and past.

        Example::

            seasons = await client.seasons.list(ctx)
            for season in seasons.data:
                print(f"Season: {season.name} (ID: {season.id})")
        """
        return await request(
            self.client,
            ctx,
            self.client.v4.get_season_list,
            parse_get_season_list_response,
            ListResponse,
            operation="seasons.list",
        )

    async def machines(self, ctx: Context | None = None) -> MachinesResponse:
        """Machines that are part of the current season."""
        return await request(
            self.client,
            ctx,
            self.client.v4.get_season_machines,
            parse_get_season_machines_response,
            MachinesResponse,
            operation="seasons.machines",
        )

    async def active_machine(self, ctx: Context | None = None) -> ActiveMachineResponse:
        """The machine currently open for solving in the season."""
        return await request(
            self.client,
            ctx,
            self.client.v4.get_season_machine_active,
            parse_get_season_machine_active_response,
            ActiveMachineResponse,
            operation="seasons.active_machine",
        )
