"""Season payload schemas and per-operation envelopes.

All payload fields are optional (nullable) so that partial upstream documents
still decode. Unknown keys are kept on the model rather than rejected.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from htb.models.common import Envelope


class HTBModel(BaseModel):
    """Base for upstream payload documents."""

    model_config = ConfigDict(extra="allow", frozen=True)


class Season(HTBModel):
    """One entry of the season list."""

    id: int | None = None
    name: str | None = None
    subtitle: str | None = None
    state: str | None = None
    active: bool | None = None
    start_date: str | None = None
    end_date: str | None = None
    logo: str | None = None


class SeasonReward(HTBModel):
    """A prize or achievement that can be earned during a season."""

    id: int | None = None
    name: str | None = None
    description: str | None = None
    points: int | None = None
    image: str | None = None


class SeasonUserRank(HTBModel):
    """Authenticated user's standing in a season."""

    rank: str | None = None
    league: str | None = None
    position: int | None = None
    points: int | None = None
    total_season_points: int | None = None
    total_ranks: int | None = None
    next_rank: str | None = None


class SeasonFollower(HTBModel):
    id: int | None = None
    name: str | None = None
    avatar: str | None = None
    rank: str | None = None


class SeasonUserFollowers(HTBModel):
    """Users following the authenticated user during a season."""

    followers: list[SeasonFollower] = []


class SeasonMachine(HTBModel):
    """A machine that is part of the active season."""

    id: int | None = None
    name: str | None = None
    os: str | None = None
    difficulty_text: str | None = None
    avatar: str | None = None
    release_time: str | None = None
    is_released: bool | None = None
    is_owned_user: bool | None = None
    is_owned_root: bool | None = None


class ActiveMachine(HTBModel):
    """The machine currently open for solving in the active season."""

    id: int | None = None
    name: str | None = None
    os: str | None = None
    difficulty_text: str | None = None
    avatar: str | None = None
    release_time: str | None = None
    ip: str | None = None


# ---------------------------------------------------------------------------
# Per-operation envelopes
# ---------------------------------------------------------------------------


class ListResponse(Envelope[list[Season]]):
    """Result of SeasonsService.list."""


class RewardsResponse(Envelope[list[SeasonReward]]):
    """Result of SeasonHandle.rewards."""


class UserRankResponse(Envelope[SeasonUserRank]):
    """Result of SeasonHandle.user_rank."""


class UserFollowersResponse(Envelope[SeasonUserFollowers]):
    """Result of SeasonHandle.user_followers."""


class MachinesResponse(Envelope[list[SeasonMachine]]):
    """Result of SeasonsService.machines."""


class ActiveMachineResponse(Envelope[ActiveMachine]):
    """Result of SeasonsService.active_machine."""
