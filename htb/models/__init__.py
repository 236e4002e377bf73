"""Public models for the HTB client."""

from htb.models.common import Envelope, ResponseMeta
from htb.models.seasons import (
    ActiveMachine,
    ActiveMachineResponse,
    ListResponse,
    MachinesResponse,
    RewardsResponse,
    Season,
    SeasonFollower,
    SeasonMachine,
    SeasonReward,
    SeasonUserFollowers,
    SeasonUserRank,
    UserFollowersResponse,
    UserRankResponse,
)

__all__ = [
    "ActiveMachine",
    "ActiveMachineResponse",
    "Envelope",
    "ListResponse",
    "MachinesResponse",
    "ResponseMeta",
    "RewardsResponse",
    "Season",
    "SeasonFollower",
    "SeasonMachine",
    "SeasonReward",
    "SeasonUserFollowers",
    "SeasonUserRank",
    "UserFollowersResponse",
    "UserRankResponse",
]
