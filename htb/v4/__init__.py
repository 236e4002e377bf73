"""Low-level Hack The Box v4 operations and their decode functions."""

from htb.v4.client import V4Client
from htb.v4.parse import (
    DataDocument,
    ParsedResponse,
    parse_get_season_list_response,
    parse_get_season_machine_active_response,
    parse_get_season_machines_response,
    parse_get_season_rewards_response,
    parse_get_season_user_followers_response,
    parse_get_season_user_rank_response,
)

__all__ = [
    "DataDocument",
    "ParsedResponse",
    "V4Client",
    "parse_get_season_list_response",
    "parse_get_season_machine_active_response",
    "parse_get_season_machines_response",
    "parse_get_season_rewards_response",
    "parse_get_season_user_followers_response",
    "parse_get_season_user_rank_response",
]
