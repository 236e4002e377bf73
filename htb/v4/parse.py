"""Decode functions for the v4 season endpoints.

Each ``parse_get_*_response`` turns a raw response into a ParsedResponse.
The ``json200`` slot is filled only for a 200 with a JSON body; any other
status leaves it empty. A 200 whose body does not match the endpoint's
document schema raises ValueError (pydantic's ValidationError).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

import httpx
from pydantic import BaseModel

from htb.models.seasons import (
    ActiveMachine,
    Season,
    SeasonMachine,
    SeasonReward,
    SeasonUserFollowers,
    SeasonUserRank,
)

T = TypeVar("T")


class DataDocument(BaseModel, Generic[T]):
    """Upstream wire wrapper: {"data": ...}."""

    data: T


@dataclass
class ParsedResponse(Generic[T]):
    """Status-keyed decode result of one raw response."""

    status_code: int
    body: bytes
    http_response: httpx.Response
    json200: DataDocument[T] | None = None


def _is_json(response: httpx.Response) -> bool:
    content_type = response.headers.get("content-type", "")
    return "json" in content_type.lower()


def _parse(response: httpx.Response, document: type[DataDocument[T]]) -> ParsedResponse[T]:
    parsed: ParsedResponse[T] = ParsedResponse(
        status_code=response.status_code,
        body=response.content,
        http_response=response,
    )
    if response.status_code == 200 and _is_json(response):
        parsed.json200 = document.model_validate_json(response.content)
    return parsed


def parse_get_season_list_response(response: httpx.Response) -> ParsedResponse[list[Season]]:
    return _parse(response, DataDocument[list[Season]])


def parse_get_season_rewards_response(
    response: httpx.Response,
) -> ParsedResponse[list[SeasonReward]]:
    return _parse(response, DataDocument[list[SeasonReward]])


def parse_get_season_user_rank_response(
    response: httpx.Response,
) -> ParsedResponse[SeasonUserRank]:
    return _parse(response, DataDocument[SeasonUserRank])


def parse_get_season_user_followers_response(
    response: httpx.Response,
) -> ParsedResponse[SeasonUserFollowers]:
    return _parse(response, DataDocument[SeasonUserFollowers])


def parse_get_season_machines_response(
    response: httpx.Response,
) -> ParsedResponse[list[SeasonMachine]]:
    return _parse(response, DataDocument[list[SeasonMachine]])


def parse_get_season_machine_active_response(
    response: httpx.Response,
) -> ParsedResponse[ActiveMachine]:
    return _parse(response, DataDocument[ActiveMachine])
