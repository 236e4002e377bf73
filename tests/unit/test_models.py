"""Unit tests for ResponseMeta, envelopes and the v4 decode functions."""

from __future__ import annotations

import httpx
import pytest
from pydantic import ValidationError

from htb.errors import (
    ConfigurationError,
    DecodeError,
    HTBError,
    RequestCancelledError,
    TransportError,
    UnexpectedStatusError,
)
from htb.models.common import ResponseMeta
from htb.models.seasons import ListResponse, RewardsResponse, Season, SeasonUserFollowers
from htb.v4.parse import (
    parse_get_season_list_response,
    parse_get_season_machine_active_response,
    parse_get_season_user_followers_response,
)
from tests.helpers import json_response


class TestResponseMeta:
    def test_default_is_empty(self) -> None:
        meta = ResponseMeta()
        assert meta.is_empty
        assert meta.status_code == 0
        assert meta.headers == ()
        assert meta.raw == b""
        assert not meta.ok

    def test_from_response(self) -> None:
        request = httpx.Request(
            "GET", "https://labs.test/api/v4/season/list", headers={"X-Request-ID": "rid-1"}
        )
        response = httpx.Response(
            200, content=b'{"data": []}', headers={"Content-Type": "application/json"}, request=request
        )

        meta = ResponseMeta.from_response(response)

        assert meta.status_code == 200
        assert meta.ok
        assert meta.header("content-type") == "application/json"
        assert meta.header("Content-Type") == "application/json"
        assert meta.raw == b'{"data": []}'
        assert meta.url == "https://labs.test/api/v4/season/list"
        assert meta.request_id == "rid-1"
        assert not meta.is_empty

    def test_from_response_without_request(self) -> None:
        meta = ResponseMeta.from_response(httpx.Response(500, content=b"boom"))
        assert meta.status_code == 500
        assert meta.url == ""
        assert meta.request_id is None

    def test_is_immutable(self) -> None:
        meta = ResponseMeta(status_code=200)
        with pytest.raises(ValidationError):
            meta.status_code = 404  # type: ignore[misc]

    def test_headers_cannot_be_mutated(self) -> None:
        meta = ResponseMeta.from_response(json_response(200, {"data": []}))

        with pytest.raises(TypeError):
            meta.headers["x-injected"] = "1"  # type: ignore[index]
        with pytest.raises(ValidationError):
            meta.headers = ()  # type: ignore[misc]

        assert meta.header("x-injected") is None
        assert meta.header("content-type") == "application/json"

    def test_repeated_headers_are_joined(self) -> None:
        response = httpx.Response(
            200,
            content=b"{}",
            headers=[
                ("Link", "<https://labs.test/a>; rel=next"),
                ("Link", "<https://labs.test/b>; rel=last"),
                ("Content-Type", "application/json"),
            ],
        )

        meta = ResponseMeta.from_response(response)

        assert meta.header("link") == (
            "<https://labs.test/a>; rel=next, <https://labs.test/b>; rel=last"
        )
        assert [name for name, _ in meta.headers].count("link") == 1


class TestEnvelopes:
    def test_default_envelope_is_zero_valued(self) -> None:
        envelope = ListResponse()
        assert envelope.data is None
        assert envelope.meta.is_empty

    def test_envelope_is_immutable(self) -> None:
        envelope = RewardsResponse(data=[], meta=ResponseMeta(status_code=200))
        with pytest.raises(ValidationError):
            envelope.data = None  # type: ignore[misc]

    def test_envelope_validates_data(self) -> None:
        envelope = ListResponse(data=[{"id": 1, "name": "S1"}])
        assert envelope.data == [Season(id=1, name="S1")]


class TestParseFunctions:
    def test_200_fills_json200(self) -> None:
        parsed = parse_get_season_list_response(json_response(200, {"data": [{"id": 1}]}))
        assert parsed.status_code == 200
        assert parsed.json200 is not None
        assert parsed.json200.data == [Season(id=1)]

    def test_non_200_leaves_json200_empty(self) -> None:
        parsed = parse_get_season_machine_active_response(json_response(401, {"message": "Unauthenticated."}))
        assert parsed.status_code == 401
        assert parsed.json200 is None
        assert b"Unauthenticated" in parsed.body

    def test_followers_default_to_empty_list(self) -> None:
        parsed = parse_get_season_user_followers_response(json_response(200, {"data": {}}))
        assert parsed.json200 is not None
        assert parsed.json200.data == SeasonUserFollowers(followers=[])

    def test_schema_mismatch_raises_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_get_season_list_response(json_response(200, {"data": "nope"}))


class TestErrors:
    @pytest.mark.parametrize(
        "error_cls",
        [ConfigurationError, RequestCancelledError, TransportError, DecodeError, UnexpectedStatusError],
    )
    def test_all_errors_extend_base(self, error_cls: type[HTBError]) -> None:
        exc = error_cls()
        assert isinstance(exc, HTBError)
        assert exc.message == error_cls.message
        assert exc.meta.is_empty
        assert exc.envelope is None

    def test_details_are_kept(self) -> None:
        exc = TransportError("down", endpoint="/v4/season/list")
        assert str(exc) == "down"
        assert exc.details == {"endpoint": "/v4/season/list"}

    def test_unexpected_status_exposes_status_code(self) -> None:
        exc = UnexpectedStatusError(meta=ResponseMeta(status_code=429))
        assert exc.status_code == 429
        assert isinstance(exc, DecodeError)

    def test_cancelled_reason(self) -> None:
        assert RequestCancelledError().reason == "cancelled"
        assert RequestCancelledError(reason="deadline_exceeded").reason == "deadline_exceeded"
