from __future__ import annotations

import asyncio
from typing import Any, List, Optional

import pytest
from requests import exceptions as req_exc

from pitchgraph.adapters.api_errors import (
    InvalidDataError,
    InvalidInputsError,
    InvalidResponseError,
    UnableToCompleteError,
)
from pitchgraph.adapters.http_client import API_HOST, ApiSession, HttpConfig
from pitchgraph.adapters.network_caller import NetworkCaller
from pitchgraph.domain.players import PlayerData
from pitchgraph.domain.search import IntRange, QueryItem, SearchParameter, SortOption


class ResponseStub:
    def __init__(self, status_code: Any = 200, body: Any = None, *, json_error: Optional[Exception] = None) -> None:
        self.status_code = status_code
        self._body = body
        self._json_error = json_error
        self.text = "" if body is None else str(body)

    def json(self) -> Any:
        if self._json_error is not None:
            raise self._json_error
        return self._body


class SessionStub:
    def __init__(self, response: Optional[ResponseStub] = None, exc: Optional[Exception] = None) -> None:
        self.response = response
        self.exc = exc
        self.calls: List[tuple] = []

    def send(self, prepared, timeout=None):
        self.calls.append((prepared, timeout))
        if self.exc is not None:
            raise self.exc
        return self.response


def make_caller(response: Optional[ResponseStub] = None, exc: Optional[Exception] = None):
    session = SessionStub(response=response, exc=exc)
    http = ApiSession(HttpConfig(api_key="secret-key"), session=session)
    return NetworkCaller(http), session


def test_fetch_data_sends_single_get_with_api_headers() -> None:
    caller, session = make_caller(ResponseStub(200, {"value": 42}))

    result = asyncio.run(caller.fetch_data("https://api.example.test/players", lambda body: body["value"]))

    assert result == 42
    assert len(session.calls) == 1
    prepared, timeout = session.calls[0]
    assert prepared.method == "GET"
    assert prepared.url == "https://api.example.test/players"
    assert prepared.headers["X-RapidAPI-Key"] == "secret-key"
    assert prepared.headers["X-RapidAPI-Host"] == API_HOST
    assert timeout == 10.0


@pytest.mark.parametrize("url", ["", "not a url", "players", "ftp://files.example.test/x", "https://"])
def test_invalid_url_raises_before_any_request(url: str) -> None:
    caller, session = make_caller(ResponseStub(200, {}))

    with pytest.raises(InvalidInputsError):
        asyncio.run(caller.fetch_data(url, lambda body: body))

    assert session.calls == []


@pytest.mark.parametrize("status", [201, 204, 301, 404, 500])
def test_non_200_status_is_invalid_response_without_retry(status: int) -> None:
    caller, session = make_caller(ResponseStub(status, {"message": "nope"}))

    with pytest.raises(InvalidResponseError) as excinfo:
        asyncio.run(caller.fetch_data("https://api.example.test/players", lambda body: body))

    assert excinfo.value.status == status
    assert excinfo.value.payload == {"message": "nope"}
    assert len(session.calls) == 1


def test_response_without_status_code_is_invalid_response() -> None:
    caller, _ = make_caller(ResponseStub(None, {}))

    with pytest.raises(InvalidResponseError):
        asyncio.run(caller.fetch_data("https://api.example.test/players", lambda body: body))


def test_non_json_body_is_invalid_data() -> None:
    caller, _ = make_caller(ResponseStub(200, json_error=ValueError("Expecting value")))

    with pytest.raises(InvalidDataError) as excinfo:
        asyncio.run(caller.fetch_data("https://api.example.test/players", lambda body: body))

    assert str(excinfo.value) == "Invalid data received from server. Please retry."


def test_decoder_rejecting_shape_is_invalid_data() -> None:
    caller, _ = make_caller(ResponseStub(200, {"playerId": "1"}))

    with pytest.raises(InvalidDataError):
        asyncio.run(caller.fetch_data("https://api.example.test/players", PlayerData.list_from_payload))


@pytest.mark.parametrize(
    "decode",
    [lambda body: body["value"].upper(), lambda body: body["items"][0]],
    ids=["attribute-error", "index-error"],
)
def test_any_decoder_failure_is_invalid_data(decode) -> None:
    caller, _ = make_caller(ResponseStub(200, {"value": 3, "items": []}))

    with pytest.raises(InvalidDataError):
        asyncio.run(caller.fetch_data("https://api.example.test/players", decode))


def test_unparseable_url_is_invalid_inputs_before_any_request() -> None:
    caller, session = make_caller(ResponseStub(200, {}))

    with pytest.raises(InvalidInputsError):
        asyncio.run(caller.fetch_data("https://[oops/players", lambda body: body))

    assert session.calls == []


@pytest.mark.parametrize(
    "exc, reason",
    [
        (req_exc.Timeout("read timed out"), "timed_out"),
        (req_exc.ConnectionError("[Errno 101] Network is unreachable"), "not_connected"),
        (req_exc.ConnectionError("Connection refused"), "cannot_connect"),
        (req_exc.TooManyRedirects("loop"), "other"),
    ],
)
def test_transport_failure_is_unable_to_complete(exc: Exception, reason: str) -> None:
    caller, _ = make_caller(exc=exc)

    with pytest.raises(UnableToCompleteError) as excinfo:
        asyncio.run(caller.fetch_data("https://api.example.test/players", lambda body: body))

    assert excinfo.value.reason == reason
    assert excinfo.value.context == "GET https://api.example.test/players"


def test_make_url_replaces_query_and_keeps_item_order() -> None:
    caller, _ = make_caller()

    url = caller.make_url(
        "https://api.example.test/players?stale=1",
        [QueryItem("name", "Heung Min"), QueryItem("minAge", "18"), QueryItem("orderBy", "age-asc")],
    )

    assert url == "https://api.example.test/players?name=Heung%20Min&minAge=18&orderBy=age-asc"


@pytest.mark.parametrize("path", ["players", "/players", "mailto:someone@example.test"])
def test_make_url_rejects_non_absolute_urls(path: str) -> None:
    caller, _ = make_caller()

    with pytest.raises(InvalidInputsError):
        caller.make_url(path, [QueryItem("name", "x")])


def test_age_ascending_search_produces_seven_items_and_query_string() -> None:
    caller, _ = make_caller()
    params = SearchParameter(
        age_range=IntRange(18, 30),
        ability_range=IntRange(0, 200),
        potential_range=IntRange(0, 200),
        sort_option=SortOption.AGE_ASCENDING,
    )

    items = caller.search_parameters_to_query_items(params)

    assert items == [
        QueryItem("minAge", "18"),
        QueryItem("maxAge", "30"),
        QueryItem("minCa", "0"),
        QueryItem("maxCa", "200"),
        QueryItem("minPa", "0"),
        QueryItem("maxPa", "200"),
        QueryItem("orderBy", "age-asc"),
    ]
    assert caller.make_url("https://api.example.test/players", items).endswith(
        "?minAge=18&maxAge=30&minCa=0&maxCa=200&minPa=0&maxPa=200&orderBy=age-asc"
    )


def test_search_players_puts_name_first_and_decodes_list() -> None:
    body = [
        {"playerId": "89063073", "name": "Kim Min-Jae", "currentAbility": 162, "nationalities": ["KOR"]},
        {"playerId": "92020288", "name": "Heung-Min Son", "club": "Tottenham"},
    ]
    caller, session = make_caller(ResponseStub(200, body))
    params = SearchParameter(IntRange(20, 35), IntRange(100, 200), IntRange(150, 200))

    players = asyncio.run(caller.search_players("Kim", params))

    assert [p.player_id for p in players] == ["89063073", "92020288"]
    assert players[0].nationalities == ["KOR"]
    prepared, _ = session.calls[0]
    assert prepared.url == (
        f"https://{API_HOST}/players?name=Kim&minAge=20&maxAge=35&minCa=100&maxCa=200&minPa=150&maxPa=200"
    )


def test_fetch_player_requests_player_path() -> None:
    caller, session = make_caller(ResponseStub(200, {"playerId": "7458500", "name": "Lionel Messi"}))

    player = asyncio.run(caller.fetch_player("7458500"))

    assert player.name == "Lionel Messi"
    prepared, _ = session.calls[0]
    assert prepared.url == f"https://{API_HOST}/players/7458500"


def test_rejected_status_is_logged_compactly(caplog: pytest.LogCaptureFixture) -> None:
    caller, _ = make_caller(ResponseStub(503, {"message": "down"}))

    with caplog.at_level("INFO", logger="pitchgraph.adapters.network_caller"):
        with pytest.raises(InvalidResponseError):
            asyncio.run(caller.fetch_data("https://api.example.test/players", lambda body: body))

    assert "InvalidResponseError GET https://api.example.test/players HTTP 503" in caplog.text
