"""Generic fetch-and-decode client for the player statistics API.

Every call issues exactly one GET with the static API headers; there is no
caching, retrying or request de-duplication. Decoding is delegated to a
caller-supplied function so any payload shape can be requested.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, List, Optional, Sequence, TypeVar
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

from pitchgraph.adapters.api_errors import (
    InvalidDataError,
    InvalidInputsError,
    InvalidResponseError,
    describe,
    parse_error_payload,
)
from pitchgraph.adapters.http_client import ApiSession, BASE_URL_PLAYER_SEARCH, HttpConfig, RequestSpec
from pitchgraph.domain.players import PlayerData
from pitchgraph.domain.search import (
    QueryItem,
    SearchParameter,
    search_parameters_to_query_items,
)

T = TypeVar("T")

_OK = 200


class NetworkCaller:
    """Fetch JSON documents and decode them into caller-chosen types."""

    def __init__(self, http: ApiSession) -> None:
        self.http = http
        self._log = logging.getLogger(__name__)

    @classmethod
    def from_config(cls, cfg: HttpConfig) -> "NetworkCaller":
        return cls(ApiSession(cfg))

    async def fetch_data(self, url: str, decode: Callable[[Any], T]) -> T:
        """GET ``url`` and return ``decode(json_body)``.

        Raises:
            InvalidInputsError: ``url`` is not a valid absolute http(s) URL.
                Raised before any request is sent.
            UnableToCompleteError: The transport could not complete.
            InvalidResponseError: The status code is not exactly 200.
            InvalidDataError: The body is not JSON or ``decode`` rejects it.
        """
        spec = self.http.spec_for(url)
        prepared = self.http.prepare(spec)
        response = await asyncio.to_thread(self.http.send, prepared, spec)

        status = getattr(response, "status_code", None)
        if not isinstance(status, int) or status != _OK:
            payload = parse_error_payload(response) if isinstance(status, int) else None
            error = InvalidResponseError(status=status, context=spec.context, payload=payload)
            self._log.info("%s", describe(error))
            raise error

        try:
            body = response.json()
        except ValueError as exc:
            raise self._invalid_data(spec, exc) from exc
        try:
            return decode(body)
        except Exception as exc:
            raise self._invalid_data(spec, exc) from exc

    def _invalid_data(self, spec: RequestSpec, cause: Exception) -> InvalidDataError:
        error = InvalidDataError(context=spec.context)
        self._log.info("%s: %r", describe(error), cause)
        return error

    def make_url(self, path: str, query_items: Sequence[QueryItem]) -> str:
        """Attach ``query_items`` in order to ``path``, replacing any query.

        Raises:
            InvalidInputsError: The composition is not an absolute http(s) URL.
        """
        try:
            parts = urlsplit(path)
        except (TypeError, ValueError, AttributeError) as exc:
            raise InvalidInputsError(context=f"make_url {path!r}") from exc
        if parts.scheme.lower() not in ("http", "https") or not parts.hostname:
            raise InvalidInputsError(context=f"make_url {path!r}")
        query = urlencode([(item.name, item.value) for item in query_items], quote_via=quote)
        return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))

    def search_parameters_to_query_items(self, params: SearchParameter) -> List[QueryItem]:
        return search_parameters_to_query_items(params)

    # ---- Player endpoints ----
    def player_url(self, player_id: str) -> str:
        return f"{BASE_URL_PLAYER_SEARCH}/{quote(str(player_id), safe='')}"

    def search_url(self, name: str, params: Optional[SearchParameter] = None) -> str:
        items = [QueryItem("name", name)]
        if params is not None:
            items.extend(self.search_parameters_to_query_items(params))
        return self.make_url(BASE_URL_PLAYER_SEARCH, items)

    async def fetch_player(self, player_id: str) -> PlayerData:
        return await self.fetch_data(self.player_url(player_id), PlayerData.from_dict)

    async def search_players(
        self, name: str, params: Optional[SearchParameter] = None
    ) -> List[PlayerData]:
        return await self.fetch_data(self.search_url(name, params), PlayerData.list_from_payload)


__all__ = ["NetworkCaller"]
