from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from pitchgraph.adapters.api_errors import NetworkError
from pitchgraph.domain.players import MOCK_PLAYERS, PlayerData
from pitchgraph.domain.ports import NetworkCallingPort, UseCaseError
from pitchgraph.domain.search import QueryItem, SearchParameter
from pitchgraph.usecases.error_mapping import map_network_error


class SearchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class SearchState:
    """Snapshot of the search screen state."""

    status: SearchStatus = SearchStatus.IDLE
    players: Tuple[PlayerData, ...] = ()
    error: Optional[UseCaseError] = None


class PlayerSearchVM:
    """Player search state machine: idle -> loading -> success | failed."""

    def __init__(
        self,
        network_caller: NetworkCallingPort,
        *,
        base_url: str,
        on_state: Optional[Callable[[SearchState], None]] = None,
    ) -> None:
        self.network_caller = network_caller
        self.base_url = base_url
        self.on_state = on_state
        self.state = SearchState()
        self.player_data: List[PlayerData] = []
        self.name: Optional[str] = None
        self._log = logging.getLogger(__name__)

    def _set_state(self, state: SearchState) -> None:
        self.state = state
        if self.on_state:
            self.on_state(state)

    async def get_players(
        self,
        name: str,
        search_parameters: Optional[SearchParameter] = None,
        *,
        is_debug: bool = False,
    ) -> SearchState:
        self.name = name
        self._set_state(SearchState(status=SearchStatus.LOADING))
        if is_debug:
            self.fetch_mock_data()
        else:
            await self.fetch_player_data(name, search_parameters)
        return self.state

    def fetch_mock_data(self) -> None:
        self.player_data = list(MOCK_PLAYERS)
        self._set_state(SearchState(status=SearchStatus.SUCCESS, players=MOCK_PLAYERS))

    async def fetch_player_data(
        self, name: str, search_parameters: Optional[SearchParameter] = None
    ) -> None:
        try:
            url = self.network_caller.make_url(
                self.base_url, self.make_query_items(name, search_parameters)
            )
            players = await self.network_caller.fetch_data(url, PlayerData.list_from_payload)
        except NetworkError as exc:
            self._log.info("Player search for %r failed: %s", name, exc)
            error = map_network_error(exc, default_code="SEARCH_FAILED")
            self._set_state(SearchState(status=SearchStatus.FAILED, error=error))
            return
        self.player_data = list(players)
        self._set_state(SearchState(status=SearchStatus.SUCCESS, players=tuple(players)))

    def make_query_items(
        self, name: str, search_parameters: Optional[SearchParameter]
    ) -> List[QueryItem]:
        items = [QueryItem("name", name)]
        if search_parameters is not None:
            items.extend(self.network_caller.search_parameters_to_query_items(search_parameters))
        return items

    def clear_players(self) -> None:
        self.player_data.clear()
        self._set_state(SearchState())
