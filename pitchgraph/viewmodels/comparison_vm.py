from __future__ import annotations

import logging
from typing import List, Optional

from pitchgraph.adapters.api_errors import NetworkError
from pitchgraph.domain.players import MOCK_PLAYERS, PlayerData
from pitchgraph.domain.ports import NetworkCallingPort, UseCaseError
from pitchgraph.domain.search import QueryItem
from pitchgraph.usecases.error_mapping import map_network_error


class ComparisonVM:
    """Candidate lists for the two-player comparison screen."""

    def __init__(
        self,
        network_caller: NetworkCallingPort,
        *,
        player_search_url: str,
        player_data: Optional[List[PlayerData]] = None,
    ) -> None:
        self.network_caller = network_caller
        self.player_search_url = player_search_url
        self.player_data = player_data
        self.last_error: Optional[UseCaseError] = None
        self._log = logging.getLogger(__name__)

    async def call_for_player(self, name: str, *, is_debug: bool = False) -> Optional[List[PlayerData]]:
        if is_debug:
            self.player_data = list(MOCK_PLAYERS)
            return self.player_data
        try:
            url = self.network_caller.make_url(self.player_search_url, [QueryItem("name", name)])
            self.player_data = await self.network_caller.fetch_data(url, PlayerData.list_from_payload)
        except NetworkError as exc:
            self._log.info("Comparison search for %r failed: %s", name, exc)
            self.last_error = map_network_error(exc, default_code="COMPARISON_FAILED")
            return None
        self.last_error = None
        return self.player_data
