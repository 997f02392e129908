"""View models for the locally stored player lists.

``LastSearchedVM`` backs the "Last Searched" tab and ``FavouriteVM`` the
favourites list. Both re-fetch a full profile from the API when a row is
opened; a failed fetch leaves ``player_data`` untouched and records the
mapped error in ``last_error``.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from pitchgraph.adapters.api_errors import NetworkError
from pitchgraph.domain.players import LastSearchedPlayerInfo, PlayerData, PlayerInfo
from pitchgraph.domain.ports import EntityType, NetworkCallingPort, PlayerStorePort, UseCaseError
from pitchgraph.usecases.error_mapping import map_network_error


class _StoredPlayersVM:
    entity_type: EntityType = EntityType.PLAYER

    def __init__(
        self,
        player_store: PlayerStorePort,
        network_caller: NetworkCallingPort,
        *,
        player_search_url: str,
    ) -> None:
        self.player_store = player_store
        self.network_caller = network_caller
        self.player_search_url = player_search_url.rstrip("/")
        self.player_data: Optional[PlayerData] = None
        self.last_error: Optional[UseCaseError] = None
        self._log = logging.getLogger(__name__)

    async def call_for_player(self, player_id: str) -> Optional[PlayerData]:
        """Fetch the full profile for ``player_id`` into ``player_data``."""
        url = f"{self.player_search_url}/{player_id}"
        try:
            self.player_data = await self.network_caller.fetch_data(url, PlayerData.from_dict)
        except NetworkError as exc:
            self._log.info("Fetching player %s failed: %s", player_id, exc)
            self.last_error = map_network_error(exc, default_code="PLAYER_FETCH_FAILED")
            return None
        self.last_error = None
        return self.player_data

    def delete_all_player_info(self) -> None:
        self.player_store.delete_all(self.entity_type)


class LastSearchedVM(_StoredPlayersVM):
    entity_type = EntityType.LAST_SEARCHED

    def fetch_all_players(self) -> List[LastSearchedPlayerInfo]:
        return [
            record
            for record in self.player_store.fetch_all(EntityType.LAST_SEARCHED)
            if isinstance(record, LastSearchedPlayerInfo)
        ]

    def save_in_last_saved_list(self, player_info: LastSearchedPlayerInfo) -> None:
        self.player_store.save_player_info(player_info)


class FavouriteVM(_StoredPlayersVM):
    entity_type = EntityType.PLAYER

    def __init__(
        self,
        player_store: PlayerStorePort,
        network_caller: NetworkCallingPort,
        *,
        player_search_url: str,
    ) -> None:
        super().__init__(player_store, network_caller, player_search_url=player_search_url)
        self.players: List[PlayerInfo] = []

    def fetch_all_players(self) -> List[PlayerInfo]:
        self.players = [
            record
            for record in self.player_store.fetch_all(EntityType.PLAYER)
            if isinstance(record, PlayerInfo)
        ]
        return self.players
