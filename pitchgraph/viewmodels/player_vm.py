from __future__ import annotations

from typing import Optional

from pitchgraph.domain.players import LastSearchedPlayerInfo, PlayerData, PlayerInfo
from pitchgraph.domain.ports import EntityType, PlayerStorePort, StoredPlayer
from pitchgraph.usecases.record_last_searched import RecordLastSearched


class PlayerVM:
    """Profile screen state for one player plus favourite bookkeeping."""

    def __init__(self, player_store: PlayerStorePort) -> None:
        self.player_store = player_store
        self.player_data: Optional[PlayerData] = None
        self._record_last_searched = RecordLastSearched(player_store)

    def give_player_data(self, player_data: Optional[PlayerData]) -> None:
        self.player_data = player_data

    def load_player_info(self) -> Optional[StoredPlayer]:
        if self.player_data is None or not self.player_data.player_id:
            return None
        return self.player_store.load_player_info(self.player_data.player_id, EntityType.PLAYER)

    def is_player_favorited(self) -> bool:
        if self.player_data is None or not self.player_data.player_id:
            return False
        return self.player_store.is_player_favorited(self.player_data.player_id)

    def delete_player_info(self, player_id: str) -> None:
        self.player_store.delete(EntityType.PLAYER, player_id)

    def save_player_info(self, info: PlayerInfo | LastSearchedPlayerInfo) -> None:
        self.player_store.save_player_info(info)

    def toggle_favourite(self) -> bool:
        """Add or remove the current player from favourites; return the new flag."""
        if self.player_data is None or not self.player_data.player_id:
            return False
        if self.is_player_favorited():
            self.delete_player_info(self.player_data.player_id)
            return False
        self.save_player_info(self.player_data.to_player_info())
        return True

    def manage_last_searched_players_and_update(
        self, new_player_info: LastSearchedPlayerInfo | PlayerData, *, is_pro: bool
    ) -> LastSearchedPlayerInfo:
        return self._record_last_searched(new_player_info, is_pro=is_pro)
