"""Use case for adding a player to the bounded last-searched history."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from pitchgraph.domain.players import LastSearchedPlayerInfo, PlayerData
from pitchgraph.domain.ports import EntityType, PlayerStorePort, UseCaseError


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RecordLastSearched:
    """Evict the oldest entry when the history is full, then save the new one.

    Re-recording a player already in the history replaces its entry.
    """

    player_store: PlayerStorePort
    clock: Callable[[], datetime] = _utc_now

    def __call__(
        self,
        player: PlayerData | LastSearchedPlayerInfo,
        *,
        is_pro: bool = False,
    ) -> LastSearchedPlayerInfo:
        entry = self._entry_for(player)
        if not entry.player_id:
            raise UseCaseError("LAST_SEARCHED_NO_ID", "Player has no identifier.")
        already_listed = self.player_store.load_player_info(entry.player_id, EntityType.LAST_SEARCHED)
        if already_listed is None and self.player_store.exceeded_maximum_number_of_entries(is_pro):
            self.player_store.delete_oldest_last_searched()
        self.player_store.save_player_info(entry)
        return entry

    def _entry_for(self, player: PlayerData | LastSearchedPlayerInfo) -> LastSearchedPlayerInfo:
        if isinstance(player, LastSearchedPlayerInfo):
            if player.last_searched is not None:
                return player
            return LastSearchedPlayerInfo(
                player_id=player.player_id,
                name=player.name,
                nationality=player.nationality,
                club=player.club,
                last_searched=self.clock(),
            )
        nationality: Optional[str] = player.nationalities[0] if player.nationalities else None
        return LastSearchedPlayerInfo(
            player_id=player.player_id,
            name=player.name,
            nationality=nationality,
            club=player.club,
            last_searched=self.clock(),
        )


__all__ = ["RecordLastSearched"]
