from __future__ import annotations
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol, Sequence, TypeVar, Union

from .players import LastSearchedPlayerInfo, PlayerData, PlayerInfo
from .search import QueryItem, SearchParameter

T = TypeVar("T")
Decoder = Callable[[Any], T]
StoredPlayer = Union[PlayerInfo, LastSearchedPlayerInfo]


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for view-model level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class EntityType(str, Enum):
    """Collections held by the player store."""

    PLAYER = "player"
    LAST_SEARCHED = "last_searched"


# ---- Ports (Hexagonal boundaries) ----
class NetworkCallingPort(Protocol):
    """Single GET + JSON decode against the player statistics API."""

    async def fetch_data(self, url: str, decode: Decoder[T]) -> T: ...
    def make_url(self, path: str, query_items: Sequence[QueryItem]) -> str: ...
    def search_parameters_to_query_items(self, params: SearchParameter) -> List[QueryItem]: ...


class NetworkServicePort(Protocol):
    """Connectivity probe returning the raw HTTP status code."""

    async def perform_network_check(self, url: str) -> int: ...


class PlayerStorePort(Protocol):
    """Persistence for favourite and recently searched players."""

    def save_player_info(self, info: StoredPlayer) -> None: ...
    def load_player_info(self, player_id: str, entity_type: EntityType) -> Optional[StoredPlayer]: ...
    def is_player_favorited(self, player_id: str) -> bool: ...
    def fetch_all(self, entity_type: EntityType) -> List[StoredPlayer]: ...
    def delete_all(self, entity_type: EntityType) -> None: ...
    def delete(self, entity_type: EntityType, player_id: str) -> None: ...
    def exceeded_maximum_number_of_entries(self, is_pro: bool) -> bool: ...
    def delete_oldest_last_searched(self) -> None: ...
    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]: ...


class PreferencesPort(Protocol):
    """Small scalar/config values kept across app launches."""

    def register_default_search_parameters(self) -> None: ...
    def save_search_parameters(self, params: SearchParameter) -> None: ...
    def load_search_parameters(self) -> SearchParameter: ...
    def mark_app_as_launched(self) -> None: ...
    def has_app_launched_before(self) -> bool: ...
    def mark_onboarding_as_played(self) -> None: ...
    def save_player_data(self, data: PlayerData, key: Any) -> None: ...
    def save(self, key: Any, value: Any) -> None: ...
    def load(self, key: Any, decode: Decoder[T]) -> T: ...
    def delete(self, key: Any) -> None: ...
