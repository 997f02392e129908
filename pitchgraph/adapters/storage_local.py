from __future__ import annotations
import json, logging, os
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from pitchgraph.domain.players import LastSearchedPlayerInfo, PlayerData, PlayerInfo
from pitchgraph.domain.ports import EntityType, PlayerStorePort, PreferencesPort, StoredPlayer
from pitchgraph.domain.search import IntRange, SearchParameter, SortOption

T = TypeVar("T")

MAX_LAST_SEARCHED = 10
MAX_LAST_SEARCHED_PRO = 12


class PreferenceKey(str, Enum):
    PLAYER_DATA_1 = "playerData1"
    PLAYER_DATA_2 = "playerData2"
    HAS_LAUNCHED_BEFORE = "hasLaunchedBefore"
    SELECTED_SORT_OPTION = "selectedSortOption"
    AGE_RANGE_MIN = "ageRangeMin"
    AGE_RANGE_MAX = "ageRangeMax"
    ABILITY_RANGE_MIN = "abilityRangeMin"
    ABILITY_RANGE_MAX = "abilityRangeMax"
    POTENTIAL_RANGE_MIN = "potentialRangeMin"
    POTENTIAL_RANGE_MAX = "potentialRangeMax"
    ONBOARDING_PLAYED = "onboardingPlayed"
    SELECTED_OPTION_INDEX = "selectedOptionIndex"
    SETTINGS = "settings"


class PreferenceError(Exception):
    """Base class for preference store failures."""


class PreferenceNotFoundError(PreferenceError):
    pass


class PreferenceDecodingError(PreferenceError):
    pass


class PreferenceEncodingError(PreferenceError):
    pass


def _key_name(key: Any) -> str:
    return key.value if isinstance(key, Enum) else str(key)


class PreferencesLocal(PreferencesPort):
    """User preferences kept in one JSON document (``user_prefs.json``).

    Registered defaults live in memory only and never overwrite stored values.
    """

    _DEFAULT_SEARCH_VALUES: Dict[str, Any] = {
        PreferenceKey.AGE_RANGE_MIN.value: 0,
        PreferenceKey.AGE_RANGE_MAX.value: 60,
        PreferenceKey.ABILITY_RANGE_MIN.value: 0,
        PreferenceKey.ABILITY_RANGE_MAX.value: 200,
        PreferenceKey.POTENTIAL_RANGE_MIN.value: 0,
        PreferenceKey.POTENTIAL_RANGE_MAX.value: 200,
        PreferenceKey.SELECTED_SORT_OPTION.value: SortOption.NOTHING.value,
        PreferenceKey.SELECTED_OPTION_INDEX.value: 0,
    }

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir
        self.path = os.path.join(self.root, "user_prefs.json")
        self._defaults: Dict[str, Any] = {}
        self._values: Dict[str, Any] = self._read()
        self._log = logging.getLogger(__name__)

    # ---- raw access ----
    def _read(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}

    def _write(self) -> None:
        os.makedirs(self.root, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._values, f, ensure_ascii=False, indent=2, sort_keys=True)

    def _set(self, key: Any, value: Any) -> None:
        self._values[_key_name(key)] = value
        self._write()

    def load_raw(self, key: Any) -> Any:
        name = _key_name(key)
        if name in self._values:
            return self._values[name]
        return self._defaults.get(name)

    def _int(self, key: Any) -> int:
        value = self.load_raw(key)
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, int):
            return value
        try:
            return int(value)
        except (TypeError, ValueError):
            return 0

    def _bool(self, key: Any) -> bool:
        return bool(self.load_raw(key))

    # ---- launch / onboarding flags ----
    def mark_app_as_launched(self) -> None:
        self._set(PreferenceKey.HAS_LAUNCHED_BEFORE, True)

    def has_app_launched_before(self) -> bool:
        return self._bool(PreferenceKey.HAS_LAUNCHED_BEFORE)

    def mark_onboarding_as_played(self) -> None:
        self._set(PreferenceKey.ONBOARDING_PLAYED, True)

    def has_onboarding_played(self) -> bool:
        return self._bool(PreferenceKey.ONBOARDING_PLAYED)

    # ---- search parameters ----
    def register_default_search_parameters(self) -> None:
        self._defaults.update(self._DEFAULT_SEARCH_VALUES)

    def save_search_parameters(self, params: SearchParameter) -> None:
        self._values.update(
            {
                PreferenceKey.AGE_RANGE_MIN.value: params.age_range.lower,
                PreferenceKey.AGE_RANGE_MAX.value: params.age_range.upper,
                PreferenceKey.ABILITY_RANGE_MIN.value: params.ability_range.lower,
                PreferenceKey.ABILITY_RANGE_MAX.value: params.ability_range.upper,
                PreferenceKey.POTENTIAL_RANGE_MIN.value: params.potential_range.lower,
                PreferenceKey.POTENTIAL_RANGE_MAX.value: params.potential_range.upper,
                PreferenceKey.SELECTED_SORT_OPTION.value: params.sort_option.value,
            }
        )
        self._write()

    def load_search_parameters(self) -> SearchParameter:
        sort_option = SortOption.from_string(self.load_raw(PreferenceKey.SELECTED_SORT_OPTION))
        return SearchParameter(
            age_range=self._range(PreferenceKey.AGE_RANGE_MIN, PreferenceKey.AGE_RANGE_MAX),
            ability_range=self._range(PreferenceKey.ABILITY_RANGE_MIN, PreferenceKey.ABILITY_RANGE_MAX),
            potential_range=self._range(PreferenceKey.POTENTIAL_RANGE_MIN, PreferenceKey.POTENTIAL_RANGE_MAX),
            sort_option=sort_option or SortOption.NOTHING,
        )

    def _range(self, low_key: PreferenceKey, high_key: PreferenceKey) -> IntRange:
        low, high = self._int(low_key), self._int(high_key)
        if low > high:
            self._log.warning("Stored range %s=%s > %s=%s; swapping", low_key.value, low, high_key.value, high)
            low, high = high, low
        return IntRange(low, high)

    # ---- typed values ----
    def save(self, key: Any, value: Any) -> None:
        """Store any JSON-serializable value under ``key``."""
        try:
            json.dumps(value)
        except (TypeError, ValueError) as exc:
            raise PreferenceEncodingError(f"{_key_name(key)}: value is not JSON serializable") from exc
        self._set(key, value)

    def save_player_data(self, data: PlayerData, key: Any) -> None:
        self.save(key, data.to_dict())

    def load(self, key: Any, decode: Callable[[Any], T]) -> T:
        """Return ``decode(stored_value)``.

        Raises:
            PreferenceNotFoundError: Nothing stored under ``key``.
            PreferenceDecodingError: ``decode`` rejected the stored value.
        """
        name = _key_name(key)
        if name not in self._values:
            raise PreferenceNotFoundError(name)
        try:
            return decode(self._values[name])
        except (TypeError, ValueError, KeyError) as exc:
            raise PreferenceDecodingError(name) from exc

    def load_player_data(self, key: Any) -> PlayerData:
        return self.load(key, PlayerData.from_dict)

    def delete(self, key: Any) -> None:
        name = _key_name(key)
        if self._values.pop(name, None) is not None:
            self._write()

    # ---- selected option index (section, item) ----
    def save_selected_option_index(
        self, index: Tuple[int, int], key: Any = PreferenceKey.SELECTED_OPTION_INDEX
    ) -> None:
        self.save(key, [int(index[0]), int(index[1])])

    def load_selected_option_index(
        self, key: Any = PreferenceKey.SELECTED_OPTION_INDEX
    ) -> Optional[Tuple[int, int]]:
        try:
            return self.load(key, _decode_index_path)
        except PreferenceError as exc:
            self._log.debug("selected option index unavailable: %r", exc)
            return None


def _decode_index_path(value: Any) -> Tuple[int, int]:
    if not isinstance(value, list) or len(value) != 2:
        raise ValueError("index path must be a two-element list")
    section, item = value
    if not isinstance(section, int) or not isinstance(item, int):
        raise TypeError("index path entries must be integers")
    return section, item


class PlayerStoreLocal(PlayerStorePort):
    """Favourite and recently searched players kept in ``players.json``.

    Subscribers are notified after every mutation so displayed lists can
    refresh.
    """

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir
        self.path = os.path.join(self.root, "players.json")
        self._listeners: List[Callable[[], None]] = []
        self._log = logging.getLogger(__name__)

    # ---- file I/O ----
    def _read(self) -> Dict[str, List[Dict[str, Any]]]:
        empty: Dict[str, List[Dict[str, Any]]] = {kind.value: [] for kind in EntityType}
        if not os.path.exists(self.path):
            return empty
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            return empty
        for kind in EntityType:
            rows = data.get(kind.value)
            empty[kind.value] = [row for row in rows if isinstance(row, dict)] if isinstance(rows, list) else []
        return empty

    def _write(self, data: Dict[str, List[Dict[str, Any]]]) -> None:
        os.makedirs(self.root, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        self._notify()

    # ---- change notifications ----
    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        self._listeners.append(callback)

        def _unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return _unsubscribe

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()

    # ---- records ----
    @staticmethod
    def _entity_type_of(info: StoredPlayer) -> EntityType:
        if isinstance(info, LastSearchedPlayerInfo):
            return EntityType.LAST_SEARCHED
        if isinstance(info, PlayerInfo):
            return EntityType.PLAYER
        raise TypeError(f"Unsupported player record: {type(info).__name__}")

    @staticmethod
    def _decode(entity_type: EntityType, row: Dict[str, Any]) -> StoredPlayer:
        if entity_type is EntityType.LAST_SEARCHED:
            return LastSearchedPlayerInfo.from_dict(row)
        return PlayerInfo.from_dict(row)

    def save_player_info(self, info: StoredPlayer) -> None:
        entity_type = self._entity_type_of(info)
        data = self._read()
        rows = [
            row
            for row in data[entity_type.value]
            if info.player_id is None or row.get("playerId") != info.player_id
        ]
        rows.append(info.to_dict())
        data[entity_type.value] = rows
        self._write(data)

    def load_player_info(
        self, player_id: str, entity_type: EntityType = EntityType.PLAYER
    ) -> Optional[StoredPlayer]:
        for row in self._read()[entity_type.value]:
            if row.get("playerId") == player_id:
                return self._decode(entity_type, row)
        return None

    def is_player_favorited(self, player_id: str) -> bool:
        return self.load_player_info(player_id, EntityType.PLAYER) is not None

    def fetch_all(self, entity_type: EntityType) -> List[StoredPlayer]:
        records: List[StoredPlayer] = []
        for row in self._read()[entity_type.value]:
            try:
                records.append(self._decode(entity_type, row))
            except (TypeError, ValueError) as exc:
                self._log.warning("Skipping unreadable %s record: %s", entity_type.value, exc)
        if entity_type is EntityType.LAST_SEARCHED:
            records.sort(key=_searched_at, reverse=True)
        return records

    def delete_all(self, entity_type: EntityType) -> None:
        data = self._read()
        data[entity_type.value] = []
        self._write(data)

    def delete(self, entity_type: EntityType, player_id: str) -> None:
        data = self._read()
        data[entity_type.value] = [
            row for row in data[entity_type.value] if row.get("playerId") != player_id
        ]
        self._write(data)

    def exceeded_maximum_number_of_entries(self, is_pro: bool) -> bool:
        limit = MAX_LAST_SEARCHED_PRO if is_pro else MAX_LAST_SEARCHED
        return len(self._read()[EntityType.LAST_SEARCHED.value]) >= limit

    def delete_oldest_last_searched(self) -> None:
        data = self._read()
        rows = data[EntityType.LAST_SEARCHED.value]
        oldest_index: Optional[int] = None
        oldest_at = float("inf")
        for index, row in enumerate(rows):
            try:
                record = self._decode(EntityType.LAST_SEARCHED, row)
            except (TypeError, ValueError):
                continue
            stamp = _searched_at(record)
            if stamp <= oldest_at:
                oldest_index, oldest_at = index, stamp
        if oldest_index is None:
            return
        del rows[oldest_index]
        self._write(data)


def _searched_at(record: StoredPlayer) -> float:
    stamp = getattr(record, "last_searched", None)
    if stamp is None:
        return float("-inf")
    return stamp.timestamp()
