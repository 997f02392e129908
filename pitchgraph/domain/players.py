"""Player records returned by the statistics API and kept in local storage."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

AttributeScores = Dict[str, int]

ATTRIBUTE_CATEGORIES = ("technicals", "mentals", "physicals", "goalkeeping", "hidden")


def _require_mapping(payload: Any, label: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise TypeError(f"{label}: expected object, got {type(payload).__name__}")
    return payload


def _opt_str(payload: Mapping[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"{key}: expected string, got {type(value).__name__}")
    return value


def _opt_int(payload: Mapping[str, Any], key: str) -> Optional[int]:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{key}: expected integer, got {type(value).__name__}")
    return value


def _opt_str_list(payload: Mapping[str, Any], key: str) -> Optional[List[str]]:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise TypeError(f"{key}: expected list of strings")
    return list(value)


def _opt_attributes(payload: Mapping[str, Any]) -> Optional[Dict[str, AttributeScores]]:
    value = payload.get("attributes")
    if value is None:
        return None
    raw = _require_mapping(value, "attributes")
    attributes: Dict[str, AttributeScores] = {}
    for category in ATTRIBUTE_CATEGORIES:
        scores = raw.get(category)
        if scores is None:
            continue
        scores = _require_mapping(scores, f"attributes.{category}")
        for name in scores:
            _opt_int(scores, name)
        attributes[category] = dict(scores)
    return attributes


def _opt_datetime(payload: Mapping[str, Any], key: str) -> Optional[datetime]:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise TypeError(f"{key}: expected ISO timestamp string")
    return datetime.fromisoformat(value)


@dataclass(frozen=True)
class PlayerData:
    """Full player profile as delivered by the ``/players`` endpoints.

    Every field is optional because the upstream API omits unknown values.
    """

    player_id: Optional[str] = None
    name: Optional[str] = None
    age: Optional[str] = None
    current_ability: Optional[int] = None
    potential_ability: Optional[str] = None
    club: Optional[str] = None
    min_potential_ability: Optional[int] = None
    max_potential_ability: Optional[int] = None
    nationalities: Optional[List[str]] = None
    positions: Optional[List[str]] = None
    asking_price: Optional[str] = None
    contract_length: Optional[str] = None
    personality: Optional[str] = None
    search_string: Optional[str] = None
    reputation: Optional[int] = None
    strong_foot: Optional[str] = None
    attributes: Optional[Dict[str, AttributeScores]] = field(default=None, compare=False)

    @classmethod
    def from_dict(cls, payload: Any) -> "PlayerData":
        """Decode one API object; raises ``TypeError`` on shape mismatches."""
        data = _require_mapping(payload, "player")
        return cls(
            player_id=_opt_str(data, "playerId"),
            name=_opt_str(data, "name"),
            age=_opt_str(data, "age"),
            current_ability=_opt_int(data, "currentAbility"),
            potential_ability=_opt_str(data, "potentialAbility"),
            club=_opt_str(data, "club"),
            min_potential_ability=_opt_int(data, "minPotentialAbility"),
            max_potential_ability=_opt_int(data, "maxPotentialAbility"),
            nationalities=_opt_str_list(data, "nationalities"),
            positions=_opt_str_list(data, "positions"),
            asking_price=_opt_str(data, "askingPrice"),
            contract_length=_opt_str(data, "contractLength"),
            personality=_opt_str(data, "personality"),
            search_string=_opt_str(data, "searchString"),
            reputation=_opt_int(data, "reputation"),
            strong_foot=_opt_str(data, "strongFoot"),
            attributes=_opt_attributes(data),
        )

    @classmethod
    def list_from_payload(cls, payload: Any) -> List["PlayerData"]:
        """Decode a JSON array of player objects."""
        if not isinstance(payload, list):
            raise TypeError(f"players: expected array, got {type(payload).__name__}")
        return [cls.from_dict(entry) for entry in payload]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "playerId": self.player_id,
            "name": self.name,
            "age": self.age,
            "currentAbility": self.current_ability,
            "potentialAbility": self.potential_ability,
            "club": self.club,
            "minPotentialAbility": self.min_potential_ability,
            "maxPotentialAbility": self.max_potential_ability,
            "nationalities": list(self.nationalities) if self.nationalities is not None else None,
            "positions": list(self.positions) if self.positions is not None else None,
            "askingPrice": self.asking_price,
            "contractLength": self.contract_length,
            "personality": self.personality,
            "searchString": self.search_string,
            "reputation": self.reputation,
            "strongFoot": self.strong_foot,
            "attributes": self.attributes,
        }

    def score(self, category: str, attribute: str) -> int:
        """Return one attribute score, ``0`` when unknown."""
        return (self.attributes or {}).get(category, {}).get(attribute, 0)

    def to_player_info(self) -> "PlayerInfo":
        nationality = self.nationalities[0] if self.nationalities else None
        return PlayerInfo(
            player_id=self.player_id,
            name=self.name,
            nationality=nationality,
            club=self.club,
        )


@dataclass(frozen=True)
class PlayerInfo:
    """Compact favourite-player record kept in the player store."""

    player_id: Optional[str] = None
    name: Optional[str] = None
    nationality: Optional[str] = None
    club: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Any) -> "PlayerInfo":
        data = _require_mapping(payload, "player_info")
        return cls(
            player_id=_opt_str(data, "playerId"),
            name=_opt_str(data, "name"),
            nationality=_opt_str(data, "nationality"),
            club=_opt_str(data, "club"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "playerId": self.player_id,
            "name": self.name,
            "nationality": self.nationality,
            "club": self.club,
        }


@dataclass(frozen=True)
class LastSearchedPlayerInfo:
    """History entry for a player profile the user opened."""

    player_id: Optional[str] = None
    name: Optional[str] = None
    nationality: Optional[str] = None
    club: Optional[str] = None
    last_searched: Optional[datetime] = None

    @classmethod
    def from_dict(cls, payload: Any) -> "LastSearchedPlayerInfo":
        data = _require_mapping(payload, "last_searched")
        return cls(
            player_id=_opt_str(data, "playerId"),
            name=_opt_str(data, "name"),
            nationality=_opt_str(data, "nationality"),
            club=_opt_str(data, "club"),
            last_searched=_opt_datetime(data, "lastSearched"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "playerId": self.player_id,
            "name": self.name,
            "nationality": self.nationality,
            "club": self.club,
            "lastSearched": self.last_searched.isoformat() if self.last_searched else None,
        }


MOCK_PLAYERS: tuple[PlayerData, ...] = (
    PlayerData(
        player_id="7458500",
        name="Lionel Messi",
        age="35",
        current_ability=180,
        potential_ability="200",
        club="PSG",
        nationalities=["ARG", "ESP"],
        positions=["AM (RC)", "ST (C)"],
        asking_price="€76M",
        contract_length="30/6/2023",
        personality="Driven",
        search_string="Lionel Messi",
        reputation=200,
        strong_foot="Left",
    ),
    PlayerData(
        player_id="67201634",
        name="André Onana",
        age="27",
        current_ability=153,
        potential_ability="160",
        club="Man UFC",
    ),
    PlayerData(
        player_id="92020288",
        name="Heung-Min Son",
        age="31",
        current_ability=169,
        potential_ability="173",
        club="Tottenham",
    ),
    PlayerData(
        player_id="43252073",
        name="Gianluigi Donnarumma",
        age="24",
        current_ability=160,
        potential_ability="169",
        club="Paris SG",
    ),
    PlayerData(
        player_id="89063073",
        name="Kim Min-Jae",
        age="26",
        current_ability=162,
        min_potential_ability=165,
        max_potential_ability=165,
        potential_ability="165",
        club="FC Bayern",
        nationalities=["KOR"],
        positions=["D (C)"],
    ),
)
