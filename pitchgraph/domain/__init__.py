"""Domain package exports for value objects and ports."""

from .navigation import NavigationStack, Screen, TabItem
from .players import LastSearchedPlayerInfo, MOCK_PLAYERS, PlayerData, PlayerInfo
from .ports import EntityType, UseCaseError
from .search import (
    IntRange,
    QueryItem,
    SearchParameter,
    SortOption,
    search_parameters_to_query_items,
    sort_option_to_string,
)

__all__ = [
    "EntityType",
    "IntRange",
    "LastSearchedPlayerInfo",
    "MOCK_PLAYERS",
    "NavigationStack",
    "PlayerData",
    "PlayerInfo",
    "QueryItem",
    "Screen",
    "SearchParameter",
    "SortOption",
    "TabItem",
    "UseCaseError",
    "search_parameters_to_query_items",
    "sort_option_to_string",
]
