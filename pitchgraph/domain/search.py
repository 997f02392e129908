"""Search criteria value objects and their query-string translation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional


class SortOption(str, Enum):
    """Ordering criteria offered by the player search.

    ``NOTHING`` is the default until the user picks an ordering.
    """

    AGE_ASCENDING = "age (ascending)"
    AGE_DESCENDING = "age (descending)"
    CURRENT_ABILITY_ASCENDING = "current ability (ascending)"
    CURRENT_ABILITY_DESCENDING = "current ability (descending)"
    POTENTIAL_ABILITY_ASCENDING = "potential ability (ascending)"
    POTENTIAL_ABILITY_DESCENDING = "potential ability (descending)"
    NOTHING = "nothing"

    @classmethod
    def from_string(cls, value: Optional[str]) -> Optional["SortOption"]:
        for option in cls:
            if option.value == value:
                return option
        return None


_ORDER_BY_VALUES = {
    SortOption.AGE_ASCENDING: "age-asc",
    SortOption.AGE_DESCENDING: "age-desc",
    SortOption.CURRENT_ABILITY_ASCENDING: "currentAbility-asc",
    SortOption.CURRENT_ABILITY_DESCENDING: "currentAbility-desc",
    SortOption.POTENTIAL_ABILITY_ASCENDING: "potentialAbility-asc",
    SortOption.POTENTIAL_ABILITY_DESCENDING: "potentialAbility-desc",
}


class QueryItem(NamedTuple):
    """Single ``name=value`` pair of a URL query string."""

    name: str
    value: str


@dataclass(frozen=True)
class IntRange:
    """Closed (inclusive) integer range."""

    lower: int
    upper: int

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            raise ValueError(f"IntRange lower bound {self.lower} exceeds upper bound {self.upper}.")

    def __contains__(self, value: object) -> bool:
        return isinstance(value, int) and self.lower <= value <= self.upper


@dataclass(frozen=True)
class SearchParameter:
    """Criteria used when searching players."""

    age_range: IntRange
    """Inclusive age bounds."""
    ability_range: IntRange
    """Inclusive current-ability bounds."""
    potential_range: IntRange
    """Inclusive potential-ability bounds."""
    sort_option: SortOption = SortOption.NOTHING
    """Requested ordering of the results."""


def sort_option_to_string(sort_option: SortOption) -> str:
    """Return the ``orderBy`` value for ``sort_option`` or ``""`` when unmapped."""
    return _ORDER_BY_VALUES.get(sort_option, "")


def search_parameters_to_query_items(params: SearchParameter) -> List[QueryItem]:
    """Translate search criteria into ordered query items.

    The six range bounds are always emitted in a fixed order; ``orderBy`` is
    appended only when a sort option other than ``NOTHING`` is selected.
    """
    items = [
        QueryItem("minAge", str(params.age_range.lower)),
        QueryItem("maxAge", str(params.age_range.upper)),
        QueryItem("minCa", str(params.ability_range.lower)),
        QueryItem("maxCa", str(params.ability_range.upper)),
        QueryItem("minPa", str(params.potential_range.lower)),
        QueryItem("maxPa", str(params.potential_range.upper)),
    ]
    if params.sort_option != SortOption.NOTHING:
        items.append(QueryItem("orderBy", sort_option_to_string(params.sort_option)))
    return items


__all__ = [
    "IntRange",
    "QueryItem",
    "SearchParameter",
    "SortOption",
    "search_parameters_to_query_items",
    "sort_option_to_string",
]
