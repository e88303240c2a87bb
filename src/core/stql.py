"""STQL query building for topology component searches."""

import re
from typing import List, Tuple

from pydantic import BaseModel

from core.errors import (
    InvalidDirectionError,
    InvalidLevelsError,
    MissingBaseFilterError,
    NoFilterProvidedError,
)
from core.utils import split_values

NEIGHBOR_DIRECTIONS = ("up", "down", "both")
MAX_NEIGHBOR_LEVELS = 14
DEFAULT_NEIGHBOR_LEVELS = "1"
DEFAULT_NEIGHBOR_DIRECTION = "both"
_LEVELS = re.compile(r"[0-9]+")


def quote(value: str) -> str:
    """Double-quote a value for use inside an STQL IN list."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def in_clause(field: str, values: List[str]) -> str:
    """Render `field IN ("a", "b")`, or "" when there are no values."""
    if not values:
        return ""
    return f"{field} IN ({', '.join(quote(v) for v in values)})"


class ComponentFilter(BaseModel):
    """Filters accepted by the component search tools.

    Every filter takes comma-separated values. Neighbor expansion defaults to
    one level in both directions.
    """

    names: str = ""
    types: str = ""
    healthstates: str = ""
    layers: str = ""
    domains: str = ""
    with_neighbors: bool = False
    with_neighbors_levels: str = ""
    with_neighbors_direction: str = ""

    def fields(self) -> List[Tuple[str, List[str]]]:
        """STQL field names paired with their parsed values, in query order."""
        return [
            ("name", split_values(self.names)),
            ("type", split_values(self.types)),
            ("healthstate", split_values(self.healthstates)),
            ("layer", split_values(self.layers)),
            ("domain", split_values(self.domains)),
        ]

    def base_query(self) -> str:
        clauses = [in_clause(field, values) for field, values in self.fields()]
        return " AND ".join(clause for clause in clauses if clause)

    def to_stql(self) -> str:
        """Build the STQL expression for these filters.

        Raises:
            MissingBaseFilterError: Neighbors requested without any base filter.
            InvalidDirectionError: Unknown neighbor direction.
            InvalidLevelsError: Levels outside 1-14 and not 'all'.
            NoFilterProvidedError: No filter was given at all.
        """
        query = self.base_query()

        if self.with_neighbors:
            if not query:
                raise MissingBaseFilterError(
                    "with_neighbors requires at least one base filter (names, types, healthstates, layers or domains)"
                )
            levels = self.with_neighbors_levels.strip() or DEFAULT_NEIGHBOR_LEVELS
            direction = self.with_neighbors_direction.strip() or DEFAULT_NEIGHBOR_DIRECTION
            if direction not in NEIGHBOR_DIRECTIONS:
                raise InvalidDirectionError(
                    f"invalid with_neighbors_direction {direction!r}: must be one of up, down, both"
                )
            if not _valid_levels(levels):
                raise InvalidLevelsError(
                    f"invalid with_neighbors_levels {levels!r}: must be 1-{MAX_NEIGHBOR_LEVELS} or 'all'"
                )
            query = (
                f"{query} OR withNeighborsOf(components = ({query}), "
                f'levels = "{levels}", direction = "{direction}")'
            )

        if not query:
            raise NoFilterProvidedError(
                "at least one filter must be provided (names, types, healthstates, layers or domains)"
            )
        return query

    def describe(self) -> str:
        """Human readable summary of the filters that are set."""
        parts = [
            f"{field}: {', '.join(values)}" for field, values in self.fields() if values
        ]
        if self.with_neighbors:
            levels = self.with_neighbors_levels or DEFAULT_NEIGHBOR_LEVELS
            direction = self.with_neighbors_direction or DEFAULT_NEIGHBOR_DIRECTION
            parts.append(f"neighbors: {levels} level(s) {direction}")
        return "; ".join(parts)


def _valid_levels(levels: str) -> bool:
    if levels == "all":
        return True
    return _LEVELS.fullmatch(levels) is not None and 1 <= int(levels) <= MAX_NEIGHBOR_LEVELS
