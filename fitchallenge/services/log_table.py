from __future__ import annotations
import unicodedata
from dataclasses import dataclass
from typing import Any, Literal, Sequence, TypeVar
from pydantic import BaseModel

SortDirection = Literal["asc", "desc"]
NAME_FIELDS = ("participant", "username")
NUMERIC_FIELDS = ("points", "workout_points")

Row = TypeVar("Row", bound=BaseModel)


@dataclass(frozen=True)
class SortState:
    field: str = "participant"
    direction: SortDirection = "asc"

    def select(self, field: str) -> "SortState":
        # Same column flips; a new column starts descending
        if field == self.field:
            return SortState(field, "desc" if self.direction == "asc" else "asc")
        return SortState(field, "desc")


def resolve_sort(current: SortState, field: str | None = None, direction: SortDirection | None = None) -> SortState:
    """
    Next sort state for a header click.

    An explicit direction is taken as given; otherwise clicking `field` toggles
    against `current`. No field keeps the current state.
    """
    if field is None:
        return current if direction is None else SortState(current.field, direction)
    if direction is not None:
        return SortState(field, direction)
    return current.select(field)


def name_key(value: str) -> str:
    """Collation key for user names: accents folded next to their base letter, case ignored."""
    return unicodedata.normalize("NFKD", value).casefold()


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def sort_key(row: BaseModel, field: str):
    if field in NAME_FIELDS:
        return name_key(getattr(row, "username"))
    if field in NUMERIC_FIELDS:
        return getattr(row, field) or 0
    return _text(getattr(row, field, None))


def sort(logs: Sequence[Row], field: str, direction: SortDirection) -> list[Row]:
    """Order day-table rows by one column; rows with equal keys keep their relative order."""
    return sorted(logs, key=lambda row: sort_key(row, field), reverse=direction == "desc")
