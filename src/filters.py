"""Filtering logic for soccer field listings."""

from collections.abc import Iterable, Mapping
from typing import Any

from models import FilterSelection, SoccerField

FEATURED_FIELD_IDS = (1, 2, 3)


def _read(field: SoccerField | Mapping[str, Any], key: str) -> Any:
    if isinstance(field, Mapping):
        return field.get(key)
    return getattr(field, key, None)


def _text(field: SoccerField | Mapping[str, Any], key: str) -> str:
    value = _read(field, key)
    return value if isinstance(value, str) else ""


def _is_record(field: Any) -> bool:
    return isinstance(field, (SoccerField, Mapping))


class FieldFilter:
    """Filter fields based on a filter selection and a search term."""

    def __init__(self, selection: FilterSelection | None = None):
        self.selection = selection or FilterSelection()

    def matches(self, field: SoccerField | Mapping[str, Any], search_term: str = "") -> bool:
        """Check if a field satisfies the search term and every active filter."""
        selection = self.selection

        # Search: name, address or borough contains the term
        term = (search_term or "").strip().lower()
        if term:
            haystacks = (
                _text(field, "name").lower(),
                _text(field, "address").lower(),
                _text(field, "borough").lower(),
            )
            if not any(term in h for h in haystacks):
                return False

        if selection.type != FilterSelection.ALL:
            if _text(field, "surface_type") != selection.type:
                return False

        if selection.size != FilterSelection.ALL:
            if _text(field, "format") != selection.size:
                return False

        # Absent amenity values count as False
        for amenity in ("lighting", "parking", "accessibility"):
            wanted = getattr(selection, amenity)
            if wanted is not None and bool(_read(field, amenity)) != bool(wanted):
                return False

        if selection.borough != FilterSelection.ALL_BOROUGHS:
            if _text(field, "borough").lower() != (selection.borough or "").lower():
                return False

        return True

    def filter_fields(self, fields: Iterable[Any], search_term: str = "") -> list:
        """Return the matching fields in input order, skipping non-records."""
        if not isinstance(fields, Iterable) or isinstance(fields, (str, bytes, Mapping)):
            return []
        return [f for f in fields if _is_record(f) and self.matches(f, search_term)]


def filter_fields(
    fields: Iterable[Any],
    selection: FilterSelection | None,
    search_term: str = "",
) -> list:
    """Filter a listing collection with a selection and search term."""
    return FieldFilter(selection).filter_fields(fields, search_term)


def select_showcase(
    fields: list[SoccerField],
    featured_ids: tuple[int, ...] = FEATURED_FIELD_IDS,
) -> list[SoccerField]:
    """
    Pick the fields for the featured section.

    Featured ids come first in their configured order. When some are missing
    the rest is topped up with non-featured fields in listing order.
    """
    by_id = {f.id: f for f in fields}
    selected = [by_id[i] for i in featured_ids if i in by_id]
    if len(selected) == len(featured_ids):
        return selected

    fallback = [f for f in fields if f.id not in featured_ids]
    return (selected + fallback)[: len(featured_ids)]
