"""Display helpers for field icons, ratings and plain-text field cards."""

import math
from collections.abc import Iterable
from typing import Any

from models import SoccerField

FIELD_ICONS = {
    "Natural": "🌱",
    "Artificial": "🏟️",
    "Indoor": "🏢",
}
DEFAULT_ICON = "⚽"

FILLED_STAR = "★"
EMPTY_STAR = "☆"
MAX_STARS = 5


def field_icon(surface_type: str | None) -> str:
    """Glyph for a surface type, falling back to a ball for anything unknown."""
    return FIELD_ICONS.get(surface_type or "", DEFAULT_ICON)


def _rating_value(rating: Any) -> float:
    if rating is None or isinstance(rating, bool):
        return 0.0
    if isinstance(rating, int):
        # Clamp before converting, big ints do not fit in a float
        return float(max(0, min(MAX_STARS, rating)))
    try:
        value = float(rating)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def format_rating(rating: Any = 0) -> str:
    """Render a 0-5 rating as filled and empty stars."""
    value = _rating_value(rating)
    filled = int(math.floor(max(0.0, min(float(MAX_STARS), value))))
    return FILLED_STAR * filled + EMPTY_STAR * (MAX_STARS - filled)


def _yes_no(value: bool | None) -> str:
    return "Yes" if value else "No"


def format_field_text(field: SoccerField, favorite: bool = False) -> str:
    """Build a plain text card for a single field."""
    name = field.name or field.address or "Unknown field"
    if favorite:
        name = f"{name} (favorite)"

    location = field.address or ""
    if field.borough:
        location = f"{location}, {field.borough}" if location else field.borough

    lines = [f"{field_icon(field.surface_type)} {name}"]
    if location:
        lines.append(f"  {location}")
    lines.append(
        f"  {format_rating(field.rating)} | "
        f"Surface: {field.surface_type or '-'} | Format: {field.format or '-'}"
    )
    lines.append(
        f"  Lighting: {_yes_no(field.lighting)} | "
        f"Parking: {_yes_no(field.parking)} | "
        f"Accessible: {_yes_no(field.accessibility)}"
    )
    if field.amenities:
        lines.append(f"  Amenities: {', '.join(field.amenities)}")
    if field.description:
        lines.append(f"  {field.description}")
    return "\n".join(lines)


def format_results_text(
    fields: list[SoccerField],
    favorite_ids: Iterable[int] = (),
) -> str:
    """Build the plain text list view for a set of fields."""
    favorites = set(favorite_ids)
    lines = []
    lines.append("=" * 60)
    lines.append(f"{len(fields)} fields found")
    lines.append("=" * 60)
    lines.append("")

    if not fields:
        lines.append(f"{DEFAULT_ICON} No fields found")
        return "\n".join(lines)

    for field in fields:
        lines.append(format_field_text(field, favorite=field.id in favorites))
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"
