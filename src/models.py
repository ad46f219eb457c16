"""Data models for soccer field listings, filter selections and accounts."""

from dataclasses import dataclass
from typing import Any

# Downtown Montréal, used when a listing has no usable coordinates
DEFAULT_COORDINATES = (45.5017, -73.5673)
PLACEHOLDER_PHOTO = "/Images/placeholder.jpeg"


@dataclass(frozen=True)
class SoccerField:
    id: int
    name: str = ""
    address: str = ""
    coordinates: tuple[float, float] = DEFAULT_COORDINATES
    surface_type: str | None = None   # "Natural", "Artificial", "Indoor", ...
    format: str | None = None         # "5v5", "7v7", "11v11", ...
    lighting: bool | None = None
    parking: bool | None = None
    accessibility: bool | None = None
    phone: str | None = None
    website: str | None = None
    borough: str | None = None
    description: str | None = None
    amenities: tuple[str, ...] = ()
    rating: float | None = None
    reviews: int | None = None
    photos: tuple[str, ...] = ()


def parse_tristate(value: Any) -> bool | None:
    """Interpret a config value as True, False or None (no constraint)."""
    if value is None or isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "yes", "1", "on"):
        return True
    if text in ("false", "no", "0", "off"):
        return False
    return None


@dataclass(frozen=True)
class FilterSelection:
    """The user's chosen constraints. Sentinels mean "no constraint"."""

    ALL = "All"
    ALL_BOROUGHS = "All Boroughs"

    type: str = ALL
    size: str = ALL
    lighting: bool | None = None
    parking: bool | None = None
    accessibility: bool | None = None
    borough: str = ALL_BOROUGHS

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "FilterSelection":
        return cls(
            type=config.get("type") or cls.ALL,
            size=config.get("size") or cls.ALL,
            lighting=parse_tristate(config.get("lighting")),
            parking=parse_tristate(config.get("parking")),
            accessibility=parse_tristate(config.get("accessibility")),
            borough=config.get("borough") or cls.ALL_BOROUGHS,
        )

    def is_unconstrained(self) -> bool:
        return self == FilterSelection()


@dataclass(frozen=True)
class User:
    id: int
    email: str
    full_name: str = ""
    is_active: bool | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        return cls(
            id=int(data["id"]),
            email=str(data["email"]),
            full_name=data.get("full_name") or "",
            is_active=data.get("is_active"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
            "is_active": self.is_active,
        }


@dataclass(frozen=True)
class Admin:
    id: int
    email: str
    full_name: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Admin":
        return cls(
            id=int(data["id"]),
            email=str(data["email"]),
            full_name=data.get("full_name") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "email": self.email, "full_name": self.full_name}
