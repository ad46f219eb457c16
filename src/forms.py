"""Form validation and payload building for field, login and signup forms."""

import math
from dataclasses import dataclass
from typing import Any

from models import SoccerField

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 72


class FormError(ValueError):
    """Raised when submitted form values are not acceptable."""


@dataclass
class FieldForm:
    """Admin form state. Text inputs stay strings until the payload is built."""

    id: int | None = None
    name: str = ""
    address: str = ""
    latitude: str = ""
    longitude: str = ""
    surface_type: str = ""
    format: str = ""
    borough: str = ""
    lighting: bool = False
    parking: bool = False
    accessibility: bool = False
    phone: str = ""
    website: str = ""
    description: str = ""
    amenities: str = ""
    photos: str = ""


def to_list(value: str) -> list[str] | None:
    """Split comma separated text, dropping blanks. None when nothing is left."""
    items = [item.strip() for item in (value or "").split(",")]
    items = [item for item in items if item]
    return items or None


def _coordinate(value: str) -> float:
    try:
        number = float(str(value).strip())
    except ValueError:
        number = math.nan
    if not math.isfinite(number):
        raise FormError("Please provide a valid latitude and longitude.")
    return number


def build_field_payload(form: FieldForm) -> dict[str, Any]:
    """Turn the admin form into an API payload."""
    name = form.name.strip()
    address = form.address.strip()
    if not name or not address:
        raise FormError("Field name and address are required.")

    payload: dict[str, Any] = {
        "name": name,
        "address": address,
        "coordinates": [_coordinate(form.latitude), _coordinate(form.longitude)],
        "lighting": form.lighting,
        "parking": form.parking,
        "accessibility": form.accessibility,
    }

    optional = {
        "surface_type": form.surface_type.strip(),
        "format": form.format.strip(),
        "phone": form.phone.strip(),
        "website": form.website.strip(),
        "borough": form.borough.strip(),
        "description": form.description.strip(),
        "amenities": to_list(form.amenities),
        "photos": to_list(form.photos),
    }
    payload.update({k: v for k, v in optional.items() if v})
    return payload


def hydrate_form(field: SoccerField) -> FieldForm:
    """Fill the admin form from an existing field for editing."""
    lat, lng = field.coordinates
    return FieldForm(
        id=field.id,
        name=field.name,
        address=field.address,
        latitude=str(lat),
        longitude=str(lng),
        surface_type=field.surface_type or "",
        format=field.format or "",
        borough=field.borough or "",
        lighting=bool(field.lighting),
        parking=bool(field.parking),
        accessibility=bool(field.accessibility),
        phone=field.phone or "",
        website=field.website or "",
        description=field.description or "",
        amenities=", ".join(field.amenities),
        photos=", ".join(field.photos),
    )


def _check_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise FormError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")
    if len(password) > MAX_PASSWORD_LENGTH:
        raise FormError(f"Password cannot exceed {MAX_PASSWORD_LENGTH} characters.")


def validate_login(email: str, password: str) -> str:
    """Check login credentials and return the trimmed email."""
    email = (email or "").strip()
    if not email:
        raise FormError("Please enter your email address.")
    _check_password(password or "")
    return email


def validate_signup(full_name: str, email: str, password: str, confirm_password: str) -> tuple[str, str]:
    """Check signup values and return the trimmed (full_name, email)."""
    full_name = (full_name or "").strip()
    if not full_name:
        raise FormError("Please enter your full name.")
    email = (email or "").strip()
    if not email:
        raise FormError("Please enter an email address.")
    _check_password(password or "")
    if password != confirm_password:
        raise FormError("Passwords do not match.")
    return full_name, email
