"""FieldFinder REST API client for fields, users and admin management."""

import base64
import binascii
import logging
import math
import os
from typing import Any

import requests

from models import (
    DEFAULT_COORDINATES,
    PLACEHOLDER_PHOTO,
    Admin,
    SoccerField,
    User,
)

log = logging.getLogger("fieldfinder.client")

DEFAULT_API_URL = "http://127.0.0.1:8000/api"


class ApiError(Exception):
    """Raised when the API answers with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def encode_basic_token(email: str, password: str) -> str:
    raw = f"{email}:{password}".encode("utf-8")
    return f"Basic {base64.b64encode(raw).decode('ascii')}"


def decode_admin_token(token: str) -> tuple[str, str] | None:
    """Recover (email, password) from a Basic token, or None if it is not one."""
    if not token or not token.startswith("Basic "):
        return None
    encoded = token[len("Basic "):].strip()
    try:
        decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None

    email, sep, password = decoded.partition(":")
    if not email or not sep:
        return None
    return email, password


def _parse_error(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict) and payload.get("detail"):
        detail = payload["detail"]
        return detail if isinstance(detail, str) else str(detail)
    if isinstance(payload, str) and payload:
        return payload
    return response.reason or "An error occurred"


def _coordinates(value: Any) -> tuple[float, float]:
    if isinstance(value, (list, tuple)) and len(value) == 2:
        try:
            lat, lng = float(value[0]), float(value[1])
        except (TypeError, ValueError, OverflowError):
            return DEFAULT_COORDINATES
        if math.isfinite(lat) and math.isfinite(lng):
            return lat, lng
    return DEFAULT_COORDINATES


def _optional_bool(value: Any) -> bool | None:
    return None if value is None else bool(value)


def _optional_number(value: Any, cast=float):
    if value is None or isinstance(value, bool):
        return None
    try:
        number = cast(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if isinstance(number, float) and not math.isfinite(number):
        return None
    return number


def _strings(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(str(v) for v in value if v)


def parse_field(raw: dict[str, Any], placeholder_photos: bool = True) -> SoccerField:
    """Parse a raw API field into a SoccerField with safe defaults."""
    photos = _strings(raw.get("photos"))
    if not photos and placeholder_photos:
        photos = (PLACEHOLDER_PHOTO,)

    return SoccerField(
        id=int(raw["id"]),
        name=raw.get("name") or "",
        address=raw.get("address") or "",
        coordinates=_coordinates(raw.get("coordinates")),
        surface_type=raw.get("surface_type"),
        format=raw.get("format"),
        lighting=_optional_bool(raw.get("lighting")),
        parking=_optional_bool(raw.get("parking")),
        accessibility=_optional_bool(raw.get("accessibility")),
        phone=raw.get("phone"),
        website=raw.get("website"),
        borough=raw.get("borough"),
        description=raw.get("description"),
        amenities=_strings(raw.get("amenities")),
        rating=_optional_number(raw.get("rating")),
        reviews=_optional_number(raw.get("reviews"), int),
        photos=photos,
    )


class FieldFinderClient:
    """Client for the FieldFinder API."""

    def __init__(self, base_url: str | None = None, timeout: float = 30):
        base_url = base_url or os.environ.get("FIELDFINDER_API_URL") or DEFAULT_API_URL
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(
        self,
        method: str,
        path: str,
        token: str | None = None,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        headers = {}
        if token:
            headers["Authorization"] = token
        if payload is not None:
            headers["Content-Type"] = "application/json"

        url = f"{self.base_url}{path}"
        log.debug("%s %s", method, url)
        response = requests.request(
            method,
            url,
            headers=headers,
            json=payload,
            timeout=self.timeout,
        )
        if not response.ok:
            message = _parse_error(response)
            log.warning("%s %s failed (%s): %s", method, url, response.status_code, message)
            raise ApiError(message, response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # --- Fields ---

    def fetch_fields(self, placeholder_photos: bool = True) -> list[SoccerField]:
        """Fetch every field listing, skipping records that cannot be parsed."""
        data = self._request("GET", "/fields")
        if not isinstance(data, list):
            raise ApiError("Unexpected response while fetching fields")

        fields = []
        for raw in data:
            if not isinstance(raw, dict) or raw.get("id") is None:
                log.warning("Skipping malformed field record: %r", raw)
                continue
            try:
                fields.append(parse_field(raw, placeholder_photos=placeholder_photos))
            except (TypeError, ValueError, OverflowError) as e:
                log.warning("Skipping field %r: %s", raw.get("id"), e)
        return fields

    def create_field(self, payload: dict[str, Any], token: str) -> SoccerField:
        data = self._request("POST", "/fields", token=token, payload=payload)
        return parse_field(data, placeholder_photos=False)

    def update_field(self, field_id: int, payload: dict[str, Any], token: str) -> SoccerField:
        data = self._request("PUT", f"/fields/{field_id}", token=token, payload=payload)
        return parse_field(data, placeholder_photos=False)

    def delete_field(self, field_id: int, token: str) -> None:
        self._request("DELETE", f"/fields/{field_id}", token=token)

    # --- Users ---

    def signup_user(self, email: str, full_name: str, password: str) -> User:
        payload = {"email": email, "full_name": full_name, "password": password}
        return User.from_dict(self._request("POST", "/users", payload=payload))

    def login_user(self, email: str, password: str) -> User:
        payload = {"email": email, "password": password}
        return User.from_dict(self._request("POST", "/users/login", payload=payload))

    # --- Admin ---

    def login_admin(self, email: str, password: str) -> tuple[Admin, str]:
        """Log an admin in. Returns the profile and the token for later calls."""
        payload = {"email": email, "password": password}
        admin = Admin.from_dict(self._request("POST", "/admin/login", payload=payload))
        return admin, encode_basic_token(email, password)

    def fetch_admin_profile(self, token: str) -> Admin:
        return Admin.from_dict(self._request("GET", "/admin/me", token=token))
