"""Session context for the signed-in user, the admin session and favorites.

The session is an explicit value: it is loaded once at startup, passed to
whatever needs it, and saved after sign-in, sign-out and favorite changes.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import requests

from fieldfinder_client import ApiError, FieldFinderClient
from models import Admin, User

log = logging.getLogger("fieldfinder.session")

DATA_DIR = Path(__file__).parent.parent / "data"
SESSION_FILE = DATA_DIR / "session.json"


class SessionError(Exception):
    """Raised when an action needs a signed-in user or admin."""


@dataclass
class SessionContext:
    user: User | None = None
    admin: Admin | None = None
    admin_token: str | None = None
    favorites: dict[str, list[int]] = field(default_factory=dict)

    @property
    def is_admin(self) -> bool:
        return bool(self.admin and self.admin_token)

    @property
    def display_name(self) -> str:
        if not self.user:
            return ""
        return self.user.full_name.strip() or self.user.email or ""

    def sign_in(self, user: User) -> None:
        self.user = user

    def sign_out(self) -> None:
        self.user = None

    def start_admin(self, admin: Admin, token: str) -> None:
        self.admin = admin
        self.admin_token = token

    def end_admin(self) -> None:
        self.admin = None
        self.admin_token = None

    def _user_key(self) -> str:
        if not self.user:
            raise SessionError("Sign in to manage favorites.")
        return str(self.user.id)

    def favorite_ids(self) -> list[int]:
        if not self.user:
            return []
        return list(self.favorites.get(str(self.user.id), []))

    def add_favorite(self, field_id: int) -> None:
        ids = self.favorites.setdefault(self._user_key(), [])
        if field_id not in ids:
            ids.append(field_id)

    def remove_favorite(self, field_id: int) -> None:
        ids = self.favorites.get(self._user_key(), [])
        if field_id in ids:
            ids.remove(field_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "user": self.user.to_dict() if self.user else None,
            "admin": self.admin.to_dict() if self.admin else None,
            "admin_token": self.admin_token,
            "favorites": self.favorites,
        }


def _session_from_dict(data: dict[str, Any]) -> SessionContext:
    session = SessionContext()

    try:
        if data.get("user"):
            session.user = User.from_dict(data["user"])
    except (KeyError, TypeError, ValueError) as e:
        log.warning("Ignoring stored user: %s", e)

    try:
        if data.get("admin") and data.get("admin_token"):
            session.start_admin(Admin.from_dict(data["admin"]), str(data["admin_token"]))
    except (KeyError, TypeError, ValueError) as e:
        log.warning("Ignoring stored admin session: %s", e)

    favorites = data.get("favorites")
    if isinstance(favorites, dict):
        session.favorites = {
            str(key): [i for i in ids if isinstance(i, int) and not isinstance(i, bool)]
            for key, ids in favorites.items()
            if isinstance(ids, list)
        }
    return session


def load_session(path: Path = SESSION_FILE) -> SessionContext:
    """Load the stored session, or an empty one if there is nothing usable."""
    if not path.exists():
        return SessionContext()
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        log.warning("Could not read session file %s: %s", path, e)
        return SessionContext()

    if not isinstance(data, dict):
        log.warning("Session file %s does not hold an object", path)
        return SessionContext()
    return _session_from_dict(data)


def save_session(session: SessionContext, path: Path = SESSION_FILE) -> None:
    """Save the session to a JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(session.to_dict(), f, indent=2)


def refresh_admin(session: SessionContext, client: FieldFinderClient) -> bool:
    """Re-validate a stored admin token. Clears the admin session if it is rejected."""
    if not session.is_admin:
        return False
    try:
        session.admin = client.fetch_admin_profile(session.admin_token)
    except (ApiError, requests.RequestException) as e:
        log.warning("Stored admin session is no longer valid: %s", e)
        session.end_admin()
        return False
    return True
