"""Command line entry point for FieldFinder."""

import argparse
import getpass
import logging
import os
import sys
from pathlib import Path
from typing import Any

import requests
import yaml

from catalog import BOROUGHS, FORMAT_OPTIONS, SURFACE_TYPES, select_options
from fieldfinder_client import ApiError, FieldFinderClient
from filters import filter_fields, select_showcase
from forms import (
    FieldForm,
    FormError,
    build_field_payload,
    hydrate_form,
    validate_login,
    validate_signup,
)
from models import FilterSelection
from presentation import format_field_text, format_results_text
from session import (
    SESSION_FILE,
    SessionContext,
    SessionError,
    load_session,
    refresh_admin,
    save_session,
)

CONFIG_PATH = Path(__file__).parent.parent / "config.yaml"
TRISTATE_CHOICES = ("yes", "no", "any")


def load_config(config_path: Path = CONFIG_PATH) -> dict:
    """Load configuration from config.yaml or environment."""
    if config_path.exists():
        with open(config_path) as f:
            return yaml.safe_load(f) or {}

    # Fall back to environment variables
    return {
        "api_base_url": os.environ.get("FIELDFINDER_API_URL"),
        "session_file": os.environ.get("FIELDFINDER_SESSION_FILE"),
        "search_term": os.environ.get("SEARCH_TERM", ""),
        "filters": {
            "type": os.environ.get("FILTER_TYPE"),
            "size": os.environ.get("FILTER_SIZE"),
            "lighting": os.environ.get("FILTER_LIGHTING"),
            "parking": os.environ.get("FILTER_PARKING"),
            "accessibility": os.environ.get("FILTER_ACCESSIBILITY"),
            "borough": os.environ.get("FILTER_BOROUGH"),
        },
    }


def build_selection(config: dict[str, Any], args: argparse.Namespace) -> FilterSelection:
    """Config filters, overridden by whatever was given on the command line."""
    values = dict(config.get("filters") or {})
    for key in ("type", "size", "lighting", "parking", "accessibility", "borough"):
        given = getattr(args, key, None)
        if given is not None:
            values[key] = given
    return FilterSelection.from_config(values)


def _field_form_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--name")
    parser.add_argument("--address")
    parser.add_argument("--latitude")
    parser.add_argument("--longitude")
    parser.add_argument("--surface-type", dest="surface_type", help=f"e.g. {', '.join(SURFACE_TYPES)}")
    parser.add_argument("--format", help=f"e.g. {', '.join(FORMAT_OPTIONS)}")
    parser.add_argument("--borough")
    parser.add_argument("--phone")
    parser.add_argument("--website")
    parser.add_argument("--description")
    parser.add_argument("--amenities", help="Comma separated")
    parser.add_argument("--photos", help="Comma separated photo URLs")
    for flag in ("lighting", "parking", "accessibility"):
        parser.add_argument(f"--{flag}", action=argparse.BooleanOptionalAction, default=None)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="fieldfinder", description="Find soccer fields around Montréal")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command")

    search = sub.add_parser("search", help="Search and filter fields")
    search.add_argument("term", nargs="?", default=None)
    search.add_argument("--type", help=f"Surface type ({', '.join(SURFACE_TYPES)})")
    search.add_argument("--size", help=f"Format ({', '.join(FORMAT_OPTIONS)})")
    for flag in ("lighting", "parking", "accessibility"):
        search.add_argument(f"--{flag}", choices=TRISTATE_CHOICES)
    search.add_argument("--borough", help="Borough name, case-insensitive")
    search.add_argument("--showcase", action="store_true", help="Show the featured fields only")

    sub.add_parser("options", help="List known boroughs, formats and surface types")

    for name in ("login", "admin-login"):
        login = sub.add_parser(name)
        login.add_argument("--email", required=True)
        login.add_argument("--password")

    signup = sub.add_parser("signup")
    signup.add_argument("--email", required=True)
    signup.add_argument("--name", required=True, dest="full_name")
    signup.add_argument("--password")

    sub.add_parser("logout")
    sub.add_parser("admin-logout")

    create = sub.add_parser("create-field")
    _field_form_args(create)

    update = sub.add_parser("update-field")
    update.add_argument("field_id", type=int)
    _field_form_args(update)

    delete = sub.add_parser("delete-field")
    delete.add_argument("field_id", type=int)

    for name in ("favorite", "unfavorite"):
        fav = sub.add_parser(name)
        fav.add_argument("field_id", type=int)
    sub.add_parser("favorites", help="List your favorite fields")

    argv = sys.argv[1:] if argv is None else argv
    args = p.parse_args(argv)
    if args.command is None:
        args = p.parse_args([*argv, "search"])
    return args


def _password(args: argparse.Namespace, confirm: bool = False) -> tuple[str, str]:
    if args.password is not None:
        return args.password, args.password
    password = getpass.getpass("Password: ")
    confirmation = getpass.getpass("Confirm password: ") if confirm else password
    return password, confirmation


def _apply_form_args(form: FieldForm, args: argparse.Namespace) -> FieldForm:
    for key in (
        "name", "address", "latitude", "longitude", "surface_type", "format",
        "borough", "phone", "website", "description", "amenities", "photos",
        "lighting", "parking", "accessibility",
    ):
        value = getattr(args, key, None)
        if value is not None:
            setattr(form, key, value)
    return form


def _require_admin(session: SessionContext) -> str:
    if not session.is_admin:
        raise SessionError("Admin authentication required. Run admin-login first.")
    return session.admin_token


def run_search(
    args: argparse.Namespace,
    config: dict,
    client: FieldFinderClient,
    session: SessionContext,
) -> int:
    print("Fetching fields...")
    fields = client.fetch_fields()
    print(f"Loaded {len(fields)} fields")

    if args.showcase:
        featured = select_showcase(fields)
        print("Top fields of the moment")
        print(format_results_text(featured, session.favorite_ids()))
        return 0

    selection = build_selection(config, args)
    term = args.term if args.term is not None else config.get("search_term") or ""
    if not selection.is_unconstrained():
        defaults = vars(FilterSelection())
        active = [f"{k}={v}" for k, v in vars(selection).items() if v != defaults[k]]
        print("Active filters: " + ", ".join(active))
    visible = filter_fields(fields, selection, term)
    print(format_results_text(visible, session.favorite_ids()))
    return 0


def run_command(
    args: argparse.Namespace,
    config: dict,
    client: FieldFinderClient,
    session: SessionContext,
    session_path: Path,
) -> int:
    command = args.command

    if command == "search":
        return run_search(args, config, client, session)

    if command == "options":
        for title, values in (
            ("Boroughs", BOROUGHS),
            ("Formats", FORMAT_OPTIONS),
            ("Surface types", SURFACE_TYPES),
        ):
            print(title)
            for value in select_options(values)[1:]:
                print(f"  {value}")
        return 0

    if command == "signup":
        password, confirmation = _password(args, confirm=True)
        full_name, email = validate_signup(args.full_name, args.email, password, confirmation)
        session.sign_in(client.signup_user(email, full_name, password))
        save_session(session, session_path)
        print(f"Welcome, {session.display_name}!")
        return 0

    if command == "login":
        password, _ = _password(args)
        email = validate_login(args.email, password)
        session.sign_in(client.login_user(email, password))
        save_session(session, session_path)
        print(f"Signed in as {session.display_name}")
        return 0

    if command == "logout":
        session.sign_out()
        save_session(session, session_path)
        print("Signed out")
        return 0

    if command == "admin-login":
        password, _ = _password(args)
        email = (args.email or "").strip()
        if not email or not password:
            raise FormError("Please provide an email and a password.")
        admin, token = client.login_admin(email, password)
        session.start_admin(admin, token)
        save_session(session, session_path)
        print(f"Signed in as admin {admin.full_name or admin.email}")
        return 0

    if command == "admin-logout":
        session.end_admin()
        save_session(session, session_path)
        print("Admin signed out")
        return 0

    if command in ("create-field", "update-field", "delete-field"):
        token = _require_admin(session)
        if not refresh_admin(session, client):
            save_session(session, session_path)
            raise SessionError("Admin session expired. Run admin-login again.")

        if command == "create-field":
            payload = build_field_payload(_apply_form_args(FieldForm(), args))
            created = client.create_field(payload, token)
            print(f"Created field {created.id}")
        elif command == "update-field":
            current = {f.id: f for f in client.fetch_fields(placeholder_photos=False)}
            if args.field_id not in current:
                raise ApiError(f"Field {args.field_id} not found", 404)
            form = _apply_form_args(hydrate_form(current[args.field_id]), args)
            client.update_field(args.field_id, build_field_payload(form), token)
            print(f"Updated field {args.field_id}")
        else:
            client.delete_field(args.field_id, token)
            print(f"Deleted field {args.field_id}")

        print(f"{len(client.fetch_fields())} fields now listed")
        return 0

    if command == "favorite":
        session.add_favorite(args.field_id)
        save_session(session, session_path)
        print(f"Saved field {args.field_id} to favorites")
        return 0

    if command == "unfavorite":
        session.remove_favorite(args.field_id)
        save_session(session, session_path)
        print(f"Removed field {args.field_id} from favorites")
        return 0

    if command == "favorites":
        if not session.user:
            raise SessionError("Sign in to see your favorites.")
        ids = set(session.favorite_ids())
        favorites = [f for f in client.fetch_fields() if f.id in ids]
        print(f"YOUR FAVORITE FIELDS ({len(favorites)})")
        for field in favorites:
            print(format_field_text(field, favorite=True))
            print()
        return 0

    print(f"Unknown command: {command}")
    return 1


def main(argv: list[str] | None = None) -> int:
    """Run the FieldFinder CLI."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config()
    client = FieldFinderClient(config.get("api_base_url"))
    session_path = Path(config.get("session_file") or SESSION_FILE)
    session = load_session(session_path)

    try:
        return run_command(args, config, client, session, session_path)
    except (ApiError, FormError, SessionError) as e:
        print(f"Error: {e}")
        return 1
    except requests.RequestException as e:
        print(f"Error reaching the FieldFinder API: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
