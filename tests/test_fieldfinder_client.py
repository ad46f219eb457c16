import pytest
import requests

from fieldfinder_client import (
    ApiError,
    FieldFinderClient,
    decode_admin_token,
    encode_basic_token,
    parse_field,
)
from models import DEFAULT_COORDINATES, PLACEHOLDER_PHOTO, Admin, User

BASE = "http://api.test/api"


@pytest.fixture
def client():
    return FieldFinderClient(BASE, timeout=5)


def test_base_url_from_environment(monkeypatch):
    monkeypatch.setenv("FIELDFINDER_API_URL", "http://env.test/api/")
    assert FieldFinderClient().base_url == "http://env.test/api"
    monkeypatch.delenv("FIELDFINDER_API_URL")
    assert FieldFinderClient().base_url == "http://127.0.0.1:8000/api"


def test_fetch_fields_normalizes_records(client, fake_api):
    fake_api.queue(payload=[
        {
            "id": 1,
            "name": "Parc Jarry",
            "address": "285 rue Faillon O",
            "coordinates": ["45.53", "-73.62"],
            "surface_type": "Artificial",
            "lighting": True,
            "rating": 4.5,
            "photos": ["/Images/jarry.jpg"],
            "amenities": ["Vestiaires"],
        },
        {"id": 2, "name": "Sans coordonnées", "coordinates": [45.5]},
        "not a field",
        {"name": "No id"},
    ])

    fields = client.fetch_fields()

    assert [f.id for f in fields] == [1, 2]
    jarry, other = fields
    assert jarry.coordinates == (45.53, -73.62)
    assert jarry.photos == ("/Images/jarry.jpg",)
    assert jarry.amenities == ("Vestiaires",)
    assert jarry.parking is None
    assert other.coordinates == DEFAULT_COORDINATES
    assert other.photos == (PLACEHOLDER_PHOTO,)
    assert fake_api.calls[0]["method"] == "GET"
    assert fake_api.calls[0]["url"] == f"{BASE}/fields"
    assert fake_api.calls[0]["timeout"] == 5


def test_fetch_fields_without_placeholders(client, fake_api):
    fake_api.queue(payload=[{"id": 3, "photos": []}])
    assert client.fetch_fields(placeholder_photos=False)[0].photos == ()


def test_fetch_fields_rejects_non_list(client, fake_api):
    fake_api.queue(payload={"detail": "nope"})
    with pytest.raises(ApiError):
        client.fetch_fields()


@pytest.mark.parametrize(
    "coordinates",
    [None, [], ["a", "b"], [float("nan"), 1.0], [1, 2, 3], "45,-73"],
)
def test_parse_field_bad_coordinates(coordinates):
    field = parse_field({"id": 1, "coordinates": coordinates})
    assert field.coordinates == DEFAULT_COORDINATES


def test_parse_field_bad_rating_is_dropped():
    assert parse_field({"id": 1, "rating": "great"}).rating is None
    assert parse_field({"id": 1, "rating": "3"}).rating == 3.0


def test_parse_field_out_of_range_numbers_are_dropped():
    field = parse_field({"id": 1, "rating": 10**400, "reviews": float("inf")})
    assert field.rating is None
    assert field.reviews is None
    assert parse_field({"id": 1, "coordinates": [10**400, 1]}).coordinates == DEFAULT_COORDINATES


def test_fetch_fields_survives_oversized_numbers(client, fake_api):
    big = "9" * 400
    fake_api.queue(raw=(
        b'[{"id": 1, "reviews": 1e400}, {"id": 2},'
        b' {"id": 3, "rating": ' + big.encode() + b'},'
        b' {"id": 1e400, "name": "Broken"}]'
    ))

    fields = client.fetch_fields()

    assert [f.id for f in fields] == [1, 2, 3]
    assert fields[0].reviews is None
    assert fields[2].rating is None


def test_error_detail_is_surfaced(client, fake_api):
    fake_api.queue(400, {"detail": "Email already registered"}, reason="Bad Request")
    with pytest.raises(ApiError) as exc:
        client.signup_user("a@b.c", "Ana", "password123")
    assert exc.value.message == "Email already registered"
    assert exc.value.status_code == 400


def test_error_string_body_and_reason_fallbacks(client, fake_api):
    fake_api.queue(500, "Server exploded", reason="Internal Server Error")
    fake_api.queue(502, raw=b"<html>", reason="Bad Gateway")
    fake_api.queue(503, raw=b"", reason="")

    for expected in ("Server exploded", "Bad Gateway", "An error occurred"):
        with pytest.raises(ApiError, match=expected):
            client.login_user("a@b.c", "password123")


def test_transport_errors_propagate(client, fake_api):
    fake_api.responses.append(requests.ConnectionError("down"))
    with pytest.raises(requests.ConnectionError):
        client.fetch_fields()


def test_user_signup_and_login(client, fake_api):
    fake_api.queue(201, {"id": 7, "email": "ana@ex.com", "full_name": "Ana", "is_active": True})
    fake_api.queue(200, {"id": 7, "email": "ana@ex.com", "full_name": "Ana"})

    user = client.signup_user("ana@ex.com", "Ana", "password123")
    assert user == User(id=7, email="ana@ex.com", full_name="Ana", is_active=True)
    assert fake_api.calls[0]["url"] == f"{BASE}/users"
    assert fake_api.calls[0]["json"] == {
        "email": "ana@ex.com", "full_name": "Ana", "password": "password123",
    }

    assert client.login_user("ana@ex.com", "password123").id == 7
    assert fake_api.calls[1]["url"] == f"{BASE}/users/login"


def test_admin_login_builds_basic_token(client, fake_api):
    fake_api.queue(200, {"id": 1, "email": "admin@ff.com", "full_name": "Admin"})

    admin, token = client.login_admin("admin@ff.com", "s3cret!!")

    assert admin == Admin(id=1, email="admin@ff.com", full_name="Admin")
    assert token == encode_basic_token("admin@ff.com", "s3cret!!")
    assert "Authorization" not in fake_api.calls[0]["headers"]


def test_admin_mutations_send_token(client, fake_api):
    token = encode_basic_token("admin@ff.com", "s3cret!!")
    fake_api.queue(201, {"id": 10, "name": "Nouveau", "address": "1 rue", "coordinates": [45, -73]})
    fake_api.queue(200, {"id": 10, "name": "Renommé", "address": "1 rue", "coordinates": [45, -73]})
    fake_api.queue(204)

    created = client.create_field({"name": "Nouveau"}, token)
    updated = client.update_field(10, {"name": "Renommé"}, token)
    assert client.delete_field(10, token) is None

    assert created.id == 10 and created.photos == ()
    assert updated.name == "Renommé"
    assert [c["method"] for c in fake_api.calls] == ["POST", "PUT", "DELETE"]
    assert fake_api.calls[1]["url"] == f"{BASE}/fields/10"
    assert all(c["headers"]["Authorization"] == token for c in fake_api.calls)
    assert fake_api.calls[0]["headers"]["Content-Type"] == "application/json"


def test_fetch_admin_profile(client, fake_api):
    fake_api.queue(200, {"id": 1, "email": "admin@ff.com", "full_name": "Admin"})
    assert client.fetch_admin_profile("Basic abc").email == "admin@ff.com"
    assert fake_api.calls[0]["url"] == f"{BASE}/admin/me"


def test_token_decoding():
    assert decode_admin_token(encode_basic_token("a@b.c", "pass:word")) == ("a@b.c", "pass:word")
    assert decode_admin_token(encode_basic_token("a@b.c", "")) == ("a@b.c", "")
    assert decode_admin_token("Bearer xyz") is None
    assert decode_admin_token("Basic !!!notbase64") is None
    assert decode_admin_token(encode_basic_token("", "pw")) is None
    assert decode_admin_token("Basic bm9jb2xvbg==") is None  # "nocolon"
    assert decode_admin_token("") is None
