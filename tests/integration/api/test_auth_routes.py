from uuid import uuid4

import pytest

from modion.adapters.auth.crypto import JWTAuthAdapter
from modion.adapters.sqlite.repos import SQLiteUserRepo
from modion.api.deps import Settings, get_settings, get_user_repo
from modion.api.main import app


def test_register(client):
    resp = client.post(
        "/api/auth/register",
        json={"name": "Ann", "email": "a@x.com", "password": "secret12"},
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "Login successful"
    assert body["token"]
    assert body["user"]["role"] == "user"
    assert body["user"]["name"] == "Ann"
    assert "password" not in str(body["user"])

    cookie = resp.headers["set-cookie"]
    assert cookie.startswith(f"jwt={body['token']}")
    assert "HttpOnly" in cookie
    assert "samesite=lax" in cookie.lower()
    assert "Max-Age=86400" in cookie
    assert "Secure" not in cookie


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "a@x.com", "password": "secret12"},
        {"name": "Ann", "password": "secret12"},
        {"name": "Ann", "email": "a@x.com", "password": ""},
        {},
    ],
)
def test_register_requires_all_fields(client, payload):
    resp = client.post("/api/auth/register", json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"message": "All fields are required"}


def test_register_duplicate_email(client, make_user):
    make_user(email="a@x.com")
    resp = client.post(
        "/api/auth/register",
        json={"name": "Ann", "email": "a@x.com", "password": "secret12"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"message": "email already exists"}


def test_register_unknown_role_becomes_user(client):
    resp = client.post(
        "/api/auth/register",
        json={"name": "Ann", "email": "a@x.com", "password": "pw", "role": "superuser"},
    )
    assert resp.json()["user"]["role"] == "user"


def test_malformed_body(client):
    resp = client.post("/api/auth/register", json={"name": 123, "email": [], "password": "x"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid request"


def test_login(client, make_user):
    user = make_user(email="a@x.com", password="secret12")
    resp = client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret12"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["user"] == {"id": str(user.id), "name": "Ann", "email": "a@x.com", "role": "user"}
    assert resp.cookies.get("jwt") == body["token"]


def test_login_missing_fields(client):
    resp = client.post("/api/auth/login", json={"email": "a@x.com"})
    assert resp.status_code == 400
    assert resp.json() == {"message": "Email and password are required"}


@pytest.mark.parametrize(
    ("email", "password"),
    [("a@x.com", "wrong"), ("nobody@x.com", "secret12")],
)
def test_login_invalid_credentials(client, make_user, email, password):
    make_user(email="a@x.com", password="secret12")
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid credentials"}


@pytest.mark.parametrize(
    ("path", "payload"),
    [
        ("/api/auth/login", {"email": "a@x.com", "password": "secret12"}),
        ("/api/auth/register", {"name": "Ann", "email": "a@x.com", "password": "secret12"}),
    ],
)
def test_storage_failure_returns_generic_message(client, tmp_path, path, payload):
    app.dependency_overrides[get_user_repo] = lambda: SQLiteUserRepo(str(tmp_path / "blank.db"))
    resp = client.post(path, json=payload)
    assert resp.status_code == 500
    assert resp.json() == {"message": "Server error"}


def test_secure_cookie_in_production(client, db_path, make_user):
    make_user(email="a@x.com")

    def _settings():
        s = Settings()
        s.db_path = db_path
        s.env = "production"
        return s

    app.dependency_overrides[get_settings] = _settings
    resp = client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret12"})
    assert "Secure" in resp.headers["set-cookie"]


# --- Status ---


def test_status_with_bearer_header(client, make_user, login):
    make_user()
    resp = client.get("/api/auth/status", headers=login())
    assert resp.status_code == 200
    assert resp.json()["user"]["email"] == "ann@example.com"


def test_status_with_cookie(client, make_user):
    make_user()
    token = client.post(
        "/api/auth/login", json={"email": "ann@example.com", "password": "secret12"}
    ).json()["token"]
    client.cookies.clear()
    client.cookies.set("jwt", token)

    resp = client.get("/api/auth/status")
    assert resp.status_code == 200
    assert resp.json()["user"]["name"] == "Ann"


def test_status_without_token(client):
    resp = client.get("/api/auth/status")
    assert resp.status_code == 401
    assert resp.json() == {"message": "Unauthorized: No token provided"}


def test_status_with_invalid_token(client):
    resp = client.get("/api/auth/status", headers={"Authorization": "Bearer not.a.jwt"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Unauthorized: Invalid token"}


def test_status_for_deleted_user(client, jwt_secret):
    token = JWTAuthAdapter(jwt_secret).create_token(uuid4(), 60)
    resp = client.get("/api/auth/status", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Unauthorized: User not found"}


def test_token_must_be_signed_with_configured_secret(client, make_user, jwt_secret):
    user = make_user()
    foreign = JWTAuthAdapter("some-other-secret").create_token(user.id, 60)
    resp = client.get("/api/auth/status", headers={"Authorization": f"Bearer {foreign}"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Unauthorized: Invalid token"}

    token = JWTAuthAdapter(jwt_secret).create_token(user.id, 60)
    resp = client.get("/api/auth/status", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200


def test_logout_clears_cookie(client):
    resp = client.post("/api/auth/logout")
    assert resp.status_code == 200
    assert resp.json()["success"] is True
    cookie = resp.headers["set-cookie"]
    assert cookie.startswith("jwt=")
    assert "Max-Age=0" in cookie
