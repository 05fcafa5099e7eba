import pytest
from fastapi.testclient import TestClient

from modion.adapters.dev_email import DevEmailAdapter
from modion.adapters.dev_media import DevMediaAdapter
from modion.adapters.sqlite.migrator import SQLiteMigrator
from modion.adapters.sqlite.repos import SQLiteUserRepo
from modion.api.auth_utils import get_password_hash
from modion.api.deps import Settings, get_email_adapter, get_media_host, get_settings
from modion.api.main import app
from modion.domain.entities import User


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "data" / "modion.db")
    SQLiteMigrator(path).run_migrations()
    return path


@pytest.fixture
def email_adapter():
    return DevEmailAdapter()


@pytest.fixture
def media_host():
    return DevMediaAdapter()


@pytest.fixture
def jwt_secret():
    return "test-secret"


@pytest.fixture
def client(db_path, email_adapter, media_host, jwt_secret):
    def _settings():
        s = Settings()
        s.db_path = db_path
        s.jwt_secret = jwt_secret
        return s

    app.dependency_overrides[get_settings] = _settings
    app.dependency_overrides[get_email_adapter] = lambda: email_adapter
    app.dependency_overrides[get_media_host] = lambda: media_host
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_path):
    """Store a user with a real bcrypt hash."""

    def _make(name="Ann", email="ann@example.com", password="secret12", role="user"):
        user = User(name=name, email=email, password_hash=get_password_hash(password), role=role)
        return SQLiteUserRepo(db_path).save(user)

    return _make


@pytest.fixture
def login(client):
    """Log in and return Authorization headers."""

    def _login(email="ann@example.com", password="secret12"):
        resp = client.post("/api/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        client.cookies.clear()
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    return _login
