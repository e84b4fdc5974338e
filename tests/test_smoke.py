import pytest

from app.clubhouse import create_app
from app.clubhouse.models import Base


@pytest.fixture()
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("CLUB_SECRET", "open-sesame")
    monkeypatch.setenv("CSRF_ENABLED", "0")

    app = create_app()
    Base.metadata.create_all(bind=app.extensions["sqlalchemy_engine"])
    return app.test_client()


def test_health_ok(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json["ok"] is True


def test_healthz_ok(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.data == b"ok"


def test_index_renders_for_anonymous(client):
    r = client.get("/")
    assert r.status_code == 200
    assert b"No messages yet." in r.data
    assert b"Log in" in r.data


@pytest.mark.parametrize("path", ["/log-in", "/sign-up"])
def test_public_forms_render(client, path):
    r = client.get(path)
    assert r.status_code == 200
    assert b"<form" in r.data


@pytest.mark.parametrize(
    "method,path",
    [
        ("get", "/new-message"),
        ("post", "/new-message"),
        ("get", "/join-club"),
        ("post", "/join-club"),
        ("post", "/delete-message/1"),
    ],
)
def test_gated_routes_redirect_anonymous_to_login(client, method, path):
    r = getattr(client, method)(path)
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/log-in")


def test_unknown_route_is_404(client):
    r = client.get("/nope")
    assert r.status_code == 404
    assert b"Not found" in r.data
