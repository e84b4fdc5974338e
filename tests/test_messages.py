"""Message board: listing, posting, admin deletion and the sign-up-to-post flow."""
import pytest
from sqlalchemy import text
from werkzeug.security import generate_password_hash

from app.clubhouse import create_app
from app.clubhouse.db import session_scope
from app.clubhouse.models import Base
from app.clubhouse.queries import find_user_by_username, insert_message, insert_user, list_messages, set_admin, set_member

FAST_HASH = "pbkdf2:sha256:1000"


@pytest.fixture()
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("CLUB_SECRET", "open-sesame")
    monkeypatch.setenv("CSRF_ENABLED", "0")
    monkeypatch.setenv("PASSWORD_HASH_METHOD", FAST_HASH)

    app = create_app()
    Base.metadata.create_all(bind=app.extensions["sqlalchemy_engine"])

    with session_scope(app) as s:
        for username, first in (("admin", "Ada"), ("bob", "Bob")):
            insert_user(
                s,
                first_name=first,
                last_name="Test",
                username=username,
                password_hash=generate_password_hash("pw", method=FAST_HASH),
            )
        set_admin(s, find_user_by_username(s, "admin").id)
    return app


@pytest.fixture()
def client(app):
    return app.test_client()


def _login(client, username):
    r = client.post("/log-in", data={"username": username, "password": "pw"})
    assert r.status_code == 302


def _seed_messages(app, *titles):
    with session_scope(app) as s:
        bob = find_user_by_username(s, "bob")
        for title in titles:
            insert_message(s, title=title, message=f"{title} body", user_id=bob.id)


def _message_ids(app):
    with session_scope(app) as s:
        return sorted(r[0] for r in s.execute(text("SELECT id FROM messages")).all())


def test_new_message_form_requires_login(client):
    _login(client, "bob")
    r = client.get("/new-message")
    assert r.status_code == 200
    assert b'name="title"' in r.data


def test_post_message_redirects_and_lists(app, client):
    _login(client, "bob")
    r = client.post("/new-message", data={"title": "Hello", "message": "First post"})
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/")

    r = client.get("/")
    assert r.status_code == 200
    assert b"Hello" in r.data
    assert b"First post" in r.data


@pytest.mark.parametrize("data", [{"title": "Only title"}, {"message": "Only body"}, {"title": " ", "message": "x"}])
def test_post_message_requires_both_fields(app, client, data):
    _login(client, "bob")
    r = client.post("/new-message", data=data)
    assert r.status_code == 400
    assert r.mimetype == "text/plain"
    assert r.get_data(as_text=True) == "Both fields are required."
    assert _message_ids(app) == []


def test_list_orders_by_timestamp_descending(app):
    with session_scope(app) as s:
        bob = find_user_by_username(s, "bob")
        # Inserted out of chronological order so id order disagrees with time order.
        for title, ts in (("middle", "2024-01-02 12:00:00"), ("oldest", "2024-01-01 12:00:00"), ("newest", "2024-01-03 12:00:00")):
            s.execute(
                text("INSERT INTO messages (title, message, timestamp, user_id) VALUES (:t, 'x', :ts, :u)"),
                {"t": title, "ts": ts, "u": bob.id},
            )

    with session_scope(app) as s:
        titles = [m.title for m in list_messages(s)]
    assert titles == ["newest", "middle", "oldest"]


def test_list_hides_authors_from_non_members(app, client):
    _seed_messages(app, "Secret")
    _login(client, "bob")
    r = client.get("/")
    assert b"by Anonymous" in r.data
    assert b"by Bob Test" not in r.data

    with session_scope(app) as s:
        set_member(s, find_user_by_username(s, "bob").id)
    r = client.get("/")
    assert b"by Bob Test" in r.data


def test_non_admin_cannot_delete(app, client):
    _seed_messages(app, "keep me")
    before = _message_ids(app)
    _login(client, "bob")

    r = client.post(f"/delete-message/{before[0]}")
    assert r.status_code == 403
    assert r.mimetype == "text/plain"
    assert r.get_data(as_text=True) == "Access denied. Admins only."
    assert _message_ids(app) == before


def test_admin_deletes_exactly_one(app, client):
    _seed_messages(app, "one", "two", "three")
    ids = _message_ids(app)
    _login(client, "admin")

    r = client.post(f"/delete-message/{ids[1]}")
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/")
    assert _message_ids(app) == [ids[0], ids[2]]


def test_admin_delete_of_missing_message_is_harmless(app, client):
    _seed_messages(app, "one")
    ids = _message_ids(app)
    _login(client, "admin")
    r = client.post("/delete-message/9999")
    assert r.status_code == 302
    assert _message_ids(app) == ids


def test_admin_sees_delete_buttons(app, client):
    _seed_messages(app, "one")
    _login(client, "admin")
    r = client.get("/")
    assert b"/delete-message/" in r.data


def test_deleting_user_cascades_to_messages(app):
    _seed_messages(app, "orphan?")
    with session_scope(app) as s:
        s.execute(text("DELETE FROM users WHERE username = :u"), {"u": "bob"})
    assert _message_ids(app) == []


def test_signup_login_post_flow(app, client):
    r = client.post(
        "/sign-up",
        data={
            "firstName": "Alice",
            "lastName": "Smith",
            "username": "alice",
            "password": "pw123",
            "confirmPassword": "pw123",
        },
    )
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/log-in")

    r = client.post("/log-in", data={"username": "alice", "password": "pw123"})
    assert r.status_code == 302
    assert not r.headers["Location"].endswith("/log-in")

    _seed_messages(app, "older")
    r = client.post("/new-message", data={"title": "Hi", "message": "Hello"})
    assert r.status_code == 302

    with session_scope(app) as s:
        messages = list_messages(s)
    assert messages[0].title == "Hi"
    assert messages[0].message == "Hello"
    assert messages[0].author == "Alice Smith"

    r = client.get("/")
    body = r.get_data(as_text=True)
    assert body.index("Hi") < body.index("older")


def test_overlong_title_is_rejected_without_insert(app, client):
    _login(client, "bob")
    r = client.post("/new-message", data={"title": "t" * 256, "message": "body"})
    assert r.status_code == 400
    assert r.mimetype == "text/plain"
    assert r.get_data(as_text=True) == "Title must be at most 255 characters."
    assert _message_ids(app) == []

    r = client.post("/new-message", data={"title": "t" * 255, "message": "body"})
    assert r.status_code == 302
    assert len(_message_ids(app)) == 1
