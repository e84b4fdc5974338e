"""
Typed request identity.

`load_identity()` (registered as a before_request hook) resolves the session's
user id into either `Anonymous` or `Authenticated(user)` and stores it on
`g.identity`. Handlers read it through `current_identity()` instead of poking
at the session themselves.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass

from flask import current_app, g, request, session

from app.clubhouse.db import db_session
from app.clubhouse.queries import UserRecord, get_user

SESSION_USER_KEY = "user_id"


@dataclass(frozen=True)
class Anonymous:
    is_authenticated = False
    user = None


@dataclass(frozen=True)
class Authenticated:
    user: UserRecord
    is_authenticated = True


Identity = Anonymous | Authenticated

ANONYMOUS = Anonymous()


def login_session(user: UserRecord) -> None:
    """Only the id goes into the session; the row is re-read on every request."""
    session.clear()
    session[SESSION_USER_KEY] = user.id
    session.permanent = True


def logout_session() -> None:
    session.clear()


def load_identity() -> None:
    if not getattr(g, "request_id", None):
        g.request_id = uuid.uuid4().hex
    if request.path.startswith(("/static/", "/health", "/healthz")):
        g.identity = ANONYMOUS
        return

    user_id = session.get(SESSION_USER_KEY)
    if not user_id:
        g.identity = ANONYMOUS
        return

    try:
        uid = int(user_id)
    except (TypeError, ValueError):
        current_app.logger.warning("Discarding malformed session user id: %r", user_id)
        uid = None
    # DB errors propagate to the 500 handler.
    user = get_user(db_session(), uid) if uid is not None else None

    if user is None:
        session.pop(SESSION_USER_KEY, None)
        g.identity = ANONYMOUS
        return
    g.identity = Authenticated(user=user)


def current_identity() -> Identity:
    return getattr(g, "identity", ANONYMOUS)


def current_user() -> UserRecord | None:
    return current_identity().user
