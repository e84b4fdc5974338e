from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

from flask import Blueprint, current_app, flash, g, redirect, render_template, request, url_for
from sqlalchemy.exc import SQLAlchemyError

from app.clubhouse.db import db_session
from app.clubhouse.identity import current_identity, login_session, logout_session
from app.clubhouse.queries import UserRecord, find_user_by_username, insert_user
from app.clubhouse.security import hash_password, verify_password
from app.clubhouse.utils import form_value, plain_text

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

bp = Blueprint("auth", __name__)


class AuthFailure(enum.Enum):
    NOT_FOUND = "not_found"
    BAD_CREDENTIALS = "bad_credentials"


@dataclass(frozen=True)
class AuthResult:
    user: UserRecord | None = None
    failure: AuthFailure | None = None

    @property
    def ok(self) -> bool:
        return self.user is not None


def authenticate(s: "Session", username: str, password: str) -> AuthResult:
    """
    Check a username/password pair. The reason for a failure is for logs only;
    callers must not reveal it to the client.
    """
    user = find_user_by_username(s, username)
    if user is None:
        return AuthResult(failure=AuthFailure.NOT_FOUND)
    if not verify_password(password, user.password):
        return AuthResult(failure=AuthFailure.BAD_CREDENTIALS)
    return AuthResult(user=user)


# ---------- Sign-up ----------
@bp.get("/sign-up")
def signup_get():
    return render_template("sign-up.html")


@bp.post("/sign-up")
def signup_post():
    first_name = form_value(request.form, "firstName")
    last_name = form_value(request.form, "lastName")
    username = form_value(request.form, "username")
    password = request.form.get("password") or ""
    confirm = request.form.get("confirmPassword") or ""

    if not (first_name and last_name and username and password and confirm):
        return plain_text("All fields are required.", 400)
    if password != confirm:
        return plain_text("Passwords do not match.", 400)

    s = db_session()
    try:
        insert_user(
            s,
            first_name=first_name,
            last_name=last_name,
            username=username,
            password_hash=hash_password(password),
        )
        s.commit()
    except SQLAlchemyError:
        s.rollback()
        current_app.logger.exception("Sign-up failed (username=%s request_id=%s)", username, getattr(g, "request_id", None))
        return plain_text("There was an error creating your account.", 400)

    current_app.logger.info("New account created (username=%s)", username)
    return redirect(url_for("auth.login_get"))


# ---------- Log-in / Log-out ----------
@bp.get("/log-in")
def login_get():
    return render_template("log-in.html")


@bp.post("/log-in")
def login_post():
    username = form_value(request.form, "username")
    password = request.form.get("password") or ""

    result = authenticate(db_session(), username, password)
    if not result.ok:
        current_app.logger.info("Login failed (username=%s reason=%s)", username, result.failure.value)
        flash("Invalid username or password.", "danger")
        return redirect(url_for("auth.login_get"))

    login_session(result.user)
    current_app.logger.info("Login ok (user_id=%s)", result.user.id)
    return redirect(url_for("board.index"))


@bp.get("/log-out")
def logout():
    user = current_identity().user
    logout_session()
    if user:
        current_app.logger.info("Logout (user_id=%s)", user.id)
    return redirect(url_for("board.index"))
