from flask import Blueprint, current_app, redirect, render_template, request, url_for

from app.clubhouse.db import db_session
from app.clubhouse.identity import current_identity
from app.clubhouse.queries import delete_message, insert_message, list_messages, set_member
from app.clubhouse.rbac import require_admin, require_authenticated
from app.clubhouse.security import passphrase_matches
from app.clubhouse.utils import form_value, plain_text

bp = Blueprint("board", __name__)

WELCOME_MESSAGE = "Welcome to the Club! You're now a member."
WRONG_PASSCODE_MESSAGE = "Incorrect passcode."
TITLE_MAX_LENGTH = 255  # messages.title is VARCHAR(255)


@bp.get("/")
def index():
    messages = list_messages(db_session())
    return render_template("index.html", messages=messages)


# ---------- Messages ----------
@bp.get("/new-message")
@require_authenticated
def new_message_get():
    return render_template("new-message.html")


@bp.post("/new-message")
@require_authenticated
def new_message_post():
    title = form_value(request.form, "title")
    body = form_value(request.form, "message")
    if not title or not body:
        return plain_text("Both fields are required.", 400)
    if len(title) > TITLE_MAX_LENGTH:
        return plain_text(f"Title must be at most {TITLE_MAX_LENGTH} characters.", 400)

    s = db_session()
    insert_message(s, title=title, message=body, user_id=current_identity().user.id)
    s.commit()
    return redirect(url_for("board.index"))


@bp.post("/delete-message/<int:message_id>")
@require_authenticated
@require_admin
def delete_message_post(message_id: int):
    s = db_session()
    removed = delete_message(s, message_id)
    s.commit()
    current_app.logger.info(
        "Message delete (message_id=%s removed=%s by user_id=%s)", message_id, removed, current_identity().user.id
    )
    return redirect(url_for("board.index"))


# ---------- Club ----------
@bp.get("/join-club")
@require_authenticated
def join_club_get():
    return render_template("join-club.html")


@bp.post("/join-club")
@require_authenticated
def join_club_post():
    user = current_identity().user
    candidate = request.form.get("secret") or ""
    if not passphrase_matches(candidate, current_app.extensions["club_passphrase"]):
        current_app.logger.info("Join-club rejected (user_id=%s)", user.id)
        return plain_text(WRONG_PASSCODE_MESSAGE, 403)

    s = db_session()
    set_member(s, user.id)
    s.commit()
    current_app.logger.info("Membership granted (user_id=%s)", user.id)
    return plain_text(WELCOME_MESSAGE)


# ---------- Probes ----------
@bp.get("/health")
def health():
    """Health check endpoint. Returns JSON."""
    return {"ok": True}


@bp.get("/healthz")
def healthz():
    """
    Fast health check for load balancer probes. No DB access, minimal overhead.
    """
    return "ok", 200
