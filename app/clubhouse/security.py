import hmac
import secrets

from flask import Request, current_app, session
from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(plaintext: str, method: str | None = None) -> str:
    """Salted one-way hash. Method defaults to the app's PASSWORD_HASH_METHOD."""
    if method is None:
        method = current_app.config.get("PASSWORD_HASH_METHOD") or "scrypt"
    return generate_password_hash(plaintext, method=method)


def verify_password(plaintext: str, digest: str) -> bool:
    return check_password_hash(digest, plaintext)


def passphrase_matches(candidate: str, expected: str) -> bool:
    """Constant-time passphrase check. An unset passphrase never matches."""
    if not expected:
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))


def ensure_csrf_token() -> str:
    """Ensure a CSRF token exists in the session and return it."""
    token = session.get("csrf_token")
    if not token:
        token = secrets.token_urlsafe(32)
        session["csrf_token"] = token
    return token


def validate_csrf(req: Request) -> bool:
    """Validate CSRF token from form field or header."""
    token = req.headers.get("X-CSRF-Token") or req.form.get("csrf_token")
    expected = session.get("csrf_token")
    if not token or not expected:
        return False
    return hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8"))
