from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import Response, current_app, redirect, url_for

from app.clubhouse.identity import current_identity

ADMIN_ONLY_MESSAGE = "Access denied. Admins only."


def require_authenticated(fn: Callable[..., Any]) -> Callable[..., Any]:
    @wraps(fn)
    def wrapped(*args: Any, **kwargs: Any):
        # Unauthenticated → redirect to login.
        if not current_identity().is_authenticated:
            return redirect(url_for("auth.login_get"))
        return fn(*args, **kwargs)

    return wrapped


def require_admin(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Stack below require_authenticated; assumes an identity is present."""

    @wraps(fn)
    def wrapped(*args: Any, **kwargs: Any):
        user = current_identity().user
        if user is None or not user.is_admin:
            current_app.logger.warning("Forbidden: admin required (user_id=%s)", getattr(user, "id", None))
            return Response(ADMIN_ONLY_MESSAGE, status=403, mimetype="text/plain")
        return fn(*args, **kwargs)

    return wrapped
