from __future__ import annotations

from flask import Response


def plain_text(message: str, status: int = 200) -> Response:
    """Inline feedback for form posts; these are never rendered through a template."""
    return Response(message, status=status, mimetype="text/plain")


def form_value(form, key: str) -> str:
    """Stripped form field, empty string when missing."""
    return (form.get(key) or "").strip()
