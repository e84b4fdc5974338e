#!/usr/bin/env python3
"""Migrate, seed, then exec gunicorn on app.wsgi:app bound to $PORT (default 8080)."""

from __future__ import annotations

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def _port() -> str:
    raw = (os.environ.get("PORT") or "8080").strip()
    if not raw.isdigit() or not 1 <= int(raw) <= 65535:
        sys.exit(f"ERROR: PORT must be an integer 1-65535, got {raw!r}")
    return raw


def main() -> None:
    port = _port()

    from scripts.release import run_release
    try:
        run_release()
    except Exception as e:
        sys.exit(f"Release failed: {e}")

    print(f"Starting clubhouse on 0.0.0.0:{port}", flush=True)
    # exec so gunicorn owns PID 1 and its signals.
    os.execvp(
        "gunicorn",
        ["gunicorn", "app.wsgi:app", "--bind", f"0.0.0.0:{port}", "--workers", "2", "--preload", "--access-logfile", "-"],
    )


if __name__ == "__main__":
    main()
