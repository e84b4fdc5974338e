"""Seed the optional admin account (idempotent).

Usage:
  ADMIN_USERNAME=admin ADMIN_PASSWORD=... python scripts/init_db.py
"""
import os
import sys
from pathlib import Path

from werkzeug.security import generate_password_hash

# Ensure repo root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.clubhouse.config import load_settings
from app.clubhouse.queries import find_user_by_username, insert_user, set_admin
from scripts._db_utils import script_session


def seed_only(*, database_url: str | None = None) -> None:
    """
    Create or promote the admin account named by ADMIN_USERNAME.
    Does NOT overwrite an existing user's password.
    """
    admin_username = (os.environ.get("ADMIN_USERNAME") or "").strip()
    admin_password = os.environ.get("ADMIN_PASSWORD") or ""
    if not admin_username or not admin_password:
        print("ADMIN_USERNAME/ADMIN_PASSWORD not set; skipping admin seed.")
        return

    settings = load_settings()
    db_url = (database_url or settings.database_url).strip()

    with script_session(db_url) as s:
        user = find_user_by_username(s, admin_username)
        if not user:
            insert_user(
                s,
                first_name="Club",
                last_name="Admin",
                username=admin_username,
                password_hash=generate_password_hash(admin_password, method=settings.password_hash_method),
            )
            user = find_user_by_username(s, admin_username)
            print(f"Created admin user: {admin_username}")
        if not user.is_admin:
            set_admin(s, user.id)

    print("Initialized database (seed_only).")
    print(f"Admin username: {admin_username}")
    print("Admin password: (from ADMIN_PASSWORD)")


def main() -> None:
    seed_only(database_url=None)


if __name__ == "__main__":
    main()
