#!/usr/bin/env python3
"""Grant the admin flag to an existing user (idempotent).

Usage:
  python scripts/promote_admin.py --username alice
"""

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.clubhouse.config import load_settings
from app.clubhouse.queries import find_user_by_username, set_admin
from scripts._db_utils import script_session


def promote(username: str, *, database_url: str | None = None) -> bool:
    db_url = database_url or load_settings().database_url
    with script_session(db_url) as s:
        user = find_user_by_username(s, username)
        if not user:
            print(f"User not found: {username}")
            return False
        if user.is_admin:
            print(f"User is already an admin: {username}")
            return True
        set_admin(s, user.id)
    print(f"Admin flag set for {username}")
    return True


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--username", required=True, help="Username to promote to admin")
    args = parser.parse_args()
    if not promote(args.username):
        sys.exit(1)


if __name__ == "__main__":
    main()
