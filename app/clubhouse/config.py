import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    secret_key: str
    env: str
    database_url: str

    club_secret: str
    password_hash_method: str
    csrf_enabled: bool


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def _database_url() -> str:
    url = _getenv("DATABASE_URL")
    if url:
        return url
    # Discrete DB_* variables describe a Postgres connection.
    name = _getenv("DB_NAME")
    if not name:
        return "sqlite:///clubhouse.db"
    user = _getenv("DB_USER", "postgres")
    password = _getenv("DB_PASSWORD")
    host = _getenv("DB_HOST", "localhost")
    port = _getenv("DB_PORT", "5432")
    auth = f"{user}:{password}" if password else user
    return f"postgresql+psycopg2://{auth}@{host}:{port}/{name}"


def load_settings() -> Settings:
    return Settings(
        secret_key=_getenv("SECRET_KEY") or _getenv("SESSION_SECRET", "change-me"),
        env=_getenv("ENV", "development"),
        database_url=_database_url(),
        club_secret=_getenv("CLUB_SECRET", ""),
        password_hash_method=_getenv("PASSWORD_HASH_METHOD", "scrypt"),
        csrf_enabled=_getenv("CSRF_ENABLED", "1").lower() not in ("0", "false", "no"),
    )


def load_config(s: Settings | None = None) -> dict:
    s = s or load_settings()
    is_production = s.env in ("prod", "production")
    return {
        "SECRET_KEY": s.secret_key,
        "ENV": s.env,
        "DATABASE_URL": s.database_url,
        "CLUB_SECRET": s.club_secret,
        "PASSWORD_HASH_METHOD": s.password_hash_method,
        "CSRF_ENABLED": s.csrf_enabled,
        # security defaults
        "SESSION_COOKIE_HTTPONLY": True,
        "SESSION_COOKIE_SAMESITE": "Lax",
        "SESSION_COOKIE_SECURE": is_production,  # Require HTTPS in production
    }
