import os
from dataclasses import dataclass
from urllib.parse import quote_plus


@dataclass(frozen=True)
class Settings:
    secret_key: str
    env: str
    log_level: str
    database_url: str
    db_sslmode: str
    session_ttl_hours: int


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def _compose_database_url() -> str:
    """
    Build a Postgres URL from the discrete DB_* variables.
    Returns "" when no host is configured.
    """
    host = _getenv("DB_HOST")
    if not host:
        return ""
    user = quote_plus(_getenv("DB_USER"))
    password = quote_plus(_getenv("DB_PASSWORD"))
    name = _getenv("DB_NAME")
    port = _getenv("DB_PORT", "5432")
    return f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{name}"


def load_settings() -> Settings:
    database_url = _getenv("DATABASE_URL") or _compose_database_url() or "sqlite:///rpv.db"
    try:
        ttl = int(_getenv("SESSION_TTL_HOURS", "24"))
    except ValueError:
        ttl = 24
    return Settings(
        secret_key=_getenv("SECRET_KEY", "change-me"),
        env=_getenv("ENV", "development"),
        log_level=_getenv("LOG_LEVEL", "INFO").upper(),
        database_url=database_url,
        db_sslmode=_getenv("DB_SSLMODE", "require"),
        session_ttl_hours=ttl,
    )


def load_config() -> dict:
    s = load_settings()
    is_production = s.env in ("prod", "production")
    return {
        "SECRET_KEY": s.secret_key,
        "ENV": s.env,
        "LOG_LEVEL": s.log_level,
        "DATABASE_URL": s.database_url,
        "DB_SSLMODE": s.db_sslmode,
        "SESSION_TTL_HOURS": s.session_ttl_hours,
        # security defaults
        "SESSION_COOKIE_HTTPONLY": True,
        "SESSION_COOKIE_SAMESITE": "Lax",
        "SESSION_COOKIE_SECURE": is_production,  # Require HTTPS in production
    }
