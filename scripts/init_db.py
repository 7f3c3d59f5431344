"""
Create tables (if missing) and seed reference data.

- Properties from DEFAULT_PROPERTIES (idempotent).
- Optional manager account from MANAGER_USERNAME / MANAGER_PASSWORD.
  An existing account's password is never overwritten.

Usage:
  python scripts/init_db.py
"""
import os
import sys
from pathlib import Path

from werkzeug.security import generate_password_hash

# Ensure repo root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.rpv.config import load_settings  # noqa: E402
from app.rpv.constants import DEFAULT_PROPERTIES  # noqa: E402
from app.rpv.models import Base, Property, User, UserRole  # noqa: E402
from scripts._db_utils import create_script_engine, script_session  # noqa: E402


def seed_only(*, database_url: str | None = None) -> None:
    settings = load_settings()
    db_url = (database_url or settings.database_url).strip()

    with script_session(db_url, settings.db_sslmode) as s:
        existing = {name for (name,) in s.query(Property.property_name).all()}
        for name in DEFAULT_PROPERTIES:
            if name not in existing:
                s.add(Property(property_name=name))
                print(f"Added property: {name}", flush=True)

        username = (os.environ.get("MANAGER_USERNAME") or "").strip()
        password = os.environ.get("MANAGER_PASSWORD") or ""
        if username and password:
            user = s.query(User).filter(User.username == username).one_or_none()
            if user is None:
                s.add(User(username=username, password=generate_password_hash(password), role=UserRole.manager))
                print(f"Created manager account: {username}", flush=True)
            else:
                print(f"Manager account already exists: {username} (password unchanged)", flush=True)


def main() -> None:
    settings = load_settings()
    engine = create_script_engine(settings.database_url, settings.db_sslmode)
    try:
        Base.metadata.create_all(bind=engine)
    finally:
        engine.dispose()
    seed_only(database_url=settings.database_url)
    print("Database initialized.", flush=True)


if __name__ == "__main__":
    main()
