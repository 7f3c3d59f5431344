"""
Release-phase helper.

- Fail fast if no database is configured (avoid silently using SQLite in prod).
- Run alembic migrations.
- Seed properties / manager account (idempotent).

Usage:
  python scripts/release.py
"""

from __future__ import annotations

import os
import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def run_release() -> None:
    from app.rpv.config import load_settings

    settings = load_settings()
    db_url = settings.database_url
    env = (os.environ.get("ENV") or "").strip().lower()
    # Guardrail: prevent accidental prod deploys against SQLite.
    if env in ("prod", "production") and db_url.startswith("sqlite"):
        raise RuntimeError("Refusing to run release on sqlite in production. Set DATABASE_URL or DB_HOST.")

    print("=== RPV release start ===", flush=True)
    print(f"ENV={env or '(unset)'}", flush=True)
    print("Running Alembic migrations...", flush=True)

    from alembic import command
    from alembic.config import Config

    cfg = Config(str(ROOT / "alembic.ini"))
    # Escape % for configparser interpolation (url-encoded passwords).
    cfg.set_main_option("sqlalchemy.url", db_url.replace("%", "%%"))
    command.upgrade(cfg, "head")
    print("Migrations complete.", flush=True)

    print("Seeding reference data (idempotent)...", flush=True)
    from scripts import init_db

    init_db.seed_only(database_url=db_url)
    print("Seed complete.", flush=True)
    print("=== RPV release done ===", flush=True)


def main() -> None:
    run_release()


if __name__ == "__main__":
    main()
