"""Provision the bootstrap administrator (ADMIN_EMAIL / ADMIN_PASSWORD)."""
from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.extentrack.extentrack.database.bootstrap import ensure_admin


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    if not settings.ADMIN_PASSWORD:
        raise SystemExit("ADMIN_PASSWORD is not set")

    created = ensure_admin(
        db_config,
        email=settings.ADMIN_EMAIL,
        password=settings.ADMIN_PASSWORD,
        name=getattr(settings, "ADMIN_NAME", "Administrador"),
    )
    state = "created" if created else "already exists"
    print(f"OK: admin {settings.ADMIN_EMAIL} {state} -> {db_config.get('host')}/{db_config.get('database')}")


if __name__ == "__main__":
    main()
