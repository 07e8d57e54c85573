from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from dotenv import load_dotenv

from config import get_settings_module

from faculty_attendance.database.bootstrap import apply_seed_sql, ensure_admin_user
from faculty_attendance.database.connection import DBConfig


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        raise SystemExit("ADMIN_EMAIL and ADMIN_PASSWORD must be set")

    ensure_admin_user(
        db_config,
        fid=settings.ADMIN_FID,
        name=settings.ADMIN_NAME,
        email=settings.ADMIN_EMAIL,
        password=settings.ADMIN_PASSWORD,
    )
    print(f"OK: Admin {settings.ADMIN_EMAIL} ready -> {DBConfig.from_dict(db_config).describe()}")

    # Extra SQL files, e.g. `python scripts/seed_db.py database/sample_data.sql`
    for seed_path in sys.argv[1:]:
        count = apply_seed_sql(db_config, seed_path=seed_path)
        print(f"OK: {count} statements from {seed_path}")


if __name__ == "__main__":
    main()
