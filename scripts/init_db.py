"""
Create the reports/blacklist/settings tables and seed default settings.

The service does the same on every startup; this is for preparing a
database file before the first deploy.
"""
from outage.core.config import settings
from outage.core.db import SessionLocal, init_db
from outage.services.settings_store import SettingsStore


def main() -> int:
    init_db()
    with SessionLocal() as db:
        values = SettingsStore(db).all()
    print(f"database ready: {settings.sqlite_path}")
    for key, value in values.items():
        print(f"  {key} = {value}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
