from __future__ import annotations

from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from outage.models.setting import FORCE_STATUS, MAINTENANCE_MODE, Setting


DEFAULTS: Dict[str, str] = {
    MAINTENANCE_MODE: "false",
    FORCE_STATUS: "auto",
}

FORCE_STATUS_VALUES = ("up", "down", "auto")


class SettingsStore:
    """String key/value settings backed by the ``settings`` table."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        rec = self.db.get(Setting, key)
        if rec is not None:
            return rec.value
        if default is not None:
            return default
        return DEFAULTS.get(key)

    def set(self, key: str, value: str) -> None:
        rec = self.db.get(Setting, key)
        if rec:
            rec.value = value
        else:
            self.db.add(Setting(key=key, value=value))
        self.db.commit()

    def all(self) -> Dict[str, str]:
        rows = self.db.execute(select(Setting).order_by(Setting.key)).scalars().all()
        return {r.key: r.value for r in rows}

    # ---- typed accessors for the recognised keys ----
    def maintenance_enabled(self) -> bool:
        return self.get(MAINTENANCE_MODE) == "true"

    def set_maintenance(self, enabled: bool) -> None:
        self.set(MAINTENANCE_MODE, "true" if enabled else "false")

    def force_status(self) -> str:
        return self.get(FORCE_STATUS) or "auto"

    def set_force_status(self, status: str) -> None:
        if status not in FORCE_STATUS_VALUES:
            raise ValueError(f"unsupported force_status: {status!r}")
        self.set(FORCE_STATUS, status)


def seed_defaults(db: Session) -> List[str]:
    """Insert the recognised keys that are missing; return the keys written.

    Rows another process inserted first are skipped, not overwritten.
    """
    seeded = []
    for key, value in DEFAULTS.items():
        result = db.execute(
            sqlite_insert(Setting).values(key=key, value=value).on_conflict_do_nothing(index_elements=["key"])
        )
        if result.rowcount:
            seeded.append(key)
    db.commit()
    return seeded
