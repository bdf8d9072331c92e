from __future__ import annotations

from typing import Any, Dict, Iterable, List

from sqlalchemy.orm import Session

from outage.core.config import Settings
from outage.models.report import Report
from outage.services.report_ledger import ReportLedger
from outage.services.settings_store import SettingsStore


def resolve_status(db: Session, now_ms: int, settings: Settings) -> Dict[str, Any]:
    """Public status: forced override if set, else derived from recent reports.

    A forced status skips the ledger entirely and reports zero rows.
    """
    forced = SettingsStore(db).force_status()
    if forced != "auto":
        text = settings.status_up_text if forced == "up" else settings.status_down_text
        return {"status": text, "count": 0, "reports": [], "forced": True}

    rows = ReportLedger(db).since(now_ms - settings.report_window_ms)
    count = len(rows)
    text = settings.status_down_text if count >= settings.down_threshold else settings.status_up_text
    return {
        "status": text,
        "count": count,
        "reports": [r.to_dict() for r in rows],
        "forced": False,
    }


def group_reports_by_ip(rows: Iterable[Report]) -> List[Dict[str, Any]]:
    """Per-address report count and latest timestamp, busiest address first."""
    grouped: Dict[str, Dict[str, Any]] = {}
    for r in rows:
        item = grouped.get(r.ip)
        if item is None:
            grouped[r.ip] = {"ip": r.ip, "count": 1, "last_report": r.timestamp}
        else:
            item["count"] += 1
            item["last_report"] = max(item["last_report"], r.timestamp)
    return sorted(grouped.values(), key=lambda g: (-g["count"], -g["last_report"]))
