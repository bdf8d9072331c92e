from __future__ import annotations

import logging
import threading
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from outage.core.errors import RateLimitError
from outage.models.report import Report


logger = logging.getLogger(__name__)

# process-wide mutex so two submissions from one address cannot both pass the
# window check; in a multi-process deployment the gap remains
_submit_lock = threading.Lock()


class ReportLedger:
    """Append-only log of (address, timestamp) outage reports."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def has_reported_since(self, ip: str, since_ms: int) -> bool:
        row = self.db.execute(
            select(Report.id).where(Report.ip == ip, Report.timestamp > since_ms).limit(1)
        ).scalar_one_or_none()
        return row is not None

    def add(self, ip: str, timestamp_ms: int) -> Report:
        rec = Report(ip=ip, timestamp=timestamp_ms)
        self.db.add(rec)
        self.db.commit()
        self.db.refresh(rec)
        return rec

    def since(self, since_ms: int) -> List[Report]:
        return list(
            self.db.execute(
                select(Report).where(Report.timestamp > since_ms).order_by(Report.id)
            ).scalars().all()
        )

    def submit(self, ip: str, now_ms: int, window_ms: int) -> Report:
        """Record a report unless ``ip`` already reported inside the window.

        Raises RateLimitError when a report newer than ``now_ms - window_ms``
        exists for the address.
        """
        since_ms = now_ms - window_ms
        with _submit_lock:
            if self.has_reported_since(ip, since_ms):
                logger.info("report.rate_limited ip=%s", ip)
                raise RateLimitError()
            rec = self.add(ip, now_ms)
        logger.info("report.accepted ip=%s id=%s", ip, rec.id)
        return rec
