from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from outage.core.errors import ConflictError, StorageError
from outage.models.blacklist import DEFAULT_REASON, BlacklistEntry


logger = logging.getLogger(__name__)


class Blacklist:
    def __init__(self, db: Session) -> None:
        self.db = db

    def contains(self, ip: str) -> bool:
        row = self.db.execute(
            select(BlacklistEntry.id).where(BlacklistEntry.ip == ip).limit(1)
        ).scalar_one_or_none()
        return row is not None

    def entries(self) -> List[BlacklistEntry]:
        return list(
            self.db.execute(
                select(BlacklistEntry).order_by(BlacklistEntry.timestamp.desc(), BlacklistEntry.id.desc())
            ).scalars().all()
        )

    def add(self, ip: str, now_ms: int, reason: Optional[str] = None) -> BlacklistEntry:
        """Insert ``ip``; the UNIQUE constraint on the address rejects duplicates."""
        rec = BlacklistEntry(ip=ip, timestamp=now_ms, reason=reason or DEFAULT_REASON)
        self.db.add(rec)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("IP already blacklisted") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError() from e
        self.db.refresh(rec)
        logger.info("blacklist.added ip=%s reason=%s", ip, rec.reason)
        return rec

    def remove(self, ip: str) -> int:
        """Delete ``ip`` if present; returns the number of rows removed."""
        result = self.db.execute(delete(BlacklistEntry).where(BlacklistEntry.ip == ip))
        self.db.commit()
        logger.info("blacklist.removed ip=%s rows=%s", ip, result.rowcount)
        return result.rowcount
