from __future__ import annotations

from sqlalchemy import BigInteger, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from outage.core.db import Base


class Report(Base):
    __tablename__ = "reports"
    __table_args__ = (
        Index("idx_reports_ip_timestamp", "ip", "timestamp"),
        Index("idx_reports_timestamp", "timestamp"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # client address as received (forwarded-for value or peer host), not normalised
    ip: Mapped[str] = mapped_column(String(512), nullable=False)
    # milliseconds since epoch
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)

    def to_dict(self) -> dict:
        return {"id": self.id, "ip": self.ip, "timestamp": self.timestamp}
