from __future__ import annotations

from sqlalchemy import BigInteger, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from outage.core.db import Base


DEFAULT_REASON = "No reason provided"


class BlacklistEntry(Base):
    __tablename__ = "blacklisted_ips"
    __table_args__ = (
        UniqueConstraint("ip", name="uq_blacklisted_ips_ip"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ip: Mapped[str] = mapped_column(String(512), nullable=False)
    # creation time, milliseconds since epoch
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False, default=DEFAULT_REASON)

    def to_dict(self) -> dict:
        return {"id": self.id, "ip": self.ip, "timestamp": self.timestamp, "reason": self.reason}
