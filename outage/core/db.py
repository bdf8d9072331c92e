from __future__ import annotations

import logging
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import get_settings


logger = logging.getLogger(__name__)

Base = declarative_base()

# handlers run in the threadpool and share one engine
engine = create_engine(
    f"sqlite:///{get_settings().sqlite_path}",
    connect_args={"check_same_thread": False},
)


# WAL lets the status readers proceed while a report is being written
@event.listens_for(engine, "connect")
def _set_sqlite_pragmas(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA journal_mode=WAL;")
        cursor.execute("PRAGMA synchronous=NORMAL;")
    finally:
        cursor.close()


SessionLocal = sessionmaker(autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    with SessionLocal() as db:
        yield db


def init_db() -> None:
    """Create missing tables and seed the recognised settings.

    Safe to run on every boot: existing rows are left untouched.
    """
    # models must be imported so their tables are registered on Base
    from outage.models import blacklist, report, setting  # noqa: F401
    from outage.services.settings_store import seed_defaults

    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        seeded = seed_defaults(db)
    if seeded:
        logger.info("db.seeded keys=%s", ",".join(seeded))
