"""
Pytest fixtures for the outage service.
Provides an isolated SQLite file, a controllable clock, and HTTP clients.
"""

import os
import shutil
import sys
import tempfile
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Settings are read once on import, so the environment must be ready first.
TEST_SESSION_ROOT = Path(tempfile.mkdtemp(prefix="outage_pytest_"))
os.environ["OUTAGE_SQLITE_PATH"] = (TEST_SESSION_ROOT / "reports.db").as_posix()
os.environ["OUTAGE_ADMIN_USERNAME"] = "operator"
os.environ["OUTAGE_ADMIN_PASSWORD"] = "s3cret-pass"
os.environ["OUTAGE_SESSION_SECRET"] = "test-session-secret-0123456789abcdef"

from fastapi.testclient import TestClient

from outage.core.clock import now_ms
from outage.core.db import Base, SessionLocal, engine, init_db
from outage.main import app
from outage.models.blacklist import BlacklistEntry  # noqa: F401  registers the table
from outage.models.report import Report
from outage.models.setting import Setting  # noqa: F401

ADMIN_USERNAME = "operator"
ADMIN_PASSWORD = "s3cret-pass"
DAY_MS = 24 * 60 * 60 * 1000
T0 = 1_700_000_000_000


class FakeClock:
    def __init__(self, now: int) -> None:
        self.now = now

    def advance(self, ms: int) -> None:
        self.now += ms

    def __call__(self) -> int:
        return self.now


@pytest.fixture(scope="session", autouse=True)
def _session_artifact_cleanup():
    yield
    engine.dispose()
    shutil.rmtree(TEST_SESSION_ROOT, ignore_errors=True)


# ==================== Database Fixtures ====================

@pytest.fixture(autouse=True)
def clean_db():
    """Fresh tables with default settings for every test."""
    Base.metadata.drop_all(bind=engine)
    init_db()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def add_reports(db):
    def _add(count: int, timestamp: int, ip_prefix: str = "10.0.0.") -> None:
        db.add_all([Report(ip=f"{ip_prefix}{i}", timestamp=timestamp) for i in range(count)])
        db.commit()

    return _add


# ==================== Application Fixtures ====================

@pytest.fixture
def clock():
    fake = FakeClock(T0)
    app.dependency_overrides[now_ms] = fake
    yield fake
    app.dependency_overrides.pop(now_ms, None)


@pytest.fixture
def client(clock):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_client(client):
    resp = client.post("/admin/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return client


@pytest.fixture
def anon_client(clock):
    """Second client without the admin cookie, sharing the same app."""
    with TestClient(app) as c:
        yield c
