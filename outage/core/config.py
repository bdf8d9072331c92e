from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Admin credentials and the session secret should be provided via
    environment in production.
    """

    app_name: str = "Outage Board"
    # Display name of the third-party service people report on
    service_name: str = "Korone"

    # Admin
    admin_username: str | None = None
    admin_password: str | None = None

    # Session
    session_secret: str = "change-me-in-prod"
    session_algorithm: str = "HS256"
    session_cookie_name: str = "outage_admin"
    session_max_age_minutes: int = 60 * 12

    # Database
    sqlite_path: str = "./reports.db"

    # Static pages
    static_dir: str = str(PACKAGE_DIR / "static")

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    # Reporting
    report_window_ms: int = 24 * 60 * 60 * 1000
    down_threshold: int = 30

    model_config = SettingsConfigDict(env_prefix="OUTAGE_", env_file=".env", extra="ignore")

    @property
    def status_up_text(self) -> str:
        return f"{self.service_name} is up"

    @property
    def status_down_text(self) -> str:
        return f"{self.service_name} is probably down"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]


settings = get_settings()
