from __future__ import annotations

import logging
import re
from functools import lru_cache
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from .config import get_settings
from .db import SessionLocal
from .errors import ForbiddenError, StorageError, error_response


logger = logging.getLogger(__name__)

ASSET_PATTERN = re.compile(r"\.(png|jpe?g|gif|svg|ico|webp|css|js|map|woff2?|ttf|otf|eot)$", re.IGNORECASE)

_FALLBACK_MAINTENANCE_PAGE = "<!doctype html><title>Maintenance</title><h1>Down for maintenance</h1>"


def resolve_client_address(request: Request) -> str:
    """Forwarded-for header as sent, else the peer host. Not validated."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for
    return request.client.host if request.client else "unknown"


def is_admin_path(path: str) -> bool:
    return path.startswith("/admin")


def is_asset_path(path: str) -> bool:
    return ASSET_PATTERN.search(path) is not None


@lru_cache(maxsize=1)
def maintenance_page() -> str:
    page = Path(get_settings().static_dir) / "maintenance.html"
    try:
        return page.read_text(encoding="utf-8")
    except OSError:
        logger.warning("gate.maintenance_page_missing path=%s", page)
        return _FALLBACK_MAINTENANCE_PAGE


def register_access_gate(app: FastAPI) -> None:
    """Attach the middleware that runs before routing on every request.

    Maintenance mode is checked before the blacklist; admin paths bypass both.
    """
    # late imports: services import the models, which import core.db
    from outage.services.blacklist import Blacklist
    from outage.services.settings_store import SettingsStore

    def _lookup(address: str, asset: bool) -> tuple[bool, bool]:
        with SessionLocal() as db:
            maintenance = not asset and SettingsStore(db).maintenance_enabled()
            blocked = not maintenance and Blacklist(db).contains(address)
        return maintenance, blocked

    @app.middleware("http")
    async def access_gate(request: Request, call_next):
        address = resolve_client_address(request)
        request.state.client_address = address
        path = request.url.path

        if is_admin_path(path):
            return await call_next(request)

        try:
            maintenance, blocked = await run_in_threadpool(_lookup, address, is_asset_path(path))
        except SQLAlchemyError as e:
            logger.error("gate.lookup_failed ip=%s path=%s error=%s", address, path, e)
            return error_response(StorageError())
        if maintenance:
            return HTMLResponse(maintenance_page())
        if blocked:
            logger.warning("gate.blocked ip=%s path=%s", address, path)
            return error_response(ForbiddenError())
        return await call_next(request)
