from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Response
from fastapi.responses import FileResponse, JSONResponse
from sqlalchemy.orm import Session

from outage.core.clock import now_ms
from outage.core.config import Settings, get_settings
from outage.core.db import get_db
from outage.core.errors import AuthError, ValidationError
from outage.core.security import create_session_token, verify_admin_credentials
from outage.deps.admin import require_admin
from outage.schemas.admin import BlacklistAddRequest, LoginRequest, MaintenanceRequest, SetStatusRequest
from outage.services.blacklist import Blacklist
from outage.services.report_ledger import ReportLedger
from outage.services.settings_store import FORCE_STATUS_VALUES, SettingsStore
from outage.services.status import group_reports_by_ip


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

SUCCESS = {"success": True}


@router.get("", include_in_schema=False)
def admin_page(settings: Settings = Depends(get_settings)) -> FileResponse:
    return FileResponse(Path(settings.static_dir) / "admin.html")


# ---- Session ----
@router.post("/login")
def login(payload: LoginRequest, settings: Settings = Depends(get_settings)) -> JSONResponse:
    if not payload.username or not payload.password:
        raise ValidationError("Username and password are required")
    if not verify_admin_credentials(payload.username, payload.password):
        logger.warning("admin.login_failed username=%s", payload.username)
        raise AuthError("Invalid credentials")
    response = JSONResponse(SUCCESS)
    response.set_cookie(
        settings.session_cookie_name,
        create_session_token(),
        max_age=settings.session_max_age_minutes * 60,
        httponly=True,
        samesite="lax",
    )
    logger.info("admin.login username=%s", payload.username)
    return response


@router.post("/logout")
def logout(response: Response, settings: Settings = Depends(get_settings)) -> dict:
    response.delete_cookie(settings.session_cookie_name, httponly=True, samesite="lax")
    return SUCCESS


# ---- Dashboard ----
@router.get("/dashboard", dependencies=[Depends(require_admin)])
def dashboard(
    now: int = Depends(now_ms),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
) -> dict:
    rows = ReportLedger(db).since(now - settings.report_window_ms)
    return {
        "reports": group_reports_by_ip(rows),
        "blacklistedIPs": [e.to_dict() for e in Blacklist(db).entries()],
        "settings": SettingsStore(db).all(),
    }


# ---- Settings mutations ----
@router.post("/set-status", dependencies=[Depends(require_admin)])
def set_status(payload: SetStatusRequest, db: Session = Depends(get_db)) -> dict:
    if payload.status not in FORCE_STATUS_VALUES:
        raise ValidationError("Invalid status")
    SettingsStore(db).set_force_status(payload.status)
    logger.info("admin.force_status value=%s", payload.status)
    return SUCCESS


@router.post("/maintenance", dependencies=[Depends(require_admin)])
def maintenance(payload: Optional[MaintenanceRequest] = None, db: Session = Depends(get_db)) -> dict:
    enabled = bool(payload.enabled) if payload is not None else False
    SettingsStore(db).set_maintenance(enabled)
    logger.info("admin.maintenance enabled=%s", enabled)
    return SUCCESS


# ---- Blacklist ----
@router.post("/blacklist", dependencies=[Depends(require_admin)])
def blacklist_add(
    payload: BlacklistAddRequest,
    now: int = Depends(now_ms),
    db: Session = Depends(get_db),
) -> dict:
    if not payload.ip:
        raise ValidationError("IP address is required")
    Blacklist(db).add(payload.ip, now, payload.reason)
    return SUCCESS


@router.delete("/blacklist/{ip:path}", dependencies=[Depends(require_admin)])
def blacklist_remove(ip: str, db: Session = Depends(get_db)) -> dict:
    Blacklist(db).remove(ip)
    return SUCCESS
