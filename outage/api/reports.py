from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from outage.core.clock import now_ms
from outage.core.config import Settings, get_settings
from outage.core.db import get_db
from outage.deps.client import get_client_address
from outage.schemas.report import StatusOut, SuccessOut
from outage.services.report_ledger import ReportLedger
from outage.services.status import resolve_status


router = APIRouter(tags=["reports"])


@router.post("/report", response_model=SuccessOut, responses={429: {"description": "Already reported in the window"}})
def submit_report(
    ip: str = Depends(get_client_address),
    now: int = Depends(now_ms),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
) -> SuccessOut:
    ReportLedger(db).submit(ip, now, settings.report_window_ms)
    return SuccessOut()


@router.get("/status", response_model=StatusOut)
def get_status(
    now: int = Depends(now_ms),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
) -> StatusOut:
    return StatusOut.model_validate(resolve_status(db, now, settings))
