from __future__ import annotations

from typing import List

from pydantic import BaseModel


class ReportOut(BaseModel):
    id: int
    ip: str
    timestamp: int


class StatusOut(BaseModel):
    status: str
    count: int
    reports: List[ReportOut]
    forced: bool


class SuccessOut(BaseModel):
    success: bool = True
