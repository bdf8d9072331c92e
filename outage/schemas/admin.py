from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


# Fields are optional so that missing values reach the handlers and are
# reported as 400 with the service's own messages.
class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class SetStatusRequest(BaseModel):
    status: Optional[str] = None


class MaintenanceRequest(BaseModel):
    enabled: Any = None


class BlacklistAddRequest(BaseModel):
    ip: Optional[str] = None
    reason: Optional[str] = None
