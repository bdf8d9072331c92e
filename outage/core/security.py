from __future__ import annotations

import hmac
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt

from .config import get_settings


ADMIN_SUBJECT = "admin"


def verify_admin_credentials(username: str, password: str) -> bool:
    """Compare against the operator-provisioned credential pair.

    Unconfigured credentials never match.
    """
    settings = get_settings()
    if not settings.admin_username or not settings.admin_password:
        return False
    user_ok = hmac.compare_digest(username.encode("utf-8"), settings.admin_username.encode("utf-8"))
    pass_ok = hmac.compare_digest(password.encode("utf-8"), settings.admin_password.encode("utf-8"))
    return user_ok and pass_ok


def create_session_token(expires_minutes: Optional[int] = None) -> str:
    settings = get_settings()
    expire_delta = timedelta(minutes=expires_minutes or settings.session_max_age_minutes)
    now = datetime.now(tz=timezone.utc)
    payload: dict[str, Any] = {
        "sub": ADMIN_SUBJECT,
        "iat": int(now.timestamp()),
        "exp": int((now + expire_delta).timestamp()),
    }
    return jwt.encode(payload, settings.session_secret, algorithm=settings.session_algorithm)


def decode_session_token(token: str) -> dict[str, Any]:
    settings = get_settings()
    return jwt.decode(token, settings.session_secret, algorithms=[settings.session_algorithm])


def is_session_valid(token: Optional[str]) -> bool:
    if not token:
        return False
    try:
        payload = decode_session_token(token)
    except jwt.InvalidTokenError:
        return False
    return payload.get("sub") == ADMIN_SUBJECT
