from __future__ import annotations

from fastapi import Request

from outage.core.config import get_settings
from outage.core.errors import AuthError
from outage.core.security import is_session_valid


def require_admin(request: Request) -> None:
    token = request.cookies.get(get_settings().session_cookie_name)
    if not is_session_valid(token):
        raise AuthError()
