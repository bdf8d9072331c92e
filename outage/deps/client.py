from __future__ import annotations

from fastapi import Request

from outage.core.gate import resolve_client_address


def get_client_address(request: Request) -> str:
    """Address resolved by the access gate for this request."""
    address = getattr(request.state, "client_address", None)
    return address or resolve_client_address(request)
