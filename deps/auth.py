import os
from typing import Optional

from fastapi import Request


def admin_error(request: Request) -> Optional[str]:
    """
    Check the X-Admin-Token header against ADMIN_TOKEN.
    Returns an error string for the response body, or None when allowed.
    The token is read per request so it can be rotated without a restart.
    """
    expected = os.getenv("ADMIN_TOKEN") or ""
    provided = request.headers.get("x-admin-token")

    if not expected:
        return "ADMIN_TOKEN not configured on server."
    if provided != expected:
        return "unauthorized"
    return None
