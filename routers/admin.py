from __future__ import annotations

from collections import Counter

from fastapi import APIRouter, Request

from clock import running_clocks, stop_clock
from deps.auth import admin_error
from session import Phase
from store import SessionStore

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/sessions")
async def session_stats(request: Request):
    err = admin_error(request)
    if err:
        return {"ok": False, "error": err}

    phases = Counter(s.phase.value for _, s in SessionStore.items())
    return {
        "ok": True,
        "count": SessionStore.count(),
        "phases": {p.value: phases.get(p.value, 0) for p in Phase},
        "clocks": running_clocks(),
    }


@router.post("/purge")
async def purge_sessions(request: Request):
    """Drop every session that is not mid-round."""
    err = admin_error(request)
    if err:
        return {"ok": False, "error": err}

    for sid, s in SessionStore.items():
        if not s.is_playing:
            stop_clock(sid)
    n = SessionStore.purge([Phase.IDLE, Phase.OVER])
    return {"ok": True, "removed": n}
