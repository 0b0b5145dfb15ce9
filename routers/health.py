# math-challenge/routers/health.py
from fastapi import APIRouter

from clock import clock_enabled, running_clocks
from store import SessionStore

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/sessions")
def health_sessions():
    return {
        "ok": True,
        "count": SessionStore.count(),
        "clock_enabled": clock_enabled(),
        "clocks": running_clocks(),
    }
