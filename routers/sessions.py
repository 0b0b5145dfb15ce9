# math-challenge/routers/sessions.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException

from clock import clock_enabled, stop_clock, sync_clock
from problems import DEFAULT_MODE, OperationMode
from schemas.sessions import (
    AnswerRequest,
    AnswerResponse,
    CreateSessionRequest,
    FeedbackOut,
    ModeRequest,
    ModeResponse,
    ModesOut,
    SessionCreated,
    SnapshotOut,
    StartRequest,
)
from session import GameSession
from store import create_session, drop_session, get_session

router = APIRouter(tags=["sessions"])

# Handlers touching a session are async: they run on the event loop, the same
# thread as the clock tasks, so transitions never interleave.


def _load(sid: str) -> GameSession:
    s = get_session(sid)
    if s is None:
        raise HTTPException(status_code=404, detail="session not found")
    return s


def _out(s: GameSession) -> SnapshotOut:
    return SnapshotOut.from_snapshot(s.snapshot())


@router.get("/modes", response_model=ModesOut)
def list_modes():
    return {"modes": list(OperationMode), "default": DEFAULT_MODE}


@router.post("/sessions", response_model=SessionCreated, status_code=201)
async def new_session(req: Optional[CreateSessionRequest] = None):
    req = req or CreateSessionRequest()
    sid, s = create_session(mode=req.mode, seed=req.seed)
    return {"id": sid, "snapshot": _out(s)}


@router.get("/sessions/{sid}", response_model=SnapshotOut)
async def read_session(sid: str):
    return _out(_load(sid))


@router.put("/sessions/{sid}/mode", response_model=ModeResponse)
async def select_mode(sid: str, req: ModeRequest):
    s = _load(sid)
    ok = s.select_mode(req.mode)
    return {"ok": ok, "snapshot": _out(s)}


@router.post("/sessions/{sid}/start", response_model=SnapshotOut)
async def start_session(sid: str, req: Optional[StartRequest] = None):
    s = _load(sid)
    s.start(req.mode if req else None)
    # a fresh round gets a fresh clock, not the tail of the old sleep
    sync_clock(sid, s, restart=True)
    return _out(s)


@router.post("/sessions/{sid}/answer", response_model=AnswerResponse)
async def submit_answer(sid: str, req: AnswerRequest):
    s = _load(sid)
    event = s.submit_answer(req.answer)
    # a wrong answer can end the round before the next tick
    sync_clock(sid, s)
    return {"feedback": FeedbackOut(**event.model_dump()), "snapshot": _out(s)}


@router.post("/sessions/{sid}/tick", response_model=SnapshotOut)
async def tick_session(sid: str):
    s = _load(sid)
    if clock_enabled():
        # the server clock owns ticking
        return _out(s)
    s.tick()
    sync_clock(sid, s)
    return _out(s)


@router.post("/sessions/{sid}/reset", response_model=SnapshotOut)
async def reset_session(sid: str):
    s = _load(sid)
    s.reset()
    sync_clock(sid, s)
    return _out(s)


@router.delete("/sessions/{sid}")
async def delete_session(sid: str):
    stop_clock(sid)
    if not drop_session(sid):
        raise HTTPException(status_code=404, detail="session not found")
    return {"ok": True}
