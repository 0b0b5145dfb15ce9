# math-challenge/store.py

from __future__ import annotations

import secrets
from typing import Dict, Iterable, Optional, Tuple

from problems import DEFAULT_MODE, OperationMode, ProblemGenerator
from session import GameSession, Phase


class SessionStore:
    # In-process only; sessions are gone when the server restarts.
    _sessions: Dict[str, GameSession] = {}

    @classmethod
    def create(
        cls, mode: Optional[OperationMode] = None, seed: Optional[int] = None
    ) -> Tuple[str, GameSession]:
        sid = secrets.token_hex(8)
        while sid in cls._sessions:
            sid = secrets.token_hex(8)
        session = GameSession(ProblemGenerator(seed=seed), mode=mode or DEFAULT_MODE)
        cls._sessions[sid] = session
        return sid, session

    @classmethod
    def get(cls, sid: str) -> Optional[GameSession]:
        return cls._sessions.get(sid)

    @classmethod
    def remove(cls, sid: str) -> bool:
        return cls._sessions.pop(sid, None) is not None

    @classmethod
    def items(cls) -> Iterable[Tuple[str, GameSession]]:
        # copy so callers may remove while iterating
        return list(cls._sessions.items())

    @classmethod
    def purge(cls, phases: Iterable[Phase]) -> int:
        wanted = set(phases)
        doomed = [sid for sid, s in cls._sessions.items() if s.phase in wanted]
        for sid in doomed:
            del cls._sessions[sid]
        return len(doomed)

    @classmethod
    def count(cls) -> int:
        return len(cls._sessions)

    @classmethod
    def clear(cls) -> None:
        cls._sessions = {}


# Public API
def create_session(
    mode: Optional[OperationMode] = None, seed: Optional[int] = None
) -> Tuple[str, GameSession]:
    return SessionStore.create(mode=mode, seed=seed)


def get_session(sid: str) -> Optional[GameSession]:
    return SessionStore.get(sid)


def drop_session(sid: str) -> bool:
    return SessionStore.remove(sid)
