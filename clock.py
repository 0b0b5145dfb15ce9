# math-challenge/clock.py
"""Server-side countdown for game sessions.

The session itself only counts seconds; something outside it has to call
``tick()`` at 1 Hz while a round is running. ``SessionClock`` is that
something: one asyncio task per playing session, started and cancelled by
``sync_clock`` after every transition the API performs.

Set ``CLOCK_ENABLED=0`` to turn the clocks off, in which case clients (and
tests) drive ``POST /sessions/{id}/tick`` themselves.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Callable, Dict, Optional

from session import GameSession

logger = logging.getLogger(__name__)


def clock_enabled() -> bool:
    return os.getenv("CLOCK_ENABLED", "1").strip().lower() not in ("0", "false", "no", "")


def tick_interval() -> float:
    try:
        return max(0.0, float(os.getenv("TICK_INTERVAL_SEC", "1.0")))
    except ValueError:
        return 1.0


class SessionClock:
    """Repeating tick callback bound to one session."""

    def __init__(
        self,
        session: GameSession,
        interval: float = 1.0,
        on_stop: Optional[Callable[[], None]] = None,
    ) -> None:
        self.session = session
        self.interval = interval
        self.on_stop = on_stop
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Begin ticking. Must be called from inside a running event loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    def cancel(self) -> None:
        if self.running:
            self._task.cancel()
        self._task = None

    async def _run(self) -> None:
        try:
            while self.session.is_playing:
                await asyncio.sleep(self.interval)
                self.session.tick()
        finally:
            if self.on_stop is not None:
                self.on_stop()


# --- Per-session registry ---------------------------------------------------------

_clocks: Dict[str, SessionClock] = {}


def _forget(sid: str, clock: SessionClock) -> Callable[[], None]:
    def _done() -> None:
        if _clocks.get(sid) is clock:
            del _clocks[sid]
            logger.info("[clock-stop] session=%s", sid)

    return _done


def sync_clock(sid: str, session: GameSession, restart: bool = False) -> None:
    """Keep exactly one clock running while the session plays, none otherwise.

    ``restart`` drops a running clock first, so a new round starts on a full
    interval.
    """
    if restart or not session.is_playing:
        stop_clock(sid)
    if not session.is_playing:
        return
    if not clock_enabled():
        return
    current = _clocks.get(sid)
    if current is not None and current.running:
        return
    clock = SessionClock(session, interval=tick_interval())
    clock.on_stop = _forget(sid, clock)
    _clocks[sid] = clock
    clock.start()
    logger.info("[clock-start] session=%s interval=%ss", sid, clock.interval)


def stop_clock(sid: str) -> bool:
    clock = _clocks.pop(sid, None)
    if clock is None:
        return False
    clock.cancel()
    logger.info("[clock-cancel] session=%s", sid)
    return True


def running_clocks() -> int:
    return sum(1 for c in _clocks.values() if c.running)
