import pytest

from clock import _clocks
from store import SessionStore


@pytest.fixture(autouse=True)
def _no_server_clock(monkeypatch):
    # tests drive tick() themselves
    monkeypatch.setenv("CLOCK_ENABLED", "0")
    SessionStore.clear()
    yield
    for c in list(_clocks.values()):
        c.cancel()
    _clocks.clear()
    SessionStore.clear()
