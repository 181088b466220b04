from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from tracking.pitch_store import PitchStore


class TickingClock:
    """Deterministic clock that advances a fixed step on every call."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)) -> None:
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture
def clock():
    return TickingClock(datetime(2024, 4, 6, 13, 5, 9))


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "pitchTracker.sqlite3")


@pytest.fixture
def store(db_path, clock):
    pitch_store = PitchStore(db_path, clock=clock)
    yield pitch_store
    pitch_store.close()
