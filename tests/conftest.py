from __future__ import annotations

import pytest

from core.persistence import PersistenceError
from core.quests import QuestStore
from core.tracker import ViewStateMachine


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class MemoryPersistence:
    """In-memory adapter that records saves and can be told to fail."""

    def __init__(self, snapshots=None, *, fail_save: bool = False, load_error: Exception | None = None):
        self.snapshots = snapshots
        self.fail_save = fail_save
        self.load_error = load_error
        self.saved: list[list[dict]] = []

    def load(self):
        if self.load_error is not None:
            raise self.load_error
        return self.snapshots

    def save(self, snapshots) -> None:
        if self.fail_save:
            raise PersistenceError("disk full")
        self.saved.append(list(snapshots))
        self.snapshots = list(snapshots)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def persistence():
    return MemoryPersistence()


@pytest.fixture
def store():
    return QuestStore()


@pytest.fixture
def tracker(store, persistence, clock):
    return ViewStateMachine(store, persistence, page_size=5, message_duration=3.0, clock=clock)
