"""Shared fixtures for Hydration Tracker tests."""

import itertools
from datetime import datetime

import pytest

from hydration.clock import FixedClock
from hydration.ledger import Ledger
from hydration.services.storage import InMemoryStorage, StateStorageInterface, StorageError


TODAY = "2024-01-15"


class RecordingLogger:
    """Stands in for a structlog logger and remembers every call."""

    def __init__(self):
        self.records = []

    def _record(self, level, event, **kwargs):
        self.records.append((level, event, kwargs))

    def debug(self, event, **kwargs):
        self._record("debug", event, **kwargs)

    def info(self, event, **kwargs):
        self._record("info", event, **kwargs)

    def warning(self, event, **kwargs):
        self._record("warning", event, **kwargs)

    def error(self, event, **kwargs):
        self._record("error", event, **kwargs)

    def event_types(self):
        return [kwargs.get("event_type") for _, _, kwargs in self.records]


class FailingStorage(StateStorageInterface):
    """Storage whose every call fails."""

    def load(self):
        raise StorageError("disk on fire")

    def save(self, value):
        raise StorageError("disk on fire")


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 1, 15, 9, 30))


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"evt-{next(counter)}"


@pytest.fixture
def ledger(clock, id_factory):
    return Ledger(clock=clock, id_factory=id_factory)


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def failing_storage():
    return FailingStorage()
