import gc

import pytest

from weakevents import WeakEvent


class Recorder:
    """Subscriber that writes every call to a log it does not own."""

    def __init__(self, log: list, label: str = "recorder") -> None:
        self.log = log
        self.label = label

    def on_event(self, sender, args):
        self.log.append((self.label, args))


@pytest.fixture
def event():
    """Isolation → every test gets a pristine WeakEvent, emptied afterwards."""
    with WeakEvent("functionality") as ev:
        yield ev


@pytest.fixture
def collect():
    """Force a full collection so dropped subscribers are really gone."""

    def _collect() -> None:
        gc.collect()

    return _collect


@pytest.fixture
def recorder_factory():
    """Builds :class:`Recorder` subscribers; the test owns every instance."""
    return Recorder
