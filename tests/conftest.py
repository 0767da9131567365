"""
Shared pytest fixtures for obsrange tests.
"""

import pytest

from obsrange import RangeObservableSequence


class ChangeRecorder:
    """Collects every change notification and property signal of a sequence."""

    def __init__(self, sequence):
        self.sequence = sequence
        self.changes = []
        self.properties = []
        # interleaved log of ("property", name) / ("change", notification)
        self.events = []
        sequence.subscribe(self.on_change)
        sequence.subscribe_property(self.on_property)

    def on_change(self, change):
        self.changes.append(change)
        self.events.append(("change", change))

    def on_property(self, name):
        self.properties.append(name)
        self.events.append(("property", name))

    @property
    def last(self):
        return self.changes[-1]

    def clear(self):
        self.changes.clear()
        self.properties.clear()
        self.events.clear()


@pytest.fixture
def letters():
    """A fresh sequence holding A..E."""
    return RangeObservableSequence(["A", "B", "C", "D", "E"])


@pytest.fixture
def recorder_factory():
    return ChangeRecorder


@pytest.fixture
def recorder(letters):
    """Recorder attached to the ``letters`` sequence."""
    return ChangeRecorder(letters)
