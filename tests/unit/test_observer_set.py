"""Unit tests for OrderedObserverSet."""

import pytest

from obsrange import InvalidArgumentError
from obsrange.util.observer_set import OrderedObserverSet


@pytest.mark.unit
class TestOrderedObserverSet:
    """Registration order, duplicates and snapshot dispatch."""

    def test_notifies_in_registration_order(self):
        observers = OrderedObserverSet()
        calls = []
        observers.add(lambda v: calls.append(("first", v)))
        observers.add(lambda v: calls.append(("second", v)))

        observers.notify_all(7)

        assert calls == [("first", 7), ("second", 7)]

    def test_duplicates_are_ignored(self):
        observers = OrderedObserverSet()

        def callback(value):
            pass

        assert observers.add(callback)
        assert not observers.add(callback)
        assert len(observers) == 1

    def test_discard_reports_membership(self):
        observers = OrderedObserverSet()

        def callback(value):
            pass

        observers.add(callback)

        assert observers.discard(callback)
        assert not observers.discard(callback)
        assert callback not in observers
        assert not observers

    def test_rejects_non_callables(self):
        with pytest.raises(InvalidArgumentError):
            OrderedObserverSet().add("not callable")

    def test_unsubscribe_during_dispatch_does_not_skip_others(self):
        observers = OrderedObserverSet()
        calls = []

        def first(value):
            calls.append("first")
            observers.discard(first)
            observers.discard(second)

        def second(value):
            calls.append("second")

        observers.add(first)
        observers.add(second)

        observers.notify_all(None)
        observers.notify_all(None)

        # the snapshot keeps second in the first dispatch only
        assert calls == ["first", "second"]

    def test_subscribe_during_dispatch_applies_next_time(self):
        observers = OrderedObserverSet()
        calls = []

        def late(value):
            calls.append("late")

        def first(value):
            calls.append("first")
            observers.add(late)

        observers.add(first)

        observers.notify_all(None)
        assert calls == ["first"]

        observers.notify_all(None)
        assert calls == ["first", "first", "late"]

    def test_observer_errors_propagate(self):
        observers = OrderedObserverSet()
        calls = []

        def failing(value):
            raise RuntimeError("listener failed")

        observers.add(failing)
        observers.add(lambda v: calls.append(v))

        with pytest.raises(RuntimeError, match="listener failed"):
            observers.notify_all(1)

        assert calls == []


@pytest.mark.unit
@pytest.mark.observable
def test_sequence_listener_unsubscribing_itself(letters):
    """A change listener may unsubscribe itself mid-dispatch"""
    calls = []

    def once(change):
        calls.append(change)
        letters.unsubscribe(once)

    letters.subscribe(once)
    letters.append("F")
    letters.append("G")

    assert len(calls) == 1
    assert letters.listener_count == 0


@pytest.mark.unit
@pytest.mark.observable
def test_subscribe_supports_chaining(letters):
    """subscribe() returns the sequence"""
    assert letters.subscribe(lambda change: None) is letters
