"""Tests for the library's logging output."""

import logging

import pytest

from obsrange import RangeObservableSequence, ReentrancyViolationError


@pytest.mark.unit
def test_dispatch_is_logged_at_debug(caplog):
    """Each change notification is logged with its payload"""
    seq = RangeObservableSequence(["A"])

    with caplog.at_level(logging.DEBUG, logger="obsrange"):
        seq.remove_range(0, 1)

    messages = [r.getMessage() for r in caplog.records if r.name == "obsrange.sequence"]
    assert any("'action': 'REMOVE'" in m for m in messages)


@pytest.mark.unit
def test_reentrancy_violation_is_logged_as_warning(caplog):
    """A rejected reentrant change leaves a warning behind"""
    seq = RangeObservableSequence([1])

    def meddler(change):
        with pytest.raises(ReentrancyViolationError):
            seq.append(0)

    seq.subscribe(meddler)
    seq.subscribe(lambda change: None)

    with caplog.at_level(logging.WARNING, logger="obsrange"):
        seq.append(2)

    assert any(
        r.levelno == logging.WARNING and r.name == "obsrange.util.reentrancy"
        for r in caplog.records
    )
