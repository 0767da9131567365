"""Unit tests for building a RangeObservableSequence."""

import pytest

from obsrange import InvalidArgumentError, RangeObservableSequence


@pytest.mark.unit
def test_empty_construction():
    """The default sequence is empty"""
    seq = RangeObservableSequence()

    assert len(seq) == 0
    assert list(seq) == []


@pytest.mark.unit
def test_construction_copies_source_in_order():
    """Elements are copied in iteration order; the source is not aliased"""
    source = [3, 1, 2]
    seq = RangeObservableSequence(source)
    source.append(4)

    assert list(seq) == [3, 1, 2]


@pytest.mark.unit
def test_construction_from_generator():
    """Any finite iterable is accepted"""
    seq = RangeObservableSequence(x * x for x in range(4))

    assert list(seq) == [0, 1, 4, 9]


@pytest.mark.unit
def test_construction_sends_no_notifications():
    """Pre-populated contents are not reported as changes"""
    seq = RangeObservableSequence([1, 2])
    received = []
    seq.subscribe(received.append)

    assert received == []


@pytest.mark.unit
def test_from_list_takes_ownership():
    """from_list adopts the given list without copying"""
    backing = ["a", "b"]
    seq = RangeObservableSequence.from_list(backing)

    seq.append("c")

    assert backing == ["a", "b", "c"]


@pytest.mark.edge_case
@pytest.mark.unit
def test_absent_source_is_rejected():
    """None is not an empty source"""
    with pytest.raises(InvalidArgumentError):
        RangeObservableSequence(None)
    with pytest.raises(InvalidArgumentError):
        RangeObservableSequence.from_list(None)


@pytest.mark.edge_case
@pytest.mark.unit
def test_from_list_requires_a_list():
    """from_list refuses other sequence types"""
    with pytest.raises(InvalidArgumentError):
        RangeObservableSequence.from_list(("a", "b"))


@pytest.mark.unit
def test_invalid_argument_is_a_value_error():
    """Callers catching ValueError keep working"""
    with pytest.raises(ValueError):
        RangeObservableSequence(None)


@pytest.mark.unit
def test_generic_subscription():
    """The class can be parameterised for type checkers"""
    seq = RangeObservableSequence[int]([1])

    assert list(seq) == [1]


@pytest.mark.unit
def test_repr_shows_contents():
    assert repr(RangeObservableSequence([1, 2])) == "RangeObservableSequence([1, 2])"
