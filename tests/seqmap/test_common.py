"""Tests for common types and comparison helpers."""

import logging

import pytest

from seqmap import configure_logging, constants
from seqmap.common import MISSING, Missing, Ordering, OutOfBoundsError, compare


def test_compare_basic():
    assert compare(1, 2) == Ordering.Lt
    assert compare(2, 1) == Ordering.Gt
    assert compare("a", "a") == Ordering.Eq
    assert compare([1, "b"], [1, "c"]) == Ordering.Lt


def test_ordering_of_comparator_results():
    """Any negative, zero or positive result maps onto an ordering."""
    assert Ordering.of(-42) == Ordering.Lt
    assert Ordering.of(0) == Ordering.Eq
    assert Ordering.of(0.5) == Ordering.Gt
    assert Ordering.of(True) == Ordering.Gt


def test_missing_is_a_singleton_value():
    assert Missing() == MISSING
    assert MISSING is not None
    assert isinstance(MISSING, Missing)


def test_out_of_bounds_is_an_index_error():
    with pytest.raises(IndexError):
        raise OutOfBoundsError("nope")


def test_configure_logging_uses_library_format(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    configure_logging("DEBUG")
    configure_logging()
    assert calls == [
        {"format": constants.LOG_FORMAT, "level": "DEBUG"},
        {"format": constants.LOG_FORMAT, "level": constants.DEFAULT_LOG_LEVEL},
    ]
