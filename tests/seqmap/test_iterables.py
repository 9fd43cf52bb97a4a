"""Tests for iterable materialization helpers."""

from collections import OrderedDict

import pytest

from seqmap.collection import Collection
from seqmap.iterables import iter_pairs, to_array, to_arrays, to_list
from seqmap.map import Map


def generate():
    yield "lorem"
    yield "ipsum"
    yield "dolor"


def test_to_arrays():
    assert to_arrays(
        [
            [],
            [1, 2, 3],
            iter(["foo", "bar", "baz"]),
            generate(),
            {"one": 1, "two": 2},
            OrderedDict([("a", "foo"), ("b", "bar")]),
            Map.create({"x": "lorem", "y": "ipsum"}),
        ]
    ) == [
        {},
        {0: 1, 1: 2, 2: 3},
        {0: "foo", 1: "bar", 2: "baz"},
        {0: "lorem", 1: "ipsum", 2: "dolor"},
        {"one": 1, "two": 2},
        {"a": "foo", "b": "bar"},
        {"x": "lorem", "y": "ipsum"},
    ]


def test_to_array_normalizes_mapping_keys():
    assert to_array({"1": "a", "01": "b", None: "c", True: "d"}) == {
        1: "d",
        "01": "b",
        "": "c",
    }


def test_to_list_discards_keys():
    assert to_list({"foo": "one", "bar": "two"}) == ["one", "two"]
    assert to_list(Map.create({3: 1, 4: 2})) == [1, 2]
    assert to_list(Collection.collect(1, 2)) == [1, 2]
    assert to_list(generate()) == ["lorem", "ipsum", "dolor"]
    assert to_list("ab") == ["a", "b"]


def test_iter_pairs_is_lazy():
    pairs = iter_pairs(generate())
    assert next(pairs) == (0, "lorem")
    assert list(pairs) == [(1, "ipsum"), (2, "dolor")]


def test_iter_pairs_of_collection():
    assert list(iter_pairs(Collection.collect("a", "b"))) == [(0, "a"), (1, "b")]


def test_traversal_errors_propagate():
    def failing():
        yield 1
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        to_list(failing())
    with pytest.raises(TypeError):
        to_array({(1, 2): "tuple key"})
