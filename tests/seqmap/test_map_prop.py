"""Property-based tests for Map using Hypothesis."""

from typing import Dict

from hypothesis import given
from hypothesis import strategies as st

from seqmap.coerce import Key
from seqmap.map import Map
from tests.seqmap.hypo import configure_hypo

configure_hypo()

keys = st.one_of(st.integers(-50, 50), st.text(alphabet="abcxyz", min_size=1, max_size=3))


@st.composite
def map_strategy(draw: st.DrawFn, value_strategy=st.integers()) -> Map[int]:
    return Map.create(draw(st.dictionaries(keys, value_strategy, max_size=20)))


@given(st.dictionaries(keys, st.integers(), max_size=30))
def test_create_preserves_pairs_and_order(pairs: Dict[Key, int]) -> None:
    m = Map.create(pairs)
    assert list(m.items()) == list(pairs.items())
    assert m.count() == len(pairs)
    assert m.keys().to_list() == list(pairs.keys())


@given(map_strategy(), keys, st.integers())
def test_set_then_get(m: Map[int], key: Key, value: int) -> None:
    size = m.count()
    existed = m.has(key)
    m.set(key, value)
    assert m.get(key) == value
    assert m.count() == size + (0 if existed else 1)


@given(map_strategy(), st.integers(-50, 50))
def test_numeric_string_keys_address_int_keys(m: Map[int], key: int) -> None:
    """A canonical decimal string and its integer are the same key."""
    assert m.has(key) == m.has(str(key))
    assert m.get(key) == m.get(str(key))


@given(map_strategy(), map_strategy())
def test_merge_later_sources_win(a: Map[int], b: Map[int]) -> None:
    merged = a.merge(b)
    for key, value in b:
        assert merged.get(key) == value
    for key, value in a:
        if not b.has(key):
            assert merged.get(key) == value


@given(map_strategy(), map_strategy())
def test_intersect_keys_and_diff_keys_partition(a: Map[int], b: Map[int]) -> None:
    kept = a.intersect_keys(b)
    dropped = a.diff_keys(b)
    assert kept.count() + dropped.count() == a.count()
    assert all(b.has(key) for key, _ in kept)
    assert not any(b.has(key) for key, _ in dropped)


@given(map_strategy())
def test_sort_keeps_association(m: Map[int]) -> None:
    sorted_map = m.sort()
    assert sorted_map.to_dict() == m.to_dict()
    assert sorted_map.values().to_list() == sorted(m.values().to_list())
    assert m.sort(reverse=True) == Map(dict(reversed(list(sorted_map.items()))))


@given(map_strategy())
def test_shuffle_keeps_keys_and_values(m: Map[int]) -> None:
    shuffled = m.shuffle()
    assert shuffled.keys() == m.keys()
    assert sorted(shuffled.values().to_list()) == sorted(m.values().to_list())


@given(map_strategy())
def test_transformations_do_not_mutate(m: Map[int]) -> None:
    before = list(m.items())
    m.flip()
    m.sort()
    m.ksort()
    m.filter(lambda k, v: v > 0)
    m.apply(lambda k, v: v + 1)
    m.merge({"extra": 1})
    m.intersect({"a": 1})
    assert list(m.items()) == before
