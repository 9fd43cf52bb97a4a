"""Property-based tests for Collection using Hypothesis."""

from typing import List

from hypothesis import given
from hypothesis import strategies as st

from seqmap.collection import Collection
from seqmap.sorting import SortFlag
from tests.seqmap.hypo import configure_hypo

configure_hypo()


@st.composite
def collection_strategy(
    draw: st.DrawFn, element_strategy: st.SearchStrategy[int] = st.integers()
) -> Collection[int]:
    return Collection.create(draw(st.lists(element_strategy, min_size=0, max_size=20)))


@given(st.lists(st.integers(), min_size=0, max_size=50))
def test_create_equals_list(values: List[int]) -> None:
    """Creating a collection should preserve order and size."""
    c = Collection.create(values)
    assert c.to_list() == values
    assert c.count() == len(values)
    assert c.is_empty() == (len(values) == 0)
    assert c.indexes() == list(range(len(values)))


@given(collection_strategy(), st.lists(st.integers(), max_size=5))
def test_indexes_stay_dense_after_mutation(c: Collection[int], indexes: List[int]) -> None:
    """Removing, inserting and padding never leaves gaps in the indexes."""
    c.remove(*indexes)
    assert c.indexes() == list(range(c.count()))
    c.insert(1, 7, 8)
    assert c.indexes() == list(range(c.count()))
    c.pad(-(c.count() + 2), 0)
    assert c.indexes() == list(range(c.count()))
    c.splice(-1, 1)
    assert c.indexes() == list(range(c.count()))


@given(collection_strategy(), st.integers(-25, 25), st.one_of(st.none(), st.integers(-25, 25)))
def test_slice_with_negative_index_counts_from_end(
    c: Collection[int], index: int, length
) -> None:
    """A negative offset behaves like the equivalent non-negative one."""
    count = c.count()
    if index < 0:
        equivalent = max(count + index, 0)
        assert c.slice(index, length) == c.slice(equivalent, length)
    sliced = c.slice(index, length)
    assert sliced.count() <= count


@given(collection_strategy(), st.integers(-25, 25), st.one_of(st.none(), st.integers(-25, 25)))
def test_splice_removes_what_slice_returns(c: Collection[int], index: int, length) -> None:
    """splice removes exactly the values slice would extract."""
    original = c.to_list()
    removed = c.slice(index, length).count()
    c.splice(index, length)
    assert c.count() == len(original) - removed


@given(collection_strategy())
def test_transformations_do_not_mutate(c: Collection[int]) -> None:
    """Methods returning a new collection leave the receiver untouched."""
    before = c.to_list()
    c.reverse()
    c.sort()
    c.unique()
    c.filter(lambda v: v > 0)
    c.apply(lambda v: v * 2)
    c.merge([1, 2])
    c.slice(1)
    c.chunk(2)
    assert c.to_list() == before


@given(collection_strategy())
def test_sort_matches_sorted(c: Collection[int]) -> None:
    assert c.sort().to_list() == sorted(c.to_list())


@given(st.lists(st.one_of(st.integers(-100, 100), st.text(max_size=3)), max_size=20))
def test_reverse_sort_is_reversed_sort(values) -> None:
    """Reverse sorting gives the ascending result reversed, whatever the mode."""
    c = Collection.create(values)
    for flags in (SortFlag.STRING, SortFlag.NATURAL, SortFlag.NUMERIC):
        assert c.sort(flags, True) == c.sort(flags).reverse()


@given(collection_strategy(), st.integers(1, 10))
def test_chunk_concatenates_back(c: Collection[int], size: int) -> None:
    chunks = c.chunk(size)
    assert Collection.create().merge(*chunks) == c
    assert all(0 < chunk.count() <= size for chunk in chunks)


@given(collection_strategy(), st.integers(1, 10))
def test_split_gives_at_most_number_parts(c: Collection[int], number: int) -> None:
    parts = c.split(number)
    assert len(parts) <= number
    assert sum(part.count() for part in parts) == c.count()


@given(collection_strategy(), collection_strategy())
def test_intersect_and_diff_partition(a: Collection[int], b: Collection[int]) -> None:
    """Every value is either in the intersection or in the difference."""
    intersection = a.intersect(b)
    difference = a.diff(b)
    assert intersection.count() + difference.count() == a.count()
    assert all(b.contains(v) for v in intersection)
    assert not any(b.contains(v) for v in difference)


@given(collection_strategy())
def test_sum_and_product(c: Collection[int]) -> None:
    assert c.sum() == sum(c.to_list())
    product = 1
    for value in c:
        product *= value
    assert c.product() == product


@given(collection_strategy())
def test_unique_has_no_duplicates(c: Collection[int]) -> None:
    unique = c.unique().to_list()
    assert len(unique) == len(set(unique))
    assert set(unique) == set(c.to_list())
