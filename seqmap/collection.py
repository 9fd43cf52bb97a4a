"""Ordered, densely indexed collection of values.

A Collection wraps a private list. Indexes always run from ``0`` to
``count() - 1`` with no gaps. A small set of methods mutate the collection in
place (``set_values``, ``replace``, ``push``, ``pop``, ``unshift``, ``shift``,
``insert``, ``pad``, ``remove``, ``clear``, ``splice``); every other
transformation returns a new, independent instance.
"""

from __future__ import annotations

import logging
import math
import random
from functools import reduce
from random import Random
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
    Union,
    override,
)

from seqmap import constants
from seqmap.coerce import (
    Key,
    identical,
    loose_equals,
    normalize_key,
    stringify,
    to_number,
)
from seqmap.common import MISSING, Iterating, Keyed, Missing, OutOfBoundsError, Sized
from seqmap.fields import column_indexed, column_values
from seqmap.iterables import to_list
from seqmap.sorting import Comparator, SortFlag, sort_values

if TYPE_CHECKING:
    from seqmap.map import Map

__all__ = ["Collection"]

logger = logging.getLogger(__name__)


def _resolve_range(count: int, index: int, length: Optional[int]) -> Tuple[int, int]:
    """Resolve a slice offset and length into list bounds.

    A negative index counts from the end. A ``None`` length runs to the end, a
    negative length stops that many values before the end.
    """
    if index < 0:
        start = max(count + index, 0)
    else:
        start = min(index, count)
    if length is None:
        end = count
    elif length < 0:
        end = count + length
    else:
        end = start + length
    return start, max(start, min(end, count))


class Collection[T](Sized, Iterating[T], Keyed[int, T]):
    """A list-backed sequence with bounds-checked access and set algebra."""

    def __init__(self, values: Optional[Iterable[T]] = None):
        self._values: List[T] = [] if values is None else to_list(values)

    @staticmethod
    def create(values: Optional[Iterable[T]] = None) -> Collection[T]:
        """Create a collection from an iterable.

        Keys of keyed sources (maps, mappings) are discarded.

        Args:
            values: The values to copy, or ``None`` for an empty collection.

        Returns:
            A new collection.
        """
        return Collection(to_list(values) if values is not None else [])

    @staticmethod
    def collect(*values: T) -> Collection[T]:
        """Create a collection from the given arguments."""
        return Collection(list(values))

    @staticmethod
    def fill(value: T, count: int) -> Collection[T]:
        """Create a collection holding ``value`` repeated ``count`` times.

        A count of zero or less gives an empty collection.
        """
        if count <= 0:
            return Collection()
        return Collection([value] * count)

    @staticmethod
    def explode(
        string: str, delimiter: str, limit: int = constants.DEFAULT_EXPLODE_LIMIT
    ) -> Collection[str]:
        """Split a string by a delimiter.

        Args:
            string: The string to split.
            delimiter: The boundary string.
            limit: If positive, at most ``limit`` parts are returned with the
                last one holding the rest of the string. Zero acts as one. If
                negative, all parts except the last ``-limit`` are returned.

        Returns:
            A new collection of string parts.

        Raises:
            ValueError: If the delimiter is empty.
        """
        if not delimiter:
            raise ValueError("Delimiter must not be empty")
        if limit > 0:
            return Collection(string.split(delimiter, limit - 1))
        elif limit == 0:
            return Collection([string])
        else:
            return Collection(string.split(delimiter)[:limit])

    def set_values(self, values: Iterable[T]) -> None:
        """Replace all values with the values of an iterable."""
        self._values = to_list(values)

    def to_list(self) -> List[T]:
        """Return a copy of the values as a list."""
        return list(self._values)

    @override
    def count(self) -> int:
        return len(self._values)

    @override
    def iter(self) -> Iterator[T]:
        yield from self._values

    @override
    def iter_pairs(self) -> Iterator[Tuple[int, T]]:
        yield from enumerate(self._values)

    @override
    def lookup_key(self, key: Key) -> Union[T, Missing]:
        if isinstance(key, int) and self.has(key):
            return self._values[key]
        return MISSING

    def has(self, index: int) -> bool:
        """Check whether an index exists. Negative indexes never exist."""
        return 0 <= index < len(self._values)

    def contains(self, value: Any, strict: bool = True) -> bool:
        """Check whether a value is present.

        Args:
            value: The value to look for.
            strict: Require the same type as well as an equal value. When
                false, numbers and numeric strings match by value.
        """
        return self.find(value, strict) is not None

    def find(self, value: Any, strict: bool = True) -> Optional[int]:
        """Return the index of the first occurrence of a value, or ``None``."""
        equals = identical if strict else loose_equals
        for index, candidate in enumerate(self._values):
            if equals(candidate, value):
                return index
        return None

    def get(self, index: int) -> Optional[T]:
        """Return the value at an index, or ``None`` if it does not exist."""
        if self.has(index):
            return self._values[index]
        return None

    def first(self) -> Optional[T]:
        """Return the first value, or ``None`` if the collection is empty."""
        return self._values[0] if self._values else None

    def last(self) -> Optional[T]:
        """Return the last value, or ``None`` if the collection is empty."""
        return self._values[-1] if self._values else None

    def indexes(self) -> List[int]:
        """Return all indexes, always ``0`` to ``count() - 1``."""
        return list(range(len(self._values)))

    def slice(self, index: int, length: Optional[int] = None) -> Collection[T]:
        """Extract a slice of the collection.

        Args:
            index: Start offset; negative counts from the end.
            length: Number of values to take. ``None`` runs to the end and a
                negative length stops that many values before the end.

        Returns:
            A new collection with the sliced values.
        """
        start, end = _resolve_range(len(self._values), index, length)
        return Collection(self._values[start:end])

    def replace(self, index: int, value: T) -> None:
        """Replace the value at an existing index.

        Raises:
            OutOfBoundsError: If the index does not exist.
        """
        if not self.has(index):
            if self._values:
                detail = constants.RANGE_MESSAGE.format(last=len(self._values) - 1)
            else:
                detail = constants.EMPTY_MESSAGE
            logger.debug("Rejected replace at index %d of %d", index, len(self._values))
            raise OutOfBoundsError(
                constants.REPLACE_MESSAGE.format(index=index, detail=detail)
            )
        self._values[index] = value

    def push(self, *values: T) -> None:
        """Append values to the end."""
        self._values.extend(values)

    def pop(self) -> Optional[T]:
        """Remove and return the last value, or ``None`` if empty."""
        return self._values.pop() if self._values else None

    def unshift(self, *values: T) -> None:
        """Prepend values to the beginning, keeping their order."""
        if values:
            self._values[0:0] = values

    def shift(self) -> Optional[T]:
        """Remove and return the first value, or ``None`` if empty."""
        return self._values.pop(0) if self._values else None

    def insert(self, index: int, *values: T) -> None:
        """Insert values as a block before the given index.

        Offsets past the end append; negative offsets count from the end.
        """
        if values:
            self.splice(index, 0, values)

    def pad(self, length: int, value: T) -> None:
        """Pad the collection to ``abs(length)`` values.

        A positive length appends the padding, a negative one prepends it.
        Nothing happens if the collection is already long enough.
        """
        missing = abs(length) - len(self._values)
        if missing <= 0:
            return
        padding = [value] * missing
        if length > 0:
            self._values.extend(padding)
        else:
            self._values[0:0] = padding

    def remove(self, *indexes: int) -> None:
        """Remove the values at the given indexes and reindex.

        A single index is resolved like a ``splice`` offset, so ``-1`` removes
        the last value. With several indexes, nonexistent ones are ignored and
        repeated ones collapse.
        """
        if not indexes or not self._values:
            return
        if len(indexes) == 1:
            self.splice(indexes[0], 1)
            return
        dropped = set(indexes)
        self._values = [v for i, v in enumerate(self._values) if i not in dropped]

    def clear(self) -> None:
        """Remove all values."""
        self._values = []

    def splice(
        self,
        index: int,
        length: Optional[int] = None,
        replacement: Optional[Iterable[T]] = None,
    ) -> None:
        """Remove a portion of the collection and optionally replace it.

        Args:
            index: Start offset, resolved like ``slice``.
            length: Number of values to remove, resolved like ``slice``.
                ``None`` removes everything from ``index`` to the end.
            replacement: Values inserted in place of the removed ones.
        """
        start, end = _resolve_range(len(self._values), index, length)
        self._values[start:end] = to_list(replacement) if replacement is not None else []

    def sum(self) -> Any:
        """Sum all values; an empty collection gives ``0``.

        Raises:
            TypeError: If a value is neither a number nor a numeric string.
        """
        return reduce(lambda acc, value: acc + to_number(value), self._values, 0)

    def product(self) -> Any:
        """Multiply all values; an empty collection gives ``1``.

        Raises:
            TypeError: If a value is neither a number nor a numeric string.
        """
        return reduce(lambda acc, value: acc * to_number(value), self._values, 1)

    def implode(self, delimiter: str = constants.DEFAULT_IMPLODE_DELIMITER) -> str:
        """Join the string forms of all values with a delimiter."""
        return delimiter.join(stringify(value) for value in self._values)

    def reduce[Z](self, reducer: Callable[[Z, T], Z], initial: Z = None) -> Z:
        """Fold the values from left to right.

        Args:
            reducer: Called as ``reducer(accumulator, value)``.
            initial: The starting accumulator, returned as is when empty.

        Returns:
            The final accumulator value.
        """
        return reduce(reducer, self._values, initial)

    def reverse(self) -> Collection[T]:
        """Return a new collection with the values in reverse order."""
        return Collection(self._values[::-1])

    def chunk(self, size: int) -> List[Collection[T]]:
        """Split into new collections of ``size`` values each.

        The last chunk may be shorter. An empty collection or a size below one
        gives an empty list.
        """
        if size < 1 or not self._values:
            return []
        return [
            Collection(self._values[i : i + size])
            for i in range(0, len(self._values), size)
        ]

    def split(self, number: int) -> List[Collection[T]]:
        """Split into at most ``number`` new collections of similar size."""
        if number < 1 or not self._values:
            return []
        return self.chunk(math.ceil(len(self._values) / number))

    def unique(self) -> Collection[T]:
        """Return a new collection without loosely equal duplicates.

        The first value of each group of equal values is kept.
        """
        result: List[T] = []
        for value in self._values:
            if not any(loose_equals(value, seen) for seen in result):
                result.append(value)
        return Collection(result)

    def shuffle(self, rng: Optional[Random] = None) -> Collection[T]:
        """Return a new collection with the values in random order.

        Args:
            rng: Random source; the process-wide one when omitted.
        """
        values = list(self._values)
        (rng or random).shuffle(values)
        return Collection(values)

    def random(self, count: int, rng: Optional[Random] = None) -> Collection[T]:
        """Pick ``count`` values from distinct positions at random.

        Picked values keep their relative order. A count of zero or less gives
        an empty collection; a count covering every value gives a shuffled
        copy.

        Args:
            count: Number of values to pick.
            rng: Random source; the process-wide one when omitted.

        Returns:
            A new collection with the picked values.
        """
        if count <= 0:
            return Collection()
        if count >= len(self._values):
            return self.shuffle(rng)
        positions = sorted((rng or random).sample(range(len(self._values)), count))
        return Collection([self._values[i] for i in positions])

    def column(self, key: Any) -> Collection[Any]:
        """Gather a field from every record-like value that has it."""
        return Collection(column_values(self._values, key))

    def map_column(self, index_key: Any, value_key: Any) -> Map[Any]:
        """Build a map from two fields of every record-like value.

        Values lacking ``value_key`` are skipped; values lacking a usable
        ``index_key`` are appended under the next integer key. A later value
        overwrites an earlier one with the same index.
        """
        from seqmap.map import Map

        return Map(column_indexed(self._values, value_key, index_key))

    def filter(self, predicate: Callable[[T], Any]) -> Collection[T]:
        """Return a new collection of the values passing a predicate."""
        return Collection([value for value in self._values if predicate(value)])

    def apply[U](self, callback: Callable[[T], U]) -> Collection[U]:
        """Return a new collection of ``callback(value)`` for every value."""
        return Collection([callback(value) for value in self._values])

    def map(self, mapper: Callable[[T], Any]) -> Map[T]:
        """Convert the collection into a map.

        Args:
            mapper: Returns the key for each value. If the same key is returned
                more than once, the last value wins.

        Returns:
            A new map of keys to values.
        """
        from seqmap.map import Map

        pairs = {}
        for value in self._values:
            pairs[normalize_key(mapper(value))] = value
        return Map(pairs)

    def merge(self, *iterables: Iterable[T]) -> Collection[T]:
        """Return a new collection with the values of all iterables appended."""
        values = list(self._values)
        for iterable in iterables:
            values.extend(to_list(iterable))
        return Collection(values)

    def intersect(self, *iterables: Iterable[Any]) -> Collection[T]:
        """Keep the values present in every given iterable.

        Values match when their string forms are equal. Without iterables the
        result is empty.
        """
        if not self._values or not iterables:
            return Collection()
        others = [{stringify(v) for v in to_list(iterable)} for iterable in iterables]
        return Collection(
            [v for v in self._values if all(stringify(v) in other for other in others)]
        )

    def uintersect(self, comparator: Comparator, *iterables: Iterable[Any]) -> Collection[T]:
        """Keep the values present in every given iterable, using a comparator.

        Args:
            comparator: 3-way comparison; zero means equal.
            iterables: The iterables to intersect with.

        Returns:
            A new collection; empty without iterables or values, in which case
            the comparator is never called.
        """
        if not self._values or not iterables:
            return Collection()
        others = [to_list(iterable) for iterable in iterables]
        return Collection(
            [
                v
                for v in self._values
                if all(_contains_with(comparator, v, other) for other in others)
            ]
        )

    def diff(self, *iterables: Iterable[Any]) -> Collection[T]:
        """Keep the values present in none of the given iterables.

        Values match when their string forms are equal. Without iterables the
        result is empty.
        """
        if not self._values or not iterables:
            return Collection()
        excluded = {stringify(v) for iterable in iterables for v in to_list(iterable)}
        return Collection([v for v in self._values if stringify(v) not in excluded])

    def udiff(self, comparator: Comparator, *iterables: Iterable[Any]) -> Collection[T]:
        """Keep the values present in none of the given iterables, using a comparator."""
        if not self._values or not iterables:
            return Collection()
        others = [to_list(iterable) for iterable in iterables]
        return Collection(
            [
                v
                for v in self._values
                if not any(_contains_with(comparator, v, other) for other in others)
            ]
        )

    def sort(self, flags: int = SortFlag.REGULAR, reverse: bool = False) -> Collection[T]:
        """Return a new sorted collection.

        Args:
            flags: Comparison mode, see ``SortFlag``.
            reverse: Return the ascending result in reverse.
        """
        if not self._values:
            return Collection()
        return Collection(sort_values(self._values, flags, reverse))

    def usort(self, comparator: Comparator) -> Collection[T]:
        """Return a new collection sorted with a 3-way comparator."""
        if not self._values:
            return Collection()
        return Collection(sort_values(self._values, comparator=comparator))

    def __getitem__(self, index: int) -> Optional[T]:
        return self.get(index)

    def __setitem__(self, index: Optional[int], value: T) -> None:
        # c[None] = v appends
        if index is None:
            self.push(value)
        else:
            self.replace(index, value)

    def __delitem__(self, index: int) -> None:
        self.remove(index)

    def __contains__(self, value: Any) -> bool:
        return self.contains(value)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Collection):
            return self._values == other._values
        return False

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Collection({self._values!r})"


def _contains_with(comparator: Comparator, value: Any, others: List[Any]) -> bool:
    return any(comparator(value, other) == 0 for other in others)
