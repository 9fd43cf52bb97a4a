"""Insertion-ordered key/value map with set algebra and sorting.

A Map wraps a private dict whose keys are ``int`` or ``str``. Keys are
normalized on every write and lookup (``"123"`` and ``123`` are the same key).
The in-place mutators are ``set_pairs``, ``set``, ``add``, ``fill``,
``remove`` and ``clear``; every other transformation returns a new map.
"""

from __future__ import annotations

import logging
import random
from random import Random
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    Mapping,
    Optional,
    Tuple,
    Union,
    override,
)

from seqmap import constants
from seqmap.coerce import Key, identical, loose_equals, normalize_key, stringify
from seqmap.collection import Collection
from seqmap.common import MISSING, Iterating, Keyed, Missing, Sized
from seqmap.fields import column_indexed, column_keyed
from seqmap.iterables import iter_pairs, to_array, to_arrays, to_list
from seqmap.sorting import Comparator, SortFlag, sort_pairs

__all__ = ["Map"]

logger = logging.getLogger(__name__)


type PairMapper[V, W] = Callable[[Key, V], Union[Mapping[Any, W], Keyed[Key, W]]]
"""Callback returning new pairs for a single key/value pair."""


def _accumulate[W](pairs: Dict[Key, W], produced: Iterable[Any]) -> None:
    """Add produced pairs, keeping any key that is already present."""
    for key, value in iter_pairs(produced):
        if key not in pairs:
            pairs[key] = value


class Map[V](Sized, Iterating[Tuple[Key, V]], Keyed[Key, V]):
    """A dict-backed map of normalized keys to values."""

    def __init__(self, pairs: Optional[Iterable[V]] = None):
        self._pairs: Dict[Key, V] = {} if pairs is None else to_array(pairs)

    @staticmethod
    def create(pairs: Optional[Iterable[V]] = None) -> Map[V]:
        """Create a map from an iterable.

        Mappings and maps keep their keys; any other iterable is keyed by
        position.

        Args:
            pairs: The source, or ``None`` for an empty map.

        Returns:
            A new map.
        """
        return Map(to_array(pairs) if pairs is not None else {})

    @staticmethod
    def build[U, W](iterable: Iterable[U], mapper: PairMapper[U, W]) -> Map[W]:
        """Build a map by mapping each pair of an iterable to new pairs.

        The first pair produced for a key is kept; later pairs with the same
        key are ignored. The mapper is not called for an empty iterable.

        Args:
            iterable: The source; non-keyed iterables are keyed by position.
            mapper: Called as ``mapper(key, value)``, returns a mapping of new
                pairs.

        Returns:
            A new map.
        """
        pairs: Dict[Key, W] = {}
        for key, value in iter_pairs(iterable):
            _accumulate(pairs, mapper(key, value))
        return Map(pairs)

    @staticmethod
    def combine[W](keys: Iterable[Any], values: Iterable[W]) -> Map[W]:
        """Create a map by pairing a list of keys with a list of values.

        Raises:
            ValueError: If the number of keys and values differ.
            TypeError: If a key is not a valid map key.
        """
        key_list = to_list(keys)
        value_list = to_list(values)
        if len(key_list) != len(value_list):
            logger.debug("Rejected combine of %d keys and %d values", len(key_list), len(value_list))
            raise ValueError(
                constants.COMBINE_MESSAGE.format(keys=len(key_list), values=len(value_list))
            )
        return Map({normalize_key(k): v for k, v in zip(key_list, value_list)})

    def set_pairs(self, pairs: Iterable[V]) -> None:
        """Replace all pairs with the pairs of an iterable."""
        self._pairs = to_array(pairs)

    def to_dict(self) -> Dict[Key, V]:
        """Return a copy of the pairs as a dict."""
        return dict(self._pairs)

    @override
    def count(self) -> int:
        return len(self._pairs)

    @override
    def iter(self) -> Iterator[Tuple[Key, V]]:
        yield from self._pairs.items()

    @override
    def iter_pairs(self) -> Iterator[Tuple[Key, V]]:
        yield from self._pairs.items()

    @override
    def iter_values(self) -> Iterator[V]:
        yield from self._pairs.values()

    @override
    def lookup_key(self, key: Key) -> Union[V, Missing]:
        return self._pairs.get(key, MISSING)

    def items(self) -> Iterator[Tuple[Key, V]]:
        """Iterate over all key/value pairs in insertion order."""
        yield from self._pairs.items()

    def has(self, key: Any) -> bool:
        """Check whether a key exists, even if its value is ``None``."""
        return normalize_key(key) in self._pairs

    def contains(self, value: Any, strict: bool = True) -> bool:
        """Check whether a value is present.

        Args:
            value: The value to look for.
            strict: Require the same type as well as an equal value. When
                false, numbers and numeric strings match by value.
        """
        return self.find(value, strict) is not None

    def find(self, value: Any, strict: bool = True) -> Optional[Key]:
        """Return the key of the first occurrence of a value, or ``None``."""
        equals = identical if strict else loose_equals
        for key, candidate in self._pairs.items():
            if equals(candidate, value):
                return key
        return None

    def get(self, key: Any) -> Optional[V]:
        """Return the value stored under a key, or ``None`` if absent."""
        return self._pairs.get(normalize_key(key))

    def values(self) -> Collection[V]:
        """Return a new collection of all values."""
        return Collection(list(self._pairs.values()))

    def keys(self) -> Collection[Key]:
        """Return a new collection of all keys."""
        return Collection(list(self._pairs.keys()))

    def set(self, key: Any, value: V) -> None:
        """Set the value of a key, adding the key if absent."""
        self._pairs[normalize_key(key)] = value

    def add(self, *iterables: Iterable[V]) -> None:
        """Add pairs from iterables; later sources overwrite existing keys."""
        for iterable in iterables:
            for key, value in iter_pairs(iterable):
                self._pairs[key] = value

    def fill(self, keys: Iterable[Any], value: V) -> None:
        """Set the same value for every given key."""
        for key in to_list(keys):
            self._pairs[normalize_key(key)] = value

    def remove(self, *keys: Any) -> None:
        """Remove the given keys; absent keys are ignored."""
        for key in keys:
            self._pairs.pop(normalize_key(key), None)

    def clear(self) -> None:
        """Remove all pairs."""
        self._pairs = {}

    def reduce[Z](self, reducer: Callable[[Z, Key, V], Z], initial: Z = None) -> Z:
        """Fold the pairs in order with ``reducer(accumulator, key, value)``."""
        result = initial
        for key, value in self._pairs.items():
            result = reducer(result, key, value)
        return result

    def flip(self) -> Map[Key]:
        """Swap keys and values.

        Values are converted to keys through their string form. When two
        values give the same key, the later pair wins.
        """
        pairs: Dict[Key, Key] = {}
        for key, value in self._pairs.items():
            flipped = normalize_key(stringify(value))
            if flipped in pairs:
                logger.debug("Flipped key %r overwrites an earlier pair", flipped)
            pairs[flipped] = key
        return Map(pairs)

    def shuffle(self, rng: Optional[Random] = None) -> Map[V]:
        """Return a new map with the values randomly reassigned to the keys.

        Keys keep their order.

        Args:
            rng: Random source; the process-wide one when omitted.
        """
        values = list(self._pairs.values())
        (rng or random).shuffle(values)
        return Map(dict(zip(self._pairs.keys(), values)))

    def column(self, key: Any, index_key: Optional[Any] = None) -> Map[Any]:
        """Gather a field from every record-like value that has it.

        Args:
            key: The field to gather.
            index_key: Field providing the result keys. When omitted the
                original keys are kept; otherwise they are discarded and a
                later value overwrites an earlier one with the same index.

        Returns:
            A new map of gathered fields.
        """
        if index_key is None:
            return Map(column_keyed(self._pairs.items(), key))
        return Map(column_indexed(self._pairs.values(), key, index_key))

    def filter(self, predicate: Callable[[Key, V], Any]) -> Map[V]:
        """Return a new map of the pairs for which ``predicate(key, value)`` holds."""
        return Map({k: v for k, v in self._pairs.items() if predicate(k, v)})

    def apply[W](self, callback: Callable[[Key, V], W]) -> Map[W]:
        """Return a new map with every value replaced by ``callback(key, value)``."""
        return Map({k: callback(k, v) for k, v in self._pairs.items()})

    def map[W](self, mapper: PairMapper[V, W]) -> Map[W]:
        """Return a new map built from the pairs returned by ``mapper(key, value)``.

        As with ``build``, the first pair produced for a key is kept.
        """
        pairs: Dict[Key, W] = {}
        for key, value in self._pairs.items():
            _accumulate(pairs, mapper(key, value))
        return Map(pairs)

    def merge(self, *iterables: Iterable[V]) -> Map[V]:
        """Return a new map with the pairs of all iterables added.

        Later sources overwrite earlier ones and the receiver.
        """
        pairs = dict(self._pairs)
        for other in to_arrays(iterables):
            pairs.update(other)
        return Map(pairs)

    def intersect(self, *iterables: Iterable[Any]) -> Map[V]:
        """Keep the pairs present in every given iterable.

        A pair matches when the other source has the same key with a value of
        the same string form.
        """
        if not self._pairs or not iterables:
            return Map()
        others = to_arrays(iterables)
        return Map(
            {
                k: v
                for k, v in self._pairs.items()
                if all(_same_string(other, k, v) for other in others)
            }
        )

    def uintersect(self, comparator: Comparator, *iterables: Iterable[Any]) -> Map[V]:
        """Keep the pairs present in every given iterable, comparing values with a comparator.

        Keys must match exactly; ``comparator(value, other_value) == 0`` means
        the values are equal.
        """
        if not self._pairs or not iterables:
            return Map()
        others = to_arrays(iterables)
        return Map(
            {
                k: v
                for k, v in self._pairs.items()
                if all(_same_with(comparator, other, k, v) for other in others)
            }
        )

    def intersect_keys(self, *iterables: Iterable[Any]) -> Map[V]:
        """Keep the pairs whose key is present in every given iterable."""
        if not self._pairs or not iterables:
            return Map()
        others = to_arrays(iterables)
        return Map(
            {k: v for k, v in self._pairs.items() if all(k in other for other in others)}
        )

    def uintersect_keys(self, comparator: Comparator, *iterables: Iterable[Any]) -> Map[V]:
        """Keep the pairs whose key matches a key of every given iterable by comparator."""
        if not self._pairs or not iterables:
            return Map()
        others = to_arrays(iterables)
        return Map(
            {
                k: v
                for k, v in self._pairs.items()
                if all(_has_key_with(comparator, other, k) for other in others)
            }
        )

    def diff(self, *iterables: Iterable[Any]) -> Map[V]:
        """Keep the pairs present in none of the given iterables.

        A pair matches when another source has the same key with a value of
        the same string form.
        """
        if not self._pairs or not iterables:
            return Map()
        others = to_arrays(iterables)
        return Map(
            {
                k: v
                for k, v in self._pairs.items()
                if not any(_same_string(other, k, v) for other in others)
            }
        )

    def udiff(self, comparator: Comparator, *iterables: Iterable[Any]) -> Map[V]:
        """Keep the pairs present in none of the given iterables, comparing values with a comparator."""
        if not self._pairs or not iterables:
            return Map()
        others = to_arrays(iterables)
        return Map(
            {
                k: v
                for k, v in self._pairs.items()
                if not any(_same_with(comparator, other, k, v) for other in others)
            }
        )

    def diff_keys(self, *iterables: Iterable[Any]) -> Map[V]:
        """Keep the pairs whose key is present in none of the given iterables."""
        if not self._pairs or not iterables:
            return Map()
        others = to_arrays(iterables)
        return Map(
            {k: v for k, v in self._pairs.items() if not any(k in other for other in others)}
        )

    def udiff_keys(self, comparator: Comparator, *iterables: Iterable[Any]) -> Map[V]:
        """Keep the pairs whose key matches no key of the given iterables by comparator."""
        if not self._pairs or not iterables:
            return Map()
        others = to_arrays(iterables)
        return Map(
            {
                k: v
                for k, v in self._pairs.items()
                if not any(_has_key_with(comparator, other, k) for other in others)
            }
        )

    def sort(self, flags: int = SortFlag.REGULAR, reverse: bool = False) -> Map[V]:
        """Return a new map ordered by value, keeping key association.

        Args:
            flags: Comparison mode, see ``SortFlag``.
            reverse: Return the ascending result in reverse.
        """
        if not self._pairs:
            return Map()
        return Map(dict(sort_pairs(list(self._pairs.items()), False, flags, reverse)))

    def usort(self, comparator: Comparator) -> Map[V]:
        """Return a new map ordered by value with a 3-way comparator."""
        if not self._pairs:
            return Map()
        pairs = sort_pairs(list(self._pairs.items()), False, comparator=comparator)
        return Map(dict(pairs))

    def ksort(self, flags: int = SortFlag.REGULAR, reverse: bool = False) -> Map[V]:
        """Return a new map ordered by key.

        Args:
            flags: Comparison mode, see ``SortFlag``.
            reverse: Return the ascending result in reverse.
        """
        if not self._pairs:
            return Map()
        return Map(dict(sort_pairs(list(self._pairs.items()), True, flags, reverse)))

    def uksort(self, comparator: Comparator) -> Map[V]:
        """Return a new map ordered by key with a 3-way comparator."""
        if not self._pairs:
            return Map()
        pairs = sort_pairs(list(self._pairs.items()), True, comparator=comparator)
        return Map(dict(pairs))

    def __getitem__(self, key: Any) -> Optional[V]:
        return self.get(key)

    def __setitem__(self, key: Any, value: V) -> None:
        self.set(key, value)

    def __delitem__(self, key: Any) -> None:
        self.remove(key)

    def __contains__(self, key: Any) -> bool:
        return self.has(key)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Map):
            return list(self._pairs.items()) == list(other._pairs.items())
        return False

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Map({self._pairs!r})"


def _same_string(other: Dict[Key, Any], key: Key, value: Any) -> bool:
    return key in other and stringify(other[key]) == stringify(value)


def _same_with(comparator: Comparator, other: Dict[Key, Any], key: Key, value: Any) -> bool:
    return key in other and comparator(value, other[key]) == 0


def _has_key_with(comparator: Comparator, other: Dict[Key, Any], key: Key) -> bool:
    return any(comparator(key, other_key) == 0 for other_key in other)
