"""Sort modes and comparison rules for Collection and Map sorting.

Each ``SortFlag`` mode selects a comparison function returning an
``Ordering``. Sorting is stable; a reverse sort is the ascending result
reversed, so reversing an ascending sort always equals the reverse sort.
"""

from __future__ import annotations

import locale
import re
from collections.abc import Mapping
from enum import IntFlag
from functools import cmp_to_key, partial
from numbers import Number
from typing import Any, Callable, List, Tuple, Union

from seqmap.coerce import numeric_value, stringify, truthy
from seqmap.common import Ordering, compare

__all__ = [
    "Comparator",
    "SortFlag",
    "comparator_key",
    "compare_locale",
    "compare_natural",
    "compare_numeric",
    "compare_regular",
    "compare_string",
    "natural_key",
    "ordering_for",
    "sort_pairs",
    "sort_values",
]


type Comparator = Callable[[Any, Any], Any]
"""A 3-way comparison callback returning negative, zero or positive."""

_DIGITS = re.compile(r"(\d+)")


class SortFlag(IntFlag):
    """Comparison modes for ``sort`` and ``ksort``.

    ``FLAG_CASE`` may be combined with ``STRING`` or ``NATURAL`` for
    case-insensitive ordering.
    """

    REGULAR = 0
    NUMERIC = 1
    STRING = 2
    LOCALE_STRING = 5
    NATURAL = 6
    FLAG_CASE = 8


def compare_regular(a: Any, b: Any) -> Ordering:
    """Compare two values the way mixed scalar data usually expects.

    Numbers and numeric strings compare numerically, other strings by code
    point, a number against a non-numeric string as strings, ``None`` and
    booleans by truthiness, sequences by length then element-wise, mappings
    by size then by value per key.

    Values of different kinds order by kind: scalars, then sequences, then
    mappings, then other objects. Objects of one class compare their
    attributes like mappings; unrelated objects use their own ordering when
    they have one and their class names otherwise.
    """
    if a is None and isinstance(b, str):
        return compare("", b)
    if b is None and isinstance(a, str):
        return compare(a, "")
    if a is None or b is None or isinstance(a, bool) or isinstance(b, bool):
        return compare(truthy(a), truthy(b))
    rank_a = _kind_rank(a)
    rank_b = _kind_rank(b)
    if rank_a != rank_b:
        return compare(rank_a, rank_b)
    match rank_a:
        case 1:
            x = numeric_value(a)
            y = numeric_value(b)
            if x is not None and y is not None:
                return compare(x, y)
            return compare(stringify(a), stringify(b))
        case 2:
            return _compare_sequences(a, b)
        case 3:
            return _compare_mappings(a, b)
    if type(a) is type(b) and hasattr(a, "__dict__") and hasattr(b, "__dict__"):
        return _compare_mappings(vars(a), vars(b))
    try:
        return compare(a, b)
    except TypeError:
        return compare(type(a).__qualname__, type(b).__qualname__)


def _kind_rank(value: Any) -> int:
    # None and bool are handled before ranking
    if isinstance(value, (Number, str)):
        return 1
    if isinstance(value, (list, tuple)):
        return 2
    if isinstance(value, Mapping):
        return 3
    return 4


def _compare_sequences(a: Union[list, tuple], b: Union[list, tuple]) -> Ordering:
    if len(a) != len(b):
        return compare(len(a), len(b))
    for x, y in zip(a, b):
        result = compare_regular(x, y)
        if result != Ordering.Eq:
            return result
    return Ordering.Eq


def _compare_mappings(a: Mapping[Any, Any], b: Mapping[Any, Any]) -> Ordering:
    if len(a) != len(b):
        return compare(len(a), len(b))
    for key, value in a.items():
        # Mappings with different keys are incomparable; treat as greater
        if key not in b:
            return Ordering.Gt
        result = compare_regular(value, b[key])
        if result != Ordering.Eq:
            return result
    return Ordering.Eq


def compare_numeric(a: Any, b: Any) -> Ordering:
    """Compare numeric values; non-numeric values count as zero."""
    x = numeric_value(a)
    y = numeric_value(b)
    return compare(0 if x is None else x, 0 if y is None else y)


def compare_string(a: Any, b: Any, fold: bool = False) -> Ordering:
    """Compare string forms by code point, optionally ignoring case."""
    x = stringify(a)
    y = stringify(b)
    if fold:
        x = x.lower()
        y = y.lower()
    return compare(x, y)


def compare_locale(a: Any, b: Any) -> Ordering:
    """Compare string forms using the current ``LC_COLLATE`` locale."""
    return Ordering.of(locale.strcoll(stringify(a), stringify(b)))


def natural_key(value: Any, fold: bool = False) -> List[Union[str, int]]:
    """Split a value's string form into alternating text and number runs.

    Example:
        >>> natural_key("foo.10")
        ['foo.', 10, '']
    """
    text = stringify(value)
    if fold:
        text = text.lower()
    return [int(part) if i % 2 else part for i, part in enumerate(_DIGITS.split(text))]


def compare_natural(a: Any, b: Any, fold: bool = False) -> Ordering:
    """Compare values in natural order ("img2" before "img10")."""
    return compare(natural_key(a, fold), natural_key(b, fold))


def ordering_for(flags: int) -> Callable[[Any, Any], Ordering]:
    """Select the comparison function for a combination of sort flags.

    Args:
        flags: A ``SortFlag`` value, optionally combined with ``FLAG_CASE``.

    Returns:
        A function comparing two values under the selected mode.

    Raises:
        ValueError: If the flags do not name a supported mode.
    """
    fold = bool(flags & SortFlag.FLAG_CASE)
    match int(flags) & ~int(SortFlag.FLAG_CASE):
        case SortFlag.REGULAR:
            return compare_regular
        case SortFlag.NUMERIC:
            return compare_numeric
        case SortFlag.STRING:
            return partial(compare_string, fold=fold)
        case SortFlag.LOCALE_STRING:
            return compare_locale
        case SortFlag.NATURAL:
            return partial(compare_natural, fold=fold)
        case _:
            raise ValueError(f"Unsupported sort flags: {int(flags)}")


def comparator_key(comparator: Comparator) -> Callable[[Any], Any]:
    """Turn a 3-way comparator into a sort key function."""
    return cmp_to_key(lambda a, b: Ordering.of(comparator(a, b)).value)


def sort_values(
    values: List[Any],
    flags: int = SortFlag.REGULAR,
    reverse: bool = False,
    comparator: Comparator | None = None,
) -> List[Any]:
    """Return a sorted copy of a list of values.

    Args:
        values: The values to sort.
        flags: Sort mode, ignored when a comparator is given.
        reverse: Reverse the ascending result.
        comparator: Optional 3-way comparator replacing the flag-based mode.

    Returns:
        A new sorted list.
    """
    key = _key_for(flags, comparator)
    result = sorted(values, key=key)
    if reverse:
        result.reverse()
    return result


def sort_pairs(
    pairs: List[Tuple[Any, Any]],
    by_key: bool,
    flags: int = SortFlag.REGULAR,
    reverse: bool = False,
    comparator: Comparator | None = None,
) -> List[Tuple[Any, Any]]:
    """Return a sorted copy of key/value pairs, ordered by key or by value."""
    key = _key_for(flags, comparator)
    index = 0 if by_key else 1
    result = sorted(pairs, key=lambda pair: key(pair[index]))
    if reverse:
        result.reverse()
    return result


def _key_for(flags: int, comparator: Comparator | None) -> Callable[[Any], Any]:
    if comparator is not None:
        return comparator_key(comparator)
    ordering = ordering_for(flags)
    return cmp_to_key(lambda a, b: ordering(a, b).value)
