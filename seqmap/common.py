"""Common types shared by the collection and map implementations.

This module provides the comparison result type, the sentinel used for
missing values, and the small abstract bases that give both structures
their Python protocol behavior.
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Tuple, Union

__all__ = [
    "Iterating",
    "Keyed",
    "MISSING",
    "Missing",
    "Ordering",
    "OutOfBoundsError",
    "Sized",
    "compare",
]


class OutOfBoundsError(IndexError):
    """Raised when writing to an index that does not exist."""

    pass


@dataclass(frozen=True)
class Missing:
    """Marker for a field or key that is not present.

    Distinct from ``None`` so that a stored ``None`` can still be found.
    """

    pass


MISSING = Missing()


class Sized(metaclass=ABCMeta):
    @abstractmethod
    def count(self) -> int: ...

    def is_empty(self) -> bool:
        return self.count() == 0

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __len__(self) -> int:
        return self.count()


class Iterating[U](metaclass=ABCMeta):
    @abstractmethod
    def iter(self) -> Iterator[U]: ...

    def __iter__(self) -> Iterator[U]:
        return self.iter()


class Keyed[K, V](metaclass=ABCMeta):
    """A source whose elements carry their own keys.

    Helpers that materialize iterables consult ``iter_pairs`` instead of
    numbering elements by position.
    """

    @abstractmethod
    def iter_pairs(self) -> Iterator[Tuple[K, V]]: ...

    @abstractmethod
    def lookup_key(self, key: K) -> Union[V, Missing]:
        """Return the value stored under a normalized key, or ``MISSING``."""
        ...

    def iter_values(self) -> Iterator[V]:
        for _, value in self.iter_pairs():
            yield value


class Ordering(Enum):
    """Enumeration representing the result of a comparison operation."""

    Lt = -1
    Eq = 0
    Gt = 1

    @staticmethod
    def of(result: Any) -> Ordering:
        """Convert a 3-way comparator result (negative/zero/positive).

        Args:
            result: The value returned by a comparator callback.

        Returns:
            The matching ordering.
        """
        if result < 0:
            return Ordering.Lt
        elif result > 0:
            return Ordering.Gt
        else:
            return Ordering.Eq


def compare[T](a: T, b: T) -> Ordering:
    """Compare two values and return their ordering relationship.

    Uses the values' own == and < operators to determine the comparison result.

    Args:
        a: First value to compare.
        b: Second value to compare.

    Returns:
        Ordering indicating the relationship between a and b.
    """
    if a == b:
        return Ordering.Eq
    elif a < b:  # type: ignore[operator]
        return Ordering.Lt
    else:
        return Ordering.Gt
