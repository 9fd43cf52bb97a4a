"""Helpers normalizing arbitrary iterables into concrete lists and dicts.

Keyed sources (maps and collections) and ``Mapping`` objects keep their
keys; any other iterable is keyed by production position. Each helper
traverses its input exactly once, so one-shot generators are safe.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Iterable, Iterator, List, Tuple

from seqmap.coerce import Key, normalize_key
from seqmap.common import Keyed

__all__ = ["iter_pairs", "to_array", "to_arrays", "to_list"]


def iter_pairs(iterable: Iterable[Any]) -> Iterator[Tuple[Key, Any]]:
    """Lazily yield the ``(key, value)`` pairs of an iterable.

    Args:
        iterable: A keyed source, a mapping or any other iterable.

    Yields:
        Pairs with normalized keys.
    """
    match iterable:
        case Keyed():
            yield from iterable.iter_pairs()
        case Mapping():
            for key, value in iterable.items():
                yield normalize_key(key), value
        case _:
            yield from enumerate(iterable)


def to_list(iterable: Iterable[Any]) -> List[Any]:
    """Materialize an iterable into a new list, discarding keys."""
    match iterable:
        case Keyed():
            return list(iterable.iter_values())
        case Mapping():
            return list(iterable.values())
        case _:
            return list(iterable)


def to_array(iterable: Iterable[Any]) -> Dict[Key, Any]:
    """Materialize an iterable into a new dict, preserving keys.

    Later pairs overwrite earlier ones with the same key.
    """
    return {key: value for key, value in iter_pairs(iterable)}


def to_arrays(iterables: Iterable[Iterable[Any]]) -> List[Dict[Key, Any]]:
    """Apply ``to_array`` to each iterable, preserving their order."""
    return [to_array(iterable) for iterable in iterables]
