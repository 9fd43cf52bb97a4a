"""Field extraction for record-shaped values.

``column`` style operations pull a named field out of each value. Mappings
and maps are read by key, lists, tuples and collections by integer index, and
other objects through their public attributes (so properties and
``__getattr__`` fallbacks are honored). Scalars never have fields.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from numbers import Number
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from seqmap.coerce import Key, is_key_like, next_index, normalize_key
from seqmap.common import MISSING, Keyed, Missing

__all__ = [
    "column_indexed",
    "column_keyed",
    "column_values",
    "lookup_field",
]

logger = logging.getLogger(__name__)


def lookup_field(value: Any, name: Any) -> Union[Any, Missing]:
    """Read a named field from a value.

    Args:
        value: The record-like value.
        name: Field name, key or index.

    Returns:
        The field value, or ``MISSING`` if the value has no such field.
    """
    match value:
        case None | str() | bytes() | Number():
            return MISSING
        case Keyed():
            if not is_key_like(name):
                return MISSING
            return value.lookup_key(normalize_key(name))
        case Mapping():
            if name in value:
                return value[name]
            if is_key_like(name) and normalize_key(name) in value:
                return value[normalize_key(name)]
            return MISSING
        case list() | tuple():
            if isinstance(name, int) and not isinstance(name, bool) and 0 <= name < len(value):
                return value[name]
            return MISSING
        case _:
            if not isinstance(name, str) or name.startswith("_"):
                return MISSING
            return getattr(value, name, MISSING)


def column_values(values: Iterable[Any], name: Any) -> List[Any]:
    """Collect a field from every value that has it, in order."""
    result: List[Any] = []
    for value in values:
        field = lookup_field(value, name)
        if isinstance(field, Missing):
            logger.debug("Skipping %s value without field %r", type(value).__name__, name)
        else:
            result.append(field)
    return result


def column_keyed(pairs: Iterable[Tuple[Key, Any]], name: Any) -> Dict[Key, Any]:
    """Collect a field from keyed values, keeping the original keys."""
    result: Dict[Key, Any] = {}
    for key, value in pairs:
        field = lookup_field(value, name)
        if isinstance(field, Missing):
            logger.debug("Skipping value at key %r without field %r", key, name)
        else:
            result[key] = field
    return result


def column_indexed(
    values: Iterable[Any], name: Any, index_name: Optional[Any]
) -> Dict[Key, Any]:
    """Collect a field from every value, keyed by another field.

    Values lacking ``name`` are skipped. Values whose ``index_name`` field is
    missing or cannot serve as a key are appended under the next integer key.
    Later values win when two share an index.

    Args:
        values: The record-like values.
        name: The field to collect.
        index_name: The field providing each result key, or ``None`` to
            number the results from zero.

    Returns:
        A dict of collected fields.
    """
    result: Dict[Key, Any] = {}
    for value in values:
        field = lookup_field(value, name)
        if isinstance(field, Missing):
            logger.debug("Skipping %s value without field %r", type(value).__name__, name)
            continue
        index = MISSING if index_name is None else lookup_field(value, index_name)
        if not isinstance(index, Missing) and is_key_like(index):
            result[normalize_key(index)] = field
        else:
            result[next_index(result)] = field
    return result
