"""Value coercion rules shared by Collection and Map.

Keys are restricted to ``int`` and ``str`` and are normalized on every write
and lookup, so ``"123"`` and ``123`` address the same entry. Values are
compared either strictly (same type, same value) or loosely (numbers and
numeric strings by value, containers element-wise).
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from numbers import Number
from typing import Any, Iterable, Optional, Union

__all__ = [
    "Key",
    "identical",
    "is_key_like",
    "loose_equals",
    "next_index",
    "normalize_key",
    "numeric_value",
    "stringify",
    "to_number",
    "truthy",
]


type Key = Union[int, str]
"""Type alias for normalized map keys."""

_CANONICAL_INT = re.compile(r"(0|-?[1-9][0-9]*)")
_NUMERIC = re.compile(r"\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*")
_INTEGRAL = re.compile(r"\s*[+-]?\d+\s*")


def normalize_key(key: Any) -> Key:
    """Normalize a value into a map key.

    Args:
        key: The candidate key.

    Returns:
        An ``int`` for integers, booleans, floats (truncated) and canonical
        decimal strings; ``""`` for ``None``; the string itself otherwise.

    Raises:
        TypeError: If the value cannot be used as a key.
    """
    match key:
        case bool():
            return int(key)
        case int():
            return key
        case float():
            return int(key)
        case None:
            return ""
        case str():
            if _CANONICAL_INT.fullmatch(key) is not None:
                return int(key)
            return key
        case _:
            raise TypeError(f"Illegal key type: {type(key).__name__}")


def is_key_like(value: Any) -> bool:
    """Check whether a value may be normalized into a key without error."""
    return isinstance(value, (int, float, str))


def next_index(keys: Iterable[Key]) -> int:
    """Return the integer key an appended value would receive."""
    return max((key for key in keys if isinstance(key, int)), default=-1) + 1


def numeric_value(value: Any) -> Optional[Number]:
    """Return the numeric value of a number or numeric string.

    Booleans count as ``0``/``1``. Anything else gives ``None``.
    """
    match value:
        case bool():
            return int(value)
        case Number():
            return value
        case str():
            if _INTEGRAL.fullmatch(value) is not None:
                return int(value)
            elif _NUMERIC.fullmatch(value) is not None:
                return float(value)
            else:
                return None
        case _:
            return None


def to_number(value: Any) -> Number:
    """Coerce a value for arithmetic.

    Raises:
        TypeError: If the value is neither a number nor a numeric string.
    """
    number = numeric_value(value)
    if number is None:
        raise TypeError(f"Cannot use {type(value).__name__} value {value!r} as a number")
    return number


def stringify(value: Any) -> str:
    """Convert a value to its string form for joining and string comparison."""
    match value:
        case None | False:
            return ""
        case True:
            return "1"
        case float() if value.is_integer():
            return str(int(value))
        case str():
            return value
        case _:
            return str(value)


def truthy(value: Any) -> bool:
    """Truthiness used by loose comparison; ``"0"`` counts as false."""
    if isinstance(value, str):
        return value not in ("", "0")
    return bool(value)


def identical(a: Any, b: Any) -> bool:
    """Strict equality: same type and equal, containers compared recursively."""
    if type(a) is not type(b):
        return False
    match a:
        case list() | tuple():
            return len(a) == len(b) and all(identical(x, y) for x, y in zip(a, b))
        case dict():
            return list(a.keys()) == list(b.keys()) and all(
                identical(a[k], b[k]) for k in a
            )
        case _:
            return bool(a == b)


def loose_equals(a: Any, b: Any) -> bool:
    """Loose equality: numbers by value, containers element-wise."""
    if a is b:
        return True
    if a is None and isinstance(b, str):
        return b == ""
    if b is None and isinstance(a, str):
        return a == ""
    if a is None or b is None or isinstance(a, bool) or isinstance(b, bool):
        return truthy(a) == truthy(b)
    if isinstance(a, (Number, str)) and isinstance(b, (Number, str)):
        return _loose_scalar_equals(a, b)
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        return len(a) == len(b) and all(loose_equals(x, y) for x, y in zip(a, b))
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        return _loose_mapping_equals(a, b)
    if type(a) is type(b) and hasattr(a, "__dict__") and hasattr(b, "__dict__"):
        return _loose_mapping_equals(vars(a), vars(b))
    return bool(a == b)


def _loose_scalar_equals(a: Union[Number, str], b: Union[Number, str]) -> bool:
    x = numeric_value(a)
    y = numeric_value(b)
    if x is not None and y is not None:
        return x == y
    return stringify(a) == stringify(b)


def _loose_mapping_equals(a: Mapping[Any, Any], b: Mapping[Any, Any]) -> bool:
    if len(a) != len(b):
        return False
    for key, value in a.items():
        if key not in b or not loose_equals(value, b[key]):
            return False
    return True
