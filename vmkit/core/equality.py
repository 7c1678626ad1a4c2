"""
Value equality rules used for stale-state comparison.

`None` and the empty string are treated as the same "no value", because
bound text inputs routinely flip between the two without the user
changing anything.
"""
from itertools import zip_longest
from typing import Any, Iterable, Optional

_MISSING = object()


def objects_equal(value1: Any, value2: Any) -> bool:
    """
    Generic equality check.

    Values are equal if both are None, if one is None and the other an
    empty string, or if they compare equal.
    """
    if value2 is None and isinstance(value1, str) and not value1:
        return True
    if value1 is None and isinstance(value2, str) and not value2:
        return True
    if value1 is None or value2 is None:
        return value1 is None and value2 is None
    return bool(value1 == value2)


def enumerable_equal(first: Optional[Iterable], second: Optional[Iterable]) -> bool:
    """
    Compare two iterables element by element with `objects_equal`.

    Both None counts as equal, exactly one None as unequal. Iterables of
    different length are unequal.
    """
    if first is None and second is None:
        return True
    if first is None or second is None:
        return False

    for value1, value2 in zip_longest(first, second, fillvalue=_MISSING):
        if value1 is _MISSING or value2 is _MISSING:
            return False
        if not objects_equal(value1, value2):
            return False
    return True
