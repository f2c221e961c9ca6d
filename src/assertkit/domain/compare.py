"""Domain comparators and the comparison dispatcher.

Each comparator receives two keys that were produced by :func:`classify`
for the same domain and returns a :class:`CompareResult`. The float
comparator is the only one that can decline: NaN operands are unordered.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from datetime import datetime, timezone, tzinfo
from decimal import Decimal
from typing import Any

from assertkit.domain.classify import classify
from assertkit.domain.types import CompareResult, Domain

Comparator = Callable[[Any, Any], "CompareResult | None"]


def _three_way(a: Any, b: Any) -> CompareResult:
    if a < b:
        return CompareResult.LESS
    if a > b:
        return CompareResult.GREATER
    return CompareResult.EQUAL


def compare_strings(a: str, b: str) -> CompareResult:
    # Code point order is identical to UTF-8 byte order.
    return _three_way(a, b)


def compare_integers(a: int, b: int) -> CompareResult:
    return _three_way(int(a), int(b))


def compare_floats(a: Any, b: Any) -> CompareResult | None:
    """IEEE-754 ordered comparison; returns None when either side is NaN."""
    if _is_nan(a) or _is_nan(b):
        return None
    return _three_way(a, b)


def compare_bytes(a: bytes, b: bytes) -> CompareResult:
    """Lexicographic by unsigned byte value; a strict prefix sorts first."""
    for x, y in zip(a, b):
        if x != y:
            return CompareResult.LESS if x < y else CompareResult.GREATER
    return _three_way(len(a), len(b))


def compare_timestamps(a: datetime, b: datetime) -> CompareResult:
    """Chronological order of the instants, whatever their zones."""
    # Aware datetimes order by instant without converting zones, which
    # would overflow near datetime.min and datetime.max.
    return _three_way(a, b)


def _is_nan(value: Any) -> bool:
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, Decimal):
        return value.is_nan()
    # Fractions are always finite.
    return False


COMPARATORS: dict[Domain, Comparator] = {
    Domain.STRING: compare_strings,
    Domain.SIGNED_INTEGER: compare_integers,
    Domain.UNSIGNED_INTEGER: compare_integers,
    Domain.FLOAT: compare_floats,
    Domain.BYTES: compare_bytes,
    Domain.TIMESTAMP: compare_timestamps,
}


def compare(
    a: Any,
    b: Any,
    *,
    naive_tz: tzinfo | None = timezone.utc,
) -> tuple[CompareResult | None, bool]:
    """Compare two arbitrary values.

    Returns ``(result, True)`` when both values classify into the same
    domain and are ordered, otherwise ``(None, False)``. Values are never
    coerced across domains: ``"123"`` and ``123`` are not comparable.
    """
    left = classify(a, naive_tz=naive_tz)
    if left is None:
        return None, False
    right = classify(b, naive_tz=naive_tz)
    if right is None or right.domain is not left.domain:
        return None, False
    result = COMPARATORS[left.domain](left.key, right.key)
    if result is None:
        return None, False
    return result, True


def contains_value(values: Iterable[CompareResult], value: CompareResult) -> bool:
    """Check whether *value* is one of the allowed *values*."""
    return value in values
