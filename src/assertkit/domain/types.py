"""Ordering domains and three-way comparison results.

Every classifiable value belongs to exactly one ordering domain. Two values
are only ever compared when they share a domain.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum
from typing import Any, NamedTuple


class Domain(StrEnum):
    """Closed set of ordering domains."""

    STRING = "string"
    SIGNED_INTEGER = "signed_integer"
    UNSIGNED_INTEGER = "unsigned_integer"
    FLOAT = "float"
    BYTES = "bytes"
    TIMESTAMP = "timestamp"


NUMERIC_DOMAINS: frozenset[Domain] = frozenset(
    {Domain.SIGNED_INTEGER, Domain.UNSIGNED_INTEGER, Domain.FLOAT}
)


class CompareResult(IntEnum):
    """Outcome of comparing two same-domain values."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


class Classified(NamedTuple):
    """A value resolved to its domain and normalized comparison key."""

    domain: Domain
    key: Any
