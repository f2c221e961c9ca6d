"""Kind classifier — map a runtime value to its ordering domain.

Classification looks only at the value's type. Subclasses of builtins resolve
through their MRO, and ctypes scalars resolve through their ``_type_`` code,
so a named wrapper around ``c_int16`` lands in the same domain as a bare
``c_int16``.

INVARIANT: ``bool`` is never numeric here, even though it subclasses ``int``.
"""

from __future__ import annotations

import ctypes
from datetime import datetime, timezone, tzinfo
from decimal import Decimal
from fractions import Fraction
from typing import Any

from assertkit.domain.types import Classified, Domain

# ctypes simple-type codes, see the ctypes ``_type_`` attribute.
CTYPES_DOMAINS: dict[str, Domain] = {
    "b": Domain.SIGNED_INTEGER,
    "h": Domain.SIGNED_INTEGER,
    "i": Domain.SIGNED_INTEGER,
    "l": Domain.SIGNED_INTEGER,
    "q": Domain.SIGNED_INTEGER,
    "B": Domain.UNSIGNED_INTEGER,
    "H": Domain.UNSIGNED_INTEGER,
    "I": Domain.UNSIGNED_INTEGER,
    "L": Domain.UNSIGNED_INTEGER,
    "Q": Domain.UNSIGNED_INTEGER,
    "P": Domain.UNSIGNED_INTEGER,  # c_void_p, pointer-sized
    "f": Domain.FLOAT,
    "d": Domain.FLOAT,
    "g": Domain.FLOAT,
    "z": Domain.BYTES,  # c_char_p
    "Z": Domain.STRING,  # c_wchar_p
}

_BYTE_FORMATS = frozenset({"B", "c"})


def _classify_ctypes(value: ctypes._SimpleCData) -> Classified | None:
    code = getattr(type(value), "_type_", None)
    domain = CTYPES_DOMAINS.get(code) if isinstance(code, str) else None
    if domain is None:
        return None
    raw = value.value
    if domain in (Domain.SIGNED_INTEGER, Domain.UNSIGNED_INTEGER):
        # NULL pointers read back as None.
        return Classified(domain, int(raw or 0))
    if domain is Domain.BYTES:
        return Classified(domain, bytes(raw or b""))
    if domain is Domain.STRING:
        return Classified(domain, str(raw or ""))
    return Classified(domain, raw)


def to_instant(value: datetime, naive_tz: tzinfo | None = timezone.utc) -> datetime:
    """Return an aware datetime for *value*.

    Naive datetimes are pinned to *naive_tz*; ``None`` means the local zone.
    """
    if value.tzinfo is not None and value.utcoffset() is not None:
        return value
    if naive_tz is None:
        try:
            return value.astimezone()
        except (OverflowError, OSError, ValueError):
            # Out of the platform's time_t range; use the current local offset.
            return value.replace(tzinfo=datetime.now().astimezone().tzinfo)
    return value.replace(tzinfo=naive_tz)


def classify(value: Any, *, naive_tz: tzinfo | None = timezone.utc) -> Classified | None:
    """Resolve *value* to its ordering domain, or None if unclassifiable."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return Classified(Domain.STRING, str.__str__(value))
    if isinstance(value, int):
        return Classified(Domain.SIGNED_INTEGER, int(value))
    if isinstance(value, (float, Decimal, Fraction)):
        return Classified(Domain.FLOAT, value)
    if isinstance(value, (bytes, bytearray)):
        return Classified(Domain.BYTES, bytes(value))
    if isinstance(value, memoryview):
        if value.format not in _BYTE_FORMATS:
            return None
        return Classified(Domain.BYTES, value.tobytes())
    if isinstance(value, datetime):
        return Classified(Domain.TIMESTAMP, to_instant(value, naive_tz))
    if isinstance(value, ctypes._SimpleCData):
        return _classify_ctypes(value)
    return None
