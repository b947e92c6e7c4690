"""
Cache Entry Definitions

This module defines the per-key entry stored by KVStore.

An entry holds exactly one value variant (integer, float, string or an
opaque payload) plus an optional absolute expiration instant. The active
variant decides which mutating operations are legal on the entry.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional

# TTL selectors accepted wherever a relative duration is expected
NO_EXPIRATION = -1
DEFAULT_EXPIRATION = 0

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class ValueKind(Enum):
    """Enumeration of the value variants an entry can hold."""
    INTEGER = auto()
    FLOAT = auto()
    STRING = auto()
    OPAQUE = auto()


def classify(value: Any) -> ValueKind:
    """
    Determine the variant a freshly stored value belongs to.

    bool is an int subclass but is never counted as an integer, and ints
    outside the signed 64-bit range are kept as opaque payloads so that
    get() hands them back untouched.
    """
    if isinstance(value, bool):
        return ValueKind.OPAQUE
    if isinstance(value, int):
        if INT64_MIN <= value <= INT64_MAX:
            return ValueKind.INTEGER
        return ValueKind.OPAQUE
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    return ValueKind.OPAQUE


def wrap_int64(value: int) -> int:
    """Wrap an arbitrary int into the signed 64-bit range."""
    return ((value - INT64_MIN) % 2 ** 64) + INT64_MIN


@dataclass
class Entry:
    """
    Represents the stored (value, expiration) pair for one key.

    Attributes:
        kind: The active value variant
        value: The stored value
        expires_at: Absolute expiration instant in the store clock's
            timebase, or None if the entry never expires
    """
    kind: ValueKind
    value: Any
    expires_at: Optional[float] = None

    @classmethod
    def of(cls, value: Any, expires_at: Optional[float] = None) -> "Entry":
        """Create an entry, classifying the value."""
        return cls(kind=classify(value), value=value, expires_at=expires_at)

    def is_expired(self, now: float) -> bool:
        """An entry is live only while its instant is strictly in the future."""
        return self.expires_at is not None and self.expires_at <= now
