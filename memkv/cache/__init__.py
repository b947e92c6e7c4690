"""Cache module for memkv."""

from .clock import Clock, MonotonicClock
from .entry import DEFAULT_EXPIRATION, NO_EXPIRATION, Entry, ValueKind
from .errors import CacheError, KeyExpiredError, KeyNotFoundError, TypeMismatchError
from .rwlock import RWLock
from .store import KVStore

__all__ = [
    "KVStore",
    "Entry",
    "ValueKind",
    "RWLock",
    "Clock",
    "MonotonicClock",
    "CacheError",
    "KeyNotFoundError",
    "KeyExpiredError",
    "TypeMismatchError",
    "NO_EXPIRATION",
    "DEFAULT_EXPIRATION",
]
