"""
memkv: In-Process Typed Key-Value Cache

A thread-safe, in-memory key-value store with lazy time-based
expiration and atomic counter / string-append operations.
"""

from .cache import (
    DEFAULT_EXPIRATION,
    NO_EXPIRATION,
    CacheError,
    KVStore,
    KeyExpiredError,
    KeyNotFoundError,
    TypeMismatchError,
)

__version__ = "1.0.0"

__all__ = [
    "KVStore",
    "CacheError",
    "KeyNotFoundError",
    "KeyExpiredError",
    "TypeMismatchError",
    "NO_EXPIRATION",
    "DEFAULT_EXPIRATION",
]
