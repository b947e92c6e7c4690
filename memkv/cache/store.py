"""
Key-Value Store Module

This module implements the core key-value storage functionality:
- Basic operations (set, get, delete, exists)
- Lazy TTL expiration (expire, expire_at)
- Atomic numeric and string mutation (incr/decr families, append)

A single reader/writer lock guards the whole mapping. get() and exists()
take it shared; every mutating operation takes it exclusively and runs
its read-modify-write as one critical section.
"""

import logging
import numbers
from typing import Any, Dict, Optional

from ..config.settings import settings
from .clock import Clock, MonotonicClock
from .entry import DEFAULT_EXPIRATION, NO_EXPIRATION, Entry, ValueKind, wrap_int64
from .errors import KeyExpiredError, KeyNotFoundError, TypeMismatchError
from .rwlock import RWLock

logger = logging.getLogger(__name__)


def _check_int_delta(delta: Any) -> None:
    if isinstance(delta, bool) or not isinstance(delta, int):
        raise TypeError(f"delta must be an int, got {type(delta).__name__}")


def _check_float_delta(delta: Any) -> None:
    if isinstance(delta, bool) or not isinstance(delta, numbers.Real):
        raise TypeError(f"delta must be a real number, got {type(delta).__name__}")


class KVStore:
    """
    Thread-safe in-memory key-value store with lazy TTL expiration.

    Each key maps to an Entry holding one value variant (integer, float,
    string or opaque) and an optional expiration instant. Expiration is
    evaluated only when an operation touches the key; nothing is reclaimed
    in the background.

    Internal Storage:
        Plain dict guarded by an RWLock.
        Format: key -> Entry(kind, value, expires_at)
        expires_at = None means no expiration

    Attributes:
        default_ttl: Seconds applied when DEFAULT_EXPIRATION is requested,
            or None when the default is to never expire
        clock: Source of the current instant
    """

    def __init__(self, default_ttl: Optional[float] = None, clock: Optional[Clock] = None):
        """
        Initialize the KV store.

        Args:
            default_ttl: Default time-to-live in seconds (default from
                settings.DEFAULT_TTL; 0 or less means no expiration)
            clock: Clock used for expirations (default MonotonicClock)
        """
        if default_ttl is None:
            default_ttl = settings.DEFAULT_TTL
        self.default_ttl = default_ttl if default_ttl and default_ttl > 0 else None
        self.clock = clock if clock is not None else MonotonicClock()

        self._lock = RWLock()
        self._store: Dict[str, Entry] = {}

        logger.debug(f"Created store (default_ttl={self.default_ttl})")

    def _expiration_for(self, ttl: float) -> Optional[float]:
        """Translate a TTL selector into an absolute instant (None = never)."""
        if ttl == NO_EXPIRATION:
            return None
        if ttl == DEFAULT_EXPIRATION:
            if self.default_ttl is None:
                return None
            return self.clock.now() + self.default_ttl
        if ttl > 0:
            return self.clock.now() + ttl
        raise ValueError(
            f"ttl must be positive, NO_EXPIRATION or DEFAULT_EXPIRATION, got {ttl!r}"
        )

    def _live_entry(self, key: str) -> Entry:
        """Return the live entry for key. Caller must hold the lock."""
        entry = self._store.get(key)
        if entry is None:
            raise KeyNotFoundError(key)
        if entry.is_expired(self.clock.now()):
            raise KeyExpiredError(key)
        return entry

    # ------------------------------------------------------------------
    # Basic operations
    # ------------------------------------------------------------------

    def get(self, key: str) -> Any:
        """
        Retrieve the value for a given key.

        Args:
            key: The key to look up

        Returns:
            The stored value

        Raises:
            KeyNotFoundError: The key was never set or has been deleted
            KeyExpiredError: The key is present but past its expiration

        An expired entry is reported but not removed; only a write can
        reclaim it.
        """
        with self._lock.read_locked():
            return self._live_entry(key).value

    def set(self, key: str, value: Any, ttl: float = DEFAULT_EXPIRATION) -> None:
        """
        Insert or overwrite a key-value pair.

        Args:
            key: The key to store
            value: The value to associate with the key
            ttl: Seconds to live, NO_EXPIRATION, or DEFAULT_EXPIRATION

        Overwrites any prior entry regardless of its kind or expiration.
        """
        with self._lock.write_locked():
            self._store[key] = Entry.of(value, self._expiration_for(ttl))

    def exists(self, key: str) -> bool:
        """Check if a key is present and not expired."""
        with self._lock.read_locked():
            entry = self._store.get(key)
            return entry is not None and not entry.is_expired(self.clock.now())

    def delete(self, key: str) -> bool:
        """
        Delete a key-value pair.

        Args:
            key: The key to delete

        Returns:
            True if a live entry was removed; False if the key was absent
            or had already expired (an expired entry is still removed)
        """
        with self._lock.write_locked():
            entry = self._store.pop(key, None)
            if entry is None:
                return False
            return not entry.is_expired(self.clock.now())

    # ------------------------------------------------------------------
    # Expiration
    # ------------------------------------------------------------------

    def expire(self, key: str, ttl: float) -> None:
        """
        Reset a live key's expiration to ttl seconds from now.

        Raises:
            KeyNotFoundError: The key is absent
            KeyExpiredError: The key already expired; set() it again instead
        """
        with self._lock.write_locked():
            entry = self._live_entry(key)
            entry.expires_at = self.clock.now() + ttl

    def expire_at(self, key: str, when: float) -> None:
        """
        Set a live key's expiration to an absolute instant.

        The instant is in the store clock's timebase (see clock.now()) and
        may already be in the past, which expires the key immediately.
        """
        with self._lock.write_locked():
            entry = self._live_entry(key)
            entry.expires_at = when

    # ------------------------------------------------------------------
    # Numeric and string mutation
    # ------------------------------------------------------------------

    def incr_by(self, key: str, delta: int) -> int:
        """
        Add delta to an integer value.

        An absent or expired key is (re)created with value delta and no
        expiration. Arithmetic wraps within the signed 64-bit range.

        Returns:
            The new value

        Raises:
            TypeMismatchError: The live value is not an integer
        """
        _check_int_delta(delta)

        with self._lock.write_locked():
            entry = self._store.get(key)
            if entry is None or entry.is_expired(self.clock.now()):
                value = wrap_int64(delta)
                self._store[key] = Entry(ValueKind.INTEGER, value)
                return value

            if entry.kind is not ValueKind.INTEGER:
                raise TypeMismatchError(key, "integer", entry.kind.name.lower())

            entry.value = wrap_int64(entry.value + delta)
            return entry.value

    def incr(self, key: str) -> int:
        """Add one to an integer value."""
        return self.incr_by(key, 1)

    def decr_by(self, key: str, delta: int) -> int:
        """Subtract delta from an integer value; see incr_by()."""
        _check_int_delta(delta)
        return self.incr_by(key, -delta)

    def decr(self, key: str) -> int:
        """Subtract one from an integer value."""
        return self.decr_by(key, 1)

    def incr_by_float(self, key: str, delta: float) -> float:
        """
        Add delta to a float value.

        Integer and float entries are not interchangeable: a live integer
        entry raises TypeMismatchError just like a string would.
        """
        _check_float_delta(delta)
        delta = float(delta)

        with self._lock.write_locked():
            entry = self._store.get(key)
            if entry is None or entry.is_expired(self.clock.now()):
                self._store[key] = Entry(ValueKind.FLOAT, delta)
                return delta

            if entry.kind is not ValueKind.FLOAT:
                raise TypeMismatchError(key, "float", entry.kind.name.lower())

            entry.value = entry.value + delta
            return entry.value

    def decr_by_float(self, key: str, delta: float) -> float:
        """Subtract delta from a float value; see incr_by_float()."""
        _check_float_delta(delta)
        return self.incr_by_float(key, -delta)

    def append(self, key: str, text: str) -> int:
        """
        Append text to a string value.

        Args:
            key: The key to append to
            text: The text to append

        Returns:
            UTF-8 byte length of the resulting string

        Raises:
            KeyExpiredError: The key is present but expired. Unlike the
                numeric operations, append does not recreate expired keys
            TypeMismatchError: The live value is not a string
            UnicodeEncodeError: The result has no UTF-8 encoding (e.g. a
                lone surrogate); the store is left unchanged
        """
        if not isinstance(text, str):
            raise TypeError(f"text must be a str, got {type(text).__name__}")

        with self._lock.write_locked():
            entry = self._store.get(key)
            if entry is None:
                length = len(text.encode("utf-8"))
                self._store[key] = Entry(ValueKind.STRING, text)
                return length

            if entry.is_expired(self.clock.now()):
                raise KeyExpiredError(key)
            if entry.kind is not ValueKind.STRING:
                raise TypeMismatchError(key, "string", entry.kind.name.lower())

            value = entry.value + text
            length = len(value.encode("utf-8"))
            entry.value = value
            return length

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def size(self) -> int:
        """
        Get the current number of keys in the store.

        Note: This includes expired keys that haven't been reclaimed yet.
        """
        with self._lock.read_locked():
            return len(self._store)

    def clear(self) -> None:
        """Remove all keys from the store."""
        with self._lock.write_locked():
            count = len(self._store)
            self._store.clear()
        logger.debug(f"Cleared {count} keys")

    def cleanup_expired(self) -> int:
        """
        Remove all expired keys from the store.

        The store never calls this on its own; an embedding process may
        call it to reclaim memory held by expired keys nobody touches.

        Returns:
            Number of keys removed
        """
        with self._lock.write_locked():
            now = self.clock.now()
            to_delete = [k for k, entry in self._store.items() if entry.is_expired(now)]
            for key in to_delete:
                del self._store[key]
        logger.debug(f"Removed {len(to_delete)} expired keys")
        return len(to_delete)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics about the store.

        Returns:
            Dictionary containing:
            - total_keys: Total keys in store
            - expired_keys: Count of expired (but not yet reclaimed) keys
            - active_keys: Count of live keys
            - default_ttl: Default time-to-live in seconds, or None
        """
        with self._lock.read_locked():
            now = self.clock.now()
            total = len(self._store)
            expired = sum(1 for entry in self._store.values() if entry.is_expired(now))

        return {
            "total_keys": total,
            "expired_keys": expired,
            "active_keys": total - expired,
            "default_ttl": self.default_ttl,
        }
