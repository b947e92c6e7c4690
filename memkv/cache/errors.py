"""
Cache Error Definitions

Every failure of a store operation is one of the typed errors below,
raised synchronously to the caller. The store leaves the entry unchanged
when it raises.
"""


class CacheError(Exception):
    """Base class for store operation failures."""

    def __init__(self, key: str, message: str):
        super().__init__(message)
        self.key = key


class KeyNotFoundError(CacheError):
    """The operation required an existing key and none is present."""

    def __init__(self, key: str):
        super().__init__(key, f"key {key!r} does not exist")


class KeyExpiredError(CacheError):
    """The key is present but its expiration instant has passed."""

    def __init__(self, key: str):
        super().__init__(key, f"key {key!r} has expired")


class TypeMismatchError(CacheError):
    """The stored value's kind does not support the requested operation."""

    def __init__(self, key: str, expected: str, actual: str):
        super().__init__(key, f"key {key!r} holds {actual}, not {expected}")
        self.expected = expected
        self.actual = actual
