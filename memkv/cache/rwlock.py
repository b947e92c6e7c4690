"""
Reader/Writer Lock Module

A single RWLock guards an entire KVStore mapping.

- Any number of readers may hold the lock at the same time
- A writer holds it exclusively, against readers and other writers
- Once a writer is waiting, new readers queue behind it so a steady
  stream of reads cannot starve writes

Acquisition is scoped through the read_locked() / write_locked() context
managers so the lock is released exactly once on every exit path,
including raised errors.
"""

import threading
from contextlib import contextmanager
from typing import Iterator


class RWLock:
    """
    Writer-preferring reader/writer lock built on threading.Condition.

    Usage:
        lock = RWLock()
        with lock.read_locked():
            ...  # shared access
        with lock.write_locked():
            ...  # exclusive access

    The lock is not reentrant: a thread holding it in either mode must
    not acquire it again.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        """Block until shared access is granted."""
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        """Release shared access."""
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a read lock held")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        """Block until exclusive access is granted."""
        with self._cond:
            self._writers_waiting += 1
            granted = False
            try:
                while self._writer or self._readers:
                    self._cond.wait()
                granted = True
            finally:
                self._writers_waiting -= 1
                if not granted:
                    # readers held back by this writer must re-check
                    self._cond.notify_all()
            self._writer = True

    def release_write(self) -> None:
        """Release exclusive access."""
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() called without the write lock held")
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
