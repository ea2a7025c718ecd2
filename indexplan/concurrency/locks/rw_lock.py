import threading
import time
from contextlib import contextmanager
from typing import Iterator, Optional

from ...core.exceptions import DbException


class LockTimeoutError(DbException):
    """Raised when a lock cannot be acquired within the configured timeout."""
    pass


class ReadWriteLock:
    """
    🔐 Per-table readers-writer lock 🔐

    Any number of readers may hold the lock together while no writer
    holds it; a writer holds it alone. Waiting writers block new readers
    so a steady stream of queries cannot starve inserts.

    Lock compatibility:
    ------------------------------------------------------------
                 | reader held | writer held
    reader wants |     ✅      |     ❌
    writer wants |     ❌      |     ❌
    ------------------------------------------------------------

    The lock is not reentrant: a thread holding the write side must not
    ask for either side again.
    """

    def __init__(self, name: str = "", timeout: Optional[float] = None):
        self.name = name
        self.timeout = timeout
        self._condition = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer: Optional[int] = None
        self._waiting_writers = 0

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

    def acquire_read(self) -> None:
        with self._condition:
            self._wait_for(lambda: self._writer is None and self._waiting_writers == 0,
                           "read")
            self._readers += 1

    def release_read(self) -> None:
        with self._condition:
            if self._readers == 0:
                raise DbException(f"Read lock on '{self.name}' released but not held")
            self._readers -= 1
            if self._readers == 0:
                self._condition.notify_all()

    def acquire_write(self) -> None:
        with self._condition:
            self._waiting_writers += 1
            try:
                self._wait_for(lambda: self._writer is None and self._readers == 0,
                               "write")
            finally:
                self._waiting_writers -= 1
                if self._waiting_writers == 0:
                    self._condition.notify_all()
            self._writer = threading.get_ident()

    def release_write(self) -> None:
        with self._condition:
            if self._writer != threading.get_ident():
                raise DbException(
                    f"Write lock on '{self.name}' released by a thread that does not hold it")
            self._writer = None
            self._condition.notify_all()

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def write_held(self) -> bool:
        return self._writer is not None

    def _wait_for(self, predicate, mode: str) -> None:
        """Wait on the condition until predicate holds. Caller holds the condition."""
        if self.timeout is None:
            self._condition.wait_for(predicate)
            return

        deadline = time.monotonic() + self.timeout
        while not predicate():
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise LockTimeoutError(
                    f"Timed out after {self.timeout}s waiting for {mode} lock on '{self.name}'")
            self._condition.wait(remaining)

    def __repr__(self) -> str:
        return (f"ReadWriteLock({self.name!r}, readers={self._readers}, "
                f"writer={'held' if self._writer is not None else 'free'})")
