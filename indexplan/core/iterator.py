from abc import ABC, abstractmethod
from typing import Generic, Iterator, Optional, TypeVar

from .exceptions import DbException

T = TypeVar('T')


class DbIterator(ABC, Generic[T]):
    """
    DbIterator is the iterator interface that every scan implements.

    Key Design Principles:
    1. **Pull-based execution**: callers pull items one at a time
    2. **Iterator pattern**: has_next() + next() for streaming
    3. **Resource management**: open() + close() for setup/cleanup
    4. **Restartable**: rewind() starts the sequence over
    5. **Lazy evaluation**: items are produced on demand
    """

    @abstractmethod
    def open(self) -> None:
        """
        Opens the iterator.
        This must be called before any other methods.
        """
        pass

    @abstractmethod
    def has_next(self) -> bool:
        """
        Returns true if the iterator has more items.

        This method does NOT advance the iterator position.

        Raises:
            DbException: If the iterator has not been opened
        """
        pass

    @abstractmethod
    def next(self) -> T:
        """
        Returns the next item and advances the iterator.

        Raises:
            StopIteration: If there are no more items
            DbException: If the iterator has not been opened
        """
        pass

    @abstractmethod
    def rewind(self) -> None:
        """
        Resets the iterator to the start.

        After calling rewind(), the next call to next() returns the
        first item again.
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """
        Closes the iterator and releases resources.

        After calling close(), calling next(), has_next(), or rewind()
        raises DbException.
        """
        pass


class AbstractDbIterator(DbIterator[T]):
    """
    Helper base class for implementing DbIterators.

    This class handles the common logic for has_next()/next() by implementing
    a "read-ahead" pattern. Subclasses only need to implement read_next()
    and reset().

    How it works:
    1. has_next() calls read_next() if no item is buffered
    2. next() returns the buffered item and clears the buffer
    3. read_next() is where subclasses implement their specific logic

    Iterating with a for loop opens (or rewinds) the scan and closes it
    when the loop finishes, so the same object can be iterated repeatedly.
    """

    def __init__(self):
        self._next_item: Optional[T] = None
        self._is_open = False

    def has_next(self) -> bool:
        """
        Check if there are more items available.

        Uses read-ahead pattern: if no item is buffered, try to read one.
        """
        self._check_open()

        if self._next_item is None:
            self._next_item = self.read_next()
        return self._next_item is not None

    def next(self) -> T:
        """
        Return the next item and advance the iterator.

        Uses the buffered item from has_next() or reads a new one.
        """
        self._check_open()

        if self._next_item is None:
            self._next_item = self.read_next()

        if self._next_item is None:
            raise StopIteration("No more items")

        result = self._next_item
        self._next_item = None  # Clear buffer
        return result

    def open(self) -> None:
        """Mark iterator as open and position it at the start."""
        self._is_open = True
        self._next_item = None
        self.reset()

    def rewind(self) -> None:
        """Reset the iterator to the beginning."""
        self._check_open()
        self._next_item = None
        self.reset()

    def close(self) -> None:
        """Mark iterator as closed and clear buffer."""
        self._is_open = False
        self._next_item = None

    def __iter__(self) -> Iterator[T]:
        if self._is_open:
            self.rewind()
        else:
            self.open()
        try:
            while self.has_next():
                yield self.next()
        finally:
            self.close()

    def __enter__(self) -> 'AbstractDbIterator[T]':
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _check_open(self) -> None:
        if not self._is_open:
            raise DbException("Iterator not open")

    @abstractmethod
    def reset(self) -> None:
        """Position the underlying source at its first item."""
        pass

    @abstractmethod
    def read_next(self) -> Optional[T]:
        """
        Read the next item from the data source.

        This is the main method subclasses need to implement.
        Should return None when no more items are available.
        """
        pass
