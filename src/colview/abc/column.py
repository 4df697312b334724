from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from colview.core.common import parse_index

if TYPE_CHECKING:
    from typing import Self

    from colview.core.buffer import Buffer

__all__ = ["Column", "ColumnIterator"]

T = TypeVar("T")


class Column(ABC, Generic[T]):
    """Abstract base class for a sequence of logical values packed into one byte buffer.

    A column exclusively owns its buffer. Subclasses define how a logical
    index maps onto a byte range of that buffer and how the bytes in that
    range are decoded and encoded.

    Columns support the sequence protocol as shorthand for the explicit
    operations: ``len(col)`` is ``col.length``, ``col[i]`` is ``col.get(i)``,
    ``col[i] = v`` is ``col.set(i, v)``, and ``iter(col)`` returns a fresh
    :class:`ColumnIterator` starting at index 0.
    """

    _buffer: Buffer

    @property
    def buffer(self) -> Buffer:
        """The buffer backing this column.

        External code may read it (e.g. to write it to a file) but must not
        hold on to it across mutations of the column.
        """
        return self._buffer

    @property
    def nbytes(self) -> int:
        return len(self._buffer)

    @property
    @abstractmethod
    def length(self) -> int:
        """Number of logical elements in the column."""
        ...

    @abstractmethod
    def get(self, idx: int) -> T:
        """Decode the element at logical index ``idx``."""
        ...

    @abstractmethod
    def set(self, idx: int, value: Any) -> None:
        """Encode ``value`` into the element at logical index ``idx``."""
        ...

    @abstractmethod
    def fill(self, value: Any) -> None:
        """Encode ``value`` into every element of the column."""
        ...

    def to_bytes(self) -> bytes:
        return self._buffer.to_bytes()

    def _check_index(self, idx: Any) -> int:
        return parse_index(idx, self.length)

    def __len__(self) -> int:
        return self.length

    def __getitem__(self, idx: int) -> T:
        return self.get(idx)

    def __setitem__(self, idx: int, value: Any) -> None:
        self.set(idx, value)

    def __iter__(self) -> ColumnIterator[T]:
        return ColumnIterator(self)

    def __eq__(self, other: object) -> bool:
        return (
            type(self) is type(other)
            and isinstance(other, Column)
            and self.length == other.length
            and self._buffer == other._buffer
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} length={self.length} nbytes={self.nbytes}>"


class ColumnIterator(Generic[T]):
    """A forward cursor over the decoded values of a column.

    Each call to ``iter(column)`` creates an independent cursor starting at
    index 0. The cursor supports both an explicit ``has_next()``/``next()``
    interface and the Python iterator protocol.
    """

    def __init__(self, column: Column[T]) -> None:
        self._column = column
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    def has_next(self) -> bool:
        return self._position < self._column.length

    def next(self) -> T:
        if not self.has_next():
            raise StopIteration
        value = self._column.get(self._position)
        self._position += 1
        return value

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> T:
        return self.next()
