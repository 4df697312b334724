from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from colview.abc.column import Column
from colview.core.buffer import Buffer
from colview.core.common import parse_chars, parse_count
from colview.errors import StrideMismatchError
from colview.registry import get_buffer_class

if TYPE_CHECKING:
    from typing import Self

    import numpy as np
    import numpy.typing as npt

    from colview.core.common import BufferLike

T = TypeVar("T")


class FixedStrideColumn(Column[T]):
    """Base class for columns whose elements all occupy the same number of bytes.

    Element ``idx`` owns the half-open byte range ``[idx * stride, (idx + 1) * stride)``
    of the buffer, where ``stride = chars * cell_size``.

    Parameters
    ----------
    buffer
        The buffer to take ownership of. Its size must be a multiple of the stride.
    chars
        The number of cells per element.
    """

    # bytes per character cell
    cell_size: ClassVar[int] = 1

    def __init__(self, buffer: Buffer, chars: int) -> None:
        self._chars = parse_chars(chars)
        stride = self._chars * self.cell_size
        if len(buffer) % stride != 0:
            raise StrideMismatchError(len(buffer), stride)
        self._buffer = buffer

    @classmethod
    def _allocate(cls, length: int, chars: int) -> Buffer:
        nbytes = parse_count(length) * parse_chars(chars) * cls.cell_size
        return get_buffer_class().create_zeros(nbytes)

    @classmethod
    def _wrap(cls, data: Buffer | BufferLike) -> Buffer:
        if isinstance(data, Buffer):
            return data
        return get_buffer_class().from_bytes(data)

    @classmethod
    def with_capacity(cls, length: int, chars: int) -> Self:
        """Create a column of ``length`` zeroed elements of ``chars`` cells each."""
        return cls(cls._allocate(length, chars), chars)

    @classmethod
    def from_bytes(cls, data: Buffer | BufferLike, chars: int) -> Self:
        """Wrap an existing buffer holding elements of ``chars`` cells each.

        Raises ``StrideMismatchError`` if the size of ``data`` is not a
        multiple of the stride.
        """
        return cls(cls._wrap(data), chars)

    @property
    def chars(self) -> int:
        return self._chars

    @property
    def stride(self) -> int:
        return self._chars * self.cell_size

    @property
    def length(self) -> int:
        return len(self._buffer) // self.stride

    def _slots(self) -> npt.NDArray[np.uint8]:
        """A ``(length, stride)`` byte view of the buffer."""
        return self._buffer.as_numpy_array().reshape(-1, self.stride)

    def _slot(self, idx: Any) -> npt.NDArray[np.uint8]:
        start = self._check_index(idx) * self.stride
        return self._buffer.as_numpy_array()[start : start + self.stride]

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, FixedStrideColumn)
            and self.stride == other.stride
            and super().__eq__(other)
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} length={self.length} chars={self.chars}>"
