from __future__ import annotations

from typing import TYPE_CHECKING, Final

from colview.columns._fixed import FixedStrideColumn

if TYPE_CHECKING:
    from typing import Self

    import numpy as np
    import numpy.typing as npt

    from colview.core.buffer import Buffer
    from colview.core.common import BufferLike

# the only byte value that decodes as True
TRUE_BYTE: Final = 1
FALSE_BYTE: Final = 0


class BooleanColumn(FixedStrideColumn[bool]):
    """A column of booleans stored one byte per element.

    An element is ``True`` if and only if its byte is exactly ``1``. Writes
    only ever produce ``0`` or ``1``, but a wrapped buffer may hold other byte
    values, all of which read back as ``False``.
    """

    def __init__(self, buffer: Buffer) -> None:
        super().__init__(buffer, 1)

    @classmethod
    def with_capacity(cls, length: int) -> Self:  # type: ignore[override]
        return cls(cls._allocate(length, 1))

    @classmethod
    def from_bytes(cls, data: Buffer | BufferLike) -> Self:  # type: ignore[override]
        return cls(cls._wrap(data))

    def get(self, idx: int) -> bool:
        return bool(self._slot(idx)[0] == TRUE_BYTE)

    def set(self, idx: int, value: object) -> None:
        self._slot(idx)[0] = TRUE_BYTE if value else FALSE_BYTE

    def fill(self, value: object) -> None:
        self._buffer.as_numpy_array()[:] = TRUE_BYTE if value else FALSE_BYTE

    def as_numpy_array(self) -> npt.NDArray[np.bool_]:
        """Decode every element at once into a new numpy ``bool`` array."""
        return self._buffer.as_numpy_array() == TRUE_BYTE

    def __repr__(self) -> str:
        return f"<{type(self).__name__} length={self.length}>"
