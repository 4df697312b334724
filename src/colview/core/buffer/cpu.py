from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from colview.core.buffer import core
from colview.registry import register_buffer

if TYPE_CHECKING:
    from typing import Self

    from colview.core.buffer.core import ArrayLike
    from colview.core.common import BufferLike


class Buffer(core.Buffer):
    """A flat contiguous memory block in host memory

    Backed by a one-dimensional numpy ``uint8`` array.

    Parameters
    ----------
    array_like
        array-like object that must be 1-dim, contiguous, and byte dtype.
    """

    def __init__(self, array_like: ArrayLike) -> None:
        super().__init__(array_like)

    @classmethod
    def create_zeros(cls, nbytes: int) -> Self:
        return cls(np.zeros(nbytes, dtype="B"))

    @classmethod
    def from_bytes(cls, bytes_like: BufferLike) -> Self:
        """Create a new buffer of a bytes-like object (host memory)

        Parameters
        ----------
        bytes_like
           bytes-like object, or a contiguous numpy array of any dtype

        Returns
        -------
            New buffer representing `bytes_like`
        """
        array = np.frombuffer(bytes_like, dtype="B")
        if not array.flags.writeable:
            array = array.copy()
        return cls.from_array_like(array)

    def as_numpy_array(self) -> npt.NDArray[np.uint8]:
        """Returns the buffer as a NumPy array (host memory).

        Returns
        -------
            NumPy array of this buffer, sharing its memory
        """
        return np.asanyarray(self._data)

    def __add__(self, other: core.Buffer) -> Self:
        """Concatenate two buffers"""

        other_array = other.as_array_like()
        assert other_array.dtype == np.dtype("B")
        return self.__class__(
            np.concatenate((np.asanyarray(self._data), np.asanyarray(other_array)))
        )


register_buffer(Buffer)
