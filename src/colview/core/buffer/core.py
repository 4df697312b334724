from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from typing import Self

    from colview.core.common import BufferLike

# Everything here is imported into ``colview.core.buffer`` namespace.
__all__: list[str] = []


@runtime_checkable
class ArrayLike(Protocol):
    """The one-dimensional byte array a Buffer wraps"""

    @property
    def dtype(self) -> np.dtype[Any]: ...

    @property
    def ndim(self) -> int: ...

    @property
    def size(self) -> int: ...

    def __getitem__(self, key: slice) -> Self: ...

    def __setitem__(self, key: slice, value: Any) -> None: ...


def check_item_key_is_1d_contiguous(key: Any) -> None:
    """Raises error if `key` isn't a 1d contiguous slice"""
    if not isinstance(key, slice):
        raise TypeError(
            f"Item key has incorrect type (expected slice, got {key.__class__.__name__})"
        )
    if not (key.step is None or key.step == 1):
        raise ValueError("slice must be contiguous")


class Buffer(ABC):
    """The byte storage behind a column

    Every column stores its elements in exactly one Buffer, which it owns
    exclusively. Slot arithmetic and record offsets are all expressed in
    bytes from the start of the buffer, and slicing a Buffer yields another
    Buffer over the same memory.

    Parameters
    ----------
    array_like
        1-dim array of ``uint8``, see :class:`ArrayLike`.
    """

    def __init__(self, array_like: ArrayLike) -> None:
        if array_like.ndim != 1:
            raise ValueError("array_like: only 1-dim allowed")
        if array_like.dtype != np.dtype("B"):
            raise ValueError("array_like: only byte dtype allowed")
        self._data = array_like

    @classmethod
    @abstractmethod
    def create_zeros(cls, nbytes: int) -> Self:
        """Allocate ``nbytes`` zeroed bytes"""
        raise NotImplementedError(f"{cls.__name__} cannot allocate memory")

    @classmethod
    def from_array_like(cls, array_like: ArrayLike) -> Self:
        """Wrap ``array_like`` without copying it"""
        return cls(array_like)

    @classmethod
    @abstractmethod
    def from_bytes(cls, bytes_like: BufferLike) -> Self:
        """Wrap host memory

        Writable memory is wrapped without copying, so the new buffer and
        ``bytes_like`` share their contents. Read-only memory such as
        ``bytes`` is copied, since columns mutate their buffer in place.
        """
        raise NotImplementedError(f"{cls.__name__} cannot wrap host memory")

    def as_array_like(self) -> ArrayLike:
        """The wrapped array, never a copy"""
        return self._data

    @abstractmethod
    def as_numpy_array(self) -> npt.NDArray[np.uint8]:
        """The contents as a host ``uint8`` array.

        Column views are built on this array, so implementations should
        return one that shares the buffer's memory wherever they can.
        """
        ...

    def to_bytes(self) -> bytes:
        """A ``bytes`` copy of the contents"""
        return bytes(self.as_numpy_array())

    def __getitem__(self, key: slice) -> Self:
        check_item_key_is_1d_contiguous(key)
        return self.__class__(self._data.__getitem__(key))

    def __setitem__(self, key: slice, value: Any) -> None:
        check_item_key_is_1d_contiguous(key)
        self._data.__setitem__(key, value)

    def __len__(self) -> int:
        return self._data.size

    @abstractmethod
    def __add__(self, other: Buffer) -> Self:
        """Concatenate two buffers into newly allocated memory"""
        ...

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Buffer) and np.array_equal(
            self.as_numpy_array(), other.as_numpy_array()
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} nbytes={len(self)}>"
