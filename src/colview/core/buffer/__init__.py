from colview.core.buffer.core import (
    ArrayLike,
    Buffer,
)
from colview.core.buffer.cpu import Buffer as CPUBuffer

__all__ = [
    "ArrayLike",
    "Buffer",
    "CPUBuffer",
]
