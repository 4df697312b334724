from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

import numpy as np

from colview.core.config import config
from colview.errors import IndexOutOfRangeError

if TYPE_CHECKING:
    import numpy.typing as npt

BytesLike = bytes | bytearray | memoryview
BufferLike = BytesLike | np.ndarray[Any, np.dtype[Any]]

# width of a record length prefix and of the record count header
LENGTH_PREFIX_BYTES: Final = 4
# little-endian int32, the layout numcodecs uses for vlen records
LENGTH_PREFIX_DTYPE: Final = np.dtype("<i4")


def bounds_checking() -> bool:
    return bool(config.get("check_bounds"))


def parse_count(data: Any, name: str = "length") -> int:
    if isinstance(data, bool) or not isinstance(data, int | np.integer):
        raise TypeError(f"Expected an integer for {name}. Got {data!r} instead.")
    if data < 0:
        raise ValueError(f"Expected a non-negative integer for {name}. Got {data} instead.")
    return int(data)


def parse_chars(data: Any) -> int:
    """Validate a per-element character count, which must be a positive integer."""
    chars = parse_count(data, "chars")
    if chars == 0:
        raise ValueError("Expected a positive integer for chars. Got 0 instead.")
    return chars


def parse_index(data: Any, length: int) -> int:
    """
    Normalize a logical index to a Python ``int``.

    Raises ``IndexOutOfRangeError`` if the index falls outside ``[0, length)`` and bounds
    checking is enabled in the config.
    """
    if isinstance(data, bool) or not isinstance(data, int | np.integer):
        raise TypeError(f"Column indices must be integers. Got {type(data).__name__} instead.")
    idx = int(data)
    if bounds_checking() and not 0 <= idx < length:
        raise IndexOutOfRangeError(idx, length)
    return idx


def parse_range(begin: Any, end: Any, length: int) -> tuple[int, int]:
    """Validate a half-open ``[begin, end)`` range of logical indices."""
    begin = parse_count(begin, "begin")
    end = parse_count(end, "end")
    if bounds_checking():
        if end > length:
            raise IndexOutOfRangeError(
                f"Range end {end} is out of range for a column of length {length}."
            )
        if begin > end:
            raise IndexOutOfRangeError(f"Range begin {begin} is greater than range end {end}.")
    return begin, end


def encode_length(value: int) -> bytes:
    """Encode a record length or count as a little-endian int32."""
    return np.array([value], dtype=LENGTH_PREFIX_DTYPE).tobytes()


def decode_length(data: npt.NDArray[np.uint8], position: int) -> int:
    """Read the little-endian int32 starting at ``position``."""
    return int(data[position : position + LENGTH_PREFIX_BYTES].view(LENGTH_PREFIX_DTYPE)[0])
