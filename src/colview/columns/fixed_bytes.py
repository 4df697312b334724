from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from colview.columns._fixed import FixedStrideColumn
from colview.core.config import config, parse_decode_errors
from colview.errors import EncodingOverflowError

if TYPE_CHECKING:
    import numpy.typing as npt


class FixedByteStringColumn(FixedStrideColumn[str]):
    """A column of UTF-8 strings, each stored NUL padded in ``chars`` bytes.

    Examples
    --------
    >>> col = FixedByteStringColumn.with_capacity(2, chars=4)
    >>> col.set(0, "ab")
    >>> col.to_bytes()[:4]
    b'ab\\x00\\x00'
    >>> col.get(0)
    'ab'
    """

    def _encode(self, value: str | bytes) -> npt.NDArray[np.uint8]:
        if isinstance(value, str):
            encoded = value.encode("utf-8")
        elif isinstance(value, bytes | bytearray | memoryview):
            encoded = bytes(value)
        else:
            raise TypeError(f"Expected a str or bytes value. Got {type(value).__name__} instead.")
        if len(encoded) > self.stride:
            raise EncodingOverflowError(len(encoded), self.stride)
        out = np.zeros(self.stride, dtype="B")
        out[: len(encoded)] = np.frombuffer(encoded, dtype="B")
        return out

    def get(self, idx: int) -> str:
        """Decode element ``idx``, dropping every NUL byte in the slot."""
        errors = parse_decode_errors(config.get("fixed_bytes.decode_errors"))
        return self._slot(idx).tobytes().decode("utf-8", errors=errors).replace("\x00", "")

    def set(self, idx: int, value: str | bytes) -> None:
        """Write ``value`` into element ``idx``.

        Strings are UTF-8 encoded, bytes are written as they are. The rest of
        the slot is zeroed.

        Raises
        ------
        EncodingOverflowError
            If the encoded value is longer than the slot. Nothing is written.
        """
        encoded = self._encode(value)
        self._slot(idx)[:] = encoded

    def fill(self, value: str | bytes) -> None:
        self._slots()[:] = self._encode(value)

    def as_numpy_array(self) -> npt.NDArray[np.bytes_]:
        """A numpy ``|S{chars}`` view of the column, sharing its memory."""
        return self._buffer.as_numpy_array().view(f"S{self.chars}")
