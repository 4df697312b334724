from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Final

import numpy as np

from colview.columns._fixed import FixedStrideColumn
from colview.core.common import parse_range
from colview.errors import CodePointRangeError, EncodingOverflowError

if TYPE_CHECKING:
    import numpy.typing as npt

# code points are stored as little-endian int32, the layout of numpy's "<U" dtype
CODE_POINT_DTYPE: Final = np.dtype("<i4")
MAX_CODE_POINT: Final = 0x10FFFF
_SURROGATES: Final = range(0xD800, 0xE000)
_CELL_LIMITS: Final = np.iinfo(CODE_POINT_DTYPE)
CELL_BITS: Final = _CELL_LIMITS.bits

CodePoints = Sequence[int] | np.ndarray


def is_valid_code_point(value: int) -> bool:
    return 0 <= value <= MAX_CODE_POINT and value not in _SURROGATES


class FixedCodePointStringColumn(FixedStrideColumn[str]):
    """A column of strings stored as ``chars`` 32-bit code points per element.

    Each character takes exactly one 4-byte cell whatever its width in
    other encodings. Unused cells are zero.

    When decoding, cells that do not hold a valid code point (negative,
    beyond ``U+10FFFF`` or a surrogate) are skipped and trailing NUL
    characters are stripped. A NUL followed by other characters is kept, so
    a cell-prefix write of ``[0, 0x41]`` reads back as ``"\\x00A"``.
    """

    cell_size = CODE_POINT_DTYPE.itemsize

    def _cells(self) -> npt.NDArray[np.int32]:
        """A ``(length, chars)`` code-point view of the buffer."""
        return self._buffer.as_numpy_array().view(CODE_POINT_DTYPE).reshape(-1, self.chars)

    def _encode_str(self, value: str) -> npt.NDArray[np.int32]:
        if len(value) > self.chars:
            raise EncodingOverflowError(len(value) * self.cell_size, self.stride)
        out = np.zeros(self.chars, dtype=CODE_POINT_DTYPE)
        out[: len(value)] = [ord(c) for c in value]
        return out

    def _encode_cells(self, value: CodePoints) -> npt.NDArray[np.int32]:
        try:
            cells = np.asarray(value, dtype=np.int64)
        except OverflowError as e:
            raise CodePointRangeError(
                f"Code points must fit in a {CELL_BITS}-bit cell. Got {value!r}."
            ) from e
        if cells.ndim != 1:
            raise ValueError(
                f"Expected a 1-dimensional sequence of code points. Got {cells.ndim} dimensions."
            )
        if cells.size > self.chars:
            raise EncodingOverflowError(cells.size * self.cell_size, self.stride)
        out_of_range = cells[(cells < _CELL_LIMITS.min) | (cells > _CELL_LIMITS.max)]
        if out_of_range.size:
            raise CodePointRangeError(int(out_of_range[0]), CELL_BITS)
        return cells.astype(CODE_POINT_DTYPE)

    def get(self, idx: int) -> str:
        row = self._cells()[self._check_index(idx)]
        return "".join(chr(c) for c in row.tolist() if is_valid_code_point(c)).rstrip("\x00")

    def set(self, idx: int, value: str | CodePoints) -> None:
        """Write ``value`` into element ``idx``.

        A ``str`` replaces the whole slot: its code points are written left
        aligned and the remaining cells are zeroed. A sequence of integers is
        copied verbatim into the first ``len(value)`` cells and the remaining
        cells keep their previous contents.

        Raises
        ------
        EncodingOverflowError
            If ``value`` has more than ``chars`` characters or code points.
            Nothing is written.
        """
        if isinstance(value, str):
            encoded = self._encode_str(value)
            self._cells()[self._check_index(idx)] = encoded
        else:
            cells = self._encode_cells(value)
            self._cells()[self._check_index(idx), : cells.size] = cells

    def fill(self, value: str | CodePoints) -> None:
        if isinstance(value, str):
            self._cells()[:] = self._encode_str(value)
        else:
            cells = self._encode_cells(value)
            self._cells()[:, : cells.size] = cells

    def subarray(self, begin: int, end: int) -> npt.NDArray[np.int32]:
        """The raw code-point cells of elements ``[begin, end)``.

        Returns a read-only flat view of ``(end - begin) * chars`` cells, valid
        until the column is next modified.
        """
        begin, end = parse_range(begin, end, self.length)
        view = self._cells().reshape(-1)[begin * self.chars : end * self.chars]
        view.flags.writeable = False
        return view

    def as_numpy_array(self) -> npt.NDArray[np.str_]:
        """A numpy ``<U{chars}`` view of the column, sharing its memory.

        Only meaningful when every cell holds a valid code point.
        """
        return self._buffer.as_numpy_array().view(f"<U{self.chars}")
