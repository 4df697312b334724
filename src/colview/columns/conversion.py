"""Conversions between column types, and between columns and numpy arrays."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np

from colview.columns.boolean import BooleanColumn
from colview.columns.fixed_bytes import FixedByteStringColumn
from colview.columns.fixed_code_points import CODE_POINT_DTYPE, FixedCodePointStringColumn
from colview.columns.vlen_bytes import VariableByteStringColumn

if TYPE_CHECKING:
    import numpy.typing as npt

    from colview.abc.column import Column

__all__ = ["column_from_numpy", "fixed_to_vlen", "vlen_to_fixed"]


def vlen_to_fixed(column: VariableByteStringColumn) -> FixedByteStringColumn:
    """
    Pad every record of a variable-length column to the length of the longest
    one, producing a fixed-width column.

    Records are NUL padded, so records that end in NUL bytes do not survive
    the round trip. A column whose records are all empty gets one byte per
    element.
    """
    chars = max(int(column.lengths.max(initial=0)), 1)
    out = FixedByteStringColumn.with_capacity(column.length, chars)
    for i, record in enumerate(column):
        out.set(i, record)
    return out


def fixed_to_vlen(
    column: FixedByteStringColumn | FixedCodePointStringColumn,
) -> VariableByteStringColumn:
    """Store the decoded values of a fixed-width string column as UTF-8 records."""
    return VariableByteStringColumn.from_values(list(column))


def column_from_numpy(array: npt.NDArray[Any]) -> Column[Any]:
    """
    Copy a one-dimensional numpy array into the column type matching its dtype.

    ======================  ================================
    dtype kind              column
    ======================  ================================
    ``b`` (bool)            :class:`BooleanColumn`
    ``S`` (bytes)           :class:`FixedByteStringColumn`
    ``U`` (str)             :class:`FixedCodePointStringColumn`
    ``O`` / ``T`` (object)  :class:`VariableByteStringColumn`
    ======================  ================================
    """
    if array.ndim != 1:
        raise ValueError(f"Expected a 1-dimensional array. Got {array.ndim} dimensions.")
    kind = array.dtype.kind
    if kind == "b":
        return BooleanColumn.from_bytes(bytearray(array.astype(np.uint8).tobytes()))
    if kind == "S":
        return FixedByteStringColumn.from_bytes(
            bytearray(array.tobytes()), max(array.dtype.itemsize, 1)
        )
    if kind == "U":
        chars = max(array.dtype.itemsize // CODE_POINT_DTYPE.itemsize, 1)
        data = np.ascontiguousarray(array, dtype=f"<U{chars}")
        return FixedCodePointStringColumn.from_bytes(bytearray(data.tobytes()), chars)
    if kind in ("O", "T"):
        return VariableByteStringColumn.from_values(array.tolist())
    raise TypeError(f"Cannot store an array of dtype {array.dtype} in a column.")
