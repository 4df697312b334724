from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
from numcodecs.vlen import VLenBytes

from colview.abc.column import Column
from colview.core.buffer import Buffer
from colview.core.common import (
    LENGTH_PREFIX_BYTES,
    decode_length,
    encode_length,
    parse_count,
    parse_range,
)
from colview.errors import (
    CorruptHeaderError,
    CorruptRecordError,
    IndexOutOfRangeError,
    RecordLengthMismatchError,
)
from colview.registry import get_buffer_class

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Self

    import numpy.typing as npt

    from colview.core.common import BufferLike

__all__ = ["HEADER_LENGTH", "VariableByteStringColumn", "build_index"]

_logger = logging.getLogger(__name__)

# the record count header
HEADER_LENGTH = LENGTH_PREFIX_BYTES

# can use a global because there are no parameters
_vlen_bytes_codec = VLenBytes()


def _as_payload(value: BufferLike | str) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, bytes | bytearray | memoryview):
        return bytes(value)
    # subarray and as_numpy_array hand out uint8 views, accept them back
    if isinstance(value, np.ndarray) and value.dtype == np.dtype("B"):
        return value.tobytes()
    raise TypeError(f"Expected a bytes-like or str value. Got {type(value).__name__} instead.")


def build_index(
    data: npt.NDArray[np.uint8],
) -> tuple[npt.NDArray[np.int64], npt.NDArray[np.int64]]:
    """
    Scan a variable-length record stream and return the payload offset and
    length of every record.

    Parameters
    ----------
    data
        The encoded stream: a little-endian int32 record count followed by
        that many ``(int32 length, payload)`` records.

    Returns
    -------
    offsets, lengths
        ``offsets[i]`` is the position of the first payload byte of record
        ``i`` and ``lengths[i]`` its size in bytes.

    Raises
    ------
    CorruptHeaderError
        If the stream is shorter than the header or declares a negative count.
    CorruptRecordError
        If a record runs past the end of the stream, declares a negative
        length, or bytes remain after the last record.
    """
    nbytes = data.size
    if nbytes < HEADER_LENGTH:
        raise CorruptHeaderError(nbytes, HEADER_LENGTH)
    count = decode_length(data, 0)
    if count < 0:
        raise CorruptHeaderError(f"corrupt buffer, header declares {count} records")
    # every record needs at least its length prefix
    if count > (nbytes - HEADER_LENGTH) // LENGTH_PREFIX_BYTES:
        raise CorruptRecordError(
            f"corrupt buffer, header declares {count} records but only "
            f"{nbytes - HEADER_LENGTH} bytes follow it"
        )

    offsets = np.empty(count, dtype=np.int64)
    lengths = np.empty(count, dtype=np.int64)
    ptr = HEADER_LENGTH
    for i in range(count):
        if ptr + LENGTH_PREFIX_BYTES > nbytes:
            raise CorruptRecordError(i, ptr, LENGTH_PREFIX_BYTES, nbytes - ptr)
        length = decode_length(data, ptr)
        ptr += LENGTH_PREFIX_BYTES
        if length < 0:
            raise CorruptRecordError(f"corrupt buffer, record {i} declares a length of {length}")
        if ptr + length > nbytes:
            raise CorruptRecordError(i, ptr, length, nbytes - ptr)
        offsets[i] = ptr
        lengths[i] = length
        ptr += length

    if ptr != nbytes:
        raise CorruptRecordError(
            f"corrupt buffer, {nbytes - ptr} unexpected bytes after the last of {count} records"
        )
    return offsets, lengths


class VariableByteStringColumn(Column[bytes]):
    """A column of opaque byte strings of any length.

    The buffer holds a little-endian int32 record count followed by one
    ``(int32 length, payload)`` record per element, back to back. This is the
    layout produced by the numcodecs ``VLenBytes`` codec.

    An offset/length index is derived from the buffer when the column is
    created, so ``get`` is a constant-time slice. Replacing a record with
    ``set`` rebuilds the buffer and shifts the offsets of every later record.

    Use one of the class methods to create a column: :meth:`from_bytes`,
    :meth:`from_values`, :meth:`empty` or :meth:`with_capacity`.

    Examples
    --------
    >>> col = VariableByteStringColumn.from_values([b"foo", b"hi"])
    >>> col.to_bytes().hex()
    '0200000003000000666f6f020000006869'
    >>> col.set(0, b"a")
    >>> list(col)
    [b'a', b'hi']
    """

    def __init__(
        self,
        buffer: Buffer,
        offsets: npt.NDArray[np.int64],
        lengths: npt.NDArray[np.int64],
    ) -> None:
        self._buffer = buffer
        self._offsets = offsets
        self._lengths = lengths

    @classmethod
    def from_bytes(cls, data: Buffer | BufferLike) -> Self:
        """Wrap an encoded record stream, indexing every record.

        Raises
        ------
        CorruptHeaderError, CorruptRecordError
            If ``data`` is not a complete record stream.
        """
        buffer = data if isinstance(data, Buffer) else get_buffer_class().from_bytes(data)
        offsets, lengths = build_index(buffer.as_numpy_array())
        _logger.debug("Indexed %d records in a %d byte buffer", offsets.size, len(buffer))
        return cls(buffer, offsets, lengths)

    @classmethod
    def from_values(cls, values: Iterable[BufferLike | str]) -> Self:
        """Encode a sequence of byte strings. ``str`` values are UTF-8 encoded."""
        payloads = [_as_payload(v) for v in values]
        items = np.empty(len(payloads), dtype=object)
        items[:] = payloads
        return cls.from_bytes(_vlen_bytes_codec.encode(items))

    @classmethod
    def empty(cls) -> Self:
        """A column with no records."""
        return cls.with_capacity(0)

    @classmethod
    def with_capacity(cls, length: int) -> Self:
        """A column of ``length`` zero-length records."""
        length = parse_count(length)
        buffer = get_buffer_class().create_zeros(HEADER_LENGTH + length * LENGTH_PREFIX_BYTES)
        buffer[:HEADER_LENGTH] = np.frombuffer(encode_length(length), dtype="B")
        offsets = HEADER_LENGTH + LENGTH_PREFIX_BYTES * np.arange(1, length + 1, dtype=np.int64)
        return cls(buffer, offsets, np.zeros(length, dtype=np.int64))

    @property
    def length(self) -> int:
        return self._offsets.size

    @property
    def offsets(self) -> npt.NDArray[np.int64]:
        """Position of the first payload byte of each record (a copy)."""
        return self._offsets.copy()

    @property
    def lengths(self) -> npt.NDArray[np.int64]:
        """Payload size of each record in bytes (a copy)."""
        return self._lengths.copy()

    def get(self, idx: int) -> bytes:
        i = self._check_index(idx)
        start = int(self._offsets[i])
        return self._buffer.as_numpy_array()[start : start + int(self._lengths[i])].tobytes()

    def set(self, idx: int, value: BufferLike | str | VariableByteStringColumn) -> None:
        """Replace record ``idx`` with ``value``.

        The buffer is rebuilt with the new record in place of the old one, and
        the offset of every later record moves by the change in length. The
        offset of record ``idx`` itself does not change.

        If ``value`` is another ``VariableByteStringColumn``, its records are
        copied element-wise: record ``i`` of ``value`` replaces record ``i`` of
        this column for every ``i < len(value)``, and ``idx`` is not used.
        """
        if isinstance(value, VariableByteStringColumn):
            self._copy_from(value)
            return

        i = self._check_index(idx)
        payload = _as_payload(value)
        start = int(self._offsets[i])
        old_length = int(self._lengths[i])
        delta = len(payload) - old_length

        record = type(self._buffer).from_bytes(encode_length(len(payload)) + payload)
        buffer = (
            self._buffer[: start - LENGTH_PREFIX_BYTES]
            + record
            + self._buffer[start + old_length :]
        )
        lengths = self._lengths.copy()
        lengths[i] = len(payload)
        offsets = self._offsets.copy()
        offsets[i + 1 :] += delta
        self._commit(buffer, offsets, lengths)

    def _copy_from(self, other: VariableByteStringColumn) -> None:
        if other.length > self.length:
            raise IndexOutOfRangeError(
                f"Cannot copy {other.length} records into a column of length {self.length}."
            )
        values = [other.get(i) for i in range(other.length)]
        values.extend(self.get(i) for i in range(other.length, self.length))
        rebuilt = type(self).from_values(values)
        self._commit(rebuilt._buffer, rebuilt._offsets, rebuilt._lengths)

    def _commit(
        self,
        buffer: Buffer,
        offsets: npt.NDArray[np.int64],
        lengths: npt.NDArray[np.int64],
    ) -> None:
        _logger.debug("Rebuilt record buffer: %d -> %d bytes", len(self._buffer), len(buffer))
        self._buffer = buffer
        self._offsets = offsets
        self._lengths = lengths

    def fill(self, value: BufferLike | str) -> None:
        """Overwrite the payload of every record with ``value``, in place.

        Record lengths are never changed, so ``value`` must be exactly as long
        as every existing record.

        Raises
        ------
        RecordLengthMismatchError
            If any record's length differs from ``len(value)``. Nothing is
            written.
        """
        payload = _as_payload(value)
        mismatched = np.flatnonzero(self._lengths != len(payload))
        if mismatched.size:
            first = int(mismatched[0])
            raise RecordLengthMismatchError(len(payload), first, int(self._lengths[first]))
        if not payload or not self.length:
            return
        positions = self._offsets[:, np.newaxis] + np.arange(len(payload))
        self._buffer.as_numpy_array()[positions] = np.frombuffer(payload, dtype="B")

    def subarray(self, begin: int, end: int) -> npt.NDArray[np.uint8]:
        """The raw bytes of records ``[begin, end)``.

        The view starts at the first payload byte of record ``begin`` and stops
        after the last payload byte of record ``end - 1``, so it includes the
        length prefixes of the records in between. It is read-only and valid
        until the column is next modified.
        """
        begin, end = parse_range(begin, end, self.length)
        data = self._buffer.as_numpy_array()
        if begin == end:
            view = data[:0]
        else:
            stop = int(self._offsets[end - 1] + self._lengths[end - 1])
            view = data[int(self._offsets[begin]) : stop]
        view.flags.writeable = False
        return view

    def __repr__(self) -> str:
        return f"<{type(self).__name__} length={self.length} nbytes={self.nbytes}>"
