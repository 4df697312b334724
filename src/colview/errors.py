__all__ = [
    "BaseColumnError",
    "CodePointRangeError",
    "CorruptBufferError",
    "CorruptHeaderError",
    "CorruptRecordError",
    "EncodingOverflowError",
    "IndexOutOfRangeError",
    "RecordLengthMismatchError",
    "StrideMismatchError",
]


class BaseColumnError(ValueError):
    """
    Base error which all colview errors are sub-classed from.
    """

    _msg: str = "{}"

    def __init__(self, *args: object) -> None:
        """
        If a single argument is passed, treat it as a pre-formatted message.

        If multiple arguments are passed, they are used as arguments for a template string class
        variable.
        """
        if len(args) == 1:
            super().__init__(args[0])
        else:
            super().__init__(self._msg.format(*args))


class CorruptBufferError(BaseColumnError):
    """
    Raised when a variable-length buffer does not follow the record wire format.
    """


class CorruptHeaderError(CorruptBufferError):
    """
    Raised when a variable-length buffer is too short to hold its record count header.
    """

    _msg = "corrupt buffer, missing or truncated header: got {} bytes, expected at least {}"


class CorruptRecordError(CorruptBufferError):
    """
    Raised when a record's length prefix or payload runs past the end of the buffer.
    """

    _msg = "corrupt buffer, record {} at byte {} declares {} bytes but only {} remain"


class EncodingOverflowError(BaseColumnError):
    """Raised when an encoded value does not fit in its fixed-width slot."""

    _msg = "Encoded value needs {} bytes, exceeding the slot width of {} bytes."


class CodePointRangeError(BaseColumnError):
    """Raised when a code point cannot be stored in a signed 32-bit cell."""

    _msg = "Code point {} does not fit in a {}-bit cell."


class IndexOutOfRangeError(BaseColumnError, IndexError):
    """Raised when a logical index falls outside ``[0, length)``."""

    _msg = "Index {!r} is out of range for a column of length {}."


class StrideMismatchError(BaseColumnError):
    """
    Raised when a buffer cannot be divided into whole slots of the requested width.
    """

    _msg = "Buffer of {} bytes is not a whole number of {}-byte slots."


class RecordLengthMismatchError(BaseColumnError):
    """
    Raised when an in-place fill value would change the size of a variable-length record.
    """

    _msg = "Fill value has {} bytes but record {} holds {} bytes."
