from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import pytest

from colview.abc.column import Column, ColumnIterator
from colview.core.buffer import Buffer
from colview.core.config import config
from colview.errors import IndexOutOfRangeError
from colview.testing.utils import assert_bytes_equal

if TYPE_CHECKING:
    from colview.core.common import BytesLike

__all__ = ["ColumnTests"]


C = TypeVar("C", bound=Column[Any])
T = TypeVar("T")


class ColumnTests(Generic[C, T]):
    """
    Tests of the behaviour every column type shares. Subclass it once per
    column type and provide the ``values`` fixture plus the two constructors.
    """

    column_cls: type[C]

    @abstractmethod
    def make_column(self, values: list[T]) -> C:
        """Create a column holding ``values``, in order."""
        ...

    @abstractmethod
    def rewrap(self, data: BytesLike, like: C) -> C:
        """Create a column of the same kind as ``like`` from raw bytes."""
        ...

    @abstractmethod
    @pytest.fixture
    def values(self) -> list[T]:
        """At least three values, in an order that differs from its reverse."""
        ...

    @pytest.fixture
    def column(self, values: list[T]) -> C:
        return self.make_column(values)

    def test_column_type(self, column: C) -> None:
        assert isinstance(column, Column)
        assert isinstance(column, self.column_cls)
        assert isinstance(column.buffer, Buffer)

    def test_length(self, column: C, values: list[T]) -> None:
        assert column.length == len(values)
        assert len(column) == len(values)

    def test_get(self, column: C, values: list[T]) -> None:
        for i, value in enumerate(values):
            assert column.get(i) == value
            assert column[i] == value

    def test_set(self, column: C, values: list[T]) -> None:
        column.set(0, values[1])
        column[1] = values[2]
        assert column.get(0) == values[1]
        assert column.get(1) == values[2]
        assert list(column)[2:] == values[2:]

    def test_fill(self, column: C, values: list[T]) -> None:
        column.fill(values[0])
        assert list(column) == [values[0]] * len(values)

    def test_iter(self, column: C, values: list[T]) -> None:
        assert list(column) == values
        # every call starts a fresh cursor
        assert list(column) == values

    def test_iterator_cursor(self, column: C, values: list[T]) -> None:
        cursor = iter(column)
        assert isinstance(cursor, ColumnIterator)
        seen = []
        while cursor.has_next():
            seen.append(cursor.next())
        assert seen == values
        assert cursor.position == len(values)
        with pytest.raises(StopIteration):
            cursor.next()

    def test_independent_iterators(self, column: C, values: list[T]) -> None:
        first = iter(column)
        next(first)
        second = iter(column)
        assert next(second) == values[0]
        assert next(first) == values[1]

    @pytest.mark.parametrize("offset", [0, 1, 10])
    def test_get_out_of_range(self, column: C, offset: int) -> None:
        with pytest.raises(IndexOutOfRangeError):
            column.get(column.length + offset)
        # also an IndexError, so sequence protocol consumers see the usual exception
        with pytest.raises(IndexError):
            column[column.length + offset]

    def test_negative_index(self, column: C, values: list[T]) -> None:
        with pytest.raises(IndexOutOfRangeError):
            column.get(-1)
        with pytest.raises(IndexOutOfRangeError):
            column.set(-1, values[0])

    def test_set_out_of_range_leaves_column_unchanged(self, column: C, values: list[T]) -> None:
        before = column.to_bytes()
        with pytest.raises(IndexOutOfRangeError):
            column.set(column.length, values[0])
        assert column.to_bytes() == before

    def test_non_integer_index(self, column: C) -> None:
        with pytest.raises(TypeError):
            column.get("0")  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            column.get(True)

    def test_bounds_check_can_be_disabled(self, column: C, values: list[T]) -> None:
        with config.set({"check_bounds": False}):
            # in-range access is unaffected
            assert column.get(0) == values[0]

    def test_rewrap(self, column: C) -> None:
        other = self.rewrap(column.to_bytes(), column)
        assert_bytes_equal(other.buffer, column.buffer)
        assert other == column
        assert list(other) == list(column)

    def test_eq(self, column: C, values: list[T]) -> None:
        assert column == column
        assert column == self.make_column(values)
        assert column != self.make_column(values[::-1])
        assert column != object()

    def test_repr(self, column: C) -> None:
        assert repr(column).startswith(f"<{self.column_cls.__name__} length={column.length}")
