from typing import Any

import numpy as np
import pytest

pytest.importorskip("hypothesis")

import hypothesis.strategies as st
from hypothesis import given
from numcodecs.vlen import VLenBytes

from colview import (
    BooleanColumn,
    FixedByteStringColumn,
    FixedCodePointStringColumn,
    VariableByteStringColumn,
)
from colview.abc.column import Column
from colview.errors import EncodingOverflowError
from colview.testing.strategies import (
    byte_records,
    chars,
    code_point_text,
    columns,
    fixed_byte_text,
    record_lists,
    vlen_columns,
    vlen_columns_and_index,
)


@given(data=st.data())
def test_fixed_byte_string_roundtrip(data: st.DataObject) -> None:
    width = data.draw(chars)
    length = data.draw(st.integers(min_value=1, max_value=8))
    column = FixedByteStringColumn.with_capacity(length, width)
    idx = data.draw(st.integers(min_value=0, max_value=length - 1))
    value = data.draw(fixed_byte_text(width))
    column.set(idx, value)
    assert column.get(idx) == value


@given(data=st.data())
def test_fixed_byte_string_overflow(data: st.DataObject) -> None:
    width = data.draw(chars)
    # every character takes at least one byte
    value = data.draw(st.text(st.characters(codec="utf-8"), min_size=width + 1))
    column = FixedByteStringColumn.with_capacity(1, width)
    with pytest.raises(EncodingOverflowError):
        column.set(0, value)
    assert column.to_bytes() == b"\x00" * width


@given(data=st.data())
def test_fixed_code_point_string_roundtrip(data: st.DataObject) -> None:
    width = data.draw(chars)
    length = data.draw(st.integers(min_value=1, max_value=8))
    column = FixedCodePointStringColumn.with_capacity(length, width)
    idx = data.draw(st.integers(min_value=0, max_value=length - 1))
    value = data.draw(code_point_text(width))
    column.set(idx, value)
    assert column.get(idx) == value
    assert column.as_numpy_array()[idx] == value


@given(values=st.lists(st.booleans(), max_size=32), raw=st.binary(max_size=32))
def test_boolean_sentinel(values: list[bool], raw: bytes) -> None:
    column = BooleanColumn.from_bytes(raw)
    assert list(column) == [b == 1 for b in raw]
    column = BooleanColumn.with_capacity(len(values))
    for i, value in enumerate(values):
        column.set(i, value)
    assert list(column) == values
    assert set(column.to_bytes()) <= {0, 1}


@given(values=record_lists)
def test_vlen_roundtrip(values: list[bytes]) -> None:
    column = VariableByteStringColumn.from_values(values)
    assert list(column) == values
    decoded = VariableByteStringColumn.from_bytes(column.to_bytes())
    assert list(decoded) == values
    assert list(VLenBytes().decode(column.to_bytes())) == values


@given(case=vlen_columns_and_index(), value=byte_records)
def test_vlen_set_preserves_other_records(
    case: tuple[VariableByteStringColumn, int], value: bytes
) -> None:
    column, idx = case
    before = list(column)
    column.set(idx, value)
    after = list(column)
    assert after[idx] == value
    assert after[:idx] == before[:idx]
    assert after[idx + 1 :] == before[idx + 1 :]
    # the mutated buffer is still a valid, identically indexed record stream
    reparsed = VariableByteStringColumn.from_bytes(column.to_bytes())
    np.testing.assert_array_equal(reparsed.offsets, column.offsets)
    np.testing.assert_array_equal(reparsed.lengths, column.lengths)


@given(column=vlen_columns(), values=st.lists(st.tuples(st.integers(0, 64), byte_records)))
def test_vlen_mutation_sequence(
    column: VariableByteStringColumn, values: list[tuple[int, bytes]]
) -> None:
    expected = list(column)
    for position, value in values:
        if not expected:
            break
        idx = position % len(expected)
        column.set(idx, value)
        expected[idx] = value
    assert list(column) == expected
    assert column.nbytes == 4 + sum(4 + len(v) for v in expected)


@given(column=columns())
def test_iteration_is_restartable(column: Column[Any]) -> None:
    first = list(column)
    assert len(first) == column.length
    assert list(column) == first
    assert [column.get(i) for i in range(column.length)] == first
