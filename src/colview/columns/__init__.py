from colview.columns.boolean import BooleanColumn
from colview.columns.conversion import column_from_numpy, fixed_to_vlen, vlen_to_fixed
from colview.columns.fixed_bytes import FixedByteStringColumn
from colview.columns.fixed_code_points import FixedCodePointStringColumn
from colview.columns.vlen_bytes import VariableByteStringColumn

__all__ = [
    "BooleanColumn",
    "FixedByteStringColumn",
    "FixedCodePointStringColumn",
    "VariableByteStringColumn",
    "column_from_numpy",
    "fixed_to_vlen",
    "vlen_to_fixed",
]
