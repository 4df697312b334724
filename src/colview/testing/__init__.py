import importlib.util
import warnings

if importlib.util.find_spec("pytest") is not None:
    from colview.testing.column import ColumnTests
else:
    warnings.warn("pytest not installed, skipping test suite", stacklevel=2)

from colview.testing.utils import assert_bytes_equal

__all__ = ["ColumnTests", "assert_bytes_equal"]
