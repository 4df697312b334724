from colview._version import version as __version__
from colview.abc.column import Column, ColumnIterator
from colview.columns import (
    BooleanColumn,
    FixedByteStringColumn,
    FixedCodePointStringColumn,
    VariableByteStringColumn,
    column_from_numpy,
    fixed_to_vlen,
    vlen_to_fixed,
)
from colview.core.buffer import Buffer
from colview.core.config import config


def print_debug_info() -> None:
    """
    Print version info for use in bug reports.
    """
    import platform
    from importlib.metadata import PackageNotFoundError, version

    def print_packages(packages: list[str]) -> None:
        not_installed = []
        for package in packages:
            try:
                print(f"{package}: {version(package)}")
            except PackageNotFoundError:
                not_installed.append(package)
        if not_installed:
            print("\n**Not Installed:**")
            for package in not_installed:
                print(package)

    required = [
        "numpy",
        "numcodecs",
        "donfig",
    ]
    optional = [
        "hypothesis",
        "pytest",
    ]

    print(f"platform: {platform.platform()}")
    print(f"python: {platform.python_version()}")
    print(f"colview: {__version__}\n")
    print("**Required dependencies:**")
    print_packages(required)
    print("\n**Optional dependencies:**")
    print_packages(optional)


__all__ = [
    "BooleanColumn",
    "Buffer",
    "Column",
    "ColumnIterator",
    "FixedByteStringColumn",
    "FixedCodePointStringColumn",
    "VariableByteStringColumn",
    "__version__",
    "column_from_numpy",
    "config",
    "fixed_to_vlen",
    "print_debug_info",
    "vlen_to_fixed",
]
