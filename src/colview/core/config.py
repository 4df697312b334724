"""
The config module is responsible for managing the configuration of colview and is based on the
Donfig python library. For selecting a custom buffer implementation, first register the
implementation in the registry and then select it in the config.

Example:
    A buffer implementation in a class ``your.module.PinnedBuffer`` requires the value of
    ``buffer`` to be ``your.module.PinnedBuffer``. Donfig can be configured programmatically, by
    environment variables, or from YAML files in standard locations.

    ```python
    from your.module import PinnedBuffer
    from colview.registry import register_buffer
    from colview.core.config import config

    register_buffer(PinnedBuffer)
    config.set({"buffer": "your.module.PinnedBuffer"})
    ```

    Instead of setting the value programmatically with ``config.set``, you can also set the value
    with an environment variable. The environment variable ``COLVIEW_BUFFER`` can be set to
    ``your.module.PinnedBuffer``. The double underscore ``__`` is used to indicate nested access,
    e.g. ``COLVIEW_FIXED_BYTES__DECODE_ERRORS=replace``.

For more information, see the Donfig documentation at https://github.com/pytroll/donfig.
"""

from __future__ import annotations

from typing import Literal, cast

from donfig import Config as DConfig

DecodeErrors = Literal["strict", "replace", "ignore"]


class BadConfigError(ValueError):
    _msg = "bad Config: %r"


class Config(DConfig):  # type: ignore[misc]
    """The Config will collect configuration from config files and environment variables

    Example environment variables:
    Grabs environment variables of the form "COLVIEW_FOO__BAR_BAZ=123" and
    turns these into config variables of the form ``{"foo": {"bar-baz": 123}}``
    It transforms the key and value in the following way:

    -  Lower-cases the key text
    -  Treats ``__`` (double-underscore) as nested access
    -  Calls ``ast.literal_eval`` on the value

    """

    def reset(self) -> None:
        self.clear()
        self.refresh()


# The default configuration for colview
config = Config(
    "colview",
    defaults=[
        {
            "check_bounds": True,
            "buffer": "colview.core.buffer.cpu.Buffer",
            "fixed_bytes": {"decode_errors": "strict"},
        }
    ],
)


def parse_decode_errors(data: object) -> DecodeErrors:
    if data not in ("strict", "replace", "ignore"):
        raise BadConfigError(
            f"fixed_bytes.decode_errors must be 'strict', 'replace' or 'ignore'. Got {data!r} instead."
        )
    return cast(DecodeErrors, data)
