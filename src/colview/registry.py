"""
The registry module keeps track of the available buffer implementations.
Which one new columns allocate is selected by the ``buffer`` key of the config.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Generic, TypeVar

from colview.core.config import BadConfigError, config

if TYPE_CHECKING:
    from colview.core.buffer import Buffer

__all__ = [
    "Registry",
    "get_buffer_class",
    "register_buffer",
]

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class Registry(dict[str, type[T]], Generic[T]):
    def register(self, cls: type[T], qualname: str | None = None) -> None:
        if qualname is None:
            qualname = fully_qualified_name(cls)
        self[qualname] = cls


__buffer_registry: Registry[Buffer] = Registry()


def fully_qualified_name(cls: type) -> str:
    module = cls.__module__
    return module + "." + cls.__qualname__


def register_buffer(cls: type[Buffer], qualname: str | None = None) -> None:
    __buffer_registry.register(cls, qualname)


def get_buffer_class(reload_config: bool = False) -> type[Buffer]:
    if reload_config:
        config.refresh()

    path = config.get("buffer")
    buffer_class = __buffer_registry.get(path)
    if buffer_class:
        _logger.debug("Resolved buffer class %s", path)
        return buffer_class
    raise BadConfigError(
        f"Buffer class '{path}' not found in registered buffers: {list(__buffer_registry)}."
    )
