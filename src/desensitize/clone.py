from __future__ import annotations

import copy
import logging
from typing import TypeVar

from desensitize.errors import NotCopyableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def clone(value: T) -> T:
    """Return a deep copy of ``value`` that shares no mutable storage with it.

    ``None`` stays ``None``. Functions, classes and modules are atomic and come
    back as the same object. Values holding locks, generators, sockets or other
    process resources raise ``NotCopyableError`` instead of being partially
    copied. Errors raised by custom copy hooks are wrapped the same way.
    """
    try:
        return copy.deepcopy(value)
    except Exception as exc:
        type_name = type(value).__qualname__
        logger.debug("deep copy of %s failed: %s", type_name, exc)
        raise NotCopyableError(type_name=type_name, reason=f"{type(exc).__name__}: {exc}") from exc


__all__ = ["clone"]
