from __future__ import annotations

import copy
import logging
import threading
import types
from dataclasses import dataclass, field
from typing import Annotated, Any, Union, get_args, get_origin

from desensitize.zero import zero_value

logger = logging.getLogger(__name__)


def type_key(tp: Any) -> Any:
    """Canonical registry key for a static type.

    ``Annotated`` metadata is dropped and ``X | None`` is folded into
    ``Optional[X]`` so both spellings address the same entry.
    """
    origin = get_origin(tp)
    if origin is Annotated:
        return type_key(get_args(tp)[0])
    if origin is Union or origin is types.UnionType:
        return Union[tuple(type_key(arg) for arg in get_args(tp))]
    return tp


def type_label(tp: Any) -> str:
    if isinstance(tp, type) and get_origin(tp) is None:
        return tp.__qualname__ if tp.__module__ == "builtins" else f"{tp.__module__}.{tp.__qualname__}"
    return repr(tp)


@dataclass(slots=True)
class _Entry:
    has_default: bool = False
    default: Any = None
    custom: dict[str, Any] = field(default_factory=dict)


class RedactionRegistry:
    """Substitute values keyed by static type and, optionally, marker key.

    Construct once, populate with ``set_default``/``set_custom`` and share it
    between redactions. Reads and writes are serialized by an internal lock,
    so registration may interleave with in-flight redactions.
    """

    def __init__(self) -> None:
        self._entries: dict[Any, _Entry] = {}
        self._lock = threading.RLock()

    def set_default(self, tp: Any, value: Any) -> None:
        key = type_key(tp)
        stored = copy.deepcopy(value)
        with self._lock:
            entry = self._entries.setdefault(key, _Entry())
            entry.has_default = True
            entry.default = stored
        logger.debug("registered default substitute for %s", type_label(key))

    def set_custom(self, tp: Any, marker_key: str, value: Any) -> None:
        key = type_key(tp)
        stored = copy.deepcopy(value)
        with self._lock:
            entry = self._entries.setdefault(key, _Entry())
            entry.custom[marker_key] = stored
        logger.debug("registered %r substitute for %s", marker_key, type_label(key))

    def lookup(self, tp: Any, marker_key: str | None = None) -> tuple[bool, Any]:
        """Return ``(found, value)`` considering registered entries only."""
        with self._lock:
            entry = self._entries.get(type_key(tp))
            if entry is None:
                return False, None
            if marker_key is not None and marker_key in entry.custom:
                return True, copy.deepcopy(entry.custom[marker_key])
            if entry.has_default:
                return True, copy.deepcopy(entry.default)
        return False, None

    def resolve(self, tp: Any, marker_key: str | None = None) -> Any:
        found, value = self.lookup(tp, marker_key)
        if found:
            return value
        return zero_value(type_key(tp))

    def entries(self) -> dict[str, dict[str, Any]]:
        """Snapshot of registered substitutes, labelled by type name."""
        with self._lock:
            snapshot: dict[str, dict[str, Any]] = {}
            for key, entry in self._entries.items():
                item: dict[str, Any] = {"custom": copy.deepcopy(entry.custom)}
                if entry.has_default:
                    item["default"] = copy.deepcopy(entry.default)
                snapshot[type_label(key)] = item
        return snapshot

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["RedactionRegistry", "type_key", "type_label"]
