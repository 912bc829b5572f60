from __future__ import annotations

import copy
import logging
import threading
from collections.abc import Iterable
from typing import Any, TypeVar

from desensitize.clone import clone
from desensitize.fields import UNKNOWN_TYPE, FieldSpec, field_specs, is_struct
from desensitize.ref import Ref
from desensitize.registry import RedactionRegistry, type_label

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


class Redactor:
    """Produces redacted copies of values using a ``RedactionRegistry``.

    The input is deep-copied first, then every struct, ``Ref``, tuple, list,
    dict and set reachable from it is rebuilt. Sensitive dataclass fields get
    their substitute from the registry; everything else keeps its value.
    """

    def __init__(self, registry: RedactionRegistry | None = None) -> None:
        self.registry = registry if registry is not None else RedactionRegistry()

    def redact(self, value: T) -> T:
        return self.redact_value(clone(value))

    def redact_value(self, value: Any) -> Any:
        if value is None:
            return None
        if is_struct(value):
            return self._redact_struct(value)
        if isinstance(value, Ref):
            return Ref(self.redact_value(value.value))
        if isinstance(value, tuple):
            return self._redact_tuple(value)
        if isinstance(value, list):
            return self._redact_list(value)
        if isinstance(value, dict):
            return self._redact_dict(value)
        if isinstance(value, (set, frozenset)):
            return self._redact_set(value)
        return value

    def _redact_struct(self, value: Any) -> Any:
        result = copy.copy(value)
        for spec in field_specs(type(value)):
            if not spec.settable:
                continue
            current = getattr(value, spec.name, _MISSING)
            if current is _MISSING:
                continue
            if spec.sensitive:
                replacement = self._substitute(spec, current)
            else:
                replacement = self.redact_value(current)
            object.__setattr__(result, spec.name, replacement)
        return result

    def _substitute(self, spec: FieldSpec, current: Any) -> Any:
        static_type = spec.type
        if static_type is UNKNOWN_TYPE and current is not None:
            static_type = type(current)
        if current is None:
            # Nil stays nil unless a substitute was registered explicitly.
            found, registered = self.registry.lookup(static_type, spec.key)
            return registered if found else None
        return self.registry.resolve(static_type, spec.key)

    def _redact_tuple(self, value: tuple[Any, ...]) -> tuple[Any, ...]:
        items = [self.redact_value(item) for item in value]
        cls = type(value)
        if cls is tuple:
            return tuple(items)
        if hasattr(cls, "_make"):
            return cls._make(items)
        return cls(items)

    def _redact_list(self, value: list[Any]) -> list[Any]:
        items = [self.redact_value(item) for item in value]
        if type(value) is list:
            return items
        result = copy.copy(value)
        result[:] = items
        return result

    def _redact_dict(self, value: dict[Any, Any]) -> dict[Any, Any]:
        # Keys may change, so entries go into a fresh mapping of the same kind.
        result = copy.copy(value)
        result.clear()
        for key, item in value.items():
            new_key = self.redact_value(key)
            new_item = self.redact_value(item)
            if new_key in result:
                logger.debug("redacted key collision in %s; last entry wins", type_label(type(value)))
                del result[new_key]
            result[new_key] = new_item
        return result

    def _redact_set(self, value: set[Any] | frozenset[Any]) -> set[Any] | frozenset[Any]:
        members = self._dedupe(self.redact_value(member) for member in value)
        if isinstance(value, frozenset):
            return type(value)(members)
        result = copy.copy(value)
        result.clear()
        result.update(members)
        return result

    @staticmethod
    def _dedupe(members: Iterable[Any]) -> list[Any]:
        ordered: dict[Any, Any] = {}
        for member in members:
            if member in ordered:
                logger.debug("redacted set members collided; last member wins")
                del ordered[member]
            ordered[member] = member
        return list(ordered)


_DEFAULT_REGISTRY = RedactionRegistry()
_DEFAULT_LOCK = threading.Lock()


def default_registry() -> RedactionRegistry:
    """The process-wide registry behind the module-level helpers."""
    with _DEFAULT_LOCK:
        return _DEFAULT_REGISTRY


def reset_default_registry() -> RedactionRegistry:
    """Swap in an empty process-wide registry and return it."""
    global _DEFAULT_REGISTRY
    with _DEFAULT_LOCK:
        _DEFAULT_REGISTRY = RedactionRegistry()
        return _DEFAULT_REGISTRY


def redact(value: T) -> T:
    return Redactor(default_registry()).redact(value)


def set_default_redact(tp: Any, value: Any) -> None:
    default_registry().set_default(tp, value)


def set_custom_redact(tp: Any, key: str, value: Any) -> None:
    default_registry().set_custom(tp, key, value)


__all__ = [
    "Redactor",
    "default_registry",
    "redact",
    "reset_default_registry",
    "set_custom_redact",
    "set_default_redact",
]
