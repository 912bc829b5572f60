from __future__ import annotations

import dataclasses
import inspect
import logging
import re
import sys
import threading
import typing
from dataclasses import dataclass
from typing import Annotated, Any, get_args, get_origin

from desensitize.annotations import marker_from_extras, marker_from_metadata
from desensitize.errors import UnresolvedMarkerError

logger = logging.getLogger(__name__)

# Sentinel for a field whose static type could not be resolved.
UNKNOWN_TYPE: Any = object()

_MARKER_NAME = re.compile(r"\bSensitive\b")


@dataclass(slots=True, frozen=True)
class FieldSpec:
    name: str
    type: Any
    sensitive: bool
    key: str | None
    settable: bool


_CACHE: dict[type, tuple[FieldSpec, ...]] = {}
_CACHE_LOCK = threading.Lock()


def _declaring_class(cls: type, name: str) -> type:
    for base in cls.__mro__:
        if name in inspect.get_annotations(base):
            return base
    return cls


def _evaluate_field(cls: type, f: dataclasses.Field[Any]) -> Any:
    if not isinstance(f.type, str):
        return f.type
    owner = _declaring_class(cls, f.name)
    module = sys.modules.get(owner.__module__)
    globalns = vars(module) if module is not None else {}
    localns = dict(vars(owner))
    localns.setdefault(owner.__name__, owner)
    try:
        return eval(f.type, globalns, localns)
    except (NameError, AttributeError, TypeError, SyntaxError) as exc:
        if _MARKER_NAME.search(f.type):
            raise UnresolvedMarkerError(
                type_name=cls.__qualname__,
                field_name=f.name,
                annotation=f.type,
                reason=str(exc),
            ) from exc
        logger.debug("unresolved annotation %s.%s: %s", cls.__qualname__, f.name, exc)
        return UNKNOWN_TYPE


def _resolve_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, AttributeError, TypeError, SyntaxError) as exc:
        # Resolve field by field; one unresolvable annotation keeps its neighbours.
        logger.debug("falling back to per-field annotations on %s: %s", cls.__qualname__, exc)
        return {f.name: _evaluate_field(cls, f) for f in dataclasses.fields(cls)}


def _split_annotated(tp: Any) -> tuple[Any, tuple[Any, ...]]:
    if get_origin(tp) is Annotated:
        base, *extras = get_args(tp)
        return base, tuple(extras)
    return tp, ()


def _build(cls: type) -> tuple[FieldSpec, ...]:
    hints = _resolve_hints(cls)
    specs: list[FieldSpec] = []
    for f in dataclasses.fields(cls):
        static_type, extras = _split_annotated(hints.get(f.name, UNKNOWN_TYPE))
        marker = marker_from_metadata(f.metadata) or marker_from_extras(extras)
        specs.append(
            FieldSpec(
                name=f.name,
                type=static_type,
                sensitive=marker is not None,
                key=marker.key if marker is not None else None,
                settable=not f.name.startswith("_"),
            )
        )
    return tuple(specs)


def field_specs(cls: type) -> tuple[FieldSpec, ...]:
    """Return the cached field descriptor table for dataclass ``cls``."""
    cached = _CACHE.get(cls)
    if cached is not None:
        return cached
    with _CACHE_LOCK:
        cached = _CACHE.get(cls)
        if cached is None:
            cached = _build(cls)
            _CACHE[cls] = cached
    return cached


def is_struct(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


__all__ = ["UNKNOWN_TYPE", "FieldSpec", "field_specs", "is_struct"]
