from __future__ import annotations

import collections.abc as cabc
import dataclasses
import types
import typing
from typing import Any, Literal, Union, get_args, get_origin

from desensitize.fields import UNKNOWN_TYPE, field_specs
from desensitize.ref import Ref

_SCALAR_ZEROS: dict[type, Any] = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    str: "",
    bytes: b"",
}

_CONTAINER_FACTORIES: dict[Any, Any] = {
    list: list,
    dict: dict,
    set: set,
    frozenset: frozenset,
    bytearray: bytearray,
    cabc.Sequence: list,
    cabc.MutableSequence: list,
    cabc.Mapping: dict,
    cabc.MutableMapping: dict,
    cabc.Set: frozenset,
    cabc.MutableSet: set,
}


def _is_optional(tp: Any) -> bool:
    origin = get_origin(tp)
    if origin is Union or origin is types.UnionType:
        return type(None) in get_args(tp)
    return False


def _zero_struct(cls: type) -> Any:
    instance = object.__new__(cls)
    for spec in field_specs(cls):
        object.__setattr__(instance, spec.name, zero_value(spec.type))
    return instance


def _zero_tuple(tp: Any) -> tuple[Any, ...]:
    args = get_args(tp)
    if not args or (len(args) == 2 and args[1] is Ellipsis) or args == ((),):
        return ()
    return tuple(zero_value(arg) for arg in args)


def zero_value(tp: Any) -> Any:
    """Return the zero value of static type ``tp``.

    Pointer-like types (``Optional[...]``, ``Ref``) and types with no obvious
    empty instance yield ``None``.
    """
    if tp is UNKNOWN_TYPE or tp is Any or tp is None or tp is type(None):
        return None
    if _is_optional(tp):
        return None
    origin = get_origin(tp)
    if origin is Literal:
        return None
    if tp is Ref or origin is Ref:
        return None
    if tp in _SCALAR_ZEROS:
        return _SCALAR_ZEROS[tp]
    if tp is tuple or origin is tuple:
        return _zero_tuple(tp)
    container = origin if origin is not None else tp
    factory = _CONTAINER_FACTORIES.get(container)
    if factory is not None:
        return factory()
    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return _zero_struct(tp)
    if isinstance(tp, type) and issubclass(tp, tuple) and hasattr(tp, "_fields"):
        try:
            hints = typing.get_type_hints(tp)
        except (NameError, TypeError):
            hints = {}
        return tp._make(zero_value(hints.get(name, UNKNOWN_TYPE)) for name in tp._fields)
    if isinstance(tp, type):
        if issubclass(tp, tuple(_SCALAR_ZEROS)):
            base = next(base for base in tp.__mro__ if base in _SCALAR_ZEROS)
            try:
                return tp(_SCALAR_ZEROS[base])
            except (TypeError, ValueError):
                return None
        try:
            return tp()
        except (TypeError, ValueError):
            return None
    return None


__all__ = ["zero_value"]
