"""Explicit pointer cells.

Python references are implicit, so an extra level of indirection that must be
preserved through redaction is spelled as ``Ref[T]``. ``None`` plays the role
of the nil pointer wherever a ``Ref`` is expected.
"""
from __future__ import annotations

from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Ref(Generic[T]):
    __slots__ = ("value",)

    def __init__(self, value: T) -> None:
        self.value = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ref):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        # Equality and hashing follow the target, like a deep comparison.
        return hash(self.value)

    def __repr__(self) -> str:
        return f"Ref({self.value!r})"

    def __getstate__(self) -> dict[str, Any]:
        return {"value": self.value}

    def __setstate__(self, state: dict[str, Any]) -> None:
        self.value = state["value"]


def deref(ref: Ref[T] | None, levels: int = 1) -> Any:
    """Follow ``levels`` pointer cells, stopping early at a nil pointer."""
    current: Any = ref
    for _ in range(levels):
        if current is None:
            return None
        current = current.value
    return current


__all__ = ["Ref", "deref"]
