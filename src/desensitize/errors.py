from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

ERROR_CODE_NOT_COPYABLE = "NOT_COPYABLE"
ERROR_CODE_INVALID_CONFIG = "INVALID_CONFIG"
ERROR_CODE_UNRESOLVED_MARKER = "UNRESOLVED_MARKER"


class RedactionError(RuntimeError):
    pass


@dataclass(slots=True)
class NotCopyableError(RedactionError):
    type_name: str
    reason: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def code(self) -> str:
        return ERROR_CODE_NOT_COPYABLE

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": str(self),
            "type_name": self.type_name,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"NOT_COPYABLE: value of type {self.type_name} cannot be deep-copied ({self.reason})"


@dataclass(slots=True)
class RegistryConfigError(RedactionError):
    message: str
    source: str | None = None

    @property
    def code(self) -> str:
        return ERROR_CODE_INVALID_CONFIG

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.source is not None:
            payload["source"] = self.source
        return payload

    def __str__(self) -> str:
        if self.source is None:
            return f"INVALID_CONFIG: {self.message}"
        return f"INVALID_CONFIG: {self.source}: {self.message}"


@dataclass(slots=True)
class UnresolvedMarkerError(RedactionError):
    type_name: str
    field_name: str
    annotation: str
    reason: str

    @property
    def code(self) -> str:
        return ERROR_CODE_UNRESOLVED_MARKER

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": str(self),
            "type_name": self.type_name,
            "field_name": self.field_name,
            "annotation": self.annotation,
        }

    def __str__(self) -> str:
        return (
            f"UNRESOLVED_MARKER: {self.type_name}.{self.field_name} is marked sensitive but "
            f"its annotation {self.annotation!r} cannot be evaluated ({self.reason})"
        )


__all__ = [
    "ERROR_CODE_INVALID_CONFIG",
    "ERROR_CODE_NOT_COPYABLE",
    "ERROR_CODE_UNRESOLVED_MARKER",
    "NotCopyableError",
    "RedactionError",
    "RegistryConfigError",
    "UnresolvedMarkerError",
]
