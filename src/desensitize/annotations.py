"""Sensitive-field markers.

Two spellings are accepted on dataclass fields::

    @dataclass
    class Login:
        user: str
        password: str = sensitive()
        token: Annotated[str, Sensitive("token")] = ""

Both carry a key (``"-"`` unless given) that selects a registered override.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

from desensitize.constants import DEFAULT_SENSITIVE_KEY, SENSITIVE_METADATA_KEY


@dataclass(slots=True, frozen=True)
class Sensitive:
    key: str = DEFAULT_SENSITIVE_KEY


def sensitive(key: str = DEFAULT_SENSITIVE_KEY, **field_kwargs: Any) -> Any:
    """Return a ``dataclasses.field`` marked sensitive under ``key``.

    Extra keyword arguments (``default``, ``default_factory``, ``repr``...) are
    passed through to ``dataclasses.field``.
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[SENSITIVE_METADATA_KEY] = Sensitive(key)
    return dataclasses.field(metadata=metadata, **field_kwargs)


def marker_from_metadata(metadata: Any) -> Sensitive | None:
    raw = metadata.get(SENSITIVE_METADATA_KEY) if metadata else None
    if raw is None:
        return None
    if isinstance(raw, Sensitive):
        return raw
    if isinstance(raw, str):
        return Sensitive(raw)
    if raw is True:
        return Sensitive()
    return None


def marker_from_extras(extras: tuple[Any, ...]) -> Sensitive | None:
    for extra in extras:
        if isinstance(extra, Sensitive):
            return extra
        if extra is Sensitive:
            return Sensitive()
    return None


__all__ = ["Sensitive", "marker_from_extras", "marker_from_metadata", "sensitive"]
