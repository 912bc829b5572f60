"""desensitize: redacted deep copies of arbitrary values.

Sensitive dataclass fields are replaced by a substitute (the field type's zero
value unless one is registered), at any depth, without touching the caller's
data.
"""
from __future__ import annotations

from desensitize.annotations import Sensitive, sensitive
from desensitize.clone import clone
from desensitize.config import configure_from_env, load_registry_config
from desensitize.engine import (
    Redactor,
    default_registry,
    redact,
    reset_default_registry,
    set_custom_redact,
    set_default_redact,
)
from desensitize.errors import NotCopyableError, RedactionError, RegistryConfigError, UnresolvedMarkerError
from desensitize.ref import Ref, deref
from desensitize.registry import RedactionRegistry
from desensitize.zero import zero_value

__version__ = "0.1.0"

__all__ = [
    "NotCopyableError",
    "RedactionError",
    "RedactionRegistry",
    "Redactor",
    "Ref",
    "RegistryConfigError",
    "Sensitive",
    "UnresolvedMarkerError",
    "__version__",
    "clone",
    "configure_from_env",
    "default_registry",
    "deref",
    "load_registry_config",
    "redact",
    "reset_default_registry",
    "sensitive",
    "set_custom_redact",
    "set_default_redact",
    "zero_value",
]
