from __future__ import annotations

import importlib
import logging
import os
from pathlib import Path
from typing import Any

from desensitize.constants import CONFIG_CUSTOM_SECTION, CONFIG_DEFAULTS_SECTION, CONFIG_ENV_VAR
from desensitize.engine import default_registry
from desensitize.errors import RegistryConfigError
from desensitize.registry import RedactionRegistry

logger = logging.getLogger(__name__)

BUILTIN_TYPE_NAMES: dict[str, type] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "bytes": bytes,
    "list": list,
    "dict": dict,
}


def _load_yaml(path: Path) -> dict[str, Any]:
    import yaml

    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RegistryConfigError(f"cannot read config: {exc}", source=str(path)) from exc
    except yaml.YAMLError as exc:
        raise RegistryConfigError(f"invalid YAML: {exc}", source=str(path)) from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise RegistryConfigError("config must be a mapping", source=str(path))
    return loaded


def resolve_type_name(name: str) -> Any:
    """Map a config type name to a type: a builtin name or ``package.module.Class``."""
    if name in BUILTIN_TYPE_NAMES:
        return BUILTIN_TYPE_NAMES[name]
    module_name, _, attr = name.rpartition(".")
    if not module_name:
        raise RegistryConfigError(f"unknown type name: {name!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise RegistryConfigError(f"cannot import module for type {name!r}: {exc}") from exc
    try:
        return getattr(module, attr)
    except AttributeError as exc:
        raise RegistryConfigError(f"module {module_name!r} has no attribute {attr!r}") from exc


def _coerce(tp: Any, value: Any, type_name: str) -> Any:
    if tp is bytes and isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(tp, type) and tp in BUILTIN_TYPE_NAMES.values() and value is not None:
        if tp is float and isinstance(value, int) and not isinstance(value, bool):
            return float(value)
        if not isinstance(value, tp) or (tp is int and isinstance(value, bool)):
            raise RegistryConfigError(
                f"substitute for {type_name!r} must be {tp.__name__}, got {type(value).__name__}"
            )
    return value


def apply_registry_config(data: dict[str, Any], registry: RedactionRegistry) -> RedactionRegistry:
    defaults = data.get(CONFIG_DEFAULTS_SECTION) or {}
    custom = data.get(CONFIG_CUSTOM_SECTION) or {}
    if not isinstance(defaults, dict):
        raise RegistryConfigError(f"{CONFIG_DEFAULTS_SECTION!r} must be a mapping of type name to value")
    if not isinstance(custom, dict):
        raise RegistryConfigError(f"{CONFIG_CUSTOM_SECTION!r} must be a mapping of type name to key mapping")
    unknown = sorted(str(name) for name in data if name not in {CONFIG_DEFAULTS_SECTION, CONFIG_CUSTOM_SECTION})
    if unknown:
        raise RegistryConfigError(f"unknown config sections: {', '.join(unknown)}")

    for type_name in sorted(defaults, key=str):
        tp = resolve_type_name(str(type_name))
        registry.set_default(tp, _coerce(tp, defaults[type_name], str(type_name)))

    for type_name in sorted(custom, key=str):
        keyed = custom[type_name]
        if not isinstance(keyed, dict):
            raise RegistryConfigError(f"custom substitutes for {type_name!r} must be a mapping of key to value")
        tp = resolve_type_name(str(type_name))
        for marker_key in sorted(keyed, key=str):
            registry.set_custom(tp, str(marker_key), _coerce(tp, keyed[marker_key], str(type_name)))
    return registry


def load_registry_config(path: Path | str, registry: RedactionRegistry | None = None) -> RedactionRegistry:
    """Populate ``registry`` (a new one when omitted) from a YAML config file."""
    config_path = Path(path)
    target = registry if registry is not None else RedactionRegistry()
    try:
        apply_registry_config(_load_yaml(config_path), target)
    except RegistryConfigError as exc:
        if exc.source is None:
            exc.source = str(config_path)
        raise
    logger.debug("loaded redaction config from %s", config_path)
    return target


def configure_from_env() -> RedactionRegistry | None:
    """Load ``$DESENSITIZE_CONFIG`` into the default registry if it is set."""
    raw = os.getenv(CONFIG_ENV_VAR)
    if not raw:
        return None
    return load_registry_config(Path(raw), default_registry())


__all__ = [
    "BUILTIN_TYPE_NAMES",
    "apply_registry_config",
    "configure_from_env",
    "load_registry_config",
    "resolve_type_name",
]
