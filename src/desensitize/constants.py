from __future__ import annotations

# Field metadata key and default marker key, mirroring the `sensitive:"-"` tag form.
SENSITIVE_METADATA_KEY = "sensitive"
DEFAULT_SENSITIVE_KEY = "-"

# Environment variable naming a registry config file for the default registry.
CONFIG_ENV_VAR = "DESENSITIZE_CONFIG"

# Config file sections.
CONFIG_DEFAULTS_SECTION = "defaults"
CONFIG_CUSTOM_SECTION = "custom"

EXIT_SUCCESS = 0
EXIT_INVALID_CONFIG = 2
