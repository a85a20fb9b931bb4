"""Configuration loading for secretenv.

- `load_config`: Load and validate the YAML configuration file
- `SecretEnvConfigModel`: Root model with resolver settings and environments
- `json_schema`: JSON schema of the configuration file for editors
"""

from .loader import CONFIG_ENV_VAR, find_config_file, load_config, parse_config
from .models import ResolverSettingsModel, SecretEnvConfigModel, json_schema

__all__ = [
    "CONFIG_ENV_VAR",
    "find_config_file",
    "load_config",
    "parse_config",
    "ResolverSettingsModel",
    "SecretEnvConfigModel",
    "json_schema",
]
