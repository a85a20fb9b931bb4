"""Configuration loader.

This module provides functions to load and validate the secretenv
configuration file.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from .models import SecretEnvConfigModel

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SECRETENV_CONFIG"


def find_config_file() -> Path | None:
    """Locate the configuration file.

    Looks for, in order:
        1. SECRETENV_CONFIG environment variable
        2. ~/.secretenv/config.yaml
        3. ./secretenv.yaml

    Returns:
        The first candidate path, or None if no file was found
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    candidates = [Path.home() / ".secretenv" / "config.yaml", Path.cwd() / "secretenv.yaml"]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


def load_config(config_path: Path | None = None) -> SecretEnvConfigModel:
    """Load configuration from a YAML file.

    Args:
        config_path: Optional path to the configuration file.
                    If not provided, uses ``find_config_file()``.

    Returns:
        SecretEnvConfigModel with resolver settings and environments

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the config is invalid
    """
    if config_path is None:
        config_path = find_config_file()
        if config_path is None:
            logger.info("No config file found, using empty configuration")
            return SecretEnvConfigModel()

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found at {config_path}")

    logger.debug(f"Loading config from: {config_path}")

    try:
        with open(config_path) as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML config file {config_path}: {e}") from e

    if not raw_config:
        logger.info("Empty config file, using empty configuration")
        return SecretEnvConfigModel()

    try:
        config = parse_config(raw_config)
    except ValueError as e:
        raise ValueError(f"Invalid config in {config_path}: {e}") from e

    logger.debug(f"Loaded {len(config.environments)} environment(s) from {config_path}")
    return config


def parse_config(raw_config: Any) -> SecretEnvConfigModel:
    """Validate an already parsed configuration document.

    Raises:
        ValueError: If the document does not match the schema
    """
    if not isinstance(raw_config, dict):
        raise ValueError(f"Config must be a mapping, got {type(raw_config).__name__}")
    return SecretEnvConfigModel.model_validate(raw_config)
