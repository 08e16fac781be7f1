# installer/config_loader.py
# -*- coding: utf-8 -*-
"""
Configuration loader for the installer.

Handles loading settings from Pydantic model defaults, environment variables
and an optional YAML file, applying a specific order of precedence:
1. Pydantic Model Defaults
2. Environment Variables (DEVOPS_* via Pydantic's BaseSettings)
3. YAML Configuration File
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from installer.config import CONFIG_FILE_DEFAULT, CONFIG_FILE_ENV_VAR
from installer.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def _deep_update(
    source: Dict[str, Any], overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Recursively updates a dictionary `source` with values from another dictionary
    `overrides`. Nested dictionaries are merged key by key; `None` values in
    `overrides` never replace an existing value.

    Parameters:
        source: Dict[str, Any]
            The dictionary to be updated. This dictionary gets modified in place.
        overrides: Dict[str, Any]
            The dictionary containing values to update or add to the `source`.

    Returns:
        Dict[str, Any]:
            The updated dictionary after applying all `overrides` to the input `source`.
    """
    for key, value in overrides.items():
        if (
            isinstance(value, dict)
            and key in source
            and isinstance(source[key], dict)
        ):
            source[key] = _deep_update(source[key], value)
        elif value is not None:
            source[key] = value
    return source


def resolve_config_path(
    config_file_path: Optional[Union[str, Path]] = None,
) -> Path:
    """Return the YAML path to read: explicit argument, then env var, then ./config.yaml."""
    if config_file_path:
        return Path(config_file_path)
    env_path = os.environ.get(CONFIG_FILE_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path.cwd() / CONFIG_FILE_DEFAULT


def _read_yaml_overrides(
    yaml_config_path: Path, logger_to_use: logging.Logger
) -> Dict[str, Any]:
    if not (yaml_config_path.exists() and yaml_config_path.is_file()):
        logger_to_use.debug(
            f"Configuration file '{yaml_config_path}' not found. Using defaults and environment variables."
        )
        return {}

    try:
        with open(yaml_config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger_to_use.warning(
            f"Could not parse YAML config file '{yaml_config_path}': {e}. Using defaults and environment variables."
        )
        return {}
    except IOError as e:
        logger_to_use.warning(
            f"Could not read config file '{yaml_config_path}': {e}. Using defaults and environment variables."
        )
        return {}

    if yaml_data is None:
        return {}
    if not isinstance(yaml_data, dict):
        logger_to_use.warning(
            f"Config file '{yaml_config_path}' does not contain a valid YAML dictionary. Ignoring."
        )
        return {}

    logger_to_use.debug(f"Loaded configuration from {yaml_config_path}")
    return yaml_data


def load_app_settings(
    config_file_path: Optional[Union[str, Path]] = None,
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Loads application settings with the following precedence:
    1. Pydantic Model Defaults.
    2. Environment Variables prefixed with DEVOPS_ (loaded by BaseSettings).
    3. Values from the YAML configuration file (highest precedence).

    The installer takes no command-line flags, so the YAML file is the only
    way to override settings besides the environment.

    Args:
        config_file_path: Path to the YAML configuration file. Defaults to the
            path in DEVOPS_INSTALLER_CONFIG, then ./config.yaml.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        An instance of AppSettings with the fully resolved configuration.

    Raises:
        SystemExit: If the merged configuration fails validation.
    """
    logger_to_use = current_logger if current_logger else module_logger

    try:
        settings_after_env_and_defaults = AppSettings()
    except ValidationError as e:
        logger_to_use.error(f"Configuration validation failed: {e}")
        raise SystemExit(f"Configuration error: {e}") from e

    yaml_overrides = _read_yaml_overrides(
        resolve_config_path(config_file_path), logger_to_use
    )
    if not yaml_overrides:
        return settings_after_env_and_defaults

    current_values_dict = settings_after_env_and_defaults.model_dump(
        exclude_defaults=False
    )
    current_values_dict = _deep_update(current_values_dict, yaml_overrides)

    try:
        final_settings = AppSettings(**current_values_dict)
    except ValidationError as e:
        logger_to_use.error(f"Configuration validation failed: {e}")
        raise SystemExit(f"Configuration error: {e}") from e

    return final_settings
