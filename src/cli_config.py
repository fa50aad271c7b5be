"""Runtime configuration: YAML config file, environment and CLI overrides.

Precedence, highest first: CLI flags, FORGEPACK_* environment variables,
the YAML config file, then the defaults in constants.Constants.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import yaml

from constants import Constants
from errors import ConfigError

logger = logging.getLogger(__name__)

# YAML key -> Settings attribute
_CONFIG_KEYS = {
    "metadata_url": "metadata_url",
    "repository_url": "repository_url",
    "java": "java_bin",
    "installer_args": "installer_args",
    "output_dir": "output_dir",
    "work_dir": "work_dir",
    "summary_file": "summary_file",
    "library_dirs": "library_dirs",
    "manifest_candidates": "manifest_candidates",
    "request_timeout": "request_timeout",
}

_LIST_KEYS = ("installer_args", "library_dirs", "manifest_candidates")

_ENV_KEYS = {
    Constants.ENV_METADATA_URL: "metadata_url",
    Constants.ENV_REPOSITORY_URL: "repository_url",
    Constants.ENV_JAVA: "java_bin",
    Constants.ENV_OUTPUT_DIR: "output_dir",
    Constants.ENV_WORK_DIR: "work_dir",
}

# argparse dest -> Settings attribute
_ARG_KEYS = {
    "METADATA_URL": "metadata_url",
    "REPOSITORY_URL": "repository_url",
    "JAVA": "java_bin",
    "OUTPUT_DIR": "output_dir",
    "WORK_DIR": "work_dir",
    "SUMMARY_FILE": "summary_file",
}


@dataclass
class Settings:
    """Resolved runtime configuration for one invocation."""

    metadata_url: str = Constants.METADATA_URL
    repository_url: str = Constants.REPOSITORY_URL
    java_bin: str = Constants.JAVA_BIN
    installer_args: List[str] = field(default_factory=lambda: list(Constants.INSTALLER_ARGS))
    output_dir: str = Constants.OUTPUT_DIR
    work_dir: str = Constants.WORK_DIR
    summary_file: str = Constants.SUMMARY_FILE
    library_dirs: List[str] = field(default_factory=lambda: list(Constants.LIBRARY_DIRS))
    manifest_candidates: List[str] = field(default_factory=lambda: list(Constants.MANIFEST_CANDIDATES))
    request_timeout: float = Constants.REQUEST_TIMEOUT


def load_config_file(config_path: Optional[str]) -> Dict[str, Any]:
    """Load a YAML (or JSON, which YAML accepts) config file.

    Args:
        config_path: Path to the file; None or empty means no file.

    Returns:
        Mapping of raw config keys; empty when no file applies.

    Raises:
        ConfigError: The file exists but cannot be read or is not a mapping.
    """
    if not config_path:
        return {}
    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config {config_path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a mapping at the top level")
    return data


def _coerce(attr: str, value: Any) -> Any:
    if attr in _LIST_KEYS:
        if isinstance(value, str):
            return value.split()
        if isinstance(value, (list, tuple)):
            return [str(v) for v in value]
        raise ConfigError(f"'{attr}' must be a list of strings")
    if attr == "request_timeout":
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"'request_timeout' must be a number, got {value!r}") from e
    return str(value)


def apply_config(settings: Settings, data: Mapping[str, Any]) -> Settings:
    """Apply raw config-file keys onto settings; unknown keys are warned about."""
    for key, value in data.items():
        attr = _CONFIG_KEYS.get(key)
        if attr is None:
            logger.warning("Ignoring unknown config key: %s", key)
            continue
        if value is None:
            continue
        setattr(settings, attr, _coerce(attr, value))
    return settings


def apply_env(settings: Settings, environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Apply FORGEPACK_* environment overrides onto settings."""
    environ = os.environ if environ is None else environ
    for env_key, attr in _ENV_KEYS.items():
        value = environ.get(env_key)
        if value and value.strip():
            setattr(settings, attr, value.strip())
    return settings


def apply_args(settings: Settings, args: Any) -> Settings:
    """Apply CLI overrides (highest precedence) onto settings."""
    for dest, attr in _ARG_KEYS.items():
        value = getattr(args, dest, None)
        if value:
            setattr(settings, attr, value)
    return settings


def load_settings(args: Any = None, environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Resolve Settings from defaults, config file, environment and CLI args."""
    environ = os.environ if environ is None else environ
    config_path = getattr(args, "CONFIG", None) or environ.get(Constants.ENV_CONFIG)
    settings = Settings()
    data = load_config_file(config_path)
    if data:
        logger.info("Loaded config from: %s", config_path)
    apply_config(settings, data)
    apply_env(settings, environ)
    if args is not None:
        apply_args(settings, args)
    return settings
