"""Configuration loader with YAML parsing and environment variable substitution."""

import os
import re
from pathlib import Path

import structlog
import yaml

from trace_window.utils.logging import LogEventNames

from .schema import TraceWindowConfig

log = structlog.get_logger()


def substitute_env_vars(text: str) -> str:
    """
    Replace ${VAR_NAME} patterns with environment variable values.

    Args:
        text: Text containing ${VAR_NAME} patterns

    Returns:
        Text with environment variables substituted

    Raises:
        ValueError: If a referenced environment variable is not found
    """

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            raise ValueError(f"Environment variable {var_name} not found")
        return value

    return re.sub(r"\$\{([^}]+)\}", replacer, text)


def load_config(path: Path) -> TraceWindowConfig:
    """
    Load configuration from YAML file with environment variable substitution.

    An empty file yields the default configuration.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated TraceWindowConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If environment variables are missing or the file is not a mapping
        ValidationError: If config doesn't match schema
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with path.open() as f:
        raw_yaml = f.read()

    config_dict = yaml.safe_load(substitute_env_vars(raw_yaml)) or {}
    if not isinstance(config_dict, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")

    config = TraceWindowConfig.model_validate(config_dict)
    log.debug(LogEventNames.CONFIG_LOADED, path=str(path))

    return config
