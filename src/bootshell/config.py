"""Configuration loading for bootshell."""

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import ValidationError

from bootshell.errors import ConfigurationError
from bootshell.models import ShellConfig

log = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".bootshell"
CONFIG_FILE = CONFIG_DIR / "config.json"

# Environment variable -> ShellConfig field.
ENV_OVERRIDES = {
    "BOOTSHELL_NAME": "application",
    "BOOTSHELL_USER": "user",
    "TERM": "term",
    "BOOTSHELL_MULTI_SCOPE_MODE": "multi_scope_mode",
    "BOOTSHELL_DISCOVERY_POLICY": "discovery_policy",
    "BOOTSHELL_LOG_LEVEL": "log_level",
}


def _read_config_file(path: Path) -> dict:
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Unable to read config file {path}: {e}") from e
    if not isinstance(payload, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")
    log.debug("loaded config from %s", path)
    return payload


def load_config(
    environ: Mapping[str, str] | None = None,
    config_file: Path | None = None,
) -> ShellConfig:
    """Load configuration from the config file with environment overrides applied."""
    env = os.environ if environ is None else environ
    data = _read_config_file(CONFIG_FILE if config_file is None else config_file)
    for env_key, field in ENV_OVERRIDES.items():
        value = env.get(env_key, "").strip()
        if value:
            data[field] = value
    try:
        return ShellConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
