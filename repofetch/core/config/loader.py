"""
Configuration loader.

Loads YAML config files and provides unified access.
Supports:
- Example defaults overridden by a local file, merged together
- Environment variable substitution (${VAR} and ${VAR:-default})
- Config directory override via REPOFETCH_CONFIG_DIR
"""

import logging
import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).parent.parent.parent.parent / "config"
CONFIG_DIR_ENV = "REPOFETCH_CONFIG_DIR"
CONFIG_FILES = ("fetcher.example.yaml", "fetcher.yaml")

_ENV_VAR_RE = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


class ConfigurationError(Exception):
    """Invalid configuration."""

    pass


def _substitute_env_vars(obj: Any) -> Any:
    """Recursively substitute environment variables in config."""
    if isinstance(obj, str):
        match = _ENV_VAR_RE.fullmatch(obj)
        if match:
            return os.environ.get(match.group(1), match.group(2) or "")
        return _ENV_VAR_RE.sub(
            lambda m: os.environ.get(m.group(1), m.group(2) or ""), obj
        )

    elif isinstance(obj, dict):
        return {k: _substitute_env_vars(v) for k, v in obj.items()}

    elif isinstance(obj, list):
        return [_substitute_env_vars(item) for item in obj]

    return obj


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a single YAML file."""
    if not path.exists():
        logger.warning(f"Config file not found: {path}")
        return {}

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    return _substitute_env_vars(data)


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries. Override takes precedence."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def _config_dir(config_dir: str | None) -> Path:
    if config_dir:
        return Path(config_dir)
    env_dir = os.environ.get(CONFIG_DIR_ENV)
    return Path(env_dir) if env_dir else CONFIG_DIR


@lru_cache(maxsize=4)
def get_config(config_dir: str | None = None) -> dict[str, Any]:
    """Load and merge all config files."""
    base_dir = _config_dir(config_dir)

    config: dict[str, Any] = {}

    for filename in CONFIG_FILES:
        file_path = base_dir / filename
        if file_path.exists():
            config = deep_merge(config, load_yaml(file_path))
            logger.debug(f"Loaded config: {file_path}")

    return config


def reload_config(config_dir: str | None = None) -> dict[str, Any]:
    """Force reload config (clears cache)."""
    get_config.cache_clear()
    return get_config(config_dir)


def get_fetcher_config(config_dir: str | None = None) -> dict[str, Any]:
    """Get the fetcher section of the config."""
    section = get_config(config_dir).get("fetcher", {}) or {}
    if not isinstance(section, dict):
        raise ConfigurationError("'fetcher' config section must be a mapping")
    return section
