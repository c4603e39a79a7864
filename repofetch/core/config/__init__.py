"""Config module — loading and managing configuration."""

from repofetch.core.config.loader import (
    ConfigurationError,
    get_config,
    get_fetcher_config,
    reload_config,
)

__all__ = [
    "ConfigurationError",
    "get_config",
    "get_fetcher_config",
    "reload_config",
]
