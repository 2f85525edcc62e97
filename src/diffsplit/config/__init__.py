"""Configuration loading, schema, and defaults."""

from diffsplit.config.loader import ConfigError, load_config
from diffsplit.config.schema import DiffSplitConfig, parse_strip

__all__ = [
    "ConfigError",
    "DiffSplitConfig",
    "load_config",
    "parse_strip",
]
