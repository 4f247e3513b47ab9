"""Configuration module for RustupKit.

This module provides YAML configuration parsing and validation for rustupkit.yaml.
"""

from rustupkit.core.exceptions import ConfigError
from rustupkit.config.parser import (
    CONFIG_FILENAME,
    RustupConfig,
    ServerConfig,
    BootstrapConfig,
    RustupKitConfig,
    parse_config,
    load_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "RustupConfig",
    "ServerConfig",
    "BootstrapConfig",
    "RustupKitConfig",
    "ConfigError",
    "parse_config",
    "load_config",
]
