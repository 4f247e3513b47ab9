"""YAML configuration parser for RustupKit.

This module provides parsing and validation for rustupkit.yaml configuration files.
A missing file is not an error: every setting has a default.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import yaml

from rustupkit.core.exceptions import ConfigError
from rustupkit.toolchain.components import DEFAULT_CHANNEL, RLS, RUSTUP_INSTALL_URL

CONFIG_FILENAME = "rustupkit.yaml"


@dataclass
class RustupConfig:
    """Toolchain manager settings."""

    executable: str = "rustup"
    channel: str = DEFAULT_CHANNEL
    install_url: str = RUSTUP_INSTALL_URL


@dataclass
class ServerConfig:
    """Language server settings."""

    binary: str = RLS
    env: Dict[str, str] = field(default_factory=dict)  # Added to the server environment


@dataclass
class BootstrapConfig:
    """Bootstrap behaviour."""

    assume_yes: bool = False  # Accept install offers without asking


@dataclass
class RustupKitConfig:
    """Complete RustupKit configuration."""

    version: int = 1
    rustup: RustupConfig = field(default_factory=RustupConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    bootstrap: BootstrapConfig = field(default_factory=BootstrapConfig)


def parse_config(config_path: Path) -> RustupKitConfig:
    """
    Parse rustupkit.yaml configuration file.

    Args:
        config_path: Path to rustupkit.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If the file is missing or invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        return RustupKitConfig()

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    return _parse_and_validate(data)


def load_config(
    project_root: Path, config_path: Optional[Path] = None
) -> RustupKitConfig:
    """
    Load configuration, falling back to defaults.

    Args:
        project_root: Directory searched for rustupkit.yaml
        config_path: Explicit configuration file; must exist if given

    Returns:
        Parsed configuration, or defaults if no file is present
    """
    if config_path is not None:
        return parse_config(Path(config_path))

    default_path = Path(project_root) / CONFIG_FILENAME
    if default_path.exists():
        return parse_config(default_path)

    return RustupKitConfig()


def _parse_and_validate(data: dict) -> RustupKitConfig:
    """Parse and validate configuration data."""
    version = data.get("version", 1)
    if version != 1:
        raise ConfigError(f"Unsupported version: {version} (expected 1)")

    return RustupKitConfig(
        version=version,
        rustup=_parse_rustup_config(_section(data, "rustup")),
        server=_parse_server_config(_section(data, "server")),
        bootstrap=_parse_bootstrap_config(_section(data, "bootstrap")),
    )


def _section(data: dict, name: str) -> dict:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    return section


def _parse_rustup_config(data: dict) -> RustupConfig:
    """Parse toolchain manager configuration."""
    defaults = RustupConfig()
    config = RustupConfig(
        executable=data.get("executable", defaults.executable),
        channel=data.get("channel", defaults.channel),
        install_url=data.get("install_url", defaults.install_url),
    )

    for field_name in ("executable", "channel", "install_url"):
        value = getattr(config, field_name)
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"rustup.{field_name} must be a non-empty string")

    if any(ch.isspace() for ch in config.channel):
        raise ConfigError(f"Invalid channel name: {config.channel!r}")

    return config


def _parse_server_config(data: dict) -> ServerConfig:
    """Parse language server configuration."""
    binary = data.get("binary", RLS)
    if not isinstance(binary, str) or not binary.strip():
        raise ConfigError("server.binary must be a non-empty string")

    env = data.get("env") or {}
    if not isinstance(env, dict):
        raise ConfigError("server.env must be a dictionary")

    parsed_env = {}
    for key, value in env.items():
        if not isinstance(key, str):
            raise ConfigError(f"server.env key must be a string: {key!r}")
        if isinstance(value, bool) or value is None:
            raise ConfigError(f"server.env.{key} must be a string or number")
        parsed_env[key] = str(value)

    return ServerConfig(binary=binary, env=parsed_env)


def _parse_bootstrap_config(data: dict) -> BootstrapConfig:
    """Parse bootstrap configuration."""
    assume_yes = data.get("assume_yes", False)
    if not isinstance(assume_yes, bool):
        raise ConfigError("bootstrap.assume_yes must be true or false")
    return BootstrapConfig(assume_yes=assume_yes)
