"""
Toolchain management module for RustupKit.

This module provides functionality for:
- Toolchain and component verification
- Toolchain and component installation
- Updating installed toolchains
"""

from rustupkit.toolchain.components import (
    DEFAULT_CHANNEL,
    REQUIRED_COMPONENTS,
    RUSTUP_INSTALL_URL,
    component_pattern,
)
from rustupkit.toolchain.verifier import (
    InstallationStatus,
    ToolchainVerifier,
    ComponentVerifier,
    status_of,
)
from rustupkit.toolchain.installer import Installer
from rustupkit.toolchain.updater import UpdateStatus, rustup_update

__all__ = [
    "DEFAULT_CHANNEL",
    "REQUIRED_COMPONENTS",
    "RUSTUP_INSTALL_URL",
    "component_pattern",
    "InstallationStatus",
    "ToolchainVerifier",
    "ComponentVerifier",
    "status_of",
    "Installer",
    "UpdateStatus",
    "rustup_update",
]
