"""
RustupKit - prepare a rustup toolchain for the Rust Language Server.

Checks that the required toolchain channel and RLS components are installed,
offers to install what is missing, and launches the RLS once everything is
in place.
"""

from rustupkit.bootstrap import BootstrapOrchestrator, BootstrapResult, BootstrapState
from rustupkit.core.exceptions import (
    RustupKitError,
    ProbeFailedError,
    UserDeclinedError,
    InstallFailedError,
)
from rustupkit.toolchain import InstallationStatus, UpdateStatus, rustup_update

__all__ = [
    "BootstrapOrchestrator",
    "BootstrapResult",
    "BootstrapState",
    "RustupKitError",
    "ProbeFailedError",
    "UserDeclinedError",
    "InstallFailedError",
    "InstallationStatus",
    "UpdateStatus",
    "rustup_update",
]
