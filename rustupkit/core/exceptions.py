"""
Centralized exception hierarchy for RustupKit.

This module defines all custom exceptions raised while verifying and
installing the rustup toolchain and components required by the RLS.
"""

from typing import Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class RustupKitError(Exception):
    """Base exception for all RustupKit errors."""

    pass


# ============================================================================
# Command Execution Exceptions
# ============================================================================


class ExecError(RustupKitError):
    """
    Raised when an external command cannot run or exits abnormally.

    Spawn failures and non-zero exit codes collapse into this one kind;
    callers never inspect exit codes directly.
    """

    def __init__(
        self,
        command: str,
        returncode: Optional[int] = None,
        stderr: str = "",
        reason: str = "",
    ):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        if reason:
            msg = f"Command '{command}' could not be run: {reason}"
        else:
            msg = f"Command '{command}' exited with code {returncode}"
        if stderr:
            msg += f"\n{stderr.strip()}"
        super().__init__(msg)


# ============================================================================
# Bootstrap Exceptions
# ============================================================================


class BootstrapError(RustupKitError):
    """Base exception for errors that abort a bootstrap attempt."""

    pass


class ProbeFailedError(BootstrapError):
    """Raised when a verification command itself fails (manager broken)."""

    pass


class UserDeclinedError(BootstrapError):
    """Raised when the user does not consent to an install."""

    def __init__(self, subject: str):
        self.subject = subject
        super().__init__(f"Installation of {subject} was declined")


class InstallFailedError(BootstrapError):
    """Raised when an install command fails; carries the failed subject."""

    def __init__(self, subject: str, message: str = ""):
        self.subject = subject
        super().__init__(message or f"installing {subject} failed")


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(RustupKitError):
    """Configuration parsing or validation error."""

    pass
