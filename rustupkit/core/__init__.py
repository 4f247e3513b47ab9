"""
Core functionality for RustupKit.

This package contains the collaborator interfaces, their console and
subprocess implementations, and the exception hierarchy.
"""

from .exceptions import (
    RustupKitError,
    ExecError,
    BootstrapError,
    ProbeFailedError,
    UserDeclinedError,
    InstallFailedError,
    ConfigError,
)

from .interfaces import (
    ExecResult,
    CommandRunner,
    ConsentPrompt,
    ProgressReporter,
    ServerLauncher,
)

from .process import (
    SubprocessRunner,
    SubprocessLauncher,
    quote_argument,
    split_command_line,
)

from .console import (
    ConsolePrompt,
    AutoConsentPrompt,
    ConsoleProgressReporter,
    safe_print,
)

__all__ = [
    "RustupKitError",
    "ExecError",
    "BootstrapError",
    "ProbeFailedError",
    "UserDeclinedError",
    "InstallFailedError",
    "ConfigError",
    "ExecResult",
    "CommandRunner",
    "ConsentPrompt",
    "ProgressReporter",
    "ServerLauncher",
    "SubprocessRunner",
    "SubprocessLauncher",
    "quote_argument",
    "split_command_line",
    "ConsolePrompt",
    "AutoConsentPrompt",
    "ConsoleProgressReporter",
    "safe_print",
]
