"""
Core interfaces for RustupKit.

This module defines the abstract interfaces that the bootstrap core depends on.
The host (a CLI, an editor extension, a test) supplies implementations, so the
core never spawns processes, prompts or renders progress by itself.
"""

import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Mapping, Optional


@dataclass
class ExecResult:
    """Captured output of a successful command."""

    stdout: str
    stderr: str = ""


class CommandRunner(ABC):
    """
    Abstract interface for running an external command line.

    Implementations are invoked serially, one call at a time.
    """

    @abstractmethod
    def run(self, command_line: str) -> ExecResult:
        """
        Run a command and capture its output.

        Args:
            command_line: Full command line (e.g., "rustup toolchain list")

        Returns:
            ExecResult with captured stdout and stderr

        Raises:
            ExecError: If the command cannot be spawned or exits non-zero
        """
        pass


class ConsentPrompt(ABC):
    """
    Abstract interface for asking the user a yes/no question.

    Also the channel for error diagnostics, so the user always sees why the
    server was not started.
    """

    @abstractmethod
    def ask(self, message: str, affirmative: str) -> Optional[str]:
        """
        Ask a question.

        Args:
            message: Question text
            affirmative: Label of the accepting answer (e.g., "Yes")

        Returns:
            The chosen label, or None if dismissed. Anything other than
            ``affirmative`` is a decline.
        """
        pass

    @abstractmethod
    def show_error(self, message: str) -> None:
        """Show an error diagnostic to the user."""
        pass


class ProgressReporter(ABC):
    """Abstract start/stop status indicator."""

    @abstractmethod
    def start(self, message: str) -> None:
        """Show the indicator with a message."""
        pass

    @abstractmethod
    def stop(self, message: str) -> None:
        """Hide the indicator, leaving a final message."""
        pass


class ServerLauncher(ABC):
    """Abstract interface for spawning the long-running server process."""

    @abstractmethod
    def spawn(self, args: List[str], env: Mapping[str, str]) -> subprocess.Popen:
        """
        Spawn the server.

        Args:
            args: Program and arguments
            env: Complete environment for the child process

        Returns:
            Handle of the running child process
        """
        pass


__all__ = [
    "ExecResult",
    "CommandRunner",
    "ConsentPrompt",
    "ProgressReporter",
    "ServerLauncher",
]
