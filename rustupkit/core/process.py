"""
Subprocess-backed command runner and server launcher.
"""

import logging
import os
import shlex
import subprocess
from typing import List, Mapping, Optional

from rustupkit.core.exceptions import ExecError
from rustupkit.core.interfaces import CommandRunner, ExecResult, ServerLauncher

logger = logging.getLogger(__name__)

_QUOTES = ('"', "'")


def _posix_default(posix: Optional[bool]) -> bool:
    return os.name != "nt" if posix is None else posix


def quote_argument(arg: str, posix: Optional[bool] = None) -> str:
    """
    Quote one argument so that ``split_command_line`` returns it unchanged.

    Args:
        arg: Argument, typically an executable path
        posix: Use POSIX rules (default: everywhere except Windows)

    Returns:
        The argument, quoted only where needed
    """
    if _posix_default(posix):
        return shlex.quote(arg)
    if not arg or any(c.isspace() for c in arg):
        return f'"{arg}"'
    return arg


def split_command_line(command_line: str, posix: Optional[bool] = None) -> List[str]:
    """
    Split a command line into arguments.

    Windows paths keep their backslashes: outside POSIX mode ``shlex`` does not
    treat them as escapes, and surrounding quotes are removed here instead.

    Args:
        command_line: Command line to split
        posix: Use POSIX rules (default: everywhere except Windows)

    Returns:
        List of arguments
    """
    if _posix_default(posix):
        return shlex.split(command_line)

    args = []
    for token in shlex.split(command_line, posix=False):
        if len(token) >= 2 and token[0] in _QUOTES and token[-1] == token[0]:
            token = token[1:-1]
        args.append(token)
    return args


class SubprocessRunner(CommandRunner):
    """
    Run command lines with ``subprocess.run``.

    There is no timeout: the caller cancels by interrupting the process.
    """

    def __init__(self, posix: Optional[bool] = None):
        """
        Initialize runner.

        Args:
            posix: Split command lines with POSIX rules (default: everywhere
                except Windows)
        """
        self.posix = _posix_default(posix)

    def run(self, command_line: str) -> ExecResult:
        """
        Run a command and capture its output.

        Args:
            command_line: Command line, split with shell-like rules

        Returns:
            ExecResult with decoded stdout and stderr

        Raises:
            ExecError: If the program is missing, cannot be started, or exits
                with a non-zero code
        """
        args = split_command_line(command_line, posix=self.posix)
        logger.debug(f"Running: {command_line}")

        try:
            result = subprocess.run(args, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise ExecError(command_line, reason=f"program not found ({e})") from e
        except OSError as e:
            raise ExecError(command_line, reason=str(e)) from e

        if result.returncode != 0:
            logger.debug(f"{command_line} exited with code {result.returncode}")
            raise ExecError(command_line, result.returncode, result.stderr or "")

        return ExecResult(stdout=result.stdout or "", stderr=result.stderr or "")


class SubprocessLauncher(ServerLauncher):
    """Spawn the server with ``subprocess.Popen``, inheriting stdio."""

    def spawn(self, args: List[str], env: Mapping[str, str]) -> subprocess.Popen:
        logger.info(f"Starting: {' '.join(args)}")
        return subprocess.Popen(args, env=dict(env))
