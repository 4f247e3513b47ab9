"""
Shared utilities for CLI commands.

Provides common functionality used across multiple CLI commands to
eliminate duplication and ensure consistent behavior.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, Optional, Tuple

from rustupkit.config.parser import RustupKitConfig, load_config
from rustupkit.core.console import (
    AutoConsentPrompt,
    ConsolePrompt,
    ConsoleProgressReporter,
)
from rustupkit.core.interfaces import CommandRunner, ConsentPrompt, ProgressReporter
from rustupkit.core.process import SubprocessRunner

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Management
# ============================================================================


def load_cli_config(args) -> RustupKitConfig:
    """
    Load configuration for a command from ``--config`` / ``--project-root``.

    Args:
        args: Parsed command-line arguments

    Returns:
        Parsed configuration (defaults if no file)

    Raises:
        ConfigError: If the configuration file is invalid
    """
    project_root = Path(getattr(args, "project_root", None) or Path.cwd()).resolve()
    config_path = getattr(args, "config", None)
    logger.debug(f"Loading configuration (root={project_root}, file={config_path})")
    return load_config(project_root, config_path)


def parse_env_pairs(pairs) -> Dict[str, str]:
    """
    Turn ``--env KEY=VALUE`` arguments into a dictionary.

    Args:
        pairs: List of [key, value] lists as produced by argparse, or None

    Returns:
        Environment additions

    Raises:
        ValueError: If an entry has no '='
    """
    env = {}
    for pair in pairs or []:
        if len(pair) != 2 or not pair[0]:
            raise ValueError(f"Invalid environment variable (expected KEY=VALUE): {pair[0]}")
        env[pair[0]] = pair[1]
    return env


# ============================================================================
# Collaborators
# ============================================================================


def create_collaborators(
    args, config: RustupKitConfig
) -> Tuple[CommandRunner, ConsentPrompt, ProgressReporter]:
    """
    Create the console runner, prompt and progress reporter for a command.

    Args:
        args: Parsed arguments (``yes`` and ``quiet`` are honoured)
        config: Loaded configuration

    Returns:
        Tuple of (runner, prompt, progress)
    """
    assume_yes = bool(getattr(args, "yes", False)) or config.bootstrap.assume_yes
    prompt = AutoConsentPrompt() if assume_yes else ConsolePrompt()
    progress = ConsoleProgressReporter(quiet=bool(getattr(args, "quiet", False)))
    return SubprocessRunner(), prompt, progress


# ============================================================================
# User Interface / Output Formatting
# ============================================================================


def print_error(message: str, details: Optional[str] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        details: Optional additional details
    """
    print(f"ERROR: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)
