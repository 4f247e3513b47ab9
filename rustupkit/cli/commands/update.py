"""
Update command implementation.

Runs ``rustup update`` as a maintenance action.
"""

import logging

from rustupkit.cli.utils import load_cli_config, print_error
from rustupkit.core.console import ConsoleProgressReporter
from rustupkit.core.exceptions import ConfigError
from rustupkit.core.process import SubprocessRunner
from rustupkit.toolchain.updater import UpdateStatus, rustup_update

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the update command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 unless the update failed)
    """
    try:
        config = load_cli_config(args)
    except ConfigError as e:
        print_error("Failed to load configuration", str(e))
        return 1

    status = rustup_update(
        SubprocessRunner(),
        ConsoleProgressReporter(quiet=args.quiet),
        manager=config.rustup.executable,
    )
    logger.debug(f"Update status: {status.value}")
    return 1 if status is UpdateStatus.FAILED else 0
