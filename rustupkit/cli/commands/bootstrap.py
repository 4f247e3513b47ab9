"""
Bootstrap command implementation.

Checks the toolchain channel and RLS components, offering to install
whatever is missing, without starting the server.
"""

import logging

from rustupkit.bootstrap.orchestrator import BootstrapOrchestrator, BootstrapState
from rustupkit.cli.utils import create_collaborators, load_cli_config, print_error
from rustupkit.core.console import safe_print
from rustupkit.core.exceptions import ConfigError

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the bootstrap command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 when ready, 1 otherwise)
    """
    try:
        config = load_cli_config(args)
    except ConfigError as e:
        print_error("Failed to load configuration", str(e))
        return 1

    runner, prompt, progress = create_collaborators(args, config)
    orchestrator = BootstrapOrchestrator.from_config(config, runner, prompt, progress)

    result = orchestrator.run()
    logger.debug(f"Visited states: {[s.name for s in result.history]}")

    if result.ready:
        if not args.quiet:
            safe_print(
                f"✓ {config.rustup.channel} toolchain and RLS components are installed"
            )
        return 0

    if result.state is BootstrapState.PROBE_BROKEN:
        print_error("Could not query rustup", str(result.error))
    else:
        print_error("Bootstrap aborted", str(result.error))
    return 1
