"""
Run command implementation.

Bootstraps the toolchain, then starts the language server and waits for it.
"""

import logging
import os

from rustupkit.bootstrap.orchestrator import BootstrapOrchestrator
from rustupkit.cli.utils import (
    create_collaborators,
    load_cli_config,
    parse_env_pairs,
    print_error,
)
from rustupkit.core.exceptions import BootstrapError, ConfigError
from rustupkit.core.process import SubprocessLauncher

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the run command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code of the server, or 1 if it was not started
    """
    try:
        config = load_cli_config(args)
        extra_env = parse_env_pairs(getattr(args, "env", None))
    except (ConfigError, ValueError) as e:
        print_error("Invalid arguments", str(e))
        return 1

    env = dict(os.environ)
    env.update(config.server.env)
    env.update(extra_env)

    runner, prompt, progress = create_collaborators(args, config)
    orchestrator = BootstrapOrchestrator.from_config(
        config, runner, prompt, progress, launcher=SubprocessLauncher()
    )

    try:
        process = orchestrator.run_with_ready_toolchain(env)
    except BootstrapError as e:
        logger.error(f"{config.server.binary} not started: {e}")
        return 1
    except OSError as e:
        print_error(f"Failed to start {config.server.binary}", str(e))
        return 1

    try:
        return process.wait()
    except KeyboardInterrupt:
        process.terminate()
        process.wait()
        raise
