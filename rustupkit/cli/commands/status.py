"""
Status command implementation.

Reports whether the toolchain and components are installed without
installing anything.
"""

import logging

from rustupkit.cli.utils import load_cli_config, print_error
from rustupkit.core.console import ConsolePrompt, safe_print
from rustupkit.core.exceptions import ConfigError, ProbeFailedError
from rustupkit.core.process import SubprocessRunner
from rustupkit.toolchain.verifier import (
    ComponentVerifier,
    InstallationStatus,
    ToolchainVerifier,
    status_of,
)

logger = logging.getLogger(__name__)

_SYMBOLS = {
    InstallationStatus.PRESENT: "✓",
    InstallationStatus.ABSENT: "❌",
    InstallationStatus.UNKNOWN: "⚠️",
}


def run(args) -> int:
    """
    Run the status command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 if everything is installed, 1 otherwise)
    """
    try:
        config = load_cli_config(args)
    except ConfigError as e:
        print_error("Failed to load configuration", str(e))
        return 1

    runner = SubprocessRunner()
    prompt = ConsolePrompt()
    channel = config.rustup.channel

    toolchain_verifier = ToolchainVerifier(
        runner,
        prompt,
        manager=config.rustup.executable,
        channel=channel,
        install_url=config.rustup.install_url,
    )
    toolchain_status = status_of(toolchain_verifier.probe)
    safe_print(
        f"{_SYMBOLS[toolchain_status]} Toolchain {channel}: {toolchain_status.value}"
    )

    # Components belong to a channel; don't ask about a missing one
    if toolchain_status is not InstallationStatus.PRESENT:
        print("  Components: not checked")
        return 1

    component_verifier = ComponentVerifier(
        runner, prompt, manager=config.rustup.executable, channel=channel
    )
    missing = []
    try:
        missing = component_verifier.probe_missing()
    except ProbeFailedError as e:
        logger.debug(f"Component probe failed: {e}")
        component_status = InstallationStatus.UNKNOWN
    else:
        component_status = (
            InstallationStatus.ABSENT if missing else InstallationStatus.PRESENT
        )

    safe_print(f"{_SYMBOLS[component_status]} Components: {component_status.value}")
    for name in missing:
        print(f"  missing: {name}")

    return 0 if component_status is InstallationStatus.PRESENT else 1
