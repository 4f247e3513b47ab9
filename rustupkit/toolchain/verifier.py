"""
Toolchain and component verification.

Probes ask rustup what is installed every time they run; nothing is cached,
since the toolchain can change outside this process at any moment.
"""

import logging
from enum import Enum
from typing import Callable, List, Optional, Sequence

from rustupkit.core.exceptions import ExecError, ProbeFailedError
from rustupkit.core.interfaces import CommandRunner, ConsentPrompt
from rustupkit.core.process import quote_argument
from rustupkit.toolchain.components import (
    DEFAULT_CHANNEL,
    REQUIRED_COMPONENTS,
    RUSTUP_INSTALL_URL,
    component_pattern,
)

logger = logging.getLogger(__name__)


class InstallationStatus(Enum):
    """Installation state of a toolchain or component set."""

    PRESENT = "present"
    ABSENT = "absent"
    UNKNOWN = "unknown"  # Probe itself failed


class ToolchainVerifier:
    """
    Check that a toolchain channel is installed.

    Example:
        >>> verifier = ToolchainVerifier(SubprocessRunner(), ConsolePrompt())
        >>> verifier.probe()
        <InstallationStatus.PRESENT: 'present'>
    """

    def __init__(
        self,
        runner: CommandRunner,
        prompt: ConsentPrompt,
        manager: str = "rustup",
        channel: str = DEFAULT_CHANNEL,
        install_url: str = RUSTUP_INSTALL_URL,
    ):
        """
        Initialize toolchain verifier.

        Args:
            runner: Command runner used to query the manager
            prompt: Where diagnostics are shown
            manager: Toolchain manager executable
            channel: Required toolchain channel
            install_url: Where the manager can be installed from
        """
        self.runner = runner
        self.prompt = prompt
        self.manager = manager
        self.channel = channel
        self.install_url = install_url

    @property
    def list_command(self) -> str:
        return f"{quote_argument(self.manager)} toolchain list"

    def probe(self) -> InstallationStatus:
        """
        Check whether the channel is installed.

        Returns:
            PRESENT if the channel name appears in the toolchain list,
            ABSENT otherwise

        Raises:
            ProbeFailedError: If the manager is missing or broken
        """
        try:
            result = self.runner.run(self.list_command)
        except ExecError as e:
            logger.debug(f"Toolchain probe failed: {e}")
            self.prompt.show_error(
                f"Rustup not available. Install from {self.install_url}"
            )
            raise ProbeFailedError(
                f"Could not list toolchains with '{self.list_command}'"
            ) from e

        if self.channel in result.stdout:
            logger.debug(f"Toolchain '{self.channel}' is installed")
            return InstallationStatus.PRESENT

        logger.info(f"Toolchain '{self.channel}' is not installed")
        return InstallationStatus.ABSENT


class ComponentVerifier:
    """Check that every required component is installed for a channel."""

    def __init__(
        self,
        runner: CommandRunner,
        prompt: ConsentPrompt,
        manager: str = "rustup",
        channel: str = DEFAULT_CHANNEL,
        components: Sequence[str] = REQUIRED_COMPONENTS,
    ):
        self.runner = runner
        self.prompt = prompt
        self.manager = manager
        self.channel = channel
        self.components = tuple(components)

    def list_command(self, channel: str) -> str:
        return f"{quote_argument(self.manager)} component list --toolchain {channel}"

    def probe(self, channel: Optional[str] = None) -> InstallationStatus:
        """
        Check whether all required components are installed.

        Args:
            channel: Channel to inspect (default: the verifier's channel)

        Returns:
            PRESENT only if every component is installed, ABSENT otherwise

        Raises:
            ProbeFailedError: If the component list cannot be obtained
        """
        channel = channel or self.channel
        missing = self.probe_missing(channel)
        if missing:
            logger.info(f"Missing components for {channel}: {', '.join(missing)}")
            return InstallationStatus.ABSENT

        logger.debug(f"All components installed for {channel}")
        return InstallationStatus.PRESENT

    def probe_missing(self, channel: Optional[str] = None) -> List[str]:
        """
        List the required components that are not installed.

        Args:
            channel: Channel to inspect (default: the verifier's channel)

        Returns:
            Missing component names in install order (empty if all present)

        Raises:
            ProbeFailedError: If the component list cannot be obtained
        """
        command = self.list_command(channel or self.channel)

        try:
            result = self.runner.run(command)
        except ExecError as e:
            logger.debug(f"Component probe failed: {e}")
            self.prompt.show_error(
                "Unexpected error initialising RLS - error running rustup"
            )
            raise ProbeFailedError(f"Could not list components with '{command}'") from e

        return self.missing(result.stdout)

    def missing(self, output: str) -> List[str]:
        """
        List the required components not shown as installed in ``output``.

        Args:
            output: Output of ``rustup component list``

        Returns:
            Component names in install order
        """
        lines = output.splitlines()
        missing = []
        for name in self.components:
            pattern = component_pattern(name)
            if not any(pattern.match(line.rstrip()) for line in lines):
                missing.append(name)
        return missing


def status_of(probe: Callable[[], InstallationStatus]) -> InstallationStatus:
    """
    Run a probe for reporting, mapping a failed probe to UNKNOWN.

    Only for read-only reports; the bootstrap itself treats a failed probe as
    fatal.
    """
    try:
        return probe()
    except ProbeFailedError as e:
        logger.debug(f"Probe failed: {e}")
        return InstallationStatus.UNKNOWN
