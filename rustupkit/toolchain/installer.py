"""
Installation of a missing toolchain channel and the RLS components.

Both entry points stop at the first failure. Nothing is rolled back:
a component added before a later one failed stays installed, and a rerun
simply adds everything again.
"""

import logging
from typing import Sequence

from rustupkit.core.exceptions import ExecError, InstallFailedError
from rustupkit.core.interfaces import CommandRunner, ConsentPrompt, ProgressReporter
from rustupkit.core.process import quote_argument
from rustupkit.toolchain.components import DEFAULT_CHANNEL, REQUIRED_COMPONENTS

logger = logging.getLogger(__name__)


class Installer:
    """
    Drive rustup to install a channel or the required components.

    Example:
        >>> installer = Installer(runner, prompt, progress)
        >>> installer.install_toolchain()
        >>> installer.install_components()
    """

    def __init__(
        self,
        runner: CommandRunner,
        prompt: ConsentPrompt,
        progress: ProgressReporter,
        manager: str = "rustup",
        channel: str = DEFAULT_CHANNEL,
        components: Sequence[str] = REQUIRED_COMPONENTS,
    ):
        """
        Initialize installer.

        Args:
            runner: Command runner used to invoke the manager
            prompt: Where error diagnostics are shown
            progress: Status indicator for running installs
            manager: Toolchain manager executable
            channel: Channel to install into
            components: Components to add, in install order
        """
        self.runner = runner
        self.prompt = prompt
        self.progress = progress
        self.manager = manager
        self.channel = channel
        self.components = tuple(components)

    @property
    def channel_title(self) -> str:
        return self.channel.capitalize()

    def install_toolchain(self) -> None:
        """
        Install the toolchain channel.

        Raises:
            InstallFailedError: If the install command fails
        """
        self.progress.start(f"Installing {self.channel} toolchain...")

        command = f"{quote_argument(self.manager)} toolchain install {self.channel}"
        try:
            result = self.runner.run(command)
        except ExecError as e:
            logger.error(f"Toolchain install failed: {e}")
            message = f"Could not install {self.channel} toolchain"
            self.prompt.show_error(message)
            self.progress.stop(message)
            raise InstallFailedError(f"toolchain:{self.channel}", str(e)) from e

        self._log_output(result.stdout, result.stderr)
        self.progress.stop(f"{self.channel_title} toolchain installed successfully")

    def install_components(self) -> None:
        """
        Add every component, in order, stopping at the first failure.

        Raises:
            InstallFailedError: Naming the component that failed
        """
        self.progress.start("Installing RLS components")

        manager = quote_argument(self.manager)
        for component in self.components:
            command = f"{manager} component add {component} --toolchain {self.channel}"
            logger.info(f"Installing component: {component}")
            try:
                result = self.runner.run(command)
            except ExecError as e:
                logger.error(f"Component install failed: {e}")
                self.prompt.show_error(
                    f"Could not install RLS component ({component})"
                )
                self.progress.stop("Could not install RLS")
                raise InstallFailedError(
                    component, f"installing {component} failed"
                ) from e

            self._log_output(result.stdout, result.stderr)

        self.progress.stop("RLS components installed successfully")

    def _log_output(self, stdout: str, stderr: str) -> None:
        if stdout:
            logger.debug(stdout.rstrip())
        if stderr:
            logger.debug(stderr.rstrip())
