"""
Bootstrap state machine.

Decides, one step at a time, whether the toolchain channel and the RLS
components are installed, offers to install what is missing, and only then
allows the server to be launched. Every run starts from INIT and probes
again; nothing is remembered between runs.

The toolchain and the components go through the same probe -> offer ->
install shape, described once by PrerequisiteStep:

    INIT -> CHECK_TOOLCHAIN -> [OFFER_TOOLCHAIN_INSTALL -> INSTALLING_TOOLCHAIN]
         -> CHECK_COMPONENTS -> [OFFER_COMPONENT_INSTALL -> INSTALLING_COMPONENTS]
         -> READY

Any failure ends in ABORTED (declined or install failed) or PROBE_BROKEN
(the manager itself could not be queried).
"""

import logging
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from rustupkit.core.exceptions import (
    BootstrapError,
    InstallFailedError,
    ProbeFailedError,
    UserDeclinedError,
)
from rustupkit.core.interfaces import (
    CommandRunner,
    ConsentPrompt,
    ProgressReporter,
    ServerLauncher,
)
from rustupkit.toolchain.components import (
    DEFAULT_CHANNEL,
    REQUIRED_COMPONENTS,
    RLS,
    RUSTUP_INSTALL_URL,
)
from rustupkit.toolchain.installer import Installer
from rustupkit.toolchain.verifier import (
    ComponentVerifier,
    InstallationStatus,
    ToolchainVerifier,
)

logger = logging.getLogger(__name__)

AFFIRMATIVE = "Yes"


class BootstrapState(Enum):
    """States of a bootstrap attempt."""

    INIT = "init"
    CHECK_TOOLCHAIN = "check_toolchain"
    OFFER_TOOLCHAIN_INSTALL = "offer_toolchain_install"
    INSTALLING_TOOLCHAIN = "installing_toolchain"
    CHECK_COMPONENTS = "check_components"
    OFFER_COMPONENT_INSTALL = "offer_component_install"
    INSTALLING_COMPONENTS = "installing_components"
    READY = "ready"
    ABORTED = "aborted"
    PROBE_BROKEN = "probe_broken"

    @property
    def is_terminal(self) -> bool:
        return self in (
            BootstrapState.READY,
            BootstrapState.ABORTED,
            BootstrapState.PROBE_BROKEN,
        )


class ConsentDecision(Enum):
    """Answer to a single install offer."""

    GRANTED = "granted"
    DECLINED = "declined"

    @classmethod
    def from_answer(cls, answer: Optional[str], affirmative: str) -> "ConsentDecision":
        """Anything but the affirmative label, including no answer, declines."""
        return cls.GRANTED if answer == affirmative else cls.DECLINED


@dataclass
class PrerequisiteStep:
    """One probe -> offer -> install prerequisite and the states it owns."""

    subject: str
    """Human-readable name used in prompts and diagnostics"""

    probe: Callable[[], InstallationStatus]
    install: Callable[[], None]
    offer_message: str

    check_state: BootstrapState
    offer_state: BootstrapState
    install_state: BootstrapState

    next_state: BootstrapState
    """State entered once the prerequisite is satisfied"""


@dataclass
class BootstrapResult:
    """Outcome of one bootstrap attempt."""

    state: BootstrapState
    error: Optional[BootstrapError] = None
    history: List[BootstrapState] = field(default_factory=list)

    @property
    def ready(self) -> bool:
        return self.state is BootstrapState.READY


class BootstrapOrchestrator:
    """
    Ensure the toolchain and RLS components are installed, then launch the RLS.

    Example:
        >>> orchestrator = BootstrapOrchestrator(
        ...     SubprocessRunner(), ConsolePrompt(), ConsoleProgressReporter(),
        ...     launcher=SubprocessLauncher(),
        ... )
        >>> process = orchestrator.run_with_ready_toolchain(dict(os.environ))
    """

    def __init__(
        self,
        runner: CommandRunner,
        prompt: ConsentPrompt,
        progress: ProgressReporter,
        launcher: Optional[ServerLauncher] = None,
        manager: str = "rustup",
        channel: str = DEFAULT_CHANNEL,
        server: str = RLS,
        install_url: str = RUSTUP_INSTALL_URL,
        components: Sequence[str] = REQUIRED_COMPONENTS,
    ):
        """
        Initialize orchestrator.

        Args:
            runner: Command runner shared by probes and installs
            prompt: Consent prompt and diagnostic sink
            progress: Status indicator passed to the installer
            launcher: Spawns the server once ready (required for launching)
            manager: Toolchain manager executable
            channel: Required toolchain channel
            server: Program run inside the channel once ready
            install_url: Where the manager can be installed from
            components: Required components, in install order
        """
        self.prompt = prompt
        self.launcher = launcher
        self.manager = manager
        self.channel = channel
        self.server = server

        self.toolchain_verifier = ToolchainVerifier(
            runner, prompt, manager=manager, channel=channel, install_url=install_url
        )
        self.component_verifier = ComponentVerifier(
            runner, prompt, manager=manager, channel=channel, components=components
        )
        self.installer = Installer(
            runner,
            prompt,
            progress,
            manager=manager,
            channel=channel,
            components=components,
        )

        self.steps = [
            PrerequisiteStep(
                subject=f"{channel.capitalize()} toolchain",
                probe=self.toolchain_verifier.probe,
                install=self.installer.install_toolchain,
                offer_message=f"{channel.capitalize()} toolchain not installed. Install?",
                check_state=BootstrapState.CHECK_TOOLCHAIN,
                offer_state=BootstrapState.OFFER_TOOLCHAIN_INSTALL,
                install_state=BootstrapState.INSTALLING_TOOLCHAIN,
                next_state=BootstrapState.CHECK_COMPONENTS,
            ),
            PrerequisiteStep(
                subject="RLS",
                probe=lambda: self.component_verifier.probe(self.channel),
                install=self.installer.install_components,
                offer_message="RLS not installed. Install?",
                check_state=BootstrapState.CHECK_COMPONENTS,
                offer_state=BootstrapState.OFFER_COMPONENT_INSTALL,
                install_state=BootstrapState.INSTALLING_COMPONENTS,
                next_state=BootstrapState.READY,
            ),
        ]

        self._owners: Dict[BootstrapState, PrerequisiteStep] = {}
        for step in self.steps:
            for state in (step.check_state, step.offer_state, step.install_state):
                self._owners[state] = step

    @classmethod
    def from_config(
        cls,
        config,
        runner: CommandRunner,
        prompt: ConsentPrompt,
        progress: ProgressReporter,
        launcher: Optional[ServerLauncher] = None,
    ) -> "BootstrapOrchestrator":
        """Create an orchestrator from a parsed RustupKitConfig."""
        return cls(
            runner,
            prompt,
            progress,
            launcher=launcher,
            manager=config.rustup.executable,
            channel=config.rustup.channel,
            server=config.server.binary,
            install_url=config.rustup.install_url,
        )

    def advance(
        self, state: BootstrapState
    ) -> Tuple[BootstrapState, Optional[BootstrapError]]:
        """
        Perform the work of ``state`` and return the next state.

        Args:
            state: Current, non-terminal state

        Returns:
            Tuple of (next state, error that ended the attempt or None)
        """
        if state is BootstrapState.INIT:
            return self.steps[0].check_state, None

        if state.is_terminal:
            raise ValueError(f"No transition out of terminal state {state.name}")

        step = self._owners[state]

        if state is step.check_state:
            try:
                status = step.probe()
            except ProbeFailedError as e:
                logger.error(f"{step.subject} check failed: {e}")
                return BootstrapState.PROBE_BROKEN, e

            if status is InstallationStatus.PRESENT:
                return step.next_state, None
            return step.offer_state, None

        if state is step.offer_state:
            answer = self.prompt.ask(step.offer_message, AFFIRMATIVE)
            decision = ConsentDecision.from_answer(answer, AFFIRMATIVE)
            if decision is ConsentDecision.GRANTED:
                return step.install_state, None

            logger.info(f"{step.subject} install declined")
            self.prompt.show_error(
                f"{step.subject} not installed; RLS will not be started"
            )
            return BootstrapState.ABORTED, UserDeclinedError(step.subject)

        # Install state: no re-probe, success moves straight on
        try:
            step.install()
        except InstallFailedError as e:
            return BootstrapState.ABORTED, e
        return step.next_state, None

    def run(self) -> BootstrapResult:
        """
        Run one bootstrap attempt from INIT to a terminal state.

        Returns:
            BootstrapResult with the terminal state and the visited states
        """
        state = BootstrapState.INIT
        history = [state]
        error = None

        while not state.is_terminal:
            state, error = self.advance(state)
            logger.debug(f"Bootstrap state: {state.name}")
            history.append(state)

        if state is BootstrapState.READY:
            logger.info(f"{self.channel} toolchain and RLS components are installed")

        return BootstrapResult(state=state, error=error, history=history)

    def ensure_ready(self) -> BootstrapResult:
        """
        Run a bootstrap attempt and raise unless it reached READY.

        Raises:
            BootstrapError: The error that ended the attempt
        """
        result = self.run()
        if not result.ready:
            raise result.error
        return result

    def server_command(self) -> List[str]:
        return [self.manager, "run", self.channel, self.server]

    def run_with_ready_toolchain(self, env: Mapping[str, str]) -> subprocess.Popen:
        """
        Bootstrap, then launch the server with ``env`` passed through unchanged.

        Args:
            env: Environment for the server process

        Returns:
            Handle of the spawned server

        Raises:
            BootstrapError: If the bootstrap did not reach READY; nothing is
                launched in that case
        """
        if self.launcher is None:
            raise ValueError("No server launcher configured")

        self.ensure_ready()
        return self.launcher.spawn(self.server_command(), env)
