"""
Unit tests for the bootstrap state machine.

Tests cover:
- Transitions for present, absent and broken prerequisites
- Consent handling
- Short-circuit on install failure
- Launching only after READY
"""

import pytest

from rustupkit.bootstrap.orchestrator import (
    BootstrapOrchestrator,
    BootstrapState,
    ConsentDecision,
)
from rustupkit.config.parser import RustupConfig, RustupKitConfig, ServerConfig
from rustupkit.core.exceptions import (
    InstallFailedError,
    ProbeFailedError,
    UserDeclinedError,
)
from tests.fixtures.rustup import (
    COMPONENT_ADDS,
    COMPONENT_LIST,
    COMPONENTS_WITHOUT_SRC,
    TOOLCHAIN_INSTALL,
    TOOLCHAIN_LIST,
    TOOLCHAINS_WITHOUT_NIGHTLY,
    FakePrompt,
    FakeRunner,
    component_add,
)

S = BootstrapState


def make_orchestrator(runner, prompt, progress, launcher=None):
    return BootstrapOrchestrator(runner, prompt, progress, launcher=launcher)


# ============================================================================
# Everything installed
# ============================================================================


class TestReady:
    """Test a machine that already has everything."""

    def test_reaches_ready_with_two_probes(self, runner, prompt, progress):
        """Test toolchain then components are probed, nothing else."""
        result = make_orchestrator(runner, prompt, progress).run()

        assert result.ready
        assert result.error is None
        assert result.history == [S.INIT, S.CHECK_TOOLCHAIN, S.CHECK_COMPONENTS, S.READY]
        assert runner.calls == [TOOLCHAIN_LIST, COMPONENT_LIST]
        assert prompt.questions == []
        assert progress.events == []

    def test_second_run_probes_again(self, runner, prompt, progress):
        """Test every run re-verifies from scratch without prompts or installs."""
        orchestrator = make_orchestrator(runner, prompt, progress)
        orchestrator.run()
        runner.calls.clear()

        result = orchestrator.run()

        assert result.ready
        assert runner.calls == [TOOLCHAIN_LIST, COMPONENT_LIST]
        assert prompt.questions == []
        assert progress.events == []


# ============================================================================
# Toolchain missing
# ============================================================================


class TestToolchainMissing:
    """Test the toolchain offer and install."""

    @pytest.fixture(autouse=True)
    def no_nightly(self, runner):
        runner.outputs[TOOLCHAIN_LIST] = TOOLCHAINS_WITHOUT_NIGHTLY

    def test_offer_message(self, runner, prompt, progress):
        """Test the user is asked to install the nightly toolchain."""
        make_orchestrator(runner, prompt, progress).run()

        message, affirmative = prompt.questions[0]
        assert "Nightly toolchain not installed." in message
        assert affirmative == "Yes"

    def test_accept_installs_then_checks_components(self, runner, prompt, progress):
        """Test accepting installs the toolchain and continues to components."""
        result = make_orchestrator(runner, prompt, progress).run()

        assert result.ready
        assert result.history == [
            S.INIT,
            S.CHECK_TOOLCHAIN,
            S.OFFER_TOOLCHAIN_INSTALL,
            S.INSTALLING_TOOLCHAIN,
            S.CHECK_COMPONENTS,
            S.READY,
        ]
        assert runner.calls == [TOOLCHAIN_LIST, TOOLCHAIN_INSTALL, COMPONENT_LIST]

    def test_decline_aborts_before_components(self, runner, progress):
        """Test declining never probes components or installs anything."""
        prompt = FakePrompt(answer=None)
        result = make_orchestrator(runner, prompt, progress).run()

        assert result.state is S.ABORTED
        assert isinstance(result.error, UserDeclinedError)
        assert runner.calls == [TOOLCHAIN_LIST]
        assert progress.events == []
        assert prompt.errors == ["Nightly toolchain not installed; RLS will not be started"]

    @pytest.mark.parametrize("answer", ["No", "yes", "", "Cancel"])
    def test_non_affirmative_answers_decline(self, runner, progress, answer):
        """Test only the exact affirmative label accepts."""
        result = make_orchestrator(runner, FakePrompt(answer), progress).run()
        assert result.state is S.ABORTED

    def test_install_failure_aborts(self, runner, prompt, progress):
        """Test a failed toolchain install aborts before components."""
        runner.failures.add(TOOLCHAIN_INSTALL)
        result = make_orchestrator(runner, prompt, progress).run()

        assert result.state is S.ABORTED
        assert isinstance(result.error, InstallFailedError)
        assert COMPONENT_LIST not in runner.calls


# ============================================================================
# Components missing
# ============================================================================


class TestComponentsMissing:
    """Test the component offer and install."""

    @pytest.fixture(autouse=True)
    def no_src(self, runner):
        runner.outputs[COMPONENT_LIST] = COMPONENTS_WITHOUT_SRC

    def test_accept_reinstalls_all_components(self, runner, prompt, progress):
        """Test all three components are added even if only one is missing."""
        result = make_orchestrator(runner, prompt, progress).run()

        assert result.ready
        assert prompt.questions == [("RLS not installed. Install?", "Yes")]
        assert runner.calls == [TOOLCHAIN_LIST, COMPONENT_LIST] + COMPONENT_ADDS
        assert result.history[-3:] == [
            S.OFFER_COMPONENT_INSTALL,
            S.INSTALLING_COMPONENTS,
            S.READY,
        ]

    def test_decline_aborts(self, runner, progress):
        """Test declining the component install aborts."""
        result = make_orchestrator(runner, FakePrompt("No"), progress).run()

        assert result.state is S.ABORTED
        assert isinstance(result.error, UserDeclinedError)
        assert result.error.subject == "RLS"
        assert runner.calls == [TOOLCHAIN_LIST, COMPONENT_LIST]

    def test_install_failure_stops_sequence(self, runner, prompt, progress):
        """Test a failing component stops later ones and aborts."""
        runner.failures.add(component_add("rust-src"))
        result = make_orchestrator(runner, prompt, progress).run()

        assert result.state is S.ABORTED
        assert result.error.subject == "rust-src"
        assert component_add("rls") not in runner.calls


# ============================================================================
# Broken rustup
# ============================================================================


class TestProbeBroken:
    """Test failures of the probes themselves."""

    def test_toolchain_probe_failure(self, runner, prompt, progress):
        """Test a broken rustup ends in PROBE_BROKEN without offers."""
        runner.failures.add(TOOLCHAIN_LIST)
        result = make_orchestrator(runner, prompt, progress).run()

        assert result.state is S.PROBE_BROKEN
        assert isinstance(result.error, ProbeFailedError)
        assert runner.calls == [TOOLCHAIN_LIST]
        assert prompt.questions == []
        assert "https://www.rustup.rs/" in prompt.errors[0]

    def test_component_probe_failure(self, runner, prompt, progress):
        """Test a failing component listing ends in PROBE_BROKEN."""
        runner.failures.add(COMPONENT_LIST)
        result = make_orchestrator(runner, prompt, progress).run()

        assert result.state is S.PROBE_BROKEN
        assert prompt.questions == []


# ============================================================================
# Transition function and launch
# ============================================================================


class TestAdvance:
    """Test the transition function directly."""

    def test_init_goes_to_toolchain_check(self, runner, prompt, progress):
        orchestrator = make_orchestrator(runner, prompt, progress)
        assert orchestrator.advance(S.INIT) == (S.CHECK_TOOLCHAIN, None)
        assert runner.calls == []

    @pytest.mark.parametrize("state", [S.READY, S.ABORTED, S.PROBE_BROKEN])
    def test_terminal_states_have_no_transition(self, runner, prompt, progress, state):
        orchestrator = make_orchestrator(runner, prompt, progress)
        with pytest.raises(ValueError):
            orchestrator.advance(state)

    def test_consent_decision(self):
        """Test only the affirmative label grants consent."""
        assert ConsentDecision.from_answer("Yes", "Yes") is ConsentDecision.GRANTED
        assert ConsentDecision.from_answer(None, "Yes") is ConsentDecision.DECLINED
        assert ConsentDecision.from_answer("yes", "Yes") is ConsentDecision.DECLINED


class TestRunWithReadyToolchain:
    """Test launching the server."""

    def test_launches_with_env_unchanged(self, runner, prompt, progress, launcher):
        """Test the server is run through rustup with the caller's environment."""
        env = {"PATH": "/usr/bin", "RUST_LOG": "rls=debug"}
        orchestrator = make_orchestrator(runner, prompt, progress, launcher)

        process = orchestrator.run_with_ready_toolchain(env)

        assert process is launcher.process
        assert launcher.spawned == [(["rustup", "run", "nightly", "rls"], env)]

    def test_not_launched_when_declined(self, runner, progress, launcher):
        """Test nothing is spawned when the bootstrap aborts."""
        runner.outputs[TOOLCHAIN_LIST] = TOOLCHAINS_WITHOUT_NIGHTLY
        orchestrator = make_orchestrator(runner, FakePrompt("No"), progress, launcher)

        with pytest.raises(UserDeclinedError):
            orchestrator.run_with_ready_toolchain({})

        assert launcher.spawned == []

    def test_not_launched_when_probe_broken(self, runner, prompt, progress, launcher):
        runner.failures.add(TOOLCHAIN_LIST)
        orchestrator = make_orchestrator(runner, prompt, progress, launcher)

        with pytest.raises(ProbeFailedError):
            orchestrator.run_with_ready_toolchain({})

        assert launcher.spawned == []

    def test_requires_launcher(self, runner, prompt, progress):
        with pytest.raises(ValueError, match="launcher"):
            make_orchestrator(runner, prompt, progress).run_with_ready_toolchain({})


class TestFromConfig:
    """Test building an orchestrator from configuration."""

    def test_uses_configured_values(self, prompt, progress, launcher):
        config = RustupKitConfig(
            rustup=RustupConfig(executable="rustup.exe", channel="beta"),
            server=ServerConfig(binary="rls-preview"),
        )
        runner = FakeRunner(
            {
                "rustup.exe toolchain list": "beta-x86_64-pc-windows-msvc\n",
                "rustup.exe component list --toolchain beta": (
                    "rls (installed)\nrust-analysis (installed)\nrust-src (installed)\n"
                ),
            }
        )
        orchestrator = BootstrapOrchestrator.from_config(
            config, runner, prompt, progress, launcher
        )

        orchestrator.run_with_ready_toolchain({})

        assert launcher.spawned[0][0] == ["rustup.exe", "run", "beta", "rls-preview"]

    def test_decline_message_names_rls_for_custom_binary(self, progress, launcher):
        """Test the decline diagnostic does not derive its name from the binary."""
        config = RustupKitConfig(server=ServerConfig(binary="rls-preview"))
        prompt = FakePrompt(answer=None)
        runner = FakeRunner({TOOLCHAIN_LIST: TOOLCHAINS_WITHOUT_NIGHTLY})
        orchestrator = BootstrapOrchestrator.from_config(
            config, runner, prompt, progress, launcher
        )

        result = orchestrator.run()

        assert result.state is S.ABORTED
        assert prompt.errors == ["Nightly toolchain not installed; RLS will not be started"]
