"""
Pytest configuration and shared fixtures for RustupKit tests.
"""

import logging

import pytest

from tests.fixtures.rustup import (
    FakeLauncher,
    FakePrompt,
    RecordingProgress,
    ready_runner,
)


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def runner():
    """Runner for a fully prepared machine; tests adjust outputs/failures."""
    return ready_runner()


@pytest.fixture
def prompt():
    """Prompt that accepts every offer."""
    return FakePrompt("Yes")


@pytest.fixture
def progress():
    """Progress reporter recording start/stop events."""
    return RecordingProgress()


@pytest.fixture
def launcher():
    """Launcher recording spawn requests."""
    return FakeLauncher()


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo the CLI's logging.basicConfig between tests."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(logging.WARNING)
