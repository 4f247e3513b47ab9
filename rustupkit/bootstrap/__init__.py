"""
Bootstrap module for RustupKit.

Runs the readiness sequence before the language server is launched.
"""

from rustupkit.bootstrap.orchestrator import (
    AFFIRMATIVE,
    BootstrapOrchestrator,
    BootstrapResult,
    BootstrapState,
    ConsentDecision,
    PrerequisiteStep,
)

__all__ = [
    "AFFIRMATIVE",
    "BootstrapOrchestrator",
    "BootstrapResult",
    "BootstrapState",
    "ConsentDecision",
    "PrerequisiteStep",
]
