"""
Components the RLS needs under its toolchain channel.
"""

import re
from typing import Tuple

DEFAULT_CHANNEL = "nightly"
RUSTUP_INSTALL_URL = "https://www.rustup.rs/"

RUST_ANALYSIS = "rust-analysis"
RUST_SRC = "rust-src"
RLS = "rls"

# Install order: analysis data, source, then the server binary itself.
REQUIRED_COMPONENTS: Tuple[str, ...] = (RUST_ANALYSIS, RUST_SRC, RLS)


def component_pattern(name: str) -> re.Pattern:
    """
    Build the pattern matching a ``rustup component list`` line for a
    component that is installed.

    Lines look like ``rust-src (installed)`` or
    ``rust-std-x86_64-unknown-linux-gnu (default)``; ``(available)`` or
    unannotated lines do not match.

    Args:
        name: Component name (e.g., "rust-src")

    Returns:
        Compiled pattern to apply to a single line
    """
    return re.compile(rf"^{re.escape(name)}.*\((default|installed)\)$")
