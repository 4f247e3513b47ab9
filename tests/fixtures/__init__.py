"""Test fixtures for RustupKit tests.

- rustup: fake collaborators (runner, prompt, progress, launcher) and
  sample rustup output

Import them in your tests using:
    from tests.fixtures.rustup import FakeRunner, TOOLCHAIN_LIST
"""

__all__ = [
    "rustup",
]
