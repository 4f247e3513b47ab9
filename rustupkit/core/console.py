"""
Console implementations of the user-facing collaborators.

Used by the CLI; an editor host would supply its own dialog and status bar
implementations of the same interfaces.
"""

import logging
import sys
from typing import Optional

from rustupkit.core.interfaces import ConsentPrompt, ProgressReporter

logger = logging.getLogger(__name__)


def safe_print(message: str, file=None):
    """
    Print message with safe encoding handling for Windows console.

    Falls back to ASCII-safe characters if Unicode symbols can't be encoded.

    Args:
        message: Message to print
        file: Output file (default: stdout)
    """
    try:
        print(message, file=file)
    except UnicodeEncodeError:
        safe_message = (
            message.replace("⏳", "...")
            .replace("✓", "[OK]")
            .replace("❌", "[ERROR]")
            .replace("⚠️", "WARNING:")
        )
        print(safe_message, file=file)


class ConsolePrompt(ConsentPrompt):
    """Ask questions on stdin, report errors on stderr."""

    def ask(self, message: str, affirmative: str) -> Optional[str]:
        try:
            response = input(f"{message} [{affirmative}/no] ").strip()
        except EOFError:
            # No terminal attached: treat as dismissed
            print()
            return None

        if response.lower() in (affirmative.lower(), "y", "yes"):
            return affirmative
        return response or None

    def show_error(self, message: str) -> None:
        logger.debug(f"Diagnostic shown: {message}")
        safe_print(f"❌ {message}", file=sys.stderr)


class AutoConsentPrompt(ConsolePrompt):
    """Accept every install offer without asking (``--yes``)."""

    def ask(self, message: str, affirmative: str) -> Optional[str]:
        safe_print(f"{message} {affirmative} (assumed)")
        return affirmative


class ConsoleProgressReporter(ProgressReporter):
    """Print start/stop messages, one line each."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def start(self, message: str) -> None:
        logger.debug(f"Progress started: {message}")
        if not self.quiet:
            safe_print(f"⏳ {message}")

    def stop(self, message: str) -> None:
        logger.debug(f"Progress stopped: {message}")
        if not self.quiet:
            safe_print(message)
