"""
Maintenance action: update installed toolchains with ``rustup update``.

Not part of the bootstrap path. Errors end up in the status message and
are never raised.
"""

import logging
from enum import Enum

from rustupkit.core.exceptions import ExecError
from rustupkit.core.interfaces import CommandRunner, ProgressReporter
from rustupkit.core.process import quote_argument

logger = logging.getLogger(__name__)


class UpdateStatus(Enum):
    """Outcome of an update."""

    UNCHANGED = "unchanged"
    UPDATED = "updated"
    FAILED = "failed"


def rustup_update(
    runner: CommandRunner, progress: ProgressReporter, manager: str = "rustup"
) -> UpdateStatus:
    """
    Update toolchains and report the outcome through ``progress``.

    Any "unchanged" in the output counts as up to date. With several
    toolchains installed one may be updated while another is unchanged;
    this is not told apart.

    Args:
        runner: Command runner
        progress: Status indicator receiving the outcome message
        manager: Toolchain manager executable

    Returns:
        UpdateStatus of the run
    """
    progress.start("Updating RLS...")

    try:
        result = runner.run(f"{quote_argument(manager)} update")
    except ExecError as e:
        logger.error(f"Update failed: {e}")
        progress.stop("An error occurred whilst trying to update.")
        return UpdateStatus.FAILED

    if "unchanged" in result.stdout:
        progress.stop("Up to date.")
        return UpdateStatus.UNCHANGED

    progress.stop("Up to date. Restart extension for changes to take effect.")
    return UpdateStatus.UPDATED
