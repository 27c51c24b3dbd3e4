"""Locating and running the fizzy executable.

fizzy is run with the rewritten arguments and this process's own stdin,
stdout and stderr, so its output reaches the caller directly. fizzy-md waits
for it without a timeout and returns its exit status unchanged; a non-zero
status from fizzy is fizzy's answer, not a fizzy-md error.
"""

import logging
import shutil
import subprocess
from collections.abc import Sequence

from fizzy_md.core.exceptions import DelegateExecutionError, DelegateNotFoundError

logger = logging.getLogger(__name__)

INSTALL_GUIDANCE = "Please install fizzy-cli: https://github.com/robzolkos/fizzy-cli"


def find_delegate(name: str) -> str:
    """Find an executable on PATH.

    Args:
        name: Executable name (e.g. "fizzy")

    Returns:
        Full path of the executable

    Raises:
        DelegateNotFoundError: If no executable with that name is on PATH
    """
    path = shutil.which(name)
    if path is None:
        raise DelegateNotFoundError(
            f"{name} command not found in PATH",
            delegate=name,
            guidance=INSTALL_GUIDANCE,
        )
    logger.debug("Found %s at %s", name, path)
    return path


def run_delegate(path: str, args: Sequence[str]) -> int:
    """Run the delegate with inherited stdio and wait for it to finish.

    Args:
        path: Executable path from find_delegate
        args: Rewritten arguments, without the program name

    Returns:
        The delegate's exit status. A delegate killed by a signal is reported
        as 128 + signal number, the way shells do.

    Raises:
        DelegateExecutionError: If the executable cannot be started
    """
    try:
        completed = subprocess.run([path, *args], check=False)
    except OSError as e:
        raise DelegateExecutionError(
            f"failed to run {path}: {e.strerror or e}",
            delegate=path,
            reason=e.strerror or str(e),
        ) from e

    returncode = completed.returncode
    if returncode < 0:
        logger.debug("%s terminated by signal %d", path, -returncode)
        return 128 - returncode

    logger.debug("%s exited with status %d", path, returncode)
    return returncode
