"""OS command helpers for ccinit.

Thin wrappers around the system binaries the initializer drives
(useradd, groupadd, chown, claude), with consistent error mapping and
debug logging.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

from .constants import ACCOUNT_COMMAND_TIMEOUT, CHOWN_TIMEOUT
from .errors import CommandError, CommandNotFoundError, CommandTimeoutError
from .logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

logger = get_logger(__name__)


def safe_run(
    cmd: Sequence[str],
    *,
    timeout: int = ACCOUNT_COMMAND_TIMEOUT,
    capture_output: bool = True,
    check: bool = False,
    env: Mapping[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a system command with consistent error handling.

    Args:
        cmd: Command and arguments.
        timeout: Command timeout in seconds.
        capture_output: Capture stdout/stderr if True.
        check: Raise CalledProcessError on non-zero exit.
        env: Environment for the child (inherit when None).

    Returns:
        CompletedProcess with command result.

    Raises:
        CommandNotFoundError: If the binary is not found.
        CommandTimeoutError: If the command times out.
        subprocess.CalledProcessError: If check=True and command fails.
    """
    cmd_str = " ".join(cmd)
    logger.debug("Running: %s", cmd_str)
    try:
        result = subprocess.run(
            list(cmd),
            capture_output=capture_output,
            text=True,
            check=check,
            timeout=timeout,
            env=dict(env) if env is not None else None,
        )
        logger.debug("Command completed: exit=%d", result.returncode)
        return result
    except FileNotFoundError as e:
        logger.debug("Command not found: %s", cmd[0])
        raise CommandNotFoundError(f"{cmd[0]} not found in PATH. Command: {cmd_str}") from e
    except subprocess.TimeoutExpired as e:
        logger.debug("Command timed out after %ds: %s", timeout, cmd_str)
        raise CommandTimeoutError(
            f"Command timed out after {timeout}s. Command: {cmd_str}"
        ) from e


def which(name: str, path: str | None = None) -> str | None:
    """Resolve an executable on PATH (``command -v`` equivalent)."""
    return shutil.which(name, path=path)


def chown(path: Path, uid: int, gid: int) -> None:
    """Change ownership of a single path (errors propagate)."""
    os.chown(path, uid, gid)


def chown_recursive(path: Path, uid: int, gid: int) -> bool:
    """Recursively change ownership of a path, best-effort.

    Returns:
        True if chown -R succeeded, False otherwise (never raises).
    """
    try:
        result = safe_run(["chown", "-R", f"{uid}:{gid}", str(path)], timeout=CHOWN_TIMEOUT)
    except CommandError as e:
        logger.debug("chown -R %s failed: %s", path, e)
        return False
    if result.returncode != 0:
        logger.debug("chown -R %s exit=%d: %s", path, result.returncode, result.stderr.strip())
        return False
    return True
