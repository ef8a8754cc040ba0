"""Container health checks for ccinit.

Working-directory problems are fatal (WorkdirError). Claude availability and
ownership repair are advisory: they print a status line and never stop the
session.
"""

from __future__ import annotations

import os
from pathlib import Path

from rich.console import Console

from .claude_config import is_claude_command
from .constants import CLAUDE_COMMAND, WORKDIR_PROBE_NAME
from .errors import WorkdirError
from .logging import get_logger
from .run_config import RunConfig
from .system import chown_recursive, which

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)
logger = get_logger(__name__)


def enter_working_directory(workdir: Path) -> None:
    """Change into the working directory before anything is provisioned.

    Raises:
        WorkdirError: If the directory is missing or cannot be entered.
    """
    if not workdir.is_dir():
        raise WorkdirError(f"Working directory does not exist: {workdir}")
    try:
        os.chdir(workdir)
    except OSError as e:
        raise WorkdirError(f"Cannot enter working directory {workdir}: {e}") from e


def check_working_directory(workdir: Path) -> None:
    """Verify the working directory exists and is writable.

    Writability is probed by creating and removing a marker file.

    Raises:
        WorkdirError: On a missing or read-only working directory.
    """
    if not workdir.is_dir():
        raise WorkdirError(f"Working directory does not exist: {workdir}")

    probe = workdir / WORKDIR_PROBE_NAME
    try:
        probe.touch()
    except OSError as e:
        raise WorkdirError(f"Cannot write to working directory: {workdir}") from e
    probe.unlink(missing_ok=True)
    console.print("✅ Working directory is accessible")


def check_claude_availability(config: RunConfig) -> bool:
    """Report whether ``claude`` resolves on PATH (Claude commands only).

    Returns:
        True if available or not relevant, False if missing.
    """
    if not is_claude_command(config.command):
        return True
    if which(CLAUDE_COMMAND, path=config.child_path):
        console.print("✅ Claude command is available")
        return True
    err_console.print(
        "[yellow]⚠️  Claude command not found - this might indicate installation issues[/yellow]"
    )
    return False


def fix_file_ownership(config: RunConfig) -> None:
    """Hand the Claude state directories to the host user (best-effort)."""
    if not config.claude_dir.is_dir():
        return
    uid, gid = config.identity.uid, config.identity.gid
    for path in (config.claude_dir, config.workspace_claude_dir):
        if not chown_recursive(path, uid, gid):
            logger.debug("Ownership not fixed for %s", path)
    console.print("✅ Fixed ownership for .claude directory")


def run_health_checks(config: RunConfig) -> None:
    """Run all checks in order; only the working-directory check can fail."""
    console.print("🏥 Running container health checks...")
    logger.debug("Checking workdir %s", config.workdir)
    check_working_directory(config.workdir)
    check_claude_availability(config)
    fix_file_ownership(config)
    console.print()
