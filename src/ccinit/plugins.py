"""First-run plugin installation for ccinit.

Runs as the provisioned user, between the privilege drop and the target
command: registers the bundled marketplace and installs its plugin the
first time a user's Claude state has no marketplace, then execs the
original command unchanged.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from enum import Enum

from rich.console import Console
from rich.markup import escape

from .constants import (
    CLAUDE_COMMAND,
    DEFAULT_MARKETPLACE,
    DEFAULT_PLUGIN,
    NO_MARKETPLACES_MARKER,
    PLUGIN_COMMAND_TIMEOUT,
)
from .errors import CommandError, CommandNotFoundError, HandoffError, PluginError
from .logging import get_logger
from .system import safe_run

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)
logger = get_logger(__name__)


class MarketplaceStatus(str, Enum):
    """Result of inspecting ``claude plugin marketplace list``."""

    FIRST_RUN_NEEDED = "first_run_needed"
    ALREADY_CONFIGURED = "already_configured"


def check_marketplace_status(claude: str = CLAUDE_COMMAND) -> MarketplaceStatus:
    """Ask the Claude CLI whether any marketplace is registered.

    The answer is read from the combined stdout/stderr text; the exit code is
    not meaningful here.

    Raises:
        CommandNotFoundError: If the claude binary is missing.
        CommandTimeoutError: If the query hangs.
    """
    result = safe_run(
        [claude, "plugin", "marketplace", "list"], timeout=PLUGIN_COMMAND_TIMEOUT
    )
    output = f"{result.stdout or ''}{result.stderr or ''}"
    if NO_MARKETPLACES_MARKER in output:
        return MarketplaceStatus.FIRST_RUN_NEEDED
    return MarketplaceStatus.ALREADY_CONFIGURED


def _run_plugin_step(cmd: list[str]) -> None:
    try:
        result = safe_run(cmd, timeout=PLUGIN_COMMAND_TIMEOUT, capture_output=False)
    except CommandError as e:
        raise PluginError(str(e)) from e
    if result.returncode != 0:
        raise PluginError(f"'{' '.join(cmd)}' failed with exit code {result.returncode}")


def install_plugins_on_first_run(
    marketplace: str = DEFAULT_MARKETPLACE,
    plugin: str = DEFAULT_PLUGIN,
    claude: str = CLAUDE_COMMAND,
) -> None:
    """Register the marketplace and install the plugin.

    Output of both steps goes straight to the terminal.

    Raises:
        PluginError: If either step fails.
    """
    console.print("⚠️  First-time setup: Installing required plugins...")
    _run_plugin_step([claude, "plugin", "marketplace", "add", marketplace])
    _run_plugin_step([claude, "plugin", "install", plugin])
    console.print("✅ Plugin installation completed")


def verify_plugin_status(
    marketplace: str = DEFAULT_MARKETPLACE,
    plugin: str = DEFAULT_PLUGIN,
    claude: str = CLAUDE_COMMAND,
) -> MarketplaceStatus | None:
    """Install plugins if no marketplace is configured yet.

    Returns:
        The observed status, or None when the Claude CLI is unavailable and
        plugin setup was skipped.

    Raises:
        PluginError: If installation was needed and failed.
    """
    try:
        status = check_marketplace_status(claude)
    except CommandNotFoundError:
        err_console.print(
            f"[yellow]⚠️  {escape(claude)} not found - skipping plugin installation[/yellow]"
        )
        return None
    except CommandError as e:
        raise PluginError(f"Cannot query plugin marketplaces: {e}") from e

    logger.debug("Marketplace status: %s", status.value)
    if status is MarketplaceStatus.FIRST_RUN_NEEDED:
        install_plugins_on_first_run(marketplace, plugin, claude)
    else:
        console.print("✅ Plugins already installed")
    return status


def exec_command(command: Sequence[str]) -> int:
    """Replace this process with ``command``; argv is passed unchanged.

    Returns:
        0 when there is nothing to run. Otherwise never returns.

    Raises:
        HandoffError: If the command cannot be executed.
    """
    if not command:
        return 0
    sys.stdout.flush()
    sys.stderr.flush()
    try:
        os.execvp(command[0], list(command))
    except OSError as e:
        raise HandoffError(f"Cannot execute {command[0]}: {e}") from e
    return 0  # pragma: no cover
