"""Claude configuration initialization for ccinit.

Prepares ``~/.claude`` and ``~/.claude.json`` for the provisioned user before
a Claude command runs.

Config sources, highest priority first:
    1. project-local override (``<workdir>/claude.json``)
    2. packaged container default (``/opt/claude.json``)
    3. none (warning only)

An existing ``~/.claude.json`` is kept byte-for-byte unless a project
override is present. ``~/.claude/.claude.json`` is a separate target filled
only from the packaged default.
"""

from __future__ import annotations

import shutil
from collections.abc import Sequence
from enum import Enum
from pathlib import Path

from rich.console import Console

from .constants import CLAUDE_COMMAND, CLAUDE_SUBDIRS
from .errors import ClaudeConfigError
from .logging import get_logger
from .run_config import RunConfig
from .system import chown, which

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)
logger = get_logger(__name__)


class ConfigSource(str, Enum):
    """Where ``~/.claude.json`` came from in this run."""

    PROJECT = "project"
    DEFAULT = "default"
    EXISTING = "existing"
    NONE = "none"


def is_claude_command(command: Sequence[str]) -> bool:
    """Decide whether Claude-specific setup should run for this command.

    Only the first word is inspected, and any occurrence of ``claude`` in it
    matches (``claude``, ``/usr/local/bin/claude``, ``claude-wrapper``...).
    An empty command (interactive shell) never matches.
    """
    if not command:
        return False
    return CLAUDE_COMMAND in command[0]


def _install(source: Path, dest: Path, uid: int, gid: int) -> None:
    try:
        shutil.copyfile(source, dest)
        chown(dest, uid, gid)
    except OSError as e:
        raise ClaudeConfigError(f"Cannot install {source} as {dest}: {e}") from e
    logger.debug("Copied %s -> %s (owner %d:%d)", source, dest, uid, gid)


def setup_claude_directories(config: RunConfig) -> None:
    """Create the Claude state directories and seed ``~/.claude/.claude.json``."""
    for name in CLAUDE_SUBDIRS:
        (config.claude_dir / name).mkdir(parents=True, exist_ok=True)

    nested = config.nested_claude_json
    if not nested.is_file() and config.default_config.is_file():
        _install(config.default_config, nested, config.identity.uid, config.identity.gid)


def initialize_claude_config(config: RunConfig) -> ConfigSource:
    """Create or refresh ``~/.claude.json`` for the provisioned user.

    Returns:
        The source that determined the file's content in this run.
    """
    target = config.claude_json
    custom = config.project_config_path
    default = config.default_config
    uid, gid = config.identity.uid, config.identity.gid

    if target.is_file():
        console.print("✅ claude.json already exists")
        if custom.is_file():
            console.print("📝 Updating with custom claude.json from project directory")
            _install(custom, target, uid, gid)
            return ConfigSource.PROJECT
        return ConfigSource.EXISTING

    console.print("🔧 Initializing Claude configuration...")
    if custom.is_file():
        console.print("📝 Using custom claude.json from project directory")
        _install(custom, target, uid, gid)
        source = ConfigSource.PROJECT
    elif default.is_file():
        console.print("📝 Using default claude.json from container")
        _install(default, target, uid, gid)
        source = ConfigSource.DEFAULT
    else:
        err_console.print("[yellow]⚠️  No default claude.json found in container[/yellow]")
        return ConfigSource.NONE

    console.print("✅ claude.json initialized successfully")
    return source


def verify_claude_configuration(config: RunConfig) -> None:
    """Advisory checks: host settings present and ``claude`` on PATH."""
    if config.settings_json.is_file():
        console.print("✅ Claude configuration available from host")
    else:
        err_console.print(
            "[yellow]⚠️  No Claude settings found - "
            "please run Claude on host first to configure[/yellow]"
        )

    if which(CLAUDE_COMMAND, path=config.child_path):
        console.print("✅ Claude command is available")
    else:
        err_console.print(
            "[yellow]⚠️  Claude command not found - installation may be incomplete[/yellow]"
        )


def handle_claude_verification(config: RunConfig) -> ConfigSource | None:
    """Run Claude setup for Claude commands; skip for anything else.

    Returns:
        The ConfigSource used, or None when setup was skipped.
    """
    if not is_claude_command(config.command):
        console.print("ℹ️  Skipping Claude verification (non-Claude command)")
        console.print()
        return None

    console.print("🔧 Verifying Claude configuration...")
    logger.debug("Claude command detected: %s", config.command[0])
    setup_claude_directories(config)
    source = initialize_claude_config(config)
    verify_claude_configuration(config)
    console.print()
    return source
