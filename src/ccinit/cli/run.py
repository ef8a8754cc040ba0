"""Session workflow for ccinit.

Runs the container initialization steps in their fixed order and ends by
replacing the process with the target command.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import NoReturn

from rich.console import Console
from rich.markup import escape

from ..accounts import provision_user
from ..claude_config import handle_claude_verification
from ..environment import build_child_env, setup_user_environment
from ..handoff import build_handoff, execute
from ..health import enter_working_directory, run_health_checks
from ..identity import HostIdentity
from ..logging import get_logger
from ..run_config import RunConfig

console = Console(highlight=False)
logger = get_logger(__name__)

BANNER_RULE = "=" * 78


def print_startup_banner() -> None:
    console.print(BANNER_RULE)
    console.print("Claude Code Docker Container Entry Point")
    console.print(BANNER_RULE)


def print_identity(identity: HostIdentity) -> None:
    console.print(
        f"Host User: {escape(identity.username)} (UID:{identity.uid}, GID:{identity.gid})"
    )
    console.print(f"Working Directory: {escape(str(identity.workdir))}")
    console.print()


def run_session(config: RunConfig, parent_env: Mapping[str, str]) -> NoReturn:
    """Initialize the container session and hand off to the target command.

    Steps:
        1. Enter the working directory (fatal if missing)
        2. Recreate the system user for the host identity
        3. Claude configuration (Claude commands only)
        4. Health checks and ownership repair
        5. Home directory and .bashrc
        6. Exec the command (or a shell) as the host user

    Args:
        config: Session configuration.
        parent_env: Environment to project into the child process.

    Raises:
        CCInitError: On any fatal condition; nothing has been exec'd.
    """
    logger.debug("Session config: %s", config)
    print_startup_banner()
    print_identity(config.identity)

    enter_working_directory(config.workdir)
    result = provision_user(config.identity, config.shell)
    if result.degraded:
        logger.debug("Continuing without passwd entry for %s", config.identity.username)

    handle_claude_verification(config)
    run_health_checks(config)
    setup_user_environment(config)

    name = escape(config.identity.username)
    console.print(f"🔄 Switching to user: {name}")
    console.print(f"🚀 Container is ready - executing command as {name}...")
    console.print()

    env = build_child_env(config, parent_env)
    execute(build_handoff(config, env), config.identity.username)
