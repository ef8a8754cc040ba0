"""User environment preparation for ccinit.

Builds the environment the target command runs with and makes sure the
provisioned user's home directory is usable.
"""

from __future__ import annotations

from collections.abc import Mapping

from rich.console import Console
from rich.markup import escape

from .constants import BASHRC_TEMPLATE, IDENTITY_ENV_KEYS
from .logging import get_logger
from .run_config import RunConfig
from .system import chown, chown_recursive

console = Console(highlight=False)
logger = get_logger(__name__)


def identity_env(config: RunConfig) -> dict[str, str]:
    """The five identity variables, derived only from the host identity."""
    username = config.identity.username
    return {
        "USER": username,
        "LOGNAME": username,
        "HOME": str(config.home),
        "SHELL": config.shell,
        "PATH": config.child_path,
    }


def build_child_env(config: RunConfig, parent_env: Mapping[str, str]) -> dict[str, str]:
    """Environment for the handed-off process.

    Every parent variable is carried over verbatim except USER, LOGNAME,
    HOME, SHELL and PATH, which always come from the host identity.
    """
    env = {key: value for key, value in parent_env.items() if key not in IDENTITY_ENV_KEYS}
    env.update(identity_env(config))
    return env


def setup_user_environment(config: RunConfig) -> None:
    """Ensure the home directory exists, is owned by the user and has a .bashrc."""
    console.print(f"🔐 Setting up complete user environment for {escape(config.identity.username)}")
    uid, gid = config.identity.uid, config.identity.gid

    config.home.mkdir(parents=True, exist_ok=True)
    if not chown_recursive(config.home, uid, gid):
        logger.warning("Could not change ownership of %s to %d:%d", config.home, uid, gid)

    if not config.bashrc.exists():
        config.bashrc.write_text(BASHRC_TEMPLATE, encoding="utf-8")
        chown(config.bashrc, uid, gid)
        logger.debug("Created %s", config.bashrc)
