"""Privilege drop and process handoff for ccinit.

The last step of a session replaces the initializer's process image with
the target command, running as the host UID/GID with no supplementary
groups. Nothing in ccinit runs after ``execute``.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import NoReturn

from rich.console import Console
from rich.markup import escape

from .errors import HandoffError
from .logging import get_logger
from .run_config import RunConfig

console = Console(highlight=False)
logger = get_logger(__name__)


@dataclass(frozen=True)
class Handoff:
    """Everything needed to exec the final process."""

    argv: tuple[str, ...]
    env: Mapping[str, str] = field(compare=False)
    uid: int
    gid: int
    cwd: Path | None = None  # None = stay in the current directory
    interactive: bool = False


def build_handoff(config: RunConfig, env: Mapping[str, str]) -> Handoff:
    """Describe the final exec for this session.

    No command starts an interactive shell in the user's home directory.
    A command is routed through the plugin wrapper, which execs it in turn.
    """
    uid, gid = config.identity.uid, config.identity.gid
    if not config.command:
        return Handoff(
            argv=(config.shell,),
            env=dict(env),
            uid=uid,
            gid=gid,
            cwd=config.home,
            interactive=True,
        )
    return Handoff(
        argv=(*config.plugin_wrapper, *config.command),
        env=dict(env),
        uid=uid,
        gid=gid,
    )


def drop_privileges(uid: int, gid: int) -> None:
    """Switch to uid/gid with an empty supplementary group list.

    Order matters: groups and GID can only be changed while still root.

    Raises:
        HandoffError: If any of the three calls is refused.
    """
    try:
        os.setgroups([])
        os.setgid(gid)
        os.setuid(uid)
    except (OSError, OverflowError) as e:
        raise HandoffError(f"Cannot drop privileges to {uid}:{gid}: {e}") from e
    logger.debug("Privileges dropped to %d:%d", uid, gid)


def execute(handoff: Handoff, username: str) -> NoReturn:
    """Replace the current process with the handoff target.

    Raises:
        HandoffError: If the directory change, privilege drop or exec fails.
    """
    if handoff.interactive:
        console.print(f"Starting interactive shell as {escape(username)}")
    else:
        console.print(
            f"Executing command as {escape(username)}: {escape(' '.join(handoff.argv))}"
        )

    if handoff.cwd is not None:
        try:
            os.chdir(handoff.cwd)
        except OSError as e:
            raise HandoffError(f"Cannot enter {handoff.cwd}: {e}") from e

    drop_privileges(handoff.uid, handoff.gid)

    logger.debug("exec %s", handoff.argv)
    # exec discards Python-level buffers
    sys.stdout.flush()
    sys.stderr.flush()
    try:
        os.execvpe(handoff.argv[0], list(handoff.argv), dict(handoff.env))
    except OSError as e:
        raise HandoffError(f"Cannot execute {handoff.argv[0]}: {e}") from e
