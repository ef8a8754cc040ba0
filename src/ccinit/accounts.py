"""System user provisioning for ccinit.

Mirrors the host user inside the container. The account is never updated in
place: any existing user and group with the host user's name are removed and
recreated so UID and GID always match the current host identity.
"""

from __future__ import annotations

import grp
import pwd
from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape

from .constants import LOGIN_SHELL
from .errors import CommandError
from .identity import HostIdentity
from .logging import get_logger
from .system import safe_run

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)
logger = get_logger(__name__)


@dataclass(frozen=True)
class ProvisionResult:
    """Outcome of provision_user."""

    created: bool

    @property
    def degraded(self) -> bool:
        """True when running in UID-only mode (no passwd entry)."""
        return not self.created


def user_exists(name: str) -> bool:
    try:
        pwd.getpwnam(name)
    except KeyError:
        return False
    return True


def group_exists(name: str) -> bool:
    try:
        grp.getgrnam(name)
    except KeyError:
        return False
    return True


def account_matches(identity: HostIdentity) -> bool:
    """True if the passwd entry for the username carries the target UID and GID."""
    try:
        entry = pwd.getpwnam(identity.username)
    except KeyError:
        return False
    return entry.pw_uid == identity.uid and entry.pw_gid == identity.gid


def _run_ignoring_errors(cmd: list[str]) -> bool:
    """Run a cleanup command; failures are logged and swallowed."""
    try:
        result = safe_run(cmd)
    except CommandError as e:
        logger.debug("%s failed: %s", cmd[0], e)
        return False
    if result.returncode != 0:
        logger.debug("%s exit=%d: %s", cmd[0], result.returncode, result.stderr.strip())
        return False
    return True


def cleanup_existing_user(name: str) -> None:
    """Remove a stale user and group with this name (best-effort).

    Deletion can fail, e.g. when the user still owns running processes; the
    subsequent useradd then reports the conflict.
    """
    if user_exists(name):
        _run_ignoring_errors(["userdel", "-f", name])
    if group_exists(name):
        _run_ignoring_errors(["groupdel", name])


def create_group(name: str, gid: int) -> bool:
    """Create the group with the given GID.

    Falls back to an OS-assigned GID when the requested one is taken.

    Returns:
        True if a group named ``name`` was created by either attempt.
    """
    if _run_ignoring_errors(["groupadd", "-g", str(gid), name]):
        return True
    logger.debug("GID %d unavailable, creating %s with OS-assigned GID", gid, name)
    return _run_ignoring_errors(["groupadd", "-f", name])


def create_user(identity: HostIdentity, shell: str = LOGIN_SHELL) -> bool:
    """Create the account with home directory, UID, primary GID and shell."""
    return _run_ignoring_errors(
        [
            "useradd",
            "-m",
            "-u",
            str(identity.uid),
            "-g",
            str(identity.gid),
            "-s",
            shell,
            identity.username,
        ]
    )


def provision_user(identity: HostIdentity, shell: str = LOGIN_SHELL) -> ProvisionResult:
    """Ensure exactly one OS user named after the host user exists.

    Failure to create the account is not fatal: the handoff still drops to
    the raw UID/GID without a matching /etc/passwd entry.

    Args:
        identity: Host identity to mirror.
        shell: Login shell for the new account.

    Returns:
        ProvisionResult; ``degraded`` is True when creation failed.
    """
    name = escape(identity.username)
    console.print(
        f"👤 Creating system user {name} with UID:{identity.uid} GID:{identity.gid}"
    )

    cleanup_existing_user(identity.username)
    create_group(identity.username, identity.gid)
    create_user(identity, shell)

    if account_matches(identity):
        console.print(f"✅ User {name} created successfully")
        console.print()
        return ProvisionResult(created=True)

    err_console.print(
        f"[yellow]❌ Failed to create user {name}, falling back to UID-only mode[/yellow]"
    )
    err_console.print(f"👤 Using direct UID/GID permission mapping: {identity.owner}")
    console.print()
    return ProvisionResult(created=False)
