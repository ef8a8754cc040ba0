"""Host identity loading for ccinit.

The host passes its user name, UID, GID and working directory into the
container as HOST_* environment variables. They are read exactly once, at
the CLI layer, into an immutable HostIdentity.
"""

from __future__ import annotations

import os
import pwd
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .constants import DEFAULT_GID, DEFAULT_UID, DEFAULT_WORKDIR
from .errors import ConfigError

ENV_USER = "HOST_USER"
ENV_UID = "HOST_UID"
ENV_GID = "HOST_GID"
ENV_WORKDIR = "HOST_WORKDIR"


@dataclass(frozen=True)
class HostIdentity:
    """Identity of the host user to mirror inside the container."""

    username: str
    uid: int = DEFAULT_UID
    gid: int = DEFAULT_GID
    workdir: Path = Path(DEFAULT_WORKDIR)

    @property
    def owner(self) -> str:
        """``uid:gid`` string as accepted by chown(1)."""
        return f"{self.uid}:{self.gid}"


def current_username() -> str:
    """Name of the effective user (``whoami`` equivalent).

    Raises:
        ConfigError: If the effective UID has no passwd entry.
    """
    uid = os.geteuid()
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError as e:
        raise ConfigError(
            f"Unable to resolve username for uid={uid}. Set {ENV_USER} explicitly."
        ) from e


def _parse_id(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{key} must be numeric, got {raw!r}") from e


def load_identity(environ: Mapping[str, str]) -> HostIdentity:
    """Build a HostIdentity from HOST_* variables, applying defaults.

    Unset and empty values fall back to the defaults. IDs are converted to
    integers but their range is not checked; the OS rejects bad values later.

    Args:
        environ: Environment mapping (normally ``os.environ``).

    Returns:
        Frozen HostIdentity.

    Raises:
        ConfigError: If HOST_UID/HOST_GID is not an integer, or the default
            username cannot be resolved.
    """
    username = environ.get(ENV_USER, "").strip() or current_username()
    workdir = environ.get(ENV_WORKDIR, "").strip() or DEFAULT_WORKDIR
    return HostIdentity(
        username=username,
        uid=_parse_id(environ, ENV_UID, DEFAULT_UID),
        gid=_parse_id(environ, ENV_GID, DEFAULT_GID),
        workdir=Path(workdir),
    )
