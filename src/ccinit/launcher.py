"""Host-side launcher for the Claude Code container.

Builds the ``docker run`` invocation that starts the image with the host
user's identity, mounts the current project and its Claude state, and
forwards ``.env`` variables into the container.

Mount layout:
    <cwd>                 -> /workspace
    <cwd>/.claude         -> /workspace/.claude
    <cwd>/.claude-system  -> /home/<user>/.claude
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

from .constants import (
    CONTAINER_NAME_PREFIX,
    CONTAINER_WORKDIR,
    DEFAULT_IMAGE,
    DOT_ENV_NAME,
    HOME_ROOT,
)
from .errors import WorkdirError
from .identity import ENV_GID, ENV_UID, ENV_USER, ENV_WORKDIR


@dataclass(frozen=True)
class LaunchSpec:
    """Inputs for one container launch."""

    project_dir: Path
    username: str
    uid: int
    gid: int
    image: str = DEFAULT_IMAGE
    interactive: bool = False


def get_container_name(now_ns: int | None = None) -> str:
    """Unique container name: ``claude-code-<seconds>-<nanoseconds>``."""
    ns = time.time_ns() if now_ns is None else now_ns
    seconds, nanos = divmod(ns, 1_000_000_000)
    return f"{CONTAINER_NAME_PREFIX}-{seconds}-{nanos:09d}"


def validate_project_dir(project_dir: Path) -> Path:
    """Ensure the directory to mount is writable.

    Raises:
        WorkdirError: If it is not.
    """
    if not os.access(project_dir, os.W_OK):
        raise WorkdirError(f"Current directory is not writable: {project_dir}")
    return project_dir


def load_dot_env(project_dir: Path) -> dict[str, str]:
    """Variables from ``<project_dir>/.env`` with non-empty values.

    Returns:
        Ordered mapping; empty when the file does not exist.
    """
    env_file = project_dir / DOT_ENV_NAME
    if not env_file.is_file():
        return {}
    values = dotenv_values(env_file)
    return {key: value.strip() for key, value in values.items() if key and value and value.strip()}


def _env_args(env: dict[str, str]) -> list[str]:
    args: list[str] = []
    for key, value in env.items():
        args.extend(["--env", f"{key}={value}"])
    return args


def build_docker_run_cmd(
    spec: LaunchSpec,
    command: tuple[str, ...] | list[str] = (),
    *,
    dot_env: dict[str, str] | None = None,
    container_name: str | None = None,
) -> list[str]:
    """Assemble the full ``docker run`` argv.

    Arguments after the image are forwarded to the container entrypoint;
    none means the image's default command.
    """
    project = str(spec.project_dir)
    home_claude = f"{HOME_ROOT}/{spec.username}/.claude"

    cmd = ["docker", "run"]
    if spec.interactive:
        cmd.append("-it")
    cmd.extend(
        [
            "--rm",
            "--name",
            container_name or get_container_name(),
            "--network",
            "host",
        ]
    )
    cmd.extend(
        _env_args(
            {
                ENV_USER: spec.username,
                ENV_UID: str(spec.uid),
                ENV_GID: str(spec.gid),
                ENV_WORKDIR: CONTAINER_WORKDIR,
            }
        )
    )
    cmd.extend(_env_args(dot_env or {}))
    cmd.extend(
        [
            "--volume",
            f"{project}:{CONTAINER_WORKDIR}",
            "--volume",
            f"{project}/.claude:{CONTAINER_WORKDIR}/.claude",
            "--volume",
            f"{project}/.claude-system:{home_claude}",
            "--workdir",
            CONTAINER_WORKDIR,
            spec.image,
        ]
    )
    cmd.extend(command)
    return cmd
