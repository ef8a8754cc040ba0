"""Docker operations for the ccinit host launcher.

Only what the launcher needs before it execs ``docker run``: a guarded
subprocess wrapper and a daemon liveness probe.
"""

from __future__ import annotations

import subprocess
from typing import TYPE_CHECKING

from .constants import DOCKER_COMMAND_TIMEOUT
from .errors import DockerNotFoundError, DockerNotRunningError
from .logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = get_logger(__name__)


def safe_docker_run(
    cmd: Sequence[str],
    *,
    timeout: int = DOCKER_COMMAND_TIMEOUT,
) -> subprocess.CompletedProcess[str]:
    """Run a short Docker command, capturing its output.

    Raises:
        DockerNotFoundError: If docker is not installed.
        DockerNotRunningError: If the command times out (daemon hung).
    """
    cmd_str = " ".join(cmd[:4]) + ("..." if len(cmd) > 4 else "")
    logger.debug("Running Docker command: %s", cmd_str)
    try:
        result = subprocess.run(
            list(cmd), capture_output=True, text=True, check=False, timeout=timeout
        )
    except FileNotFoundError as e:
        raise DockerNotFoundError(f"Docker not found in PATH. Command: {cmd_str}") from e
    except subprocess.TimeoutExpired as e:
        raise DockerNotRunningError(
            f"Docker did not answer within {timeout}s. Command: {cmd_str}"
        ) from e
    logger.debug("Docker command completed: exit=%d", result.returncode)
    return result


def ensure_docker_running() -> None:
    """Check the Docker daemon answers ``docker info``.

    Raises:
        DockerNotFoundError: If docker is not installed.
        DockerNotRunningError: If the daemon is down or unresponsive.
    """
    result = safe_docker_run(["docker", "info"])
    if result.returncode != 0:
        raise DockerNotRunningError("Docker is not running. Start Docker and try again.")
