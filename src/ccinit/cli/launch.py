"""``ccinit-run`` command: start the Claude Code container for the current project."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..constants import DEFAULT_IMAGE
from ..docker import ensure_docker_running
from ..errors import CCInitError
from ..identity import current_username
from ..launcher import (
    LaunchSpec,
    build_docker_run_cmd,
    get_container_name,
    load_dot_env,
    validate_project_dir,
)
from ..logging import get_logger, set_debug
from . import PASSTHROUGH_CONTEXT, fail

console = Console(highlight=False)
logger = get_logger(__name__)


@click.command(context_settings=PASSTHROUGH_CONTEXT)
@click.option("--debug", "-d", is_flag=True, help="Verbose diagnostics on stderr")
@click.option(
    "--image",
    envvar="CCINIT_IMAGE",
    default=DEFAULT_IMAGE,
    show_default=True,
    help="Container image to run",
)
@click.argument("command", nargs=-1, type=click.UNPROCESSED)
@click.version_option(version=__version__, prog_name="ccinit-run")
def launch(debug: bool, image: str, command: tuple[str, ...]) -> None:
    """Run COMMAND in the Claude Code container, mounting the current directory.

    Without COMMAND the image's default command (bash) is started.
    """
    if debug:
        set_debug(True)

    try:
        project_dir = validate_project_dir(Path.cwd())
        spec = LaunchSpec(
            project_dir=project_dir,
            username=current_username(),
            uid=os.getuid(),
            gid=os.getgid(),
            image=image,
            interactive=sys.stdin.isatty() and sys.stdout.isatty(),
        )
        container_name = get_container_name()

        console.print("=== Claude Code Docker Wrapper ===")
        console.print(f"Image: {escape(spec.image)}")
        console.print(f"Container: {container_name}")
        console.print(f"User: {escape(spec.username)} (UID:{spec.uid}, GID:{spec.gid})")
        console.print(f"Directory: {escape(str(project_dir))}")

        dot_env = load_dot_env(project_dir)
        if dot_env:
            console.print("Loading environment variables from .env file...")
            for key in dot_env:
                console.print(f"  {escape(key)}")

        ensure_docker_running()
        cmd = build_docker_run_cmd(
            spec, command, dot_env=dot_env, container_name=container_name
        )
    except CCInitError as e:
        fail(e)

    console.print("Starting container...")
    console.print(
        "Interactive mode: enabled"
        if spec.interactive
        else "Interactive mode: disabled (piped input/output)"
    )
    if command:
        console.print(f"Executing: {escape(' '.join(command))}")
    elif spec.interactive:
        console.print("Starting interactive bash shell...")
    else:
        console.print("Starting bash shell (non-interactive)...")
    logger.debug("docker argv: %s", cmd)

    sys.stdout.flush()
    try:
        os.execvp(cmd[0], cmd)
    except OSError as e:
        fail(e)


if __name__ == "__main__":  # pragma: no cover
    launch()
