"""CLI package for ccinit.

This package contains the console entry points:
- cli: container entrypoint (``ccinit``)
- plugins: first-run plugin wrapper (``ccinit-plugins``)
- launch: host-side ``docker run`` launcher (``ccinit-run``)
- run: the session workflow behind ``ccinit``

Every command accepts an arbitrary trailing command line. Options are only
recognized before the first command word; everything after it is passed
through untouched, so ``ccinit claude --help`` reaches Claude.
"""

from __future__ import annotations

import os
import sys
from typing import NoReturn

import click
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..constants import DEFAULT_CLAUDE_CONFIG, HOME_ROOT, PLUGIN_WRAPPER
from ..errors import CCInitError
from ..identity import load_identity
from ..logging import get_logger, set_debug
from ..run_config import RunConfig

err_console = Console(stderr=True, highlight=False)
logger = get_logger(__name__)

PASSTHROUGH_CONTEXT = {
    "ignore_unknown_options": True,
    "allow_interspersed_args": False,
}


def fail(error: Exception) -> NoReturn:
    """Report a fatal error and exit 1."""
    logger.debug("Fatal: %r", error)
    err_console.print(f"[red]❌ {escape(str(error))}[/red]")
    sys.exit(1)


@click.command(context_settings=PASSTHROUGH_CONTEXT)
@click.option("--debug", "-d", is_flag=True, help="Verbose diagnostics on stderr")
@click.option(
    "--default-config",
    envvar="CCINIT_DEFAULT_CONFIG",
    default=DEFAULT_CLAUDE_CONFIG,
    show_default=True,
    help="Packaged default claude.json",
)
@click.option(
    "--project-config",
    envvar="CCINIT_PROJECT_CONFIG",
    help="Project claude.json override [default: <workdir>/claude.json]",
)
@click.option(
    "--plugin-wrapper",
    envvar="CCINIT_PLUGIN_WRAPPER",
    default=PLUGIN_WRAPPER,
    show_default=True,
    help="Command that installs plugins, then execs the target",
)
@click.option(
    "--skip-plugins",
    envvar="CCINIT_SKIP_PLUGINS",
    is_flag=True,
    help="Exec COMMAND directly, without the plugin wrapper",
)
@click.option(
    "--home-root",
    envvar="CCINIT_HOME_ROOT",
    default=HOME_ROOT,
    show_default=True,
    help="Parent directory of user homes",
)
@click.argument("command", nargs=-1, type=click.UNPROCESSED)
@click.version_option(version=__version__, prog_name="ccinit")
def cli(
    debug: bool,
    default_config: str,
    project_config: str | None,
    plugin_wrapper: str,
    skip_plugins: bool,
    home_root: str,
    command: tuple[str, ...],
) -> None:
    """ccinit - Claude Code container entrypoint.

    Mirrors the host user (HOST_USER, HOST_UID, HOST_GID, HOST_WORKDIR)
    inside the container, prepares Claude configuration and runs COMMAND
    as that user. Without COMMAND an interactive shell is started.
    """
    if debug:
        set_debug(True)

    # Lazy import: run pulls in every workflow module
    from .run import run_session

    try:
        identity = load_identity(os.environ)
        config = RunConfig.from_cli(
            identity,
            command,
            default_config=default_config,
            project_config=project_config,
            plugin_wrapper=plugin_wrapper,
            skip_plugins=skip_plugins,
            home_root=home_root,
            debug=debug,
        )
        run_session(config, os.environ)
    except (CCInitError, OSError) as e:
        fail(e)


if __name__ == "__main__":  # pragma: no cover
    cli()
