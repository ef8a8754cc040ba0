"""``ccinit-plugins`` command: install plugins on first run, then exec COMMAND."""

from __future__ import annotations

import sys

import click

from .. import __version__
from ..constants import DEFAULT_MARKETPLACE, DEFAULT_PLUGIN
from ..errors import CCInitError
from ..logging import set_debug
from ..plugins import exec_command, verify_plugin_status
from . import PASSTHROUGH_CONTEXT, fail


@click.command(context_settings=PASSTHROUGH_CONTEXT)
@click.option("--debug", "-d", is_flag=True, help="Verbose diagnostics on stderr")
@click.option(
    "--marketplace",
    envvar="CCINIT_MARKETPLACE",
    default=DEFAULT_MARKETPLACE,
    show_default=True,
    help="Marketplace registered on first run",
)
@click.option(
    "--plugin",
    envvar="CCINIT_PLUGIN",
    default=DEFAULT_PLUGIN,
    show_default=True,
    help="Plugin installed on first run",
)
@click.argument("command", nargs=-1, type=click.UNPROCESSED)
@click.version_option(version=__version__, prog_name="ccinit-plugins")
def install_plugins(
    debug: bool,
    marketplace: str,
    plugin: str,
    command: tuple[str, ...],
) -> None:
    """Install required Claude plugins if needed, then exec COMMAND unchanged."""
    if debug:
        set_debug(True)
    try:
        verify_plugin_status(marketplace, plugin)
        sys.exit(exec_command(command))
    except CCInitError as e:
        fail(e)


if __name__ == "__main__":  # pragma: no cover
    install_plugins()
