"""Diagnostic logging for ccinit.

Two output channels are used throughout the package:
- console.print() for the emoji-prefixed status lines a container user sees
  (Rich formatting, stdout; warnings and errors on a stderr console)
- the logging module for diagnostics (subprocess argv, exit codes,
  suppressed cleanup errors), written to stderr under the ``ccinit`` logger

Usage:
    from ccinit.logging import get_logger
    logger = get_logger(__name__)
    logger.debug("userdel exit=%d", result.returncode)

Diagnostics are hidden unless enabled via:
    - CLI flag: ccinit --debug
    - Environment: CCINIT_DEBUG=1
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

ROOT_LOGGER = "ccinit"
DEBUG_ENV_VAR = "CCINIT_DEBUG"

LOG_FORMAT = "[%(name)s] %(levelname)s: %(message)s"
LOG_FORMAT_DEBUG = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"
DATE_FORMAT = "%H:%M:%S"

_configured = False


def debug_requested(environ: Mapping[str, str] | None = None) -> bool:
    """Return True if CCINIT_DEBUG asks for verbose diagnostics."""
    env = os.environ if environ is None else environ
    return env.get(DEBUG_ENV_VAR, "").strip().lower() in ("1", "true", "yes")


def _formatter(debug: bool) -> logging.Formatter:
    if debug:
        return logging.Formatter(LOG_FORMAT_DEBUG, datefmt=DATE_FORMAT)
    return logging.Formatter(LOG_FORMAT)


def _configure() -> None:
    """Attach the stderr handler to the package logger (once per process)."""
    global _configured
    if _configured:
        return

    debug = debug_requested()
    level = logging.DEBUG if debug else logging.WARNING

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(_formatter(debug))
        root.addHandler(handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger in the ccinit namespace.

    Args:
        name: Module name (typically __name__).

    Returns:
        Logger whose name is prefixed with ``ccinit``.
    """
    _configure()
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def set_debug(enabled: bool = True) -> None:
    """Switch diagnostics on or off at runtime (used by --debug)."""
    _configure()
    level = logging.DEBUG if enabled else logging.WARNING
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)
    for handler in root.handlers:
        handler.setLevel(level)
        handler.setFormatter(_formatter(enabled))
