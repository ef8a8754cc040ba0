"""Unified exception hierarchy for ccinit.

All custom exceptions inherit from CCInitError for consistent error handling.
The CLI catches these, prints a one-line diagnostic and exits nonzero.
Advisory and degraded conditions are never raised; they are reported as
warnings at the call site.

Dependency direction:
    This module has NO internal dependencies (leaf module).
    It may be imported by: all other ccinit modules.
    It should NOT import from any other ccinit modules.
"""

from __future__ import annotations


class CCInitError(Exception):
    """Base exception for all ccinit errors.

    Every fatal condition in the session workflow is a subclass of this.
    """


class ConfigError(CCInitError):
    """Configuration-related errors.

    Examples:
        - Non-numeric HOST_UID / HOST_GID
        - Effective user has no passwd entry and HOST_USER is unset
    """


class ClaudeConfigError(CCInitError):
    """Raised when a Claude config file cannot be copied into place or chowned."""


class WorkdirError(CCInitError):
    """Working directory is missing, cannot be entered, or is not writable."""


class CommandError(CCInitError):
    """External command errors.

    Base class for failures to run a helper binary.
    """


class CommandNotFoundError(CommandError):
    """Raised when a helper binary is not installed or not in PATH."""


class CommandTimeoutError(CommandError):
    """Raised when a helper command times out."""


class PluginError(CCInitError):
    """Raised when marketplace registration or plugin installation fails."""


class HandoffError(CCInitError):
    """Raised when privileges cannot be dropped or the target cannot be exec'd."""


class DockerError(CCInitError):
    """Docker operation errors (host launcher).

    Base class for all Docker-related exceptions.
    """


class DockerNotFoundError(DockerError):
    """Raised when Docker is not installed or not in PATH."""


class DockerNotRunningError(DockerError):
    """Raised when Docker daemon is not running."""
