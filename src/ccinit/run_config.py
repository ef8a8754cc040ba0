"""Run configuration dataclass for ccinit.

Bundles the host identity, the target command and every path setting into
a single configuration object that is built once at the entry point and
passed to each step of the session workflow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .constants import (
    CHILD_PATH,
    CLAUDE_DIR_NAME,
    CLAUDE_JSON_NAME,
    DEFAULT_CLAUDE_CONFIG,
    HOME_ROOT,
    LOGIN_SHELL,
    PLUGIN_WRAPPER,
    PROJECT_CONFIG_NAME,
)
from .identity import HostIdentity


@dataclass(frozen=True)
class RunConfig:
    """Configuration for one container session.

    Immutable so no step can alter what a later step sees.
    """

    identity: HostIdentity

    # Target command (empty = interactive shell)
    command: tuple[str, ...] = ()

    # Claude config sources
    default_config: Path = Path(DEFAULT_CLAUDE_CONFIG)
    project_config: Path | None = None  # None = <workdir>/claude.json

    # Handoff
    plugin_wrapper: tuple[str, ...] = (PLUGIN_WRAPPER,)
    home_root: Path = Path(HOME_ROOT)
    shell: str = LOGIN_SHELL
    child_path: str = CHILD_PATH

    # Runtime options
    debug: bool = field(default=False, compare=False)

    @classmethod
    def from_cli(
        cls,
        identity: HostIdentity,
        command: tuple[str, ...] | list[str] = (),
        *,
        default_config: str | None = None,
        project_config: str | None = None,
        plugin_wrapper: str | None = None,
        skip_plugins: bool = False,
        home_root: str | None = None,
        debug: bool = False,
    ) -> RunConfig:
        """Create RunConfig from CLI arguments.

        ``skip_plugins`` (or an empty ``plugin_wrapper``) disables the wrapper;
        the command is then exec'd directly.
        """
        if skip_plugins:
            wrapper: tuple[str, ...] = ()
        elif plugin_wrapper is None:
            wrapper = (PLUGIN_WRAPPER,)
        else:
            wrapper = tuple(plugin_wrapper.split())
        return cls(
            identity=identity,
            command=tuple(command),
            default_config=Path(default_config or DEFAULT_CLAUDE_CONFIG),
            project_config=Path(project_config) if project_config else None,
            plugin_wrapper=wrapper,
            home_root=Path(home_root or HOME_ROOT),
            debug=debug,
        )

    # Derived paths
    @property
    def home(self) -> Path:
        return self.home_root / self.identity.username

    @property
    def claude_dir(self) -> Path:
        return self.home / CLAUDE_DIR_NAME

    @property
    def claude_json(self) -> Path:
        """``~/.claude.json``, the file Claude Code reads."""
        return self.home / CLAUDE_JSON_NAME

    @property
    def nested_claude_json(self) -> Path:
        """``~/.claude/.claude.json``, synced independently from the default."""
        return self.claude_dir / CLAUDE_JSON_NAME

    @property
    def settings_json(self) -> Path:
        return self.claude_dir / "settings.json"

    @property
    def bashrc(self) -> Path:
        return self.home / ".bashrc"

    @property
    def workdir(self) -> Path:
        return self.identity.workdir

    @property
    def workspace_claude_dir(self) -> Path:
        return self.workdir / CLAUDE_DIR_NAME

    @property
    def project_config_path(self) -> Path:
        """Project-local claude.json override (``/workspace/claude.json`` by default)."""
        if self.project_config is not None:
            return self.project_config
        return self.workdir / PROJECT_CONFIG_NAME
