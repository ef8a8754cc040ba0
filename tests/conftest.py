"""Pytest configuration and fixtures for ccinit tests.

Puts ``src/`` on sys.path so the package imports without installation, and
provides a RunConfig rooted in a temporary directory. Ownership changes are
stubbed out because the tests run unprivileged.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

# Add src directory to path for development testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from ccinit.identity import HostIdentity  # noqa: E402
from ccinit.run_config import RunConfig  # noqa: E402


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    path = tmp_path / "workspace"
    path.mkdir()
    return path


@pytest.fixture
def make_config(tmp_path: Path, workspace: Path) -> Callable[..., RunConfig]:
    """Factory for RunConfig objects that only touch tmp_path."""

    def _make(command: tuple[str, ...] = ("claude",), **overrides: object) -> RunConfig:
        identity = overrides.pop(
            "identity",
            HostIdentity(username="alice", uid=5000, gid=5000, workdir=workspace),
        )
        values: dict[str, object] = {
            "identity": identity,
            "command": command,
            "default_config": tmp_path / "opt" / "claude.json",
            "home_root": tmp_path / "home",
        }
        values.update(overrides)
        return RunConfig(**values)  # type: ignore[arg-type]

    return _make


@pytest.fixture
def no_chown() -> MagicMock:
    """Stub out every ownership change made by the workflow modules."""
    with (
        patch("ccinit.claude_config.chown") as mock_chown,
        patch("ccinit.environment.chown", mock_chown),
        patch("ccinit.environment.chown_recursive", return_value=True),
        patch("ccinit.health.chown_recursive", return_value=True),
    ):
        yield mock_chown
