"""Tests for ccinit.launcher module."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from ccinit.errors import WorkdirError
from ccinit.launcher import (
    LaunchSpec,
    build_docker_run_cmd,
    get_container_name,
    load_dot_env,
    validate_project_dir,
)


def spec(project: Path, **overrides: object) -> LaunchSpec:
    values: dict[str, object] = {"project_dir": project, "username": "alice", "uid": 5000, "gid": 5000}
    values.update(overrides)
    return LaunchSpec(**values)  # type: ignore[arg-type]


class TestGetContainerName:
    """Tests for get_container_name function."""

    def test_format(self) -> None:
        assert get_container_name(1_700_000_000_000_000_042) == "claude-code-1700000000-000000042"

    def test_unique(self) -> None:
        assert get_container_name() != get_container_name(0)


class TestValidateProjectDir:
    """Tests for validate_project_dir function."""

    def test_writable(self, tmp_path: Path) -> None:
        assert validate_project_dir(tmp_path) == tmp_path

    def test_read_only(self, tmp_path: Path) -> None:
        with patch("ccinit.launcher.os.access", return_value=False):
            with pytest.raises(WorkdirError, match="not writable"):
                validate_project_dir(tmp_path)


class TestLoadDotEnv:
    """Tests for load_dot_env function."""

    def test_missing_file(self, tmp_path: Path) -> None:
        assert load_dot_env(tmp_path) == {}

    def test_values(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text(
            "# comment\n"
            "ANTHROPIC_API_KEY=sk-test\n"
            "EMPTY=\n"
            'QUOTED="a b"\n'
            "export EXPORTED=yes\n"
        )
        assert load_dot_env(tmp_path) == {
            "ANTHROPIC_API_KEY": "sk-test",
            "QUOTED": "a b",
            "EXPORTED": "yes",
        }

    def test_order_preserved(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("B=2\nA=1\n")
        assert list(load_dot_env(tmp_path)) == ["B", "A"]


class TestBuildDockerRunCmd:
    """Tests for build_docker_run_cmd function."""

    def test_layout(self, tmp_path: Path) -> None:
        cmd = build_docker_run_cmd(
            spec(tmp_path),
            ("claude", "--help"),
            dot_env={"API_KEY": "k"},
            container_name="claude-code-1-000000001",
        )
        p = str(tmp_path)
        assert cmd == [
            "docker", "run", "--rm",
            "--name", "claude-code-1-000000001",
            "--network", "host",
            "--env", "HOST_USER=alice",
            "--env", "HOST_UID=5000",
            "--env", "HOST_GID=5000",
            "--env", "HOST_WORKDIR=/workspace",
            "--env", "API_KEY=k",
            "--volume", f"{p}:/workspace",
            "--volume", f"{p}/.claude:/workspace/.claude",
            "--volume", f"{p}/.claude-system:/home/alice/.claude",
            "--workdir", "/workspace",
            "claude-code:tailor",
            "claude", "--help",
        ]  # fmt: skip

    def test_interactive_flag(self, tmp_path: Path) -> None:
        cmd = build_docker_run_cmd(spec(tmp_path, interactive=True))
        assert cmd[:3] == ["docker", "run", "-it"]

    def test_no_command_ends_with_image(self, tmp_path: Path) -> None:
        cmd = build_docker_run_cmd(spec(tmp_path, image="custom:1"))
        assert cmd[-1] == "custom:1"
        assert "-it" not in cmd

    def test_generates_name(self, tmp_path: Path) -> None:
        cmd = build_docker_run_cmd(spec(tmp_path))
        assert cmd[cmd.index("--name") + 1].startswith("claude-code-")
