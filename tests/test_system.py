"""Tests for ccinit.system module.

Subprocess calls are mocked; nothing is executed.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from ccinit.errors import CommandNotFoundError, CommandTimeoutError
from ccinit.system import chown_recursive, safe_run, which


class TestSafeRun:
    """Tests for safe_run function."""

    def test_success(self) -> None:
        with patch("ccinit.system.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stdout="ok", stderr="")
            result = safe_run(["id", "alice"])
        assert result.stdout == "ok"
        args, kwargs = mock_run.call_args
        assert args[0] == ["id", "alice"]
        assert kwargs["text"] is True
        assert kwargs["capture_output"] is True
        assert kwargs["env"] is None

    def test_env_is_passed_as_dict(self) -> None:
        with patch("ccinit.system.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0)
            safe_run(["true"], env={"A": "1"})
        assert mock_run.call_args.kwargs["env"] == {"A": "1"}

    def test_not_found(self) -> None:
        """FileNotFoundError becomes CommandNotFoundError."""
        with patch("ccinit.system.subprocess.run", side_effect=FileNotFoundError("x")):
            with pytest.raises(CommandNotFoundError, match="useradd not found"):
                safe_run(["useradd", "alice"])

    def test_timeout(self) -> None:
        """TimeoutExpired becomes CommandTimeoutError."""
        with patch(
            "ccinit.system.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="chown", timeout=5),
        ):
            with pytest.raises(CommandTimeoutError, match="timed out after 5s"):
                safe_run(["chown", "-R", "1:1", "/x"], timeout=5)

    def test_check_propagates_called_process_error(self) -> None:
        with patch(
            "ccinit.system.subprocess.run",
            side_effect=subprocess.CalledProcessError(returncode=1, cmd=["false"]),
        ):
            with pytest.raises(subprocess.CalledProcessError):
                safe_run(["false"], check=True)


class TestChownRecursive:
    """Tests for chown_recursive function."""

    def test_success(self) -> None:
        with patch("ccinit.system.safe_run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stderr="")
            assert chown_recursive(Path("/home/alice"), 5000, 5001) is True
        assert mock_run.call_args.args[0] == ["chown", "-R", "5000:5001", "/home/alice"]

    def test_nonzero_exit_is_swallowed(self) -> None:
        with patch("ccinit.system.safe_run") as mock_run:
            mock_run.return_value = MagicMock(returncode=1, stderr="Operation not permitted")
            assert chown_recursive(Path("/x"), 1, 1) is False

    def test_missing_binary_is_swallowed(self) -> None:
        with patch("ccinit.system.safe_run", side_effect=CommandNotFoundError("chown")):
            assert chown_recursive(Path("/x"), 1, 1) is False


class TestWhich:
    """Tests for which function."""

    def test_finds_executable(self, tmp_path: Path) -> None:
        tool = tmp_path / "claude"
        tool.write_text("#!/bin/sh\n")
        tool.chmod(0o755)
        assert which("claude", path=str(tmp_path)) == str(tool)

    def test_missing(self, tmp_path: Path) -> None:
        assert which("claude", path=str(tmp_path)) is None
