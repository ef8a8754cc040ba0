"""Tests for ccinit.plugins module."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from ccinit.errors import (
    CommandNotFoundError,
    CommandTimeoutError,
    HandoffError,
    PluginError,
)
from ccinit.plugins import (
    MarketplaceStatus,
    check_marketplace_status,
    exec_command,
    install_plugins_on_first_run,
    verify_plugin_status,
)


def completed(stdout: str = "", stderr: str = "", returncode: int = 0) -> MagicMock:
    return MagicMock(stdout=stdout, stderr=stderr, returncode=returncode)


class TestCheckMarketplaceStatus:
    """Tests for check_marketplace_status function."""

    def test_first_run(self) -> None:
        with patch("ccinit.plugins.safe_run", return_value=completed("No marketplaces configured\n")):
            assert check_marketplace_status() is MarketplaceStatus.FIRST_RUN_NEEDED

    def test_marker_on_stderr(self) -> None:
        """The marker counts whichever stream it is printed on."""
        result = completed(stderr="No marketplaces configured", returncode=1)
        with patch("ccinit.plugins.safe_run", return_value=result):
            assert check_marketplace_status() is MarketplaceStatus.FIRST_RUN_NEEDED

    def test_configured(self) -> None:
        result = completed("Configured marketplaces:\n  superpowers\n")
        with patch("ccinit.plugins.safe_run", return_value=result) as mock_run:
            assert check_marketplace_status() is MarketplaceStatus.ALREADY_CONFIGURED
        assert mock_run.call_args.args[0] == ["claude", "plugin", "marketplace", "list"]


class TestInstallPlugins:
    """Tests for install_plugins_on_first_run function."""

    def test_steps(self) -> None:
        with patch("ccinit.plugins.safe_run", return_value=completed()) as mock_run:
            install_plugins_on_first_run("/opt/market", "toolkit")
        assert [c.args[0] for c in mock_run.call_args_list] == [
            ["claude", "plugin", "marketplace", "add", "/opt/market"],
            ["claude", "plugin", "install", "toolkit"],
        ]
        assert all(c.kwargs["capture_output"] is False for c in mock_run.call_args_list)

    def test_add_failure_stops(self) -> None:
        with patch("ccinit.plugins.safe_run", return_value=completed(returncode=1)) as mock_run:
            with pytest.raises(PluginError, match="exit code 1"):
                install_plugins_on_first_run()
        assert mock_run.call_count == 1

    def test_timeout(self) -> None:
        with patch("ccinit.plugins.safe_run", side_effect=CommandTimeoutError("slow")):
            with pytest.raises(PluginError):
                install_plugins_on_first_run()


class TestVerifyPluginStatus:
    """Tests for verify_plugin_status function."""

    def test_installs_on_first_run(self) -> None:
        with (
            patch(
                "ccinit.plugins.check_marketplace_status",
                return_value=MarketplaceStatus.FIRST_RUN_NEEDED,
            ),
            patch("ccinit.plugins.install_plugins_on_first_run") as mock_install,
        ):
            status = verify_plugin_status("/m", "p")
        assert status is MarketplaceStatus.FIRST_RUN_NEEDED
        mock_install.assert_called_once_with("/m", "p", "claude")

    def test_already_configured(self, capsys: pytest.CaptureFixture[str]) -> None:
        with (
            patch(
                "ccinit.plugins.check_marketplace_status",
                return_value=MarketplaceStatus.ALREADY_CONFIGURED,
            ),
            patch("ccinit.plugins.install_plugins_on_first_run") as mock_install,
        ):
            verify_plugin_status()
        mock_install.assert_not_called()
        assert "Plugins already installed" in capsys.readouterr().out

    def test_missing_claude_skips(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch("ccinit.plugins.safe_run", side_effect=CommandNotFoundError("claude")):
            assert verify_plugin_status() is None
        assert "skipping plugin installation" in capsys.readouterr().err

    def test_query_timeout_is_fatal(self) -> None:
        with patch("ccinit.plugins.safe_run", side_effect=CommandTimeoutError("slow")):
            with pytest.raises(PluginError, match="Cannot query"):
                verify_plugin_status()


class TestExecCommand:
    """Tests for exec_command function."""

    def test_empty(self) -> None:
        with patch("ccinit.plugins.os.execvp") as mock_exec:
            assert exec_command(()) == 0
        mock_exec.assert_not_called()

    def test_argv_unchanged(self) -> None:
        with patch("ccinit.plugins.os.execvp") as mock_exec:
            exec_command(("claude", "-p", "two words"))
        mock_exec.assert_called_once_with("claude", ["claude", "-p", "two words"])

    def test_failure(self) -> None:
        with patch("ccinit.plugins.os.execvp", side_effect=FileNotFoundError("x")):
            with pytest.raises(HandoffError, match="Cannot execute nope"):
                exec_command(("nope",))
