"""Tests for the llmr-sync script."""

from typing import Any, Generator
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from llm_registry.scripts.sync_registry import main, run_sync
from llm_registry.sync import SyncResult, SyncStatus

REMOTE_URL = "https://example.com/llm_registry.json"


def _result(status: SyncStatus, success: bool = True, message: str = "") -> SyncResult:
    return SyncResult(
        success=success,
        status=status,
        message=message,
        path="/path/to/llm_registry.json",
        url=REMOTE_URL,
    )


@pytest.fixture
def mock_sync() -> Generator[MagicMock, None, None]:
    """Mock sync_registry for testing."""
    with patch("llm_registry.scripts.sync_registry.sync_registry") as mock:
        yield mock


@pytest.fixture
def mock_check() -> Generator[MagicMock, None, None]:
    """Mock check_for_updates for testing."""
    with patch("llm_registry.scripts.sync_registry.check_for_updates") as mock:
        yield mock


class TestRunSync:
    """Tests for the run_sync function."""

    def test_sync_updated(self, mock_sync: MagicMock, capsys: Any) -> None:
        """Test a successful sync."""
        mock_sync.return_value = _result(SyncStatus.UPDATED, message="Registry updated successfully")

        result = run_sync()

        mock_sync.assert_called_once_with(url=None, path=None, force=False)
        captured = capsys.readouterr()
        assert "✅ Registry updated successfully" in captured.out
        assert result == 0

    def test_sync_already_current(self, mock_sync: MagicMock, capsys: Any) -> None:
        """Test a sync with nothing to do."""
        mock_sync.return_value = _result(SyncStatus.ALREADY_CURRENT)

        result = run_sync()

        assert "✓ Registry is already up to date" in capsys.readouterr().out
        assert result == 0

    def test_sync_failure(self, mock_sync: MagicMock, capsys: Any) -> None:
        """Test a failed sync."""
        mock_sync.return_value = _result(SyncStatus.ERROR, success=False, message="HTTP error! status: 404")

        result = run_sync()

        assert "❌ Error syncing registry: HTTP error! status: 404" in capsys.readouterr().out
        assert result == 1

    def test_sync_options(self, mock_sync: MagicMock, capsys: Any) -> None:
        """Test options are passed through and verbose output is printed."""
        mock_sync.return_value = _result(SyncStatus.UPDATED, message="Registry updated successfully")

        result = run_sync(verbose=True, force=True, url=REMOTE_URL, path="/tmp/r.json")

        mock_sync.assert_called_once_with(url=REMOTE_URL, path="/tmp/r.json", force=True)
        captured = capsys.readouterr()
        assert "Status: updated" in captured.out
        assert "Local registry file: /path/to/llm_registry.json" in captured.out
        assert f"Remote URL: {REMOTE_URL}" in captured.out
        assert result == 0

    def test_check_update_available(self, mock_check: MagicMock, mock_sync: MagicMock, capsys: Any) -> None:
        """Test check-only mode when an update exists."""
        mock_check.return_value = _result(SyncStatus.UPDATE_AVAILABLE)

        result = run_sync(check_only=True)

        mock_sync.assert_not_called()
        assert "✅ Registry update is available" in capsys.readouterr().out
        assert result == 0

    def test_check_current(self, mock_check: MagicMock, capsys: Any) -> None:
        """Test check-only mode when current."""
        mock_check.return_value = _result(SyncStatus.ALREADY_CURRENT)

        result = run_sync(check_only=True)

        assert "✓ Registry is already up to date" in capsys.readouterr().out
        assert result == 0

    def test_check_failure(self, mock_check: MagicMock, capsys: Any) -> None:
        """Test check-only mode when the remote is unreachable."""
        mock_check.return_value = _result(SyncStatus.ERROR, success=False, message="offline")

        result = run_sync(check_only=True)

        assert "❌ Error checking for updates: offline" in capsys.readouterr().out
        assert result == 1


class TestMain:
    """Tests for the click entry point."""

    def test_exit_code(self, mock_sync: MagicMock) -> None:
        """Test the exit code follows run_sync."""
        mock_sync.return_value = _result(SyncStatus.ERROR, success=False, message="boom")

        result = CliRunner().invoke(main, ["--url", REMOTE_URL, "-f"])

        assert result.exit_code == 1
        mock_sync.assert_called_once_with(url=REMOTE_URL, path=None, force=True)

    def test_check_flag(self, mock_check: MagicMock) -> None:
        """Test --check runs the update check."""
        mock_check.return_value = _result(SyncStatus.ALREADY_CURRENT)

        result = CliRunner().invoke(main, ["--check"])

        assert result.exit_code == 0
        mock_check.assert_called_once_with(url=None, path=None)
