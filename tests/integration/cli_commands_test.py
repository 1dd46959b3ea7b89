"""Integration tests for CLI commands."""

from unittest.mock import patch

import orjson
import pytest
from typer.testing import CliRunner

from conversation_archive.cli.app import app
from conversation_archive.domain.errors import ArchiveStoreError
from conversation_archive.domain.models import SyncResult


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def populated_archive(settings):
    """Archive one linked and one stale conversation."""
    settings.archive_dir.mkdir()
    (settings.archive_dir / "abc123 - Sorting.html").write_bytes(b"x" * 2048)
    (settings.archive_dir / "old999 - Gone.html").write_text("<html></html>")
    return settings


class TestListCommand:
    """Test 'list' command."""

    def test_list_shows_table_and_summary(self, cli_runner, populated_archive):
        with patch("conversation_archive.cli.app.Settings") as mock_config:
            mock_config.return_value = populated_archive

            result = cli_runner.invoke(app, ["list"])

            assert result.exit_code == 0
            assert "abc123" in result.stdout
            assert "old999" in result.stdout
            assert "Summary:" in result.stdout
            assert "2 missing, 1 stale, 1 tracked" in result.stdout

    def test_list_by_status(self, cli_runner, populated_archive):
        with patch("conversation_archive.cli.app.Settings") as mock_config:
            mock_config.return_value = populated_archive

            result = cli_runner.invoke(app, ["list", "--status", "stale"])

            assert result.exit_code == 0
            assert "old999" in result.stdout
            assert "abc123" not in result.stdout
            assert "1 stale" in result.stdout

    def test_list_as_json(self, cli_runner, populated_archive):
        with patch("conversation_archive.cli.app.Settings") as mock_config:
            mock_config.return_value = populated_archive

            result = cli_runner.invoke(app, ["list", "--json", "--status", "tracked"])

            assert result.exit_code == 0
            entries = orjson.loads(result.stdout)
            assert entries == [
                {
                    "document_id": "abc123",
                    "title": "Sorting",
                    "filename": "abc123 - Sorting.html",
                    "size": 2048,
                    "status": "tracked",
                }
            ]

    def test_invalid_status(self, cli_runner):
        """Invalid status is rejected before any configuration is loaded."""
        with patch("conversation_archive.cli.app.Settings") as mock_config:
            result = cli_runner.invoke(app, ["list", "--status", "archived"])

            assert result.exit_code == 1
            assert "Invalid status" in result.stdout
            mock_config.assert_not_called()


class TestDiscoverCommand:
    def test_prints_sorted_ids(self, cli_runner, settings):
        with patch("conversation_archive.cli.app.Settings") as mock_config:
            mock_config.return_value = settings

            result = cli_runner.invoke(app, ["discover"])

            assert result.exit_code == 0
            assert result.stdout.split() == ["abc123", "def456", "ghi789"]


class TestSyncCommand:
    """Test 'sync' command."""

    def test_dry_run_previews_report(self, cli_runner, populated_archive):
        """Dry-run prints the report without deleting or writing anything."""
        with patch("conversation_archive.cli.app.Settings") as mock_config:
            mock_config.return_value = populated_archive

            result = cli_runner.invoke(app, ["sync", "--dry-run"])

            assert result.exit_code == 0
            assert "Report preview" in result.stdout
            assert "Added conversations: def456, ghi789" in result.stdout
            assert "Deleted conversations: old999" in result.stdout
            assert (populated_archive.archive_dir / "old999 - Gone.html").exists()
            assert not populated_archive.report_file.exists()

    def test_concurrency_override(self, cli_runner, settings):
        with (
            patch("conversation_archive.cli.app.Settings") as mock_config,
            patch("conversation_archive.cli.app.ConversationSync") as mock_sync,
        ):
            mock_config.return_value = settings
            mock_sync.return_value.sync.return_value = SyncResult()

            result = cli_runner.invoke(app, ["sync", "--concurrency", "2"])

            assert result.exit_code == 0
            mock_config.assert_called_once_with(max_capture_concurrency=2)

    def test_failures_exit_nonzero(self, cli_runner, settings):
        """A run with failed captures still completes but signals failure."""
        with (
            patch("conversation_archive.cli.app.Settings") as mock_config,
            patch("conversation_archive.cli.app.ConversationSync") as mock_sync,
        ):
            mock_config.return_value = settings
            mock_sync.return_value.sync.return_value = SyncResult(
                added=["abc123"], failed={"def456": "Timeout"}
            )

            result = cli_runner.invoke(app, ["sync"])

            assert result.exit_code == 1

    def test_fatal_error_reported(self, cli_runner, settings):
        with (
            patch("conversation_archive.cli.app.Settings") as mock_config,
            patch("conversation_archive.cli.app.ConversationSync") as mock_sync,
        ):
            mock_config.return_value = settings
            mock_sync.return_value.sync.side_effect = ArchiveStoreError("Archive unreadable")

            result = cli_runner.invoke(app, ["sync"])

            assert result.exit_code == 1
            assert "Archive unreadable" in result.stdout
