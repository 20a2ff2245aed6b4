"""Tests for Click CLI commands."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from conftest import BASE_URL, make_record
from vac_sync.cli import cli, main
from vac_sync.store import VersionCache
from vac_sync.utils.config_manager import ConfigManager

CREDENTIALS = ["--shared-secret", "secret", "--username", "user", "--password", "pass"]


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep the user's configuration file and credentials out of the tests."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for name in ("VAC_SYNC_SHARED_SECRET", "VAC_SYNC_USERNAME", "VAC_SYNC_PASSWORD"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def paths(tmp_path):
    """Database and download directory options."""
    return ["--db-path", str(tmp_path / "vac_cache.db"), "--download-dir", str(tmp_path / "downloads")]


@pytest.fixture
def invoke(runner, paths):
    """Invoke the CLI against the mocked API with credentials."""

    def _invoke(*args, credentials=True):
        options = ["--base-url", BASE_URL, *paths]
        if credentials:
            options.extend(CREDENTIALS)
        return runner.invoke(cli, [*options, *args])

    return _invoke


@pytest.fixture
def two_charts(mock_catalog, mock_chart):
    """Catalog with LFPG and LFML, both downloadable."""
    mock_catalog([make_record("LFPG", "3", city="Paris"), make_record("LFML", "7", city="Marseille")])
    return mock_chart("LFPG", b"paris"), mock_chart("LFML", b"marseille")


class TestCLIHelp:
    """Test CLI help commands."""

    def test_main_help(self, runner):
        """Test main CLI help output."""
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "VAC Sync" in result.output
        for command in ("sync", "list", "remove", "status"):
            assert command in result.output
        for option in ("--config", "--db-path", "--download-dir", "--base-url", "--debug"):
            assert option in result.output

    def test_main_help_short_flag(self, runner):
        """Test main CLI help output with -h flag."""
        result = runner.invoke(cli, ["-h"])

        assert result.exit_code == 0
        assert "-h, --help" in result.output

    def test_sync_help(self, runner):
        """Test sync command help output."""
        result = runner.invoke(cli, ["sync", "--help"])

        assert result.exit_code == 0
        assert "--oaci" in result.output

    def test_version(self, runner):
        """Test version flag."""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "1.0.0" in result.output


class TestSyncCommand:
    """Test sync command functionality."""

    def test_sync_downloads_charts(self, invoke, two_charts, tmp_path, caplog):
        """Test a successful sync downloads every chart."""
        result = invoke("sync")

        assert result.exit_code == 0
        assert (tmp_path / "downloads" / "LFPG.pdf").read_bytes() == b"paris"
        assert (tmp_path / "downloads" / "LFML.pdf").read_bytes() == b"marseille"
        assert "2 downloaded, 0 failed" in caplog.text

    def test_sync_twice_is_idempotent(self, invoke, two_charts, caplog):
        """Test a second run downloads nothing."""
        invoke("sync")
        caplog.clear()

        result = invoke("sync")

        assert result.exit_code == 0
        assert "2 up to date, 0 downloaded" in caplog.text
        assert all(route.call_count == 1 for route in two_charts)

    def test_sync_with_oaci_filter(self, invoke, two_charts, tmp_path):
        """Test -c limits the sync to the given codes."""
        result = invoke("sync", "-c", "lfml")

        assert result.exit_code == 0
        assert not two_charts[0].called
        assert (tmp_path / "downloads" / "LFML.pdf").exists()

    def test_sync_failure_exit_code(self, invoke, mock_catalog, mock_chart, caplog):
        """Test a failed download makes the command exit with 1."""
        mock_catalog([make_record("LFPG", "3"), make_record("LFML", "7")])
        mock_chart("LFPG", b"paris")
        mock_chart("LFML", b"", status=500)

        result = invoke("sync")

        assert result.exit_code == 1
        assert "1 downloaded, 1 failed" in caplog.text

    def test_sync_catalog_unauthorized(self, invoke, httpx_mock, caplog):
        """Test rejected credentials are reported and exit with 1."""
        httpx_mock.get(path="/api/v1/oacis").respond(401)

        result = invoke("sync")

        assert result.exit_code == 1
        assert "Authentication failed during chart sync" in caplog.text

    def test_sync_missing_credentials(self, invoke, caplog):
        """Test missing credentials are reported before any request."""
        result = invoke("sync", credentials=False)

        assert result.exit_code == 1
        assert "Missing API credential(s): shared_secret, username, password" in caplog.text

    def test_sync_credentials_from_environment(self, runner, paths, two_charts, monkeypatch):
        """Test credentials can come from environment variables."""
        monkeypatch.setenv("VAC_SYNC_SHARED_SECRET", "secret")
        monkeypatch.setenv("VAC_SYNC_USERNAME", "user")
        monkeypatch.setenv("VAC_SYNC_PASSWORD", "pass")

        result = runner.invoke(cli, ["--base-url", BASE_URL, *paths, "sync"])

        assert result.exit_code == 0

    def test_sync_settings_from_config_file(self, runner, two_charts, tmp_path):
        """Test paths, API and credentials can come from the configuration file."""
        config_path = tmp_path / "config.toml"
        config_path.write_text(
            f'db_path = "{tmp_path / "cfg.db"}"\n'
            f'download_dir = "{tmp_path / "cfg_downloads"}"\n'
            f'[api]\nbase_url = "{BASE_URL}"\ntimeout = 5\n'
            '[auth]\nshared_secret = "secret"\nusername = "user"\npassword = "pass"\n'
        )

        result = runner.invoke(cli, ["--config", str(config_path), "sync"])

        assert result.exit_code == 0
        assert (tmp_path / "cfg_downloads" / "LFPG.pdf").exists()
        assert (tmp_path / "cfg.db").exists()

    def test_sync_invalid_config_file(self, runner, tmp_path, caplog):
        """Test an unreadable configuration file is reported."""
        config_path = tmp_path / "config.toml"
        config_path.write_text("[api\n")

        result = runner.invoke(cli, ["--config", str(config_path), *CREDENTIALS, "sync"])

        assert result.exit_code == 1
        assert "Invalid TOML" in caplog.text

    def test_sync_invalid_base_url(self, runner, paths, caplog):
        """Test an invalid base URL is rejected."""
        result = runner.invoke(cli, ["--base-url", "vac.example.com", *paths, *CREDENTIALS, "sync"])

        assert result.exit_code == 1
        assert "Invalid settings" in caplog.text


class TestListCommand:
    """Test list command functionality."""

    def test_list_shows_local_status(self, invoke, two_charts):
        """Test the listing marks downloaded charts."""
        invoke("sync", "-c", "LFPG")

        result = invoke("list")

        assert result.exit_code == 0
        assert "OACI" in result.output
        assert "1 of 2 charts available locally" in result.output

    def test_list_local_only(self, invoke, two_charts):
        """Test --local-only hides charts not downloaded."""
        invoke("sync", "-c", "LFPG")

        result = invoke("list", "--local-only")

        assert "LFPG" in result.output
        assert "LFML" not in result.output

    def test_list_remote_only(self, invoke, two_charts):
        """Test --remote-only hides downloaded charts."""
        invoke("sync", "-c", "LFPG")

        result = invoke("list", "--remote-only")

        assert "LFML" in result.output
        assert "LFPG" not in result.output

    def test_list_exclusive_flags(self, invoke):
        """Test --local-only and --remote-only cannot be combined."""
        result = invoke("list", "--local-only", "--remote-only")

        assert result.exit_code == 2
        assert "mutually exclusive" in result.output

    def test_list_network_error(self, invoke, httpx_mock, caplog):
        """Test a catalog failure exits with 1."""
        httpx_mock.get(path="/api/v1/oacis").respond(503)

        result = invoke("list")

        assert result.exit_code == 1
        assert "Server error during chart listing" in caplog.text


class TestRemoveCommand:
    """Test remove command functionality."""

    def test_remove_chart(self, invoke, two_charts, tmp_path, caplog):
        """Test a downloaded chart is removed from disk and cache."""
        invoke("sync")

        result = invoke("remove", "lfpg", credentials=False)

        assert result.exit_code == 0
        assert not (tmp_path / "downloads" / "LFPG.pdf").exists()
        assert (tmp_path / "downloads" / "LFML.pdf").exists()
        assert "Removed 1 chart of 1 requested" in caplog.text

    def test_remove_unknown_chart(self, invoke, caplog):
        """Test removing an unknown code is reported but not an error."""
        result = invoke("remove", "ZZZZ", credentials=False)

        assert result.exit_code == 0
        assert "not found in the version cache" in caplog.text

    def test_remove_requires_code(self, invoke):
        """Test at least one code is required."""
        result = invoke("remove")

        assert result.exit_code == 2


class TestStatusCommand:
    """Test status command functionality."""

    def test_status_empty(self, invoke, tmp_path):
        """Test status on a fresh cache."""
        result = invoke("status", credentials=False)

        assert result.exit_code == 0
        assert "Charts: 0" in result.output
        assert str(tmp_path / "vac_cache.db") in result.output

    def test_status_after_sync(self, invoke, two_charts, tmp_path):
        """Test status counts synced charts."""
        invoke("sync")

        result = invoke("status", credentials=False)

        assert "Charts: 2" in result.output
        with VersionCache(tmp_path / "vac_cache.db") as cache:
            assert len(cache.list()) == 2


class TestMain:
    """Test the console entry point."""

    def test_keyboard_interrupt(self):
        """Test Ctrl+C exits with 130."""
        with patch("vac_sync.cli.cli", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc_info:
                main()

        assert exc_info.value.code == 130


class TestSharedSettings:
    """Test settings shared by every command."""

    def test_config_file_read_once(self, invoke, two_charts, mocker):
        """Test one command parses the configuration file a single time."""
        manager = mocker.patch("vac_sync.cli.settings.ConfigManager", wraps=ConfigManager)

        result = invoke("sync")

        assert result.exit_code == 0
        assert manager.call_count == 1

    @pytest.mark.parametrize("command", ["sync", "status"])
    def test_logging_uses_wrapping_formatter(self, invoke, two_charts, mocker, command):
        """Test commands configure logging with long lines wrapped."""
        setup_logging = mocker.patch(f"vac_sync.cli.{command}.setup_logging")

        invoke("-d", command)

        setup_logging.assert_called_once_with(1, use_wrapping=True)

    def test_short_d_is_debug(self, runner, tmp_path, paths):
        """Test -d raises verbosity and --db-path has no short form."""
        result = runner.invoke(cli, [*paths, "-dd", "status"])

        assert result.exit_code == 0
        assert str(tmp_path / "vac_cache.db") in result.output

        result = runner.invoke(cli, ["-d", str(tmp_path / "other.db"), "status"])

        assert result.exit_code == 2
