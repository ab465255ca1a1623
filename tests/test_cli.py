"""Tests for the Typer command-line interface."""

from pathlib import Path

from rich.console import Console
from typer.testing import CliRunner

from hfsync import __version__
from hfsync.cli import app as cli_app
from hfsync.cli.formatters import format_error_with_suggestions
from hfsync.exceptions import CredentialError, HTTPStatusError, ManifestError
from hfsync.models.stats import SyncStats

runner = CliRunner()


def _config(tmp_path: Path) -> Path:
    path = tmp_path / "hfsync.ini"
    path.write_text(
        "[user]\nname = alice\n"
        "[server]\nurl = http://some.server\nport = 80\ndownload_speed = 1000\n"
        f"[files]\ncheck_time = 3600\nignore_list = private/\ndownload_folder = {tmp_path / 'dl'}\n",
        encoding="utf-8",
    )
    return path


def test_version() -> None:
    result = runner.invoke(cli_app.app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_key_prints_credential(monkeypatch) -> None:
    monkeypatch.setattr(cli_app, "derive_credential", lambda: "cafebabe")
    result = runner.invoke(cli_app.app, ["key"])
    assert result.exit_code == 0
    assert result.output.strip() == "cafebabe"


def test_key_failure_exits_nonzero(monkeypatch) -> None:
    def boom():
        raise CredentialError("no interfaces")

    monkeypatch.setattr(cli_app, "derive_credential", boom)
    result = runner.invoke(cli_app.app, ["key"])
    assert result.exit_code == 1
    assert "no interfaces" in result.output


def test_show_config(tmp_path: Path) -> None:
    result = runner.invoke(cli_app.app, ["show-config", "--config", str(_config(tmp_path))])
    assert result.exit_code == 0
    assert "server_url = http://some.server" in result.output
    assert "rate_per_worker = 333333" in result.output


def test_sync_missing_config_exits_nonzero(tmp_path: Path) -> None:
    result = runner.invoke(cli_app.app, ["sync", "--config", str(tmp_path / "none.ini")])
    assert result.exit_code == 1
    assert "ConfigurationError" in result.output


def test_sync_once_overrides_polling(tmp_path: Path, monkeypatch) -> None:
    captured = {}

    async def fake_run(settings, credential):
        captured["settings"] = settings
        captured["credential"] = credential
        return SyncStats(files_planned=1, files_downloaded=1)

    monkeypatch.setattr(cli_app, "derive_credential", lambda: "cafebabe")
    monkeypatch.setattr(cli_app, "_run_sync", fake_run)
    result = runner.invoke(
        cli_app.app, ["sync", "--config", str(_config(tmp_path)), "--once", "-w", "2"]
    )

    assert result.exit_code == 0, result.output
    assert captured["credential"] == "cafebabe"
    assert captured["settings"].runs_once
    assert captured["settings"].worker_count == 2
    assert "private/" in result.output
    assert "Sync Summary" in result.output


def test_sync_manifest_error_exits_nonzero(tmp_path: Path, monkeypatch) -> None:
    async def fake_run(settings, credential):
        raise ManifestError("Could not download file index: 404 Not Found")

    monkeypatch.setattr(cli_app, "derive_credential", lambda: "cafebabe")
    monkeypatch.setattr(cli_app, "_run_sync", fake_run)
    result = runner.invoke(cli_app.app, ["sync", "--config", str(_config(tmp_path))])
    assert result.exit_code == 1
    assert "ManifestError" in result.output


def test_rejected_index_request_suggests_checking_the_key() -> None:
    cause = HTTPStatusError(401, "Unauthorized")
    error = ManifestError(f"Could not download file index: {cause}")
    console = Console(record=True, width=120, color_system=None)
    console.print(format_error_with_suggestions(error))
    text = console.export_text()
    assert "ManifestError: Could not download file index: 401 Unauthorized" in text
    assert "A 401 from the server" in text
