"""
Tests for the Typer command-line interface (mock provider only).
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from drivemapper import __version__
from drivemapper.adapters.mock_drive_provider import MockDriveProvider
from drivemapper.cli import app as cli_module
from drivemapper.cli.app import app

runner = CliRunner()

CONFIG_YAML = """
on_failure: prompt
drives:
  - letter: H
    path: \\\\fileserver\\home
  - letter: S
    path: \\\\fileserver\\shared
"""


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "drives.yaml"
    path.write_text(CONFIG_YAML, encoding="utf-8")
    return path


@pytest.fixture
def mock_provider(monkeypatch):
    """Route the CLI to a provider the test can inspect."""
    provider = MockDriveProvider()
    monkeypatch.setattr(cli_module, "create_drive_provider", lambda **kwargs: provider)
    monkeypatch.setenv("USERDOMAIN", "CORP")
    return provider


class TestMapCommand:

    def test_map_single_drive(self, mock_provider):
        result = runner.invoke(app, ["map", "h", "\\\\fileserver\\home"])

        assert result.exit_code == 0
        assert mock_provider.bindings == {"H": "\\\\fileserver\\home"}
        assert "created" in result.output

    def test_map_with_builtin_mock_flag(self):
        result = runner.invoke(app, ["map", "H", "\\\\fileserver\\home", "--mock"])

        assert result.exit_code == 0

    def test_invalid_letter_exits_non_zero(self, mock_provider):
        result = runner.invoke(app, ["map", "AB", "\\\\fileserver\\home"])

        assert result.exit_code == 1
        assert "Invalid drive letter" in result.output
        assert mock_provider.calls == []

    def test_failed_mapping_exits_non_zero(self, mock_provider):
        mock_provider.fail_letters.add("H")

        result = runner.invoke(app, ["map", "H", "\\\\fileserver\\home"])

        assert result.exit_code == 1
        assert "failed" in result.output

    def test_with_credential_prompts_first(self, mock_provider):
        mock_provider.require_credential.add("S")

        result = runner.invoke(
            app,
            ["map", "S", "\\\\fileserver\\shared", "--with-credential", "--domain", "HQ"],
            input="jdoe\npw\n",
        )

        assert result.exit_code == 0
        assert mock_provider.credentials_used[0].principal == "HQ\\jdoe"

    def test_dry_run_does_not_bind(self, mock_provider):
        result = runner.invoke(app, ["map", "H", "\\\\fileserver\\home", "--dry-run"])

        assert result.exit_code == 0
        assert mock_provider.mutation_calls() == []
        assert "skipped" in result.output

    def test_failure_detail_with_brackets_is_printed_verbatim(self, mock_provider):
        mock_provider.require_credential.add("H")

        result = runner.invoke(app, ["map", "H", "\\\\fileserver\\team [/ops]"])

        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "[/ops]" in result.output


class TestMapAllCommand:

    def test_all_mapped(self, mock_provider, config_path):
        result = runner.invoke(app, ["map-all", "--config", str(config_path)])

        assert result.exit_code == 0
        assert set(mock_provider.bindings) == {"H", "S"}
        assert "All drives mapped" in result.output

    def test_retry_with_prompted_credentials(self, mock_provider, config_path):
        mock_provider.require_credential.add("S")

        result = runner.invoke(
            app, ["map-all", "--config", str(config_path)], input="jdoe\npw\n"
        )

        assert result.exit_code == 0
        assert mock_provider.credentials_used[-1].principal == "CORP\\jdoe"

    def test_abort_policy_exits_non_zero(self, mock_provider, config_path):
        mock_provider.require_credential.add("S")

        result = runner.invoke(
            app, ["map-all", "--config", str(config_path), "--on-failure", "abort"]
        )

        assert result.exit_code == 1
        assert "S:" in result.output
        assert mock_provider.bindings == {"H": "\\\\fileserver\\home"}

    def test_confirm_policy_declined(self, mock_provider, config_path):
        mock_provider.require_credential.add("S")

        result = runner.invoke(
            app,
            ["map-all", "--config", str(config_path), "--on-failure", "confirm"],
            input="n\n",
        )

        assert result.exit_code == 1
        assert all(credential is None for credential in mock_provider.credentials_used)

    def test_invalid_entry_exits_non_zero(self, mock_provider, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("drives:\n  - letter: H\n    path: C:\\foo\n", encoding="utf-8")

        result = runner.invoke(app, ["map-all", "--config", str(path)])

        assert result.exit_code == 1
        assert "Invalid share path" in result.output
        assert mock_provider.calls == []

    def test_missing_config_exits_non_zero(self, tmp_path):
        result = runner.invoke(app, ["map-all", "--config", str(tmp_path / "nope.yaml")])

        assert result.exit_code == 1
        assert "Config file not found" in result.output


class TestListAndVersion:

    def test_list_drives(self, config_path):
        result = runner.invoke(app, ["list-drives", "--config", str(config_path)])

        assert result.exit_code == 0
        assert "H:" in result.output
        assert "S:" in result.output

    def test_list_drives_with_brackets_in_path(self, tmp_path):
        path = tmp_path / "drives.yaml"
        path.write_text("drives:\n  - letter: T\n    path: \\\\fileserver\\team [/ops]\n", encoding="utf-8")

        result = runner.invoke(app, ["list-drives", "--config", str(path)])

        assert result.exit_code == 0
        assert "[/ops]" in result.output

    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output
