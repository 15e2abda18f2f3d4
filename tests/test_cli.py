"""Tests for the root locus CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from locus import __version__
from locus.cli import cli
from locus.config import settings as settings_module


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "Git-aware Markdown task tracker" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


# --- Global flags ---


@pytest.mark.parametrize("flag", ["--json", "-v", "--verbose", "--log-json"])
def test_global_flag_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


def test_invalid_config_file(cli_runner: CliRunner, tmp_path: Path) -> None:
    config = tmp_path / "bad.yml"
    config.write_text("file_naming:\n  hash_length: 2\n", encoding="utf-8")
    result = cli_runner.invoke(cli, ["-c", str(config), "config", "show"])
    assert result.exit_code == 1
    assert "ERROR: config" in result.output


def test_unparseable_config_file(cli_runner: CliRunner, tmp_path: Path) -> None:
    config = tmp_path / "broken.yml"
    config.write_text("task_directory: [unclosed\n", encoding="utf-8")
    result = cli_runner.invoke(cli, ["-c", str(config), "config", "show"])
    assert result.exit_code == 1
    assert "ERROR: config" in result.output


def test_round_trip_workflow(cli_runner: CliRunner, task_dir: Path) -> None:
    """add → set → edit → list → rm, all through the CLI."""
    added = cli_runner.invoke(cli, ["--json", "add", "Ship release", "--no-git"])
    path = Path(json.loads(added.output)["data"]["path"])

    assert cli_runner.invoke(cli, ["set", "ship", "status=in-progress", "--no-git"]).exit_code == 0
    assert cli_runner.invoke(cli, ["edit", "ship", "-b", "tagged v1", "--no-git"]).exit_code == 0

    listed = cli_runner.invoke(cli, ["--json", "list", "-s", "in-progress", "--no-git"])
    tasks = json.loads(listed.output)["data"]["tasks"]
    assert [t["title"] for t in tasks] == ["Ship release"]
    assert tasks[0]["body"].endswith("tagged v1")

    assert cli_runner.invoke(cli, ["rm", "ship", "--no-git"]).exit_code == 0
    assert not path.exists()


def test_settings_loaded_once_per_flag_set(cli_runner: CliRunner, task_dir: Path) -> None:
    cli_runner.invoke(cli, ["--json", "list", "--no-git"])
    cli_runner.invoke(cli, ["--json", "list", "--no-git"])
    assert len(settings_module._cache) == 1

    cli_runner.invoke(cli, ["list", "--no-git"])
    assert len(settings_module._cache) == 2
