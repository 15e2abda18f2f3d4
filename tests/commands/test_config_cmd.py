"""Tests for the config command group."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from locus.cli import cli


class TestConfigCommands:
    def test_path(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "config", "path"])
        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert data["path"] == str(tmp_path / "home" / ".config" / "locus" / "settings.yml")
        assert data["exists"] is False

    def test_init_and_refuse(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        first = cli_runner.invoke(cli, ["config", "init"])
        assert first.exit_code == 0
        assert (tmp_path / "home" / ".config" / "locus" / "settings.yml").is_file()

        second = cli_runner.invoke(cli, ["config", "init"])
        assert second.exit_code == 1
        assert "--force" in second.output

        forced = cli_runner.invoke(cli, ["config", "init", "--force"])
        assert forced.exit_code == 0

    def test_show_uses_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        config_dir = tmp_path / "home" / ".config" / "locus"
        config_dir.mkdir(parents=True)
        (config_dir / "settings.yml").write_text(
            "task_directory: /srv/tasks\ndefaults:\n  priority: low\n", encoding="utf-8"
        )
        result = cli_runner.invoke(cli, ["--json", "config", "show"])
        data = json.loads(result.output)["data"]
        assert data["config"]["task_directory"] == "/srv/tasks"
        assert data["config"]["defaults"]["priority"] == "low"
        assert data["config"]["defaults"]["status"] == "todo"

    def test_env_overrides_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "custom.yml"
        config.write_text("task_directory: /from/file\n", encoding="utf-8")
        result = cli_runner.invoke(
            cli,
            ["--json", "-c", str(config), "config", "show"],
            env={"LOCUS_TASK_DIRECTORY": "/from/env"},
        )
        data = json.loads(result.output)["data"]
        assert data["config"]["task_directory"] == "/from/env"
        assert data["loaded_from"] == str(config)
