"""Tests for the task commands: add, read, edit, list, search, rm, path."""

from __future__ import annotations

import json
import re
from pathlib import Path

import pytest
from click.testing import CliRunner

from locus.cli import cli
from locus.domain.models import RepoInfo
from locus.infrastructure.git import SubprocessGit


def _add(runner: CliRunner, *args: str) -> dict:
    result = runner.invoke(cli, ["--json", "add", *args, "--no-git"])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)["data"]


@pytest.fixture
def in_repo(monkeypatch: pytest.MonkeyPatch) -> RepoInfo:
    """Make every command see ``github.com/alice/proj`` as the current repository."""
    info = RepoInfo(host="github.com", owner="alice", repo="proj")
    monkeypatch.setattr(SubprocessGit, "get_repo_info", lambda self, cwd=None: info)
    return info


@pytest.mark.usefixtures("task_dir")
class TestAdd:
    def test_add(self, cli_runner: CliRunner, task_dir: Path) -> None:
        result = cli_runner.invoke(cli, ["add", "Fix login bug", "--no-git"])
        assert result.exit_code == 0
        assert "OK  create_task" in result.output
        files = list(task_dir.glob("*.md"))
        assert len(files) == 1
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}-fix-login-bug-[0-9a-f]{8}\.md", files[0].name)

    def test_add_json(self, cli_runner: CliRunner) -> None:
        data = _add(cli_runner, "JSON task", "-p", "high", "-t", "bug,ui", "-t", "auth")
        content = Path(data["path"]).read_text(encoding="utf-8")
        assert "priority: high" in content
        assert "- bug\n- ui\n- auth" in content
        assert data["title"] == "JSON task"
        assert data["repository"] is None

    def test_add_in_repository(
        self, cli_runner: CliRunner, task_dir: Path, in_repo: RepoInfo
    ) -> None:
        result = cli_runner.invoke(cli, ["--json", "add", "Scoped"])
        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert Path(data["path"]).parent == task_dir / "alice" / "proj"
        assert data["repository"] == "alice/proj"

    def test_add_with_body(self, cli_runner: CliRunner) -> None:
        data = _add(cli_runner, "Body task", "-b", "custom text")
        assert Path(data["path"]).read_text(encoding="utf-8").endswith("---\ncustom text")


@pytest.mark.usefixtures("task_dir")
class TestRead:
    def test_read(self, cli_runner: CliRunner) -> None:
        _add(cli_runner, "Readable task", "-t", "docs")
        result = cli_runner.invoke(cli, ["read", "readable", "--no-git"])
        assert result.exit_code == 0
        assert "Readable task" in result.output
        assert "tags: docs" in result.output

    def test_read_raw(self, cli_runner: CliRunner) -> None:
        data = _add(cli_runner, "Raw task")
        result = cli_runner.invoke(cli, ["read", "raw-task", "--raw", "--no-git"])
        assert result.exit_code == 0
        assert result.output == Path(data["path"]).read_text(encoding="utf-8")

    def test_read_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["read", "ghost", "--no-git"])
        assert result.exit_code == 1
        assert "Task not found: ghost" in result.output

    def test_read_missing_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "read", "ghost", "--no-git"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "TASK_NOT_FOUND"


@pytest.mark.usefixtures("task_dir")
class TestEdit:
    def test_append(self, cli_runner: CliRunner) -> None:
        data = _add(cli_runner, "Notes")
        result = cli_runner.invoke(cli, ["edit", "notes", "-b", "more", "--no-git"])
        assert result.exit_code == 0
        assert Path(data["path"]).read_text(encoding="utf-8").endswith("# Notes\n\nmore")

    def test_overwrite(self, cli_runner: CliRunner) -> None:
        data = _add(cli_runner, "Notes")
        result = cli_runner.invoke(
            cli, ["edit", "notes", "--overwrite", "-b", "replaced", "--no-git"]
        )
        assert result.exit_code == 0
        content = Path(data["path"]).read_text(encoding="utf-8")
        assert content.endswith("---\nreplaced")
        assert "status: todo" in content

    def test_stdin(self, cli_runner: CliRunner) -> None:
        data = _add(cli_runner, "Piped")
        result = cli_runner.invoke(cli, ["edit", "piped", "--no-git"], input="- from stdin\n")
        assert result.exit_code == 0
        assert "- from stdin" in Path(data["path"]).read_text(encoding="utf-8")

    def test_creates_missing(self, cli_runner: CliRunner, task_dir: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "edit", "brand-new", "-b", "# Brand new idea\n\ntext", "--no-git"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["op"] == "create_task"
        assert data["data"]["title"] == "Brand new idea"
        assert "brand-new-idea" in data["data"]["file_name"]

    def test_no_text(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["edit", "anything", "--no-git"])
        assert result.exit_code == 2
        assert "Provide --body" in result.output


@pytest.mark.usefixtures("task_dir")
class TestListAndSearch:
    @pytest.fixture(autouse=True)
    def _tasks(self, cli_runner: CliRunner, task_dir: Path) -> None:
        _add(cli_runner, "Alpha task", "-p", "high", "-t", "bug")
        _add(cli_runner, "Beta task", "-s", "done", "-t", "docs")
        _add(cli_runner, "Gamma task", "-p", "low", "-b", "# Gamma task\n\nmentions OAuth")

    def _list(self, runner: CliRunner, *args: str) -> list[str]:
        result = runner.invoke(cli, ["--json", "list", "--no-git", *args])
        assert result.exit_code == 0, result.output
        return [t["title"] for t in json.loads(result.output)["data"]["tasks"]]

    def test_list_all(self, cli_runner: CliRunner) -> None:
        assert sorted(self._list(cli_runner)) == ["Alpha task", "Beta task", "Gamma task"]

    def test_filters(self, cli_runner: CliRunner) -> None:
        assert self._list(cli_runner, "-s", "done") == ["Beta task"]
        assert self._list(cli_runner, "-p", "high") == ["Alpha task"]
        assert sorted(self._list(cli_runner, "-t", "bug,docs")) == ["Alpha task", "Beta task"]

    def test_sort(self, cli_runner: CliRunner) -> None:
        assert self._list(cli_runner, "--sort", "priority") == [
            "Alpha task",
            "Beta task",
            "Gamma task",
        ]
        assert self._list(cli_runner, "--sort", "title") == ["Alpha task", "Beta task", "Gamma task"]

    def test_bad_sort(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["list", "--sort", "bogus", "--no-git"])
        assert result.exit_code == 2

    def test_table(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["list", "--no-git"])
        assert result.exit_code == 0
        assert "Alpha task" in result.output
        assert result.output.rstrip().endswith("3 tasks")

    def test_search_body(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "search", "oauth", "--no-git"])
        data = json.loads(result.output)["data"]
        assert [t["title"] for t in data["tasks"]] == ["Gamma task"]

    def test_search_case_sensitive(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "search", "oauth", "--case-sensitive", "--no-git"]
        )
        assert json.loads(result.output)["data"]["count"] == 0

    def test_search_files(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["search", "beta", "--files", "--no-git"])
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert len(lines) == 1
        assert lines[0].endswith(".md")
        assert "beta-task" in lines[0]


@pytest.mark.usefixtures("task_dir")
class TestRmAndPath:
    def test_path(self, cli_runner: CliRunner) -> None:
        data = _add(cli_runner, "Locate me")
        result = cli_runner.invoke(cli, ["path", "locate", "--no-git"])
        assert result.exit_code == 0
        assert result.output.strip() == data["path"]

    def test_path_all(self, cli_runner: CliRunner, task_dir: Path, in_repo: RepoInfo) -> None:
        _add(cli_runner, "Deploy root")
        cli_runner.invoke(cli, ["add", "Deploy scoped"])
        result = cli_runner.invoke(cli, ["--json", "path", "deploy", "--all"])
        assert json.loads(result.output)["data"]["count"] == 2

    def test_rm(self, cli_runner: CliRunner) -> None:
        data = _add(cli_runner, "Remove me")
        result = cli_runner.invoke(cli, ["rm", "remove-me", "--no-git"])
        assert result.exit_code == 0
        assert not Path(data["path"]).exists()

        again = cli_runner.invoke(cli, ["rm", "remove-me", "--no-git"])
        assert again.exit_code == 1
