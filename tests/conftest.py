"""Shared pytest fixtures for locus tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from locus.config.settings import ENV_VARS, LocusSettings, reset_settings_cache
from locus.domain.models import RepoInfo
from locus.infrastructure.memory import InMemoryFileSystem
from locus.services.container import ServiceContainer, build_container

BASE_DIR = Path("/home/test/locus")
FIXED_HASH = "a1b2c3d4e5f60718293a4b5c6d7e8f90"


class FakeGit:
    """GitService stand-in returning a fixed repository (or none)."""

    def __init__(self, info: RepoInfo | None = None) -> None:
        self.info = info

    def is_git_repo(self, cwd: Path | None = None) -> bool:
        return self.info is not None

    def get_repo_info(self, cwd: Path | None = None) -> RepoInfo | None:
        return self.info


def fixed_hash(length: int) -> str:
    return FIXED_HASH[:length]


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Point HOME and the XDG dirs into tmp_path and clear LOCUS_* variables."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("XDG_CONFIG_DIRS", str(tmp_path / "xdg"))
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings() -> LocusSettings:
    return LocusSettings.load(task_directory=str(BASE_DIR))


@pytest.fixture
def fs() -> InMemoryFileSystem:
    return InMemoryFileSystem()


@pytest.fixture
def repo() -> RepoInfo:
    return RepoInfo(host="github.com", owner="alice", repo="proj")


@pytest.fixture
def container(settings: LocusSettings, fs: InMemoryFileSystem) -> ServiceContainer:
    """Services over the in-memory filesystem with a deterministic hash."""
    return build_container(settings, fs=fs, git=FakeGit(), hash_factory=fixed_hash)


@pytest.fixture
def task_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Real on-disk task directory for CLI tests."""
    directory = tmp_path / "tasks"
    monkeypatch.setenv("LOCUS_TASK_DIRECTORY", str(directory))
    return directory


@pytest.fixture
def base_dir() -> Path:
    """Task directory used by the ``settings`` fixture."""
    return BASE_DIR
