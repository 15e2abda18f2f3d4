"""PathResolver — where task files and the config file live.

Layout::

    <task_directory>/<owner>/<repo>/<file>.md   repo detected, git-aware on
    <task_directory>/<file>.md                  otherwise

Fuzzy resolution matches case-insensitively, exact name first, then
substring. Candidates are sorted by name before matching, so the first
match is the lexicographically smallest, independent of the order the
filesystem lists entries in.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterator
from pathlib import Path

from locus.config import discovery
from locus.config.settings import LocusSettings
from locus.domain.errors import LocusError
from locus.domain.models import DEFAULT_REPOSITORY, RepoInfo
from locus.infrastructure.filesystem import FileSystem
from locus.services.markdown import ensure_markdown_extension

logger = logging.getLogger(__name__)


def expand_tilde(path: str) -> str:
    """Expand a leading ``~`` using HOME (USERPROFILE on Windows).

    Raises:
        LocusError: ``CONFIG_ERROR`` if the home variable is unset.
    """
    if path == "~" or path.startswith(("~/", "~\\")):
        return discovery.require_home_dir() + path[1:]
    return path


def _match_rank(entry_name: str, needle: str) -> int | None:
    """0 for an exact match, 1 for a substring match, None otherwise."""
    name = entry_name.lower()
    if name == needle or name == f"{needle}.md":
        return 0
    if needle in name:
        return 1
    return None


class PathResolver:
    """Maps settings and :class:`RepoInfo` onto concrete paths."""

    def __init__(self, settings: LocusSettings, fs: FileSystem) -> None:
        self._settings = settings
        self._fs = fs

    # ------------------------------------------------------------------
    # Directories
    # ------------------------------------------------------------------

    def get_base_dir(self) -> Path:
        return Path(expand_tilde(self._settings.task_directory))

    def get_task_dir(self, repo_info: RepoInfo | None) -> Path:
        """Task directory for *repo_info*, created if absent."""
        base = self.get_base_dir()
        if repo_info is None or not self._settings.repo_aware:
            task_dir = base
        else:
            task_dir = base.joinpath(*repo_info.owner.split("/"), repo_info.repo)
        self._fs.mkdir(task_dir, parents=True)
        return task_dir

    def get_task_file_path(self, file_name: str, repo_info: RepoInfo | None) -> Path:
        return self.get_task_dir(repo_info) / file_name

    def get_config_dir(self) -> Path:
        return discovery.get_config_dir()

    def get_config_file_path(self) -> Path:
        return discovery.get_config_file_path()

    # ------------------------------------------------------------------
    # Task files
    # ------------------------------------------------------------------

    def _markdown_names(self, directory: Path) -> list[str]:
        return sorted(
            entry.name
            for entry in self._fs.read_dir(directory)
            if entry.is_file and entry.name.endswith(".md")
        )

    def find_in_dir(self, directory: Path, partial_name: str) -> Path | None:
        """First exact, else first substring match of *partial_name* in *directory*."""
        needle = partial_name.lower()
        best: tuple[int, str] | None = None
        for name in self._markdown_names(directory):
            rank = _match_rank(name, needle)
            if rank is None:
                continue
            if best is None or rank < best[0]:
                best = (rank, name)
            if rank == 0:
                break
        if best is None:
            return None
        return directory / best[1]

    def resolve_task_file(self, partial_name: str, repo_info: RepoInfo | None) -> Path:
        """Resolve *partial_name* inside the task directory.

        Returns the hypothetical ``<dir>/<partial_name>.md`` (not created)
        when nothing matches.
        """
        task_dir = self.get_task_dir(repo_info)
        found = self.find_in_dir(task_dir, partial_name)
        if found is not None:
            logger.debug("Resolved %r to %s", partial_name, found)
            return found
        return task_dir / ensure_markdown_extension(partial_name)

    def walk_markdown_files(self, root: Path) -> Iterator[Path]:
        """Yield every ``.md`` file under *root*, breadth-first, names sorted.

        Uses an explicit queue rather than recursion; unreadable
        directories are skipped.
        """
        if not self._fs.exists(root):
            return
        pending: deque[Path] = deque([root])
        while pending:
            directory = pending.popleft()
            try:
                entries = sorted(self._fs.read_dir(directory), key=lambda e: e.name)
            except LocusError:
                logger.debug("Skipping unreadable directory %s", directory, exc_info=True)
                continue
            for entry in entries:
                path = directory / entry.name
                if entry.is_dir:
                    pending.append(path)
                elif entry.is_file and entry.name.endswith(".md"):
                    yield path

    def find_task_files(self, partial_name: str) -> list[Path]:
        """Every file under the base directory whose name matches *partial_name*.

        Exact matches sort before substring matches.
        """
        needle = partial_name.lower()
        ranked: list[tuple[int, Path]] = []
        for path in self.walk_markdown_files(self.get_base_dir()):
            rank = _match_rank(path.name, needle)
            if rank is not None:
                ranked.append((rank, path))
        return [path for _rank, path in sorted(ranked, key=lambda item: (item[0], str(item[1])))]

    # ------------------------------------------------------------------
    # Relative paths
    # ------------------------------------------------------------------

    def relative_path(self, path: Path) -> str:
        """*path* relative to the base directory, ``/``-separated."""
        try:
            return path.relative_to(self.get_base_dir()).as_posix()
        except ValueError:
            return path.as_posix()

    @staticmethod
    def repository_from_relative(relative: str) -> str:
        """``owner/repo`` from a relative path's first two segments, else ``default``.

        Nested owners (GitLab subgroups) are not recoverable from the path
        alone; only the first two segments are used.
        """
        parts = relative.split("/")
        if len(parts) >= 2 and not parts[1].endswith(".md"):
            return f"{parts[0]}/{parts[1]}"
        return DEFAULT_REPOSITORY
