"""ServiceContainer — explicit wiring of every service from one settings object.

Collaborators (filesystem, git, hash factory) are injected so tests can
swap in in-memory and fake implementations; nothing here is global.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from locus.config.settings import LocusSettings
from locus.infrastructure.filesystem import FileSystem, LocalFileSystem
from locus.infrastructure.git import GitService, SubprocessGit
from locus.services.config import ConfigService
from locus.services.filenames import FileNameService
from locus.services.markdown import MarkdownService
from locus.services.paths import PathResolver
from locus.services.search import SearchService
from locus.services.tags import TagsService
from locus.services.task import TaskService


@dataclass(frozen=True)
class ServiceContainer:
    settings: LocusSettings
    fs: FileSystem
    git: GitService
    filenames: FileNameService
    markdown: MarkdownService
    paths: PathResolver
    tasks: TaskService
    tags: TagsService
    search: SearchService
    config: ConfigService


def build_container(
    settings: LocusSettings,
    *,
    fs: FileSystem | None = None,
    git: GitService | None = None,
    hash_factory: Callable[[int], str] | None = None,
) -> ServiceContainer:
    """Construct the service graph, leaves first."""
    fs = fs or LocalFileSystem()
    git = git or SubprocessGit()
    markdown = MarkdownService()
    filenames = FileNameService(settings.file_naming, hash_factory=hash_factory)
    paths = PathResolver(settings, fs)
    tasks = TaskService(settings, paths, fs, filenames, markdown)
    return ServiceContainer(
        settings=settings,
        fs=fs,
        git=git,
        filenames=filenames,
        markdown=markdown,
        paths=paths,
        tasks=tasks,
        tags=TagsService(paths, fs, markdown),
        search=SearchService(tasks, paths, fs, markdown),
        config=ConfigService(settings),
    )
