"""SearchService — substring search over task names, titles, bodies and tags."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel

from locus.domain.errors import LocusError
from locus.domain.models import RepoInfo
from locus.infrastructure.filesystem import FileSystem
from locus.services._helpers import strip_md
from locus.services.markdown import MarkdownService
from locus.services.paths import PathResolver
from locus.services.result import ServiceResult
from locus.services.task import TaskService

logger = logging.getLogger(__name__)


class SearchOptions(BaseModel):
    """Which fields to match and which tasks to consider.

    ``None`` for a ``search_*`` flag means "use the operation's default":
    file search looks at names and titles only, task search at everything.
    """

    model_config = {"frozen": True}

    all: bool = False
    status: str | None = None
    priority: str | None = None
    tags: list[str] | None = None
    search_file_name: bool | None = None
    search_title: bool | None = None
    search_body: bool | None = None
    search_tags: bool | None = None
    ignore_case: bool = True


def _fold(text: str, ignore_case: bool) -> str:
    return text.lower() if ignore_case else text


def is_file_name_match(file_name: str, query: str, ignore_case: bool = True) -> bool:
    """Substring match with ``.md`` dropped from both sides."""
    return strip_md(_fold(query, ignore_case)) in strip_md(_fold(file_name, ignore_case))


def is_title_match(title: str, query: str, ignore_case: bool = True) -> bool:
    return _fold(query, ignore_case) in _fold(title, ignore_case)


def is_body_match(body: str, query: str, ignore_case: bool = True) -> bool:
    return _fold(query, ignore_case) in _fold(body, ignore_case)


def is_tags_match(tags: list[str], query: str, ignore_case: bool = True) -> bool:
    needle = _fold(query, ignore_case)
    return any(needle in _fold(tag, ignore_case) for tag in tags)


def _flag(value: bool | None, default: bool) -> bool:
    return default if value is None else value


class SearchService:
    def __init__(
        self,
        tasks: TaskService,
        paths: PathResolver,
        fs: FileSystem,
        markdown: MarkdownService | None = None,
    ) -> None:
        self._tasks = tasks
        self._paths = paths
        self._fs = fs
        self._markdown = markdown or MarkdownService()

    is_file_name_match = staticmethod(is_file_name_match)
    is_title_match = staticmethod(is_title_match)
    is_body_match = staticmethod(is_body_match)
    is_tags_match = staticmethod(is_tags_match)

    def _title_of(self, path: Path) -> str | None:
        try:
            content = self._fs.read_text(path)
        except LocusError:
            logger.debug("Cannot read %s for title match", path, exc_info=True)
            return None
        return self._markdown.extract_title(self._markdown.parse_markdown(content).body)

    def search_markdown_files(
        self,
        query: str,
        repo_info: RepoInfo | None = None,
        options: SearchOptions | None = None,
    ) -> ServiceResult:
        """Markdown files under the repository (or base) directory matching *query*.

        Matches the file name first and reads the file for its title only
        when the name does not match.
        """
        op = "search_markdown_files"
        opts = options or SearchOptions()
        by_name = _flag(opts.search_file_name, True)
        by_title = _flag(opts.search_title, True)
        try:
            root = (
                self._paths.get_task_dir(repo_info)
                if repo_info is not None
                else self._paths.get_base_dir()
            )
            found: list[str] = []
            for path in self._paths.walk_markdown_files(root):
                matched = by_name and is_file_name_match(path.name, query, opts.ignore_case)
                if not matched and by_title:
                    title = self._title_of(path)
                    matched = title is not None and is_title_match(title, query, opts.ignore_case)
                if matched:
                    found.append(str(path))
        except LocusError as exc:
            return ServiceResult.from_exception(op, exc)
        return ServiceResult.success(op, {"query": query, "paths": found, "count": len(found)})

    def search_tasks(
        self,
        query: str,
        repo_info: RepoInfo | None = None,
        options: SearchOptions | None = None,
    ) -> ServiceResult:
        """Listed tasks whose name, title, body or tags contain *query*.

        Without a repository every task under the base directory is
        considered.
        """
        op = "search_tasks"
        opts = options or SearchOptions()
        by_name = _flag(opts.search_file_name, True)
        by_title = _flag(opts.search_title, True)
        by_body = _flag(opts.search_body, True)
        by_tags = _flag(opts.search_tags, True)
        try:
            candidates = self._tasks.collect_tasks(
                status=opts.status,
                priority=opts.priority,
                tags=opts.tags,
                all_repos=opts.all or repo_info is None,
                repo_info=repo_info,
            )
        except LocusError as exc:
            return ServiceResult.from_exception(op, exc)

        matched = [
            task
            for task in candidates
            if (by_name and is_file_name_match(task.file_name, query, opts.ignore_case))
            or (by_title and is_title_match(task.title, query, opts.ignore_case))
            or (by_body and is_body_match(task.body, query, opts.ignore_case))
            or (by_tags and is_tags_match(task.tags, query, opts.ignore_case))
        ]
        return ServiceResult.success(
            op,
            {
                "query": query,
                "tasks": [task.model_dump(mode="json") for task in matched],
                "count": len(matched),
            },
        )
