"""TaskService — create, read, update, delete, list and search tasks.

Every call is stateless: nothing is cached, each operation re-reads the
files it needs and rewrites a task file wholesale. There is no locking;
two writers racing on one file end with the last write.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from locus.config.settings import LocusSettings
from locus.domain.errors import ErrorKind, LocusError
from locus.domain.models import RepoInfo, TaskFrontmatter, TaskInfo
from locus.infrastructure.filesystem import FileSystem
from locus.services._helpers import strip_md
from locus.services.filenames import FileNameService, validate_file_name
from locus.services.markdown import MarkdownService
from locus.services.paths import PathResolver
from locus.services.result import ServiceResult

logger = logging.getLogger(__name__)

SORT_KEYS = ("created", "status", "priority", "title")

_PRIORITY_RANK: dict[str, int] = {"high": 3, "medium": 2, "normal": 2, "low": 1}


def _task_dump(task: TaskInfo) -> dict[str, Any]:
    return task.model_dump(mode="json")


def filter_tasks(
    tasks: Iterable[TaskInfo],
    *,
    status: str | None = None,
    priority: str | None = None,
    tags: list[str] | None = None,
) -> list[TaskInfo]:
    """Exact status/priority match; ``tags`` passes on ANY shared tag."""
    result: list[TaskInfo] = []
    for task in tasks:
        if status and task.status != status:
            continue
        if priority and task.priority != priority:
            continue
        if tags and not any(tag in task.tags for tag in tags):
            continue
        result.append(task)
    return result


def sort_tasks(tasks: list[TaskInfo], sort: str | None = None) -> list[TaskInfo]:
    """Order tasks by *sort*; the default is newest ``created`` first."""
    if sort == "status":
        return sorted(tasks, key=lambda t: (t.status, t.path))
    if sort == "priority":
        return sorted(tasks, key=lambda t: (-_PRIORITY_RANK.get(t.priority, 0), t.path))
    if sort == "title":
        return sorted(tasks, key=lambda t: (t.title.lower(), t.path))
    by_path = sorted(tasks, key=lambda t: t.path)
    return sorted(by_path, key=lambda t: t.created, reverse=True)


def task_matches_query(task: TaskInfo, query: str) -> bool:
    needle = query.lower()
    return (
        needle in task.title.lower()
        or needle in task.body.lower()
        or any(needle in tag.lower() for tag in task.tags)
    )


class TaskService:
    """Task CRUD on top of the path, filename and markdown primitives."""

    def __init__(
        self,
        settings: LocusSettings,
        paths: PathResolver,
        fs: FileSystem,
        filenames: FileNameService,
        markdown: MarkdownService | None = None,
    ) -> None:
        self._settings = settings
        self._paths = paths
        self._fs = fs
        self._filenames = filenames
        self._markdown = markdown or MarkdownService()

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def read_task_file(self, path: Path, repo_info: RepoInfo | None = None) -> TaskInfo:
        """Materialize the task stored at *path*.

        Raises:
            LocusError: ``FS_ERROR`` if the file has no frontmatter or its
                reserved keys do not validate, or the filesystem's own
                kind if it cannot be read.
        """
        parsed = self._markdown.parse_markdown(self._fs.read_text(path))
        if parsed.frontmatter is None:
            raise LocusError(ErrorKind.FS_ERROR, f"Invalid task file: {path.name}", path=str(path))

        try:
            fm = TaskFrontmatter.model_validate(parsed.frontmatter)
        except ValidationError as exc:
            raise LocusError(
                ErrorKind.FS_ERROR,
                f"Invalid task frontmatter in {path.name}: {exc.error_count()} error(s)",
                path=str(path),
            ) from exc
        relative = self._paths.relative_path(path)
        repository = (
            repo_info.full_name if repo_info else self._paths.repository_from_relative(relative)
        )
        return TaskInfo(
            file_name=path.name,
            title=self._markdown.extract_title(parsed.body) or strip_md(path.name),
            status=fm.status or "todo",
            priority=fm.priority or "normal",
            tags=fm.tags,
            created=fm.created or fm.date or "",
            path=relative,
            repository=repository,
            frontmatter=parsed.frontmatter,
            body=parsed.body,
        )

    def _require_task_path(self, file_name: str, repo_info: RepoInfo | None) -> Path:
        path = self._paths.resolve_task_file(file_name, repo_info)
        if not self._fs.exists(path):
            raise LocusError(ErrorKind.TASK_NOT_FOUND, f"Task not found: {file_name}", file_name=file_name)
        return path

    def get_task(self, file_name: str, repo_info: RepoInfo | None = None) -> ServiceResult:
        """Load one task by exact or partial name."""
        op = "get_task"
        try:
            path = self._require_task_path(file_name, repo_info)
            task = self.read_task_file(path, repo_info)
        except LocusError as exc:
            return ServiceResult.from_exception(op, exc)
        return ServiceResult.success(op, {"task": _task_dump(task), "abs_path": str(path)})

    def locate_task(
        self,
        file_name: str,
        *,
        all_repos: bool = False,
        repo_info: RepoInfo | None = None,
    ) -> ServiceResult:
        """Absolute path(s) of an existing task.

        An absolute *file_name* is checked as-is. With *all_repos* every
        match under the base directory is returned, exact matches first.
        """
        op = "locate_task"
        try:
            if Path(file_name).is_absolute():
                paths = [Path(file_name)] if self._fs.exists(Path(file_name)) else []
            elif all_repos:
                paths = self._paths.find_task_files(file_name)
            else:
                paths = [self._require_task_path(file_name, repo_info)]
        except LocusError as exc:
            return ServiceResult.from_exception(op, exc)
        if not paths:
            return ServiceResult.failure(
                op, ErrorKind.TASK_NOT_FOUND, f"Task not found: {file_name}", file_name=file_name
            )
        return ServiceResult.success(
            op, {"path": str(paths[0]), "paths": [str(p) for p in paths], "count": len(paths)}
        )

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def create_task(
        self,
        title: str,
        *,
        body: str | None = None,
        tags: list[str] | None = None,
        priority: str | None = None,
        status: str | None = None,
        repo_info: RepoInfo | None = None,
    ) -> ServiceResult:
        """Write a new task file; never overwrites an existing one."""
        op = "create_task"
        defaults = self._settings.defaults
        try:
            task_dir = self._paths.get_task_dir(repo_info)
            file_name = self._filenames.generate_file_name(title)
            validate_file_name(file_name)
            path = task_dir / file_name

            if self._fs.exists(path):
                return ServiceResult.failure(
                    op, ErrorKind.FILE_EXISTS, f"File already exists: {path}", path=str(path)
                )

            frontmatter: dict[str, Any] = {
                "status": status or defaults.status,
                "priority": priority or defaults.priority,
                "tags": list(tags) if tags else list(defaults.tags),
            }
            content = self._markdown.create_task_markdown(title, body, frontmatter)
            self._fs.write_text(path, content)
        except LocusError as exc:
            return ServiceResult.from_exception(op, exc)

        logger.debug("Created task %s", path)
        return ServiceResult.success(
            op,
            {
                "path": str(path),
                "file_name": file_name,
                "title": title,
                "repository": repo_info.full_name if repo_info else None,
            },
        )

    def update_task(
        self,
        file_name: str,
        *,
        body: str | None = None,
        frontmatter: dict[str, Any] | None = None,
        repo_info: RepoInfo | None = None,
    ) -> ServiceResult:
        """Merge *frontmatter* over the existing one; replace body only if given."""
        op = "update_task"
        try:
            path = self._require_task_path(file_name, repo_info)
            task = self.read_task_file(path, repo_info)
            merged = self._markdown.merge_frontmatter(task.frontmatter, frontmatter or {})
            new_body = task.body if body is None else body
            self._fs.write_text(path, self._markdown.generate_markdown(merged, new_body))
        except LocusError as exc:
            return ServiceResult.from_exception(op, exc)

        fields_changed = sorted(frontmatter or {})
        if body is not None:
            fields_changed.append("body")
        return ServiceResult.success(
            op,
            {"path": str(path), "file_name": path.name, "fields_changed": fields_changed},
        )

    def append_body(
        self,
        file_name: str,
        text: str,
        *,
        repo_info: RepoInfo | None = None,
    ) -> ServiceResult:
        """Append *text* to the body, separated by a blank line."""
        try:
            path = self._require_task_path(file_name, repo_info)
            task = self.read_task_file(path, repo_info)
        except LocusError as exc:
            return ServiceResult.from_exception("append_body", exc)
        return self.update_task(
            path.name, body=f"{task.body.rstrip()}\n\n{text}", repo_info=repo_info
        )

    def delete_task(self, file_name: str, repo_info: RepoInfo | None = None) -> ServiceResult:
        op = "delete_task"
        try:
            path = self._require_task_path(file_name, repo_info)
            self._fs.remove(path)
        except LocusError as exc:
            return ServiceResult.from_exception(op, exc)
        logger.debug("Deleted task %s", path)
        return ServiceResult.success(op, {"path": str(path), "file_name": path.name})

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def _candidate_files(self, *, all_repos: bool, repo_info: RepoInfo | None) -> list[Path]:
        if all_repos:
            return list(self._paths.walk_markdown_files(self._paths.get_base_dir()))
        task_dir = self._paths.get_task_dir(repo_info)
        return [
            task_dir / entry.name
            for entry in sorted(self._fs.read_dir(task_dir), key=lambda e: e.name)
            if entry.is_file and entry.name.endswith(".md")
        ]

    def collect_tasks(
        self,
        *,
        status: str | None = None,
        priority: str | None = None,
        tags: list[str] | None = None,
        all_repos: bool = False,
        repo_info: RepoInfo | None = None,
        sort: str | None = None,
    ) -> list[TaskInfo]:
        """Filtered, sorted tasks; files that fail to parse are skipped.

        Raises:
            LocusError: If the task directory itself cannot be resolved.
        """
        tasks: list[TaskInfo] = []
        for path in self._candidate_files(all_repos=all_repos, repo_info=repo_info):
            try:
                tasks.append(self.read_task_file(path))
            except LocusError as exc:
                logger.debug("Skipping %s: %s", path, exc.message)
        filtered = filter_tasks(tasks, status=status, priority=priority, tags=tags)
        return sort_tasks(filtered, sort)

    def list_tasks(
        self,
        *,
        status: str | None = None,
        priority: str | None = None,
        tags: list[str] | None = None,
        all_repos: bool = False,
        repo_info: RepoInfo | None = None,
        sort: str | None = None,
    ) -> ServiceResult:
        """List tasks in one repository directory, or everywhere with *all_repos*."""
        op = "list_tasks"
        try:
            tasks = self.collect_tasks(
                status=status,
                priority=priority,
                tags=tags,
                all_repos=all_repos,
                repo_info=repo_info,
                sort=sort,
            )
        except LocusError as exc:
            return ServiceResult.from_exception(op, exc)
        return ServiceResult.success(
            op,
            {"tasks": [_task_dump(t) for t in tasks], "count": len(tasks)},
        )

    def search_tasks(
        self,
        query: str,
        *,
        status: str | None = None,
        priority: str | None = None,
        tags: list[str] | None = None,
        all_repos: bool = False,
        repo_info: RepoInfo | None = None,
    ) -> ServiceResult:
        """Case-insensitive substring search over title, body and tag names."""
        op = "search_tasks"
        try:
            tasks = self.collect_tasks(
                status=status,
                priority=priority,
                tags=tags,
                all_repos=all_repos,
                repo_info=repo_info,
            )
        except LocusError as exc:
            return ServiceResult.from_exception(op, exc)
        matched = [t for t in tasks if task_matches_query(t, query)]
        return ServiceResult.success(
            op,
            {"query": query, "tasks": [_task_dump(t) for t in matched], "count": len(matched)},
        )
