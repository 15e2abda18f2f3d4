"""TagsService — read and edit single frontmatter properties.

"Tags" here means any frontmatter key, not just the ``tags`` list. Files
are located by absolute path, else by fuzzy name in the repository
directory, then the base directory.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from locus.domain.errors import ErrorKind, LocusError
from locus.domain.models import RepoInfo
from locus.infrastructure.filesystem import FileSystem
from locus.services.markdown import MarkdownService
from locus.services.paths import PathResolver
from locus.services.result import ServiceResult

logger = logging.getLogger(__name__)


class TagsService:
    def __init__(
        self,
        paths: PathResolver,
        fs: FileSystem,
        markdown: MarkdownService | None = None,
    ) -> None:
        self._paths = paths
        self._fs = fs
        self._markdown = markdown or MarkdownService()

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _find_in(self, directory: Path, file_name: str) -> Path | None:
        if not self._fs.exists(directory):
            return None
        return self._paths.find_in_dir(directory, file_name)

    def resolve_tag_file(self, file_name: str, repo_info: RepoInfo | None = None) -> Path:
        """Absolute path, repo-directory match, base-directory match, or ``<base>/<name>.md``."""
        if Path(file_name).is_absolute():
            return Path(file_name)

        if repo_info is not None:
            found = self._find_in(self._paths.get_task_dir(repo_info), file_name)
            if found is not None:
                return found

        base = self._paths.get_base_dir()
        found = self._find_in(base, file_name)
        if found is not None:
            return found
        return base / self._markdown.ensure_markdown_extension(file_name)

    def _load_existing(
        self, file_name: str, repo_info: RepoInfo | None
    ) -> tuple[Path, dict[str, Any] | None, str]:
        path = self.resolve_tag_file(file_name, repo_info)
        if not self._fs.exists(path):
            raise LocusError(ErrorKind.TASK_NOT_FOUND, f"Task not found: {file_name}", file_name=file_name)
        parsed = self._markdown.parse_markdown(self._fs.read_text(path))
        return path, parsed.frontmatter, parsed.body

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def list_tags(
        self,
        file_name: str | None = None,
        *,
        repo_info: RepoInfo | None = None,
    ) -> ServiceResult:
        """One file's frontmatter, or every task file (paths only) without a name."""
        op = "list_tags"
        try:
            if file_name is None:
                files = [
                    {
                        "file_name": path.name,
                        "path": self._paths.relative_path(path),
                        "frontmatter": {},
                    }
                    for path in self._paths.walk_markdown_files(self._paths.get_base_dir())
                ]
            else:
                path, frontmatter, _body = self._load_existing(file_name, repo_info)
                files = [{"file_name": path.name, "path": str(path), "frontmatter": frontmatter or {}}]
        except LocusError as exc:
            return ServiceResult.from_exception(op, exc)
        return ServiceResult.success(op, {"files": files, "count": len(files)})

    def get_tag(
        self,
        file_name: str,
        key: str,
        *,
        repo_info: RepoInfo | None = None,
    ) -> ServiceResult:
        op = "get_tag"
        try:
            path, frontmatter, _body = self._load_existing(file_name, repo_info)
        except LocusError as exc:
            return ServiceResult.from_exception(op, exc)
        if not frontmatter or key not in frontmatter:
            return ServiceResult.failure(
                op, ErrorKind.PROPERTY_NOT_FOUND, f"Property not found: {key}", property=key
            )
        return ServiceResult.success(op, {"path": str(path), "property": key, "value": frontmatter[key]})

    def _merge_into(
        self,
        file_name: str,
        updates: dict[str, Any],
        repo_info: RepoInfo | None,
    ) -> tuple[Path, bool]:
        path = self.resolve_tag_file(file_name, repo_info)
        frontmatter: dict[str, Any] = {}
        body = ""
        created = not self._fs.exists(path)
        if created:
            self._fs.mkdir(path.parent, parents=True)
            logger.debug("Creating %s", path)
        else:
            parsed = self._markdown.parse_markdown(self._fs.read_text(path))
            frontmatter = parsed.frontmatter or {}
            body = parsed.body
        merged = self._markdown.merge_frontmatter(frontmatter, updates)
        self._fs.write_text(path, self._markdown.generate_markdown(merged, body))
        return path, created

    def set_tag(
        self,
        file_name: str,
        key: str,
        value: Any,
        *,
        repo_info: RepoInfo | None = None,
    ) -> ServiceResult:
        """Merge ``key: value`` into the frontmatter, creating the file if missing."""
        op = "set_tag"
        try:
            path, created = self._merge_into(file_name, {key: value}, repo_info)
        except LocusError as exc:
            return ServiceResult.from_exception(op, exc)
        return ServiceResult.success(
            op, {"path": str(path), "property": key, "value": value, "created": created}
        )

    def set_tags(
        self,
        file_name: str,
        updates: dict[str, Any],
        *,
        repo_info: RepoInfo | None = None,
    ) -> ServiceResult:
        """Merge several properties in one rewrite; same creation rules as :meth:`set_tag`."""
        op = "set_tags"
        if not updates:
            return ServiceResult.success(op, {"path": None, "fields_changed": [], "count": 0})
        try:
            path, created = self._merge_into(file_name, updates, repo_info)
        except LocusError as exc:
            return ServiceResult.from_exception(op, exc)
        return ServiceResult.success(
            op,
            {
                "path": str(path),
                "fields_changed": list(updates),
                "count": len(updates),
                "created": created,
            },
        )

    def remove_tag(
        self,
        file_name: str,
        key: str,
        *,
        repo_info: RepoInfo | None = None,
    ) -> ServiceResult:
        op = "remove_tag"
        try:
            path, frontmatter, body = self._load_existing(file_name, repo_info)
            if not frontmatter or key not in frontmatter:
                return ServiceResult.failure(
                    op, ErrorKind.PROPERTY_NOT_FOUND, f"Property not found: {key}", property=key
                )
            remaining = {k: v for k, v in frontmatter.items() if k != key}
            self._fs.write_text(path, self._markdown.generate_markdown(remaining, body))
        except LocusError as exc:
            return ServiceResult.from_exception(op, exc)
        return ServiceResult.success(op, {"path": str(path), "property": key})

    def clear_tags(self, file_name: str, *, repo_info: RepoInfo | None = None) -> ServiceResult:
        """Drop the frontmatter block entirely; the body is written back alone."""
        op = "clear_tags"
        try:
            path, _frontmatter, body = self._load_existing(file_name, repo_info)
            self._fs.write_text(path, body)
        except LocusError as exc:
            return ServiceResult.from_exception(op, exc)
        return ServiceResult.success(op, {"path": str(path)})
