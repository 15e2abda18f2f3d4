"""In-memory :class:`~locus.infrastructure.filesystem.FileSystem`.

Used by the test suite and by callers that want to drive the task core
without touching disk. Paths are normalized to POSIX strings; directory
listings come back in insertion order, like a real filesystem would
return them in some unspecified order.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from locus.domain.errors import ErrorKind, LocusError
from locus.infrastructure.filesystem import DirEntry, FileStat


class InMemoryFileSystem:
    """Dict-backed filesystem with implicit parent directories."""

    def __init__(self, files: dict[str | Path, str] | None = None) -> None:
        self._files: dict[str, str] = {}
        self._dirs: set[str] = {"/"}
        self.writes: list[str] = []
        for path, content in (files or {}).items():
            self._put(Path(path), content)

    @staticmethod
    def _key(path: Path | str) -> str:
        return str(PurePosixPath(Path(path).as_posix()))

    def _ensure_parents(self, key: str) -> None:
        for parent in PurePosixPath(key).parents:
            self._dirs.add(str(parent))

    def _put(self, path: Path, content: str) -> None:
        key = self._key(path)
        self._ensure_parents(key)
        self._files[key] = content

    # --- FileSystem protocol ---

    def read_text(self, path: Path) -> str:
        key = self._key(path)
        if key not in self._files:
            raise LocusError(ErrorKind.FILE_NOT_FOUND, f"File not found: {path}", path=key)
        return self._files[key]

    def write_text(self, path: Path, content: str) -> None:
        key = self._key(path)
        if key in self._dirs:
            raise LocusError(ErrorKind.FS_ERROR, f"Is a directory: {path}", path=key)
        self._put(path, content)
        self.writes.append(key)

    def exists(self, path: Path) -> bool:
        key = self._key(path)
        return key in self._files or key in self._dirs

    def remove(self, path: Path) -> None:
        key = self._key(path)
        if key not in self._files:
            raise LocusError(ErrorKind.FILE_NOT_FOUND, f"File not found: {path}", path=key)
        del self._files[key]

    def read_dir(self, path: Path) -> list[DirEntry]:
        key = self._key(path)
        if key not in self._dirs:
            raise LocusError(ErrorKind.FILE_NOT_FOUND, f"Directory not found: {path}", path=key)

        seen: dict[str, DirEntry] = {}
        for file_key in self._files:
            parent = PurePosixPath(file_key).parent
            if str(parent) == key:
                name = PurePosixPath(file_key).name
                seen.setdefault(name, DirEntry(name=name, is_file=True, is_dir=False))
        for dir_key in sorted(self._dirs):
            candidate = PurePosixPath(dir_key)
            if dir_key != key and str(candidate.parent) == key:
                seen.setdefault(candidate.name, DirEntry(name=candidate.name, is_file=False, is_dir=True))
        return list(seen.values())

    def mkdir(self, path: Path, *, parents: bool = True) -> None:
        key = self._key(path)
        if key in self._files:
            raise LocusError(ErrorKind.FILE_EXISTS, f"File already exists: {path}", path=key)
        if not parents and str(PurePosixPath(key).parent) not in self._dirs:
            raise LocusError(ErrorKind.FILE_NOT_FOUND, f"Parent not found: {path}", path=key)
        self._ensure_parents(key)
        self._dirs.add(key)

    def stat(self, path: Path) -> FileStat:
        key = self._key(path)
        if key in self._files:
            return FileStat(is_file=True, is_dir=False, size=len(self._files[key].encode("utf-8")), mtime=0.0)
        if key in self._dirs:
            return FileStat(is_file=False, is_dir=True, size=0, mtime=0.0)
        raise LocusError(ErrorKind.FILE_NOT_FOUND, f"File not found: {path}", path=key)
