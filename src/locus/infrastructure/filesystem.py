"""Filesystem contract and the local-disk implementation.

INVARIANT: Files are truth. Nothing about a task lives anywhere but its
Markdown file, so every read goes to disk.

Implementations translate OS failures into :class:`LocusError` with the
``FILE_NOT_FOUND`` / ``FILE_EXISTS`` / ``FS_ERROR`` kinds so callers never
catch ``OSError`` directly.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from locus.domain.errors import ErrorKind, LocusError


@dataclass(frozen=True)
class DirEntry:
    """One child of a directory listing."""

    name: str
    is_file: bool
    is_dir: bool


@dataclass(frozen=True)
class FileStat:
    is_file: bool
    is_dir: bool
    size: int
    mtime: float


class FileSystem(Protocol):
    """Narrow I/O contract the task core depends on."""

    def read_text(self, path: Path) -> str: ...

    def write_text(self, path: Path, content: str) -> None: ...

    def exists(self, path: Path) -> bool: ...

    def remove(self, path: Path) -> None: ...

    def read_dir(self, path: Path) -> list[DirEntry]: ...

    def mkdir(self, path: Path, *, parents: bool = True) -> None: ...

    def stat(self, path: Path) -> FileStat: ...


@contextmanager
def _translate_os_errors(path: Path, action: str) -> Iterator[None]:
    try:
        yield
    except FileNotFoundError as exc:
        raise LocusError(ErrorKind.FILE_NOT_FOUND, f"File not found: {path}", path=str(path)) from exc
    except FileExistsError as exc:
        raise LocusError(ErrorKind.FILE_EXISTS, f"File already exists: {path}", path=str(path)) from exc
    except OSError as exc:
        msg = f"Failed to {action} {path}: {exc.strerror or exc}"
        raise LocusError(ErrorKind.FS_ERROR, msg, path=str(path)) from exc


class LocalFileSystem:
    """:class:`FileSystem` backed by the real disk.

    Writes go to a temporary sibling and are moved into place with
    ``os.replace`` so an interrupted rewrite leaves the previous content.
    """

    def read_text(self, path: Path) -> str:
        with _translate_os_errors(path, "read"):
            return path.read_text(encoding="utf-8")

    def write_text(self, path: Path, content: str) -> None:
        with _translate_os_errors(path, "write"):
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                    handle.write(content)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise

    def exists(self, path: Path) -> bool:
        return path.exists()

    def remove(self, path: Path) -> None:
        with _translate_os_errors(path, "remove"):
            path.unlink()

    def read_dir(self, path: Path) -> list[DirEntry]:
        with _translate_os_errors(path, "list"), os.scandir(path) as entries:
            return [
                DirEntry(name=entry.name, is_file=entry.is_file(), is_dir=entry.is_dir())
                for entry in entries
            ]

    def mkdir(self, path: Path, *, parents: bool = True) -> None:
        with _translate_os_errors(path, "create directory"):
            path.mkdir(parents=parents, exist_ok=True)

    def stat(self, path: Path) -> FileStat:
        with _translate_os_errors(path, "stat"):
            st = path.stat()
        return FileStat(
            is_file=path.is_file(),
            is_dir=path.is_dir(),
            size=st.st_size,
            mtime=st.st_mtime,
        )
