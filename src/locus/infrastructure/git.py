"""Git repository detection and remote URL parsing.

Every git call is a blocking subprocess with no timeout. A missing git
binary, a directory outside any work tree, or a repository without an
``origin`` remote all surface as ``None`` from :meth:`SubprocessGit.get_repo_info`;
:meth:`SubprocessGit.require_repo_info` reports which one it was.
"""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path
from typing import Protocol
from urllib.parse import urlsplit

from locus.domain.errors import ErrorKind, LocusError
from locus.domain.models import RepoInfo

logger = logging.getLogger(__name__)

_SCP_LIKE_RE = re.compile(r"^(?:[\w.-]+@)?([^:/]+):(?!//)(.+)$")


class GitService(Protocol):
    """Narrow git contract the task core depends on."""

    def is_git_repo(self, cwd: Path | None = None) -> bool: ...

    def get_repo_info(self, cwd: Path | None = None) -> RepoInfo | None: ...


# ---------------------------------------------------------------------------
# Pure URL handling
# ---------------------------------------------------------------------------


def normalize_git_url(raw: str) -> str:
    """Rewrite SSH, SCP-like and ``git://`` remotes as HTTPS; drop ``.git``.

    Examples:
        >>> normalize_git_url("git@github.com:alice/proj.git")
        'https://github.com/alice/proj'
        >>> normalize_git_url("ssh://git@github.com/alice/proj.git")
        'https://github.com/alice/proj'
    """
    url = raw.strip()
    match = _SCP_LIKE_RE.match(url)
    if match and "://" not in url:
        host, path = match.groups()
        url = f"https://{host}/{path}"
    elif url.startswith(("git://", "ssh://", "git+ssh://")):
        parts = urlsplit(url)
        url = f"https://{parts.hostname or ''}{parts.path}"
    elif not url.startswith(("http://", "https://")):
        msg = f"Unsupported git remote URL: {raw!r}"
        raise ValueError(msg)

    if url.endswith(".git"):
        url = url[: -len(".git")]
    return url


def parse_repo_info(url: str) -> RepoInfo:
    """Split an HTTPS remote into ``RepoInfo``; nested groups stay in ``owner``.

    Raises:
        ValueError: If the path has fewer than two segments.
    """
    parts = urlsplit(url)
    segments = [segment for segment in parts.path.strip("/").split("/") if segment]
    if len(segments) < 2:
        msg = "Invalid repository URL: missing owner or repo name"
        raise ValueError(msg)
    repo = segments.pop()
    return RepoInfo(host=parts.netloc.rsplit("@", 1)[-1], owner="/".join(segments), repo=repo)


def repo_info_from_remote(raw: str) -> RepoInfo:
    return parse_repo_info(normalize_git_url(raw))


# ---------------------------------------------------------------------------
# Subprocess-backed service
# ---------------------------------------------------------------------------


class SubprocessGit:
    """:class:`GitService` that shells out to the ``git`` binary."""

    def __init__(self, executable: str = "git") -> None:
        self._executable = executable

    def _run(self, args: list[str], cwd: Path | None) -> str:
        """Run git and return stripped stdout.

        Raises:
            LocusError: ``GIT_COMMAND_FAILED`` on a missing binary or a
                non-zero exit status.
        """
        command = [self._executable, *args]
        try:
            proc = subprocess.run(
                command,
                cwd=cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            msg = f"Failed to run {' '.join(command)}: {exc}"
            raise LocusError(ErrorKind.GIT_COMMAND_FAILED, msg, command=command) from exc
        if proc.returncode != 0:
            msg = proc.stderr.strip() or f"git exited with status {proc.returncode}"
            raise LocusError(ErrorKind.GIT_COMMAND_FAILED, msg, command=command)
        return proc.stdout.strip()

    def is_git_repo(self, cwd: Path | None = None) -> bool:
        try:
            return self._run(["rev-parse", "--is-inside-work-tree"], cwd) == "true"
        except LocusError:
            logger.debug("Not inside a git work tree: %s", cwd or Path.cwd())
            return False

    def get_remote_url(self, cwd: Path | None = None, remote: str = "origin") -> str | None:
        try:
            return self._run(["remote", "get-url", remote], cwd) or None
        except LocusError:
            return None

    def require_repo_info(self, cwd: Path | None = None) -> RepoInfo:
        """Like :meth:`get_repo_info` but reports why detection failed.

        Raises:
            LocusError: ``GIT_NOT_REPO``, ``GIT_NO_REMOTE`` or
                ``GIT_COMMAND_FAILED`` for an unparseable remote.
        """
        if not self.is_git_repo(cwd):
            raise LocusError(ErrorKind.GIT_NOT_REPO, "Not in a git repository")
        remote_url = self.get_remote_url(cwd)
        if not remote_url:
            raise LocusError(ErrorKind.GIT_NO_REMOTE, "No git remote configured")
        try:
            return repo_info_from_remote(remote_url)
        except ValueError as exc:
            raise LocusError(ErrorKind.GIT_COMMAND_FAILED, str(exc), remote=remote_url) from exc

    def get_repo_info(self, cwd: Path | None = None) -> RepoInfo | None:
        try:
            info = self.require_repo_info(cwd)
        except LocusError as exc:
            logger.debug("No repository info: %s", exc.message)
            return None
        logger.debug("Detected repository %s on %s", info.full_name, info.host)
        return info
