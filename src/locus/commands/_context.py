"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Services are built lazily so ``--help`` never touches
the filesystem or git.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click

from locus.output.formatters import format_result

if TYPE_CHECKING:
    from locus.config.settings import LocusSettings
    from locus.domain.models import RepoInfo
    from locus.infrastructure.filesystem import FileSystem
    from locus.infrastructure.git import GitService
    from locus.services.container import ServiceContainer
    from locus.services.result import ServiceResult

logger = logging.getLogger(__name__)


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(
        self,
        settings: LocusSettings,
        *,
        fs: FileSystem | None = None,
        git: GitService | None = None,
    ) -> None:
        self.settings = settings
        self._fs = fs
        self._git = git
        self._container: ServiceContainer | None = None

        from locus.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def container(self) -> ServiceContainer:
        """The service graph (created lazily on first access)."""
        if self._container is None:
            from locus.services.container import build_container

            self._container = build_container(self.settings, fs=self._fs, git=self._git)
        return self._container

    def repo_info(self, no_git: bool = False) -> RepoInfo | None:
        """Repository of the working directory, or None with ``--no-git``/outside git."""
        if no_git:
            return None
        info = self.container.git.get_repo_info(Path.cwd())
        if info is None:
            logger.debug("No repository detected; using the base task directory")
        return info

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout and returns. Warnings go to stderr so
          they don't pollute piped output.
        * Failure: writes to stderr and exits with code 1.
        """
        output = format_result(
            result,
            json_output=self.settings.json_output,
            verbose=self.settings.verbose,
        )
        if result.ok:
            click.echo(output)
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
