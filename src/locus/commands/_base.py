"""Click base classes and shared options for locus commands.

Every command and group takes an optional ``examples`` string. When given,
an eager ``--examples`` flag prints it and exits, so ``--help`` stays short.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    """Installs ``--examples`` on a Command or Group that has example text."""

    examples: str | None
    params: list[click.Parameter]

    def _install_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return
        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=self._print_examples,
                help="Show usage examples and exit.",
            )
        )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


class LocusCommand(_ExamplesMixin, click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._install_examples(examples)


class LocusGroup(_ExamplesMixin, click.Group):
    """Group whose ``@group.command()`` subcommands are ``LocusCommand``."""

    command_class = LocusCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._install_examples(examples)


no_git_option = click.option(
    "--no-git",
    is_flag=True,
    help="Ignore the current Git repository; use the base task directory.",
)


def split_csv(values: tuple[str, ...]) -> list[str]:
    """Flatten repeated and comma-separated option values.

    ``-t a,b -t c`` yields ``["a", "b", "c"]``.
    """
    return [item.strip() for value in values for item in value.split(",") if item.strip()]
