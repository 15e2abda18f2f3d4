"""Root CLI group for locus with global flags and command registration."""

from __future__ import annotations

import click

from locus import __version__
from locus.commands import register_commands
from locus.commands._context import AppContext
from locus.config.logging import bind_command
from locus.config.settings import get_settings
from locus.domain.errors import LocusError


@click.group("locus", invoke_without_command=True)
@click.version_option(version=__version__, prog_name="locus")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """locus — Git-aware Markdown task tracker."""
    try:
        settings = get_settings(
            config_path=config_path,
            json_output=json_output,
            verbose=verbose,
            log_json=log_json,
        )
    except LocusError as exc:
        click.echo(f"ERROR: config — {exc.message}", err=True)
        ctx.exit(1)
    ctx.obj = AppContext(settings)
    bind_command(ctx.invoked_subcommand)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
