"""Root CLI group for lintctl with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from lintctl import __version__
from lintctl.commands import register_commands
from lintctl.commands._context import AppContext
from lintctl.config.settings import LintSettings


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(invoke_without_command=True, context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__, prog_name="lintctl")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Only print the outcome.")
@click.option("-v", "--verbose", is_flag=True, help="Show tool progress logs and timings.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    help="Use this lintctl.toml instead of searching upward.",
)
@click.option(
    "-C",
    "--root",
    "project_root",
    type=click.Path(exists=True, file_okay=False, resolve_path=True, path_type=Path),
    default=None,
    help="Project directory (default: the directory holding lintctl.toml, else cwd).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    project_root: Path | None,
) -> None:
    """lintctl — run every lint domain a project needs.

    Domains (python, shell, markdown, nix) are detected from the files
    present; use ``explain`` to see why each one would run or skip.
    """
    settings = LintSettings.from_cli(
        config_path=config_path,
        project_root=project_root,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
