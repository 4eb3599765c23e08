"""Command: list the registered lint domains."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from lintctl.commands._base import LintCommand

if TYPE_CHECKING:
    from lintctl.commands._context import AppContext


@click.command(
    cls=LintCommand,
    examples=("lintctl domains", "lintctl --json domains"),
)
@click.pass_obj
def domains(app: AppContext) -> None:
    """List registered lint domains in execution order."""
    from lintctl.services.lint import LintService

    app.emit(LintService(app.registry).list_domains())
