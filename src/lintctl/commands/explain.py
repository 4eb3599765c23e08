"""Command: show what ``check`` would do, without running any tool."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from lintctl.commands._base import LintCommand
from lintctl.commands._selection import collect_targets, selection_options

if TYPE_CHECKING:
    from lintctl.commands._context import AppContext


@click.command(
    cls=LintCommand,
    examples=(
        "lintctl explain",
        "lintctl explain -d markdown",
        "lintctl --json explain --nix 'nix/**/*.nix'",
    ),
)
@selection_options
@click.pass_obj
def explain(
    app: AppContext,
    fix: bool,
    domains: tuple[str, ...],
    skip_domains: tuple[str, ...],
    ruff_config: str | None,
    **target_options: Any,
) -> None:
    """Explain the per-domain selection, detection, and planned action."""
    from lintctl.engine.selection import resolve_domain_selection
    from lintctl.services.lint import LintService

    targets = collect_targets(target_options)
    selection = resolve_domain_selection(domains, skip_domains, targets)
    context = app.execution_context(fix=fix, targets=targets, ruff_config=ruff_config)
    app.emit(LintService(app.registry).explain(selection, context))
