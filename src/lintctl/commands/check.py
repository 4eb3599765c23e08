"""Command: run every applicable lint domain."""

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
        "lintctl check",
        "lintctl check --fix",
        "lintctl check -d python -d shell",
        "lintctl check -s nix",
        "lintctl check --shell 'scripts/**/*.sh'",
        "lintctl check --python src/pkg --ruff-config ruff.toml",
    ),
)
@selection_options
@click.pass_obj
def check(
    app: AppContext,
    fix: bool,
    domains: tuple[str, ...],
    skip_domains: tuple[str, ...],
    ruff_config: str | None,
    **target_options: Any,
) -> None:
    """Lint the project; exit 1 when any domain fails."""
    from lintctl.engine.selection import resolve_domain_selection
    from lintctl.services.lint import LintService

    targets = collect_targets(target_options)
    selection = resolve_domain_selection(domains, skip_domains, targets)
    context = app.execution_context(fix=fix, targets=targets, ruff_config=ruff_config)
    app.emit(LintService(app.registry).check(selection, context))
