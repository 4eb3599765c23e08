"""Domain selection options shared by ``check`` and ``explain``."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

from lintctl.domain.types import CANONICAL_ORDER, LintDomain

_F = TypeVar("_F", bound=Callable[..., Any])

_DOMAIN_CHOICE = click.Choice([d.value for d in CANONICAL_ORDER])

# (domain, click parameter name, help)
_TARGET_FLAGS: tuple[tuple[LintDomain, str, str], ...] = (
    (LintDomain.PYTHON, "python_targets", "Python files, directories, or globs to lint."),
    (LintDomain.SHELL, "shell_targets", "Shell scripts, directories, or globs to lint."),
    (LintDomain.MARKDOWN, "markdown_targets", "Markdown files, directories, or globs to check."),
    (LintDomain.NIX, "nix_targets", "Nix files, directories, or globs to check."),
)


def selection_options(func: _F) -> _F:
    """Attach ``--fix``, domain selectors, target flags, and ``--ruff-config``."""
    decorators = [
        click.option("--fix", is_flag=True, help="Apply fixes where the tool supports it."),
        click.option(
            "-d",
            "--domain",
            "domains",
            multiple=True,
            type=_DOMAIN_CHOICE,
            help="Run only this domain (repeatable).",
        ),
        click.option(
            "-s",
            "--skip-domain",
            "skip_domains",
            multiple=True,
            type=_DOMAIN_CHOICE,
            help="Skip this domain (repeatable).",
        ),
        *(
            click.option(
                f"--{domain.value}",
                param,
                multiple=True,
                metavar="PATTERN",
                help=help_text,
            )
            for domain, param, help_text in _TARGET_FLAGS
        ),
        click.option(
            "--ruff-config",
            type=click.Path(dir_okay=False),
            default=None,
            help="Use this ruff config file instead of project discovery.",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def collect_targets(options: dict[str, Any]) -> dict[LintDomain, tuple[str, ...]]:
    """Pull the per-domain target patterns out of the parsed *options*."""
    targets: dict[LintDomain, tuple[str, ...]] = {}
    for domain, param, _help in _TARGET_FLAGS:
        patterns = tuple(p for p in options.get(param, ()) if p.strip())
        if patterns:
            targets[domain] = patterns
    return targets
