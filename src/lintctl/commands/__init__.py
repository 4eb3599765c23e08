"""Subcommand modules for lintctl.

Provides register_commands() which uses deferred imports to keep
``lintctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from lintctl.commands.check import check
    from lintctl.commands.domains import domains
    from lintctl.commands.explain import explain

    cli.add_command(check)
    cli.add_command(explain)
    cli.add_command(domains)
