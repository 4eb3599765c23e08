"""LintCommand: a Click command with an eager ``--examples`` flag.

``--help`` stays short; ``--examples`` prints sample invocations and exits
before any option validation or config loading happens.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import click


class LintCommand(click.Command):
    """Click Command that lists sample invocations on ``--examples``.

    Args:
        examples: One command line per entry, shown in order.
    """

    def __init__(self, *args: Any, examples: Sequence[str] = (), **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples)
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples and exit.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        lines = [f"Examples for '{ctx.command_path}':", ""]
        lines.extend(f"  {example}" for example in self.examples)
        click.echo("\n".join(lines))
        ctx.exit(0)
