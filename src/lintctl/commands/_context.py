"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Builds the domain registry lazily, creates the
per-invocation ExecutionContext, and centralizes result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import click

from lintctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from lintctl.config.settings import LintSettings
    from lintctl.domain.types import LintDomain
    from lintctl.engine.models import ExecutionContext
    from lintctl.engine.registry import DomainRegistry
    from lintctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``. The registry is built on
    first use so ``--help`` and ``--version`` never load plugins.
    """

    def __init__(self, settings: LintSettings) -> None:
        self.settings = settings
        self._registry: DomainRegistry | None = None

        # Configure structured logging
        from lintctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        # Enable telemetry context var when verbose
        if settings.verbose:
            from lintctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def registry(self) -> DomainRegistry:
        """The domain registry (built once, on first access).

        Raises:
            click.ClickException: two plugins registered the same domain.
        """
        if self._registry is None:
            from lintctl.errors import DuplicateDomainError
            from lintctl.plugins.builtins.domains import BuiltinDomainsPlugin
            from lintctl.plugins.manager import PluginManager

            pm = PluginManager()
            pm.register_plugin(BuiltinDomainsPlugin(), name="lintctl-builtins")
            pm.discover_and_load()
            try:
                self._registry = pm.build_registry()
            except DuplicateDomainError as exc:
                raise click.ClickException(str(exc)) from exc
        return self._registry

    def execution_context(
        self,
        *,
        fix: bool,
        targets: Mapping[LintDomain, Sequence[str]],
        ruff_config: str | None = None,
    ) -> ExecutionContext:
        """Build the per-invocation context the engine and plugins read.

        Target patterns are typed relative to the current directory and are
        rebased onto the scope root (``[scope] root`` under the project
        root). A ``--ruff-config`` that is not an existing file marks the
        config invalid; the ``python`` domain then fails at run time.
        """
        from lintctl.engine.models import ExecutionContext
        from lintctl.scope.globbing import rebase_pattern

        root = self.settings.scope_root
        cwd = Path.cwd()
        rebased = {
            domain: tuple(rebase_pattern(p, base_dir=cwd, root=root) for p in patterns)
            for domain, patterns in targets.items()
        }

        chosen_config = Path(ruff_config).resolve() if ruff_config else None
        return ExecutionContext(
            fix=fix,
            verbose=self.settings.verbose,
            chosen_config=chosen_config,
            is_config_valid=chosen_config is None or chosen_config.is_file(),
            targets=rebased,
            root=root,
            settings=self.settings,
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with ``result.exit_code``.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(result.exit_code)
