"""Built-in ``python`` domain: ruff over the project's effective Python scope.

Scope comes from explicit ``--python`` targets when given; otherwise from the
``[tool.ruff]`` include/exclude globs of every configured project descriptor,
merged by :func:`lintctl.scope.patterns.build_scope_patterns`.
"""

from __future__ import annotations

import subprocess

from lintctl.config.project import resolve_lint_config
from lintctl.domain.types import AvailabilityKind, LintDomain
from lintctl.engine._helpers import normalize_log_detail
from lintctl.engine.models import Detection, DomainRunResult, ExecutionContext
from lintctl.infrastructure import tools
from lintctl.infrastructure.filesystem import resolve_files_from_patterns
from lintctl.scope.descriptors import load_project_descriptors
from lintctl.scope.patterns import ScopePatterns, build_scope_patterns

RUFF_MODULE = "ruff"
RUFF_CACHE_DIR = ".cache/lintctl/ruff"


class PythonDomainPlugin:
    """Lint Python sources with ruff."""

    domain = LintDomain.PYTHON
    description = "Lint Python sources with ruff."

    def scope_patterns(self, context: ExecutionContext) -> ScopePatterns:
        """Effective files/ignore globs from the configured project descriptors.

        Falls back to the default search roots when no descriptor exists.
        """
        settings = context.settings
        resolved = resolve_lint_config(settings)
        descriptors = load_project_descriptors(resolved.project_paths)
        if not descriptors:
            return ScopePatterns(files=tuple(settings.python.default_search_roots))
        return build_scope_patterns(
            descriptors,
            resolved.force_include,
            root=context.root,
            force_include_base=resolved.root,
            extensions=settings.python.extensions,
        )

    def detect(self, context: ExecutionContext) -> Detection:
        extensions = context.settings.python.extensions
        explicit = context.patterns_for(self.domain)
        if explicit:
            files = resolve_files_from_patterns(explicit, extensions, root=context.root)
        else:
            scope = self.scope_patterns(context)
            files = resolve_files_from_patterns(
                scope.files, extensions, root=context.root, ignore=scope.ignore
            )

        available = tools.module_available(RUFF_MODULE)
        return Detection(
            relevant=bool(files),
            relevance_reason=None if files else "No Python files matched in effective scope.",
            available=available,
            availability_kind=AvailabilityKind.REQUIRED,
            unavailable_reason=None if available else "ruff is not installed.",
            matched_files=tuple(files),
        )

    def run(self, context: ExecutionContext, detection: Detection) -> DomainRunResult:
        log = context.logger.bind(domain=self.domain.value)

        if not context.is_config_valid:
            log.error(
                "Skipping ruff due to invalid --ruff-config path",
                config=str(context.chosen_config),
            )
            return DomainRunResult(had_failure=True)

        force_exclude = False
        if not context.patterns_for(self.domain):
            resolved = resolve_lint_config(context.settings)
            if not resolved.project_paths:
                log.error("No pyproject.toml project descriptors found", root=str(resolved.root))
                return DomainRunResult(had_failure=True)
            for path in resolved.project_paths:
                log.info("Using project descriptor", path=str(path))
            # force-include paths must reach ruff unfiltered
            force_exclude = not resolved.force_include

        files = list(detection.matched_files)
        if not files:
            log.warning("No ruff targets were derived from project descriptors")
            return DomainRunResult(had_failure=False)

        argv = tools.python_module_command(RUFF_MODULE, "check", "--cache-dir", RUFF_CACHE_DIR)
        if force_exclude:
            argv.append("--force-exclude")
        if context.fix:
            argv.append("--fix")
        if context.chosen_config is not None:
            argv.extend(["--config", str(context.chosen_config)])

        log.info("Running ruff", files=len(files), fix=context.fix)
        try:
            exit_code = tools.run_tool_batched(
                argv, files, cwd=context.root, timeout=context.settings.run.timeout_seconds
            )
        except (OSError, subprocess.SubprocessError) as exc:
            log.error("ruff could not be run", error=normalize_log_detail(exc))
            return DomainRunResult(had_failure=True)

        log.info("ruff summary", files=len(files), exit_code=exit_code, fix=context.fix)
        return DomainRunResult(had_failure=exit_code != 0)
