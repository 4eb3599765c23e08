"""Built-in ``shell`` domain: shellcheck over ``*.sh`` files."""

from __future__ import annotations

import subprocess

from lintctl.domain.types import AvailabilityKind, LintDomain
from lintctl.engine._helpers import normalize_log_detail
from lintctl.engine.models import Detection, DomainRunResult, ExecutionContext
from lintctl.infrastructure import tools
from lintctl.infrastructure.filesystem import resolve_files_from_patterns

SHELLCHECK = "shellcheck"


class ShellDomainPlugin:
    """Lint shell scripts with shellcheck."""

    domain = LintDomain.SHELL
    description = "Lint shell scripts with shellcheck."

    def detect(self, context: ExecutionContext) -> Detection:
        config = context.settings.shell
        patterns = context.patterns_for(self.domain) or config.search_roots
        files = resolve_files_from_patterns(patterns, config.extensions, root=context.root)
        available = tools.command_exists(SHELLCHECK)
        return Detection(
            relevant=bool(files),
            relevance_reason=None if files else "No shell script files found.",
            available=available,
            availability_kind=AvailabilityKind.OPTIONAL,
            unavailable_reason=None if available else "shellcheck not found in environment.",
            matched_files=tuple(files),
        )

    def run(self, context: ExecutionContext, detection: Detection) -> DomainRunResult:
        log = context.logger.bind(domain=self.domain.value)
        files = list(detection.matched_files)
        if not files:
            return DomainRunResult(had_failure=False)

        log.info("Running shellcheck", command=" ".join([SHELLCHECK, *files]))
        try:
            exit_code = tools.run_tool_batched(
                [SHELLCHECK], files, cwd=context.root, timeout=context.settings.run.timeout_seconds
            )
        except (OSError, subprocess.SubprocessError) as exc:
            log.error("Shellcheck failed", error=normalize_log_detail(exc))
            return DomainRunResult(had_failure=True)

        if exit_code != 0:
            log.error("Shellcheck failed", exit_code=exit_code)
            return DomainRunResult(had_failure=True)
        return DomainRunResult(had_failure=False)
