"""Built-in ``markdown`` domain: mdformat over docs and top-level prose.

``README.md`` and ``AGENTS.md`` at the root are always checked when present,
ahead of anything found under the search patterns.
"""

from __future__ import annotations

import subprocess

from lintctl.domain.types import AvailabilityKind, LintDomain
from lintctl.engine._helpers import normalize_log_detail
from lintctl.engine.models import Detection, DomainRunResult, ExecutionContext
from lintctl.infrastructure import tools
from lintctl.infrastructure.filesystem import relativize, resolve_files_from_patterns

MDFORMAT_MODULE = "mdformat"


class MarkdownDomainPlugin:
    """Check or apply Markdown formatting with mdformat."""

    domain = LintDomain.MARKDOWN
    description = "Check Markdown formatting with mdformat."

    def collect_files(self, context: ExecutionContext) -> list[str]:
        """Root files that exist, then every file matched by the targets or search patterns."""
        config = context.settings.markdown
        explicit = context.patterns_for(self.domain)
        found = resolve_files_from_patterns(
            explicit or config.search_patterns, config.extensions, root=context.root
        )
        root_files = [
            relativize(context.root / name, context.root)
            for name in config.root_files
            if (context.root / name).is_file()
        ]
        return list(dict.fromkeys([*root_files, *found]))

    def detect(self, context: ExecutionContext) -> Detection:
        files = self.collect_files(context)
        available = tools.module_available(MDFORMAT_MODULE)
        return Detection(
            relevant=bool(files),
            relevance_reason=None if files else "No Markdown files found.",
            available=available,
            availability_kind=AvailabilityKind.REQUIRED,
            unavailable_reason=None if available else "mdformat is not installed.",
            matched_files=tuple(files),
        )

    def run(self, context: ExecutionContext, detection: Detection) -> DomainRunResult:
        log = context.logger.bind(domain=self.domain.value)
        files = list(detection.matched_files)
        if not files:
            return DomainRunResult(had_failure=False)

        args = ["--wrap", context.settings.markdown.wrap]
        if not context.fix:
            args.insert(0, "--check")
        prefix = tools.python_module_command(MDFORMAT_MODULE, *args)

        mode = "write" if context.fix else "check"
        log.info("Running mdformat", mode=mode, files=len(files))
        try:
            exit_code = tools.run_tool_batched(
                prefix, files, cwd=context.root, timeout=context.settings.run.timeout_seconds
            )
        except (OSError, subprocess.SubprocessError) as exc:
            log.error(f"Markdown {mode} failed", error=normalize_log_detail(exc))
            return DomainRunResult(had_failure=True)

        if exit_code != 0:
            log.error(f"Markdown {mode} failed", exit_code=exit_code)
            return DomainRunResult(had_failure=True)
        return DomainRunResult(had_failure=False)
