"""Built-in ``nix`` domain: nixfmt over flake, shell, and ``nix/`` files."""

from __future__ import annotations

import subprocess

from lintctl.domain.types import AvailabilityKind, LintDomain
from lintctl.engine._helpers import normalize_log_detail
from lintctl.engine.models import Detection, DomainRunResult, ExecutionContext
from lintctl.infrastructure import tools
from lintctl.infrastructure.filesystem import resolve_files_from_patterns

NIXFMT = "nixfmt"
NIX_EXTENSIONS = ("nix",)


class NixDomainPlugin:
    """Check or apply Nix formatting with nixfmt."""

    domain = LintDomain.NIX
    description = "Check Nix formatting with nixfmt."

    def detect(self, context: ExecutionContext) -> Detection:
        patterns = context.patterns_for(self.domain) or context.settings.nix.search_patterns
        files = resolve_files_from_patterns(patterns, NIX_EXTENSIONS, root=context.root)
        available = tools.command_exists(NIXFMT)
        return Detection(
            relevant=bool(files),
            relevance_reason=None if files else "No Nix files found.",
            available=available,
            availability_kind=AvailabilityKind.OPTIONAL,
            unavailable_reason=None if available else "nixfmt not found in environment.",
            matched_files=tuple(files),
        )

    def run(self, context: ExecutionContext, detection: Detection) -> DomainRunResult:
        log = context.logger.bind(domain=self.domain.value)
        files = list(detection.matched_files)
        if not files:
            return DomainRunResult(had_failure=False)

        prefix = [NIXFMT, *([] if context.fix else ["--check"])]
        log.info("Running nixfmt", command=" ".join([*prefix, *files]))
        try:
            exit_code = tools.run_tool_batched(
                prefix, files, cwd=context.root, timeout=context.settings.run.timeout_seconds
            )
        except (OSError, subprocess.SubprocessError) as exc:
            log.error("Nix formatting failed", error=normalize_log_detail(exc))
            return DomainRunResult(had_failure=True)

        if exit_code != 0:
            log.error("Nix formatting failed", exit_code=exit_code)
            return DomainRunResult(had_failure=True)
        return DomainRunResult(had_failure=False)
