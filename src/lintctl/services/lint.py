"""LintService — list, explain, and run lint domains.

Wraps the decision engine and shapes its output into ServiceResult
payloads the CLI can render as tables or JSON.
"""

from __future__ import annotations

from typing import Any

from lintctl.domain.types import PlannedAction
from lintctl.engine.evaluator import evaluate_domains
from lintctl.engine.models import (
    DomainDecision,
    DomainOutcome,
    DomainSelection,
    ExecutionContext,
)
from lintctl.engine.registry import DomainRegistry, list_domains
from lintctl.engine.runner import execute_decisions
from lintctl.services.result import ServiceResult
from lintctl.services.telemetry import trace_span, traced


def _decision_row(decision: DomainDecision) -> dict[str, Any]:
    detection = decision.detection
    return {
        "domain": decision.domain.value,
        "description": decision.description,
        "selected": decision.selected,
        "explicit": decision.explicitly_requested,
        "source": decision.selection_source.value,
        "action": decision.planned_action.value,
        "relevant": detection.relevant if detection else None,
        "available": detection.available if detection else None,
        "availability": detection.availability_kind.value if detection else None,
        "reason": _decision_reason(decision),
        "files": len(detection.matched_files) if detection else 0,
    }


def _decision_reason(decision: DomainDecision) -> str | None:
    if decision.detection_error:
        return decision.detection_error
    detection = decision.detection
    if detection is None:
        return None
    if not detection.relevant:
        return detection.relevance_reason
    if not detection.available:
        return detection.unavailable_reason
    return None


def _outcome_row(outcome: DomainOutcome) -> dict[str, Any]:
    return {
        "domain": outcome.domain.value,
        "action": outcome.planned_action.value,
        "ran": outcome.ran,
        "failed": outcome.failed,
        "detail": outcome.detail,
    }


class LintService:
    """Operations over a domain registry built once per process."""

    def __init__(self, registry: DomainRegistry) -> None:
        self._registry = registry

    @traced
    def list_domains(self) -> ServiceResult:
        """Registry metadata only; nothing is detected or run."""
        domains = list_domains(self._registry)
        return ServiceResult(
            ok=True,
            op="domains",
            data={"domains": domains, "count": len(domains)},
        )

    @traced
    def explain(self, selection: DomainSelection, context: ExecutionContext) -> ServiceResult:
        """Evaluate every domain and report the plan without running anything."""
        with trace_span("evaluate"):
            decisions = evaluate_domains(self._registry, selection, context)
        rows = [_decision_row(d) for d in decisions]
        return ServiceResult(
            ok=True,
            op="explain",
            data={
                "decisions": rows,
                "fix": context.fix,
                "will_fail": [d.domain.value for d in decisions if d.planned_action.is_failure],
            },
        )

    @traced
    def check(self, selection: DomainSelection, context: ExecutionContext) -> ServiceResult:
        """Evaluate and run every domain; ``ok`` is False when any domain failed."""
        with trace_span("evaluate"):
            decisions = evaluate_domains(self._registry, selection, context)
        outcomes = execute_decisions(
            self._registry, decisions, context, span_factory=trace_span
        )

        rows = [
            _outcome_row(o)
            for o in outcomes
            if o.planned_action is not PlannedAction.SKIP_UNSELECTED
        ]
        failed = [o.domain.value for o in outcomes if o.failed]
        ran = [o.domain.value for o in outcomes if o.ran]
        data = {"domains": rows, "ran": ran, "failed": failed, "fix": context.fix}

        if failed:
            return ServiceResult.failure(
                "check",
                code="LINT_FAILED",
                message=f"Lint failed in: {', '.join(failed)}",
                data=data,
                failed=failed,
            )
        return ServiceResult(ok=True, op="check", data=data)
