"""Decision runner — act on each DomainDecision and fold outcomes into one result."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from contextlib import AbstractContextManager, nullcontext
from typing import Any

from lintctl.domain.types import PlannedAction
from lintctl.engine._helpers import normalize_log_detail
from lintctl.engine.evaluator import evaluate_domains
from lintctl.engine.models import (
    DomainDecision,
    DomainOutcome,
    DomainSelection,
    ExecutionContext,
)
from lintctl.engine.registry import DomainRegistry, get_plugin

SpanFactory = Callable[[str], AbstractContextManager[Any]]


def _no_span(name: str) -> AbstractContextManager[Any]:
    return nullcontext()


def execute_decisions(
    registry: DomainRegistry,
    decisions: Sequence[DomainDecision],
    context: ExecutionContext,
    *,
    span_factory: SpanFactory = _no_span,
) -> list[DomainOutcome]:
    """Carry out every decision in order and report what happened to each.

    No domain's outcome stops another: plugin exceptions are logged and
    recorded as failures.

    Each run action executes inside ``span_factory("domain.<name>")``. A
    span object with an ``annotate`` method gets the ``failed`` flag.
    """
    log = context.logger
    outcomes: list[DomainOutcome] = []

    for decision in decisions:
        domain = decision.domain
        action = decision.planned_action
        detection = decision.detection
        reason: str | None = None

        if action is PlannedAction.SKIP_UNSELECTED:
            outcomes.append(DomainOutcome(domain=domain, planned_action=action))
            continue

        if action is PlannedAction.FAIL_DETECTION:
            reason = decision.detection_error or "detection failed"
            log.error("Domain detection failed", domain=domain.value, reason=reason)
            outcomes.append(
                DomainOutcome(domain=domain, planned_action=action, failed=True, detail=reason)
            )
            continue

        if action is PlannedAction.SKIP_NOT_RELEVANT:
            reason = detection.relevance_reason if detection else None
            if decision.explicitly_requested:
                log.warning(
                    "Domain was requested but is not relevant",
                    domain=domain.value,
                    reason=reason or "no matching files",
                )
            outcomes.append(DomainOutcome(domain=domain, planned_action=action, detail=reason))
            continue

        if action is PlannedAction.FAIL_UNAVAILABLE:
            reason = (detection.unavailable_reason if detection else None) or "tool unavailable"
            log.error("Domain tooling is unavailable", domain=domain.value, reason=reason)
            outcomes.append(
                DomainOutcome(domain=domain, planned_action=action, failed=True, detail=reason)
            )
            continue

        if action is PlannedAction.SKIP_UNAVAILABLE:
            reason = (detection.unavailable_reason if detection else None) or "tool unavailable"
            log.warning(
                "Skipping domain, tooling is unavailable", domain=domain.value, reason=reason
            )
            outcomes.append(DomainOutcome(domain=domain, planned_action=action, detail=reason))
            continue

        plugin = get_plugin(registry, domain)
        failed = False
        with span_factory(f"domain.{domain.value}") as span:
            log.info("Running domain", domain=domain.value, fix=context.fix)
            try:
                if detection is None:
                    msg = f"no detection recorded for `{domain}`"
                    raise RuntimeError(msg)
                result = plugin.run(context, detection)
            except Exception as exc:
                reason = normalize_log_detail(exc) or type(exc).__name__
                log.error("Domain failed unexpectedly", domain=domain.value, error=reason)
                failed = True
            else:
                failed = result.had_failure
            if hasattr(span, "annotate"):
                span.annotate("failed", failed)
        outcomes.append(
            DomainOutcome(
                domain=domain, planned_action=action, ran=True, failed=failed, detail=reason
            )
        )

    return outcomes


def run_decisions(
    registry: DomainRegistry,
    decisions: Sequence[DomainDecision],
    context: ExecutionContext,
    *,
    span_factory: SpanFactory = _no_span,
) -> bool:
    """Execute *decisions* and return True when any domain failed."""
    outcomes = execute_decisions(registry, decisions, context, span_factory=span_factory)
    return any(o.failed for o in outcomes)


def run_domains(
    registry: DomainRegistry,
    selection: DomainSelection,
    context: ExecutionContext,
    *,
    span_factory: SpanFactory = _no_span,
) -> bool:
    """Evaluate and run every domain; return True when any domain failed."""
    decisions = evaluate_domains(registry, selection, context)
    return run_decisions(registry, decisions, context, span_factory=span_factory)
