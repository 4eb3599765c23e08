"""Decision evaluator — one DomainDecision per domain, no side effects beyond detection."""

from __future__ import annotations

from collections.abc import Iterable

from lintctl.domain.types import (
    CANONICAL_ORDER,
    AvailabilityKind,
    LintDomain,
    PlannedAction,
    SelectionSource,
)
from lintctl.engine._helpers import normalize_log_detail
from lintctl.engine.models import Detection, DomainDecision, DomainSelection, ExecutionContext
from lintctl.engine.registry import DomainRegistry, get_plugin


def plan_action(
    *,
    selected: bool,
    explicitly_requested: bool,
    detection: Detection | None,
) -> PlannedAction:
    """Map (selected, explicitly requested, detection) to a planned action.

    A selected domain with ``detection=None`` is one whose detection failed.
    """
    if not selected:
        return PlannedAction.SKIP_UNSELECTED
    if detection is None:
        return PlannedAction.FAIL_DETECTION
    if not detection.relevant:
        return PlannedAction.SKIP_NOT_RELEVANT
    if not detection.available:
        if detection.availability_kind == AvailabilityKind.REQUIRED or explicitly_requested:
            return PlannedAction.FAIL_UNAVAILABLE
        return PlannedAction.SKIP_UNAVAILABLE
    return PlannedAction.RUN


def evaluate_domains(
    registry: DomainRegistry,
    selection: DomainSelection,
    context: ExecutionContext,
    order: Iterable[LintDomain] = CANONICAL_ORDER,
) -> list[DomainDecision]:
    """Evaluate every domain in *order*.

    ``detect`` is only called for selected domains. Anything it raises (or
    returns instead of a ``Detection``) is recorded as ``detection_error``
    and plans ``fail-detection``.

    Raises:
        UnknownDomainError: a selected domain has no registered plugin.
    """
    decisions: list[DomainDecision] = []
    for domain in order:
        selected = domain in selection.selected
        plugin = get_plugin(registry, domain) if selected else registry.get(domain)
        explicit = domain in selection.explicitly_requested

        detection: Detection | None = None
        detection_error: str | None = None
        if plugin is not None and selected:
            try:
                result = plugin.detect(context)
                if isinstance(result, Exception):
                    raise result
                if not isinstance(result, Detection):
                    msg = f"detect() returned {type(result).__name__}, expected Detection"
                    raise TypeError(msg)
                detection = result
            except Exception as exc:
                detection_error = normalize_log_detail(exc) or type(exc).__name__
                context.logger.debug(
                    "Domain detection raised",
                    domain=domain.value,
                    error=detection_error,
                )

        decisions.append(
            DomainDecision(
                domain=domain,
                description=plugin.description if plugin is not None else "",
                selected=selected,
                explicitly_requested=explicit,
                selection_source=(
                    selection.source_for(domain) if selected else SelectionSource.UNSELECTED
                ),
                detection=detection,
                planned_action=plan_action(
                    selected=selected,
                    explicitly_requested=explicit,
                    detection=detection,
                ),
                detection_error=detection_error,
            )
        )
    return decisions
