"""Tests for the decision runner."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from lintctl.domain.types import CANONICAL_ORDER, AvailabilityKind, LintDomain, PlannedAction
from lintctl.engine.evaluator import evaluate_domains
from lintctl.engine.models import DomainRunResult, ExecutionContext
from lintctl.engine.registry import create_registry
from lintctl.engine.runner import execute_decisions, run_decisions, run_domains
from lintctl.engine.selection import resolve_domain_selection
from tests.conftest import FakeDomainPlugin, RecordingLogger, make_detection

ORDER = [LintDomain.PYTHON, LintDomain.SHELL, LintDomain.MARKDOWN]


class TestRunDecisions:
    def test_all_pass(self, make_context: Callable[..., ExecutionContext]) -> None:
        registry = create_registry(FakeDomainPlugin(d) for d in CANONICAL_ORDER)
        assert run_domains(registry, resolve_domain_selection(), make_context()) is False

    def test_middle_failure_does_not_stop_others(
        self,
        make_context: Callable[..., ExecutionContext],
        recording_logger: RecordingLogger,
    ) -> None:
        first = FakeDomainPlugin(LintDomain.PYTHON)
        middle = FakeDomainPlugin(LintDomain.SHELL, run_result=RuntimeError("spawn\nfailed"))
        last = FakeDomainPlugin(LintDomain.MARKDOWN)
        registry = create_registry([first, middle, last])
        context = make_context()
        decisions = evaluate_domains(registry, resolve_domain_selection(), context, order=ORDER)

        assert run_decisions(registry, decisions, context) is True
        assert (first.run_calls, middle.run_calls, last.run_calls) == (1, 1, 1)
        errors = recording_logger.at("error")
        assert errors == [
            ("Domain failed unexpectedly", {"domain": "shell", "error": "spawn | failed"})
        ]

    def test_reported_failure_folds_into_result(
        self, make_context: Callable[..., ExecutionContext]
    ) -> None:
        registry = create_registry(
            [
                FakeDomainPlugin(LintDomain.PYTHON, run_result=DomainRunResult(had_failure=True)),
                FakeDomainPlugin(LintDomain.SHELL),
            ]
        )
        context = make_context()
        decisions = evaluate_domains(
            registry, resolve_domain_selection(), context, order=ORDER[:2]
        )
        outcomes = execute_decisions(registry, decisions, context)
        assert [(o.domain, o.ran, o.failed) for o in outcomes] == [
            (LintDomain.PYTHON, True, True),
            (LintDomain.SHELL, True, False),
        ]

    def test_skip_unselected_is_silent(
        self,
        make_context: Callable[..., ExecutionContext],
        recording_logger: RecordingLogger,
    ) -> None:
        plugin = FakeDomainPlugin(LintDomain.NIX)
        registry = create_registry([plugin])
        context = make_context()
        decisions = evaluate_domains(
            registry,
            resolve_domain_selection(skip_domains=["nix"]),
            context,
            order=[LintDomain.NIX],
        )
        assert run_decisions(registry, decisions, context) is False
        assert plugin.run_calls == 0
        assert recording_logger.records == []

    def test_not_relevant_warns_only_when_explicit(
        self,
        make_context: Callable[..., ExecutionContext],
        recording_logger: RecordingLogger,
    ) -> None:
        plugin = FakeDomainPlugin(LintDomain.NIX, detection=make_detection(relevant=False))
        registry = create_registry([plugin])
        context = make_context()
        order = [LintDomain.NIX]

        implicit = evaluate_domains(registry, resolve_domain_selection(), context, order=order)
        assert run_decisions(registry, implicit, context) is False
        assert recording_logger.at("warning") == []

        explicit = evaluate_domains(
            registry, resolve_domain_selection(domains=["nix"]), context, order=order
        )
        assert run_decisions(registry, explicit, context) is False
        assert len(recording_logger.at("warning")) == 1
        assert plugin.run_calls == 0

    def test_optional_unavailable_warns_and_passes(
        self,
        make_context: Callable[..., ExecutionContext],
        recording_logger: RecordingLogger,
    ) -> None:
        plugin = FakeDomainPlugin(
            LintDomain.SHELL,
            detection=make_detection(available=False, kind=AvailabilityKind.OPTIONAL),
        )
        registry = create_registry([plugin])
        context = make_context()
        decisions = evaluate_domains(
            registry, resolve_domain_selection(), context, order=[LintDomain.SHELL]
        )
        outcomes = execute_decisions(registry, decisions, context)
        assert outcomes[0].planned_action == PlannedAction.SKIP_UNAVAILABLE
        assert not outcomes[0].failed
        assert recording_logger.at("warning")[0][1]["reason"] == "tool missing"

    def test_required_unavailable_and_detection_errors_fail(
        self,
        make_context: Callable[..., ExecutionContext],
        recording_logger: RecordingLogger,
    ) -> None:
        registry = create_registry(
            [
                FakeDomainPlugin(LintDomain.PYTHON, detection=make_detection(available=False)),
                FakeDomainPlugin(LintDomain.SHELL, detection=OSError("unreadable")),
            ]
        )
        context = make_context()
        decisions = evaluate_domains(
            registry, resolve_domain_selection(), context, order=ORDER[:2]
        )
        outcomes = execute_decisions(registry, decisions, context)
        assert [o.failed for o in outcomes] == [True, True]
        assert [o.ran for o in outcomes] == [False, False]
        assert [kw["domain"] for _event, kw in recording_logger.at("error")] == ["python", "shell"]


class _RecordedSpan:
    def __init__(self, name: str) -> None:
        self.name = name
        self.annotations: dict[str, Any] = {}

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value


class TestSpanFactory:
    def test_spans_wrap_only_run_actions(
        self, make_context: Callable[..., ExecutionContext]
    ) -> None:
        spans: list[_RecordedSpan] = []

        @contextmanager
        def factory(name: str) -> Iterator[_RecordedSpan]:
            span = _RecordedSpan(name)
            spans.append(span)
            yield span

        registry = create_registry(
            [
                FakeDomainPlugin(LintDomain.PYTHON, run_result=DomainRunResult(had_failure=True)),
                FakeDomainPlugin(LintDomain.SHELL),
                FakeDomainPlugin(LintDomain.MARKDOWN),
            ]
        )
        context = make_context()
        decisions = evaluate_domains(
            registry, resolve_domain_selection(skip_domains=["markdown"]), context, order=ORDER
        )
        assert run_decisions(registry, decisions, context, span_factory=factory) is True
        assert [(s.name, s.annotations) for s in spans] == [
            ("domain.python", {"failed": True}),
            ("domain.shell", {"failed": False}),
        ]

    def test_default_runs_without_telemetry(
        self, make_context: Callable[..., ExecutionContext]
    ) -> None:
        registry = create_registry([FakeDomainPlugin(LintDomain.PYTHON)])
        context = make_context()
        decisions = evaluate_domains(
            registry, resolve_domain_selection(), context, order=[LintDomain.PYTHON]
        )
        outcomes = execute_decisions(registry, decisions, context)
        assert [(o.ran, o.failed) for o in outcomes] == [(True, False)]
