"""The contract every lint domain plugin implements."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lintctl.domain.types import LintDomain
from lintctl.engine.models import Detection, DomainRunResult, ExecutionContext


@runtime_checkable
class LintDomainPlugin(Protocol):
    """A checking domain: inspects the project, then runs its tool.

    ``detect`` must be side-effect free apart from filesystem reads and tool
    lookups. ``run`` is only called when the evaluator planned ``run`` for
    the domain, with the detection it produced.
    """

    domain: LintDomain
    description: str

    def detect(self, context: ExecutionContext) -> Detection: ...

    def run(self, context: ExecutionContext, detection: Detection) -> DomainRunResult: ...
