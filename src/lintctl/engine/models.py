"""Value types passed between the CLI, the decision engine, and domain plugins."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, Field

from lintctl.config.settings import LintSettings
from lintctl.domain.types import (
    AvailabilityKind,
    LintDomain,
    PlannedAction,
    SelectionSource,
)


def _engine_logger() -> Any:
    return structlog.get_logger("lintctl.engine")


class ExecutionContext(BaseModel):
    """Per-invocation state shared with every plugin.

    Created by the CLI layer once per invocation; the engine and plugins only
    read it.

    Attributes:
        fix: Ask tools to apply fixes instead of only reporting.
        verbose: ``-v`` was given.
        chosen_config: ``--ruff-config`` override, if any.
        is_config_valid: False when the override does not point at a file.
        targets: Explicit patterns per domain from the target flags.
        root: Working root every relative path is expressed against.
        settings: Resolved ``lintctl.toml`` / env / CLI settings.
        logger: Structured sink for all engine and plugin output.
    """

    model_config = {"frozen": True}

    fix: bool = False
    verbose: bool = False
    chosen_config: Path | None = None
    is_config_valid: bool = True
    targets: dict[LintDomain, tuple[str, ...]] = Field(default_factory=dict)
    root: Path = Field(default_factory=Path.cwd)
    settings: LintSettings = Field(default_factory=LintSettings)
    logger: Any = Field(default_factory=_engine_logger, exclude=True)

    def patterns_for(self, domain: LintDomain) -> tuple[str, ...]:
        """Return the explicit target patterns given for *domain* (may be empty)."""
        return self.targets.get(domain, ())


class Detection(BaseModel):
    """What a plugin found when inspecting the project and the environment."""

    model_config = {"frozen": True}

    relevant: bool
    relevance_reason: str | None = None
    available: bool
    availability_kind: AvailabilityKind
    unavailable_reason: str | None = None
    matched_files: tuple[str, ...] = ()


class DomainRunResult(BaseModel):
    """Outcome of one plugin ``run`` call."""

    model_config = {"frozen": True}

    had_failure: bool


class DomainSelection(BaseModel):
    """Which domains the CLI flags selected, and why."""

    model_config = {"frozen": True}

    selected: frozenset[LintDomain] = frozenset()
    explicitly_requested: frozenset[LintDomain] = frozenset()
    sources: dict[LintDomain, SelectionSource] = Field(default_factory=dict)

    def source_for(self, domain: LintDomain) -> SelectionSource:
        return self.sources.get(domain, SelectionSource.UNSELECTED)


class DomainDecision(BaseModel):
    """Evaluation record for one domain in one invocation."""

    model_config = {"frozen": True}

    domain: LintDomain
    description: str
    selected: bool
    explicitly_requested: bool
    selection_source: SelectionSource
    detection: Detection | None = None
    planned_action: PlannedAction
    detection_error: str | None = None


class DomainOutcome(BaseModel):
    """What the runner actually did with a decision."""

    model_config = {"frozen": True}

    domain: LintDomain
    planned_action: PlannedAction
    ran: bool = False
    failed: bool = False
    detail: str | None = None
