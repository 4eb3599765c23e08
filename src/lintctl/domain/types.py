"""Shared enums for the lint domain decision engine."""

from __future__ import annotations

from enum import StrEnum


class LintDomain(StrEnum):
    """Identifiers of the built-in checking domains."""

    PYTHON = "python"
    SHELL = "shell"
    MARKDOWN = "markdown"
    NIX = "nix"


# Domains are always evaluated and executed in this order.
CANONICAL_ORDER: tuple[LintDomain, ...] = (
    LintDomain.PYTHON,
    LintDomain.SHELL,
    LintDomain.MARKDOWN,
    LintDomain.NIX,
)


class AvailabilityKind(StrEnum):
    """How a missing tool is treated when the domain is relevant."""

    REQUIRED = "required"
    OPTIONAL = "optional"


class SelectionSource(StrEnum):
    """Which CLI input put a domain into the selected set."""

    DEFAULT = "default"
    DOMAIN_FLAG = "domain-flag"
    TARGET_FLAG = "target-flag"
    UNSELECTED = "unselected"


class PlannedAction(StrEnum):
    """What the runner will do with a domain."""

    RUN = "run"
    SKIP_UNSELECTED = "skip-unselected"
    SKIP_NOT_RELEVANT = "skip-not-relevant"
    SKIP_UNAVAILABLE = "skip-unavailable"
    FAIL_UNAVAILABLE = "fail-unavailable"
    FAIL_DETECTION = "fail-detection"

    @property
    def is_failure(self) -> bool:
        return self in (PlannedAction.FAIL_UNAVAILABLE, PlannedAction.FAIL_DETECTION)
