"""Exception hierarchy for lintctl.

Per-domain failures never surface as exceptions: plugins report them through
``DomainRunResult`` and the runner folds them into the aggregate outcome.
These types cover programming and configuration mistakes that should stop
the process.
"""

from __future__ import annotations


class LintctlError(Exception):
    """Base class for every error raised by lintctl itself."""


class DuplicateDomainError(LintctlError):
    """Two plugins claimed the same domain id while building the registry."""

    def __init__(self, domain: str) -> None:
        self.domain = domain
        super().__init__(f"Duplicate lint domain plugin registration: `{domain}`")


class UnknownDomainError(LintctlError):
    """A domain was requested that no registered plugin provides."""

    def __init__(self, domain: str) -> None:
        self.domain = domain
        super().__init__(f"No lint domain plugin registered for `{domain}`")


class ConfigError(LintctlError):
    """``lintctl.toml`` could not be read or validated."""


class DescriptorError(LintctlError):
    """A project descriptor (``pyproject.toml``) could not be parsed."""
