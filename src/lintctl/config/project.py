"""Resolve the Python domain's project descriptors and force-include list."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel

from lintctl.config.settings import LintSettings
from lintctl.scope.globbing import normalize_glob_value

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTOR_NAME = "pyproject.toml"


class ResolvedLintConfig(BaseModel):
    """Python-domain inputs after path sanitization.

    Attributes:
        root: Absolute scope root.
        project_paths: Existing descriptor files, absolute.
        force_include: Force-include globs relative to *root*.
    """

    model_config = {"frozen": True}

    root: Path
    project_paths: tuple[Path, ...] = ()
    force_include: tuple[str, ...] = ()


def resolve_lint_config(settings: LintSettings) -> ResolvedLintConfig:
    """Sanitize ``[python]`` settings against the scope root.

    Configured descriptor paths that do not exist are dropped with a
    warning; when none remain, ``<root>/pyproject.toml`` is used if present.
    """
    root = settings.scope_root
    configured: list[Path] = []
    for raw in settings.python.project_paths:
        candidate = (root / normalize_glob_value(raw)).resolve()
        if candidate.is_file():
            configured.append(candidate)
        else:
            logger.warning("Project descriptor not found: %s", candidate)

    project_paths = list(dict.fromkeys(configured))
    if not project_paths:
        fallback = root / DEFAULT_DESCRIPTOR_NAME
        if fallback.is_file():
            project_paths = [fallback]

    force_include = tuple(
        p for p in (normalize_glob_value(g) for g in settings.python.force_include) if p
    )
    return ResolvedLintConfig(
        root=root,
        project_paths=tuple(project_paths),
        force_include=force_include,
    )
