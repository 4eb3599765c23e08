"""Load project descriptors from ``pyproject.toml`` / ``ruff.toml`` files."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from lintctl.errors import DescriptorError
from lintctl.scope.globbing import is_glob_pattern, normalize_glob_value
from lintctl.scope.patterns import ProjectDescriptor, has_extension

logger = logging.getLogger(__name__)

# Files whose top-level table holds the ruff settings.
RUFF_CONFIG_NAMES = frozenset({"ruff.toml", ".ruff.toml"})


def _string_list(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list):
        return tuple(v for v in value if isinstance(v, str))
    return ()


def _anchor_any_depth(pattern: str) -> str:
    normalized = normalize_glob_value(pattern)
    if not normalized or "/" in normalized.rstrip("/") or normalized.startswith("**"):
        return normalized
    return f"**/{normalized}"


def anchor_include(pattern: str) -> str:
    """Make a slash-less file glob (``*.py``, ``setup.py``) match at any depth.

    A bare name with no extension and no glob (``src``) stays a directory
    relative to the descriptor.
    """
    normalized = normalize_glob_value(pattern)
    if is_glob_pattern(normalized) or has_extension(normalized):
        return _anchor_any_depth(normalized)
    return normalized


def anchor_exclude(pattern: str) -> str:
    """Make a slash-less exclude (``migrations``, ``*_pb2.py``) match at any depth."""
    return _anchor_any_depth(pattern)


def load_project_descriptor(path: Path) -> ProjectDescriptor:
    """Read the ``include`` / ``exclude`` globs declared in *path*.

    For ``pyproject.toml`` the globs come from ``[tool.ruff]``; for
    ``ruff.toml`` from the top-level table. ``extend-exclude`` adds to
    ``exclude``. Missing keys mean "no globs".

    Globs without a slash follow ruff and match a file or directory name at
    any depth: ``*.py`` becomes ``**/*.py`` and ``migrations`` becomes
    ``**/migrations``. See :func:`anchor_include` for the one exception.

    Raises:
        DescriptorError: the file cannot be read or is not valid TOML.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        msg = f"Cannot read project descriptor {path}: {exc}"
        raise DescriptorError(msg) from exc

    if path.name in RUFF_CONFIG_NAMES:
        table: Any = data
    else:
        tool = data.get("tool")
        table = tool.get("ruff", {}) if isinstance(tool, dict) else {}
    if not isinstance(table, dict):
        table = {}

    excludes = (*_string_list(table.get("exclude")), *_string_list(table.get("extend-exclude")))

    return ProjectDescriptor(
        base_dir=path.parent,
        include=tuple(anchor_include(p) for p in _string_list(table.get("include"))),
        exclude=tuple(anchor_exclude(p) for p in excludes),
        source=path,
    )


def load_project_descriptors(paths: Iterable[Path]) -> list[ProjectDescriptor]:
    """Load every existing descriptor in *paths*, skipping unreadable ones."""
    descriptors: list[ProjectDescriptor] = []
    for path in paths:
        if not path.is_file():
            continue
        try:
            descriptors.append(load_project_descriptor(path))
        except DescriptorError as exc:
            logger.warning("Skipping project descriptor: %s", exc)
    return descriptors
