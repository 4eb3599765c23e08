"""Scope pattern resolver.

Merges the include/exclude globs of several project descriptors plus a
manual force-include list into one pair of ``files`` / ``ignore`` glob
lists, all relative to a single root. The result is deterministic and
``files`` and ``ignore`` never share a pattern.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from pathlib import Path

from pydantic import BaseModel

from lintctl.scope.globbing import (
    glob_match,
    is_glob_pattern,
    normalize_glob_value,
    pattern_prefix,
    patterns_overlap,
    rebase_pattern,
)

DEFAULT_EXTENSIONS: tuple[str, ...] = ("py", "pyi")
DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = (
    ".venv/**",
    "__pypackages__/**",
    "build/**",
    "dist/**",
    "node_modules/**",
)

_EXTENSION_PATTERN = re.compile(r"(^|/)[^/]*\.[^/]*$")


class ProjectDescriptor(BaseModel):
    """Include/exclude globs declared by one project, relative to ``base_dir``."""

    model_config = {"frozen": True}

    base_dir: Path
    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()
    source: Path | None = None


class ScopePatterns(BaseModel):
    """Root-relative glob lists handed to the source linter."""

    model_config = {"frozen": True}

    files: tuple[str, ...] = ()
    ignore: tuple[str, ...] = ()


def extension_glob(extensions: Sequence[str]) -> str:
    """Return the filename suffix glob for *extensions* (``.py`` or ``.{py,pyi}``)."""
    cleaned = list(dict.fromkeys(e.strip().lstrip(".") for e in extensions if e.strip()))
    if not cleaned:
        cleaned = list(DEFAULT_EXTENSIONS)
    if len(cleaned) == 1:
        return f".{cleaned[0]}"
    return ".{" + ",".join(cleaned) + "}"


def has_extension(pattern: str) -> bool:
    """True when the last segment of *pattern* contains a dot."""
    return _EXTENSION_PATTERN.search(pattern) is not None


def expand_extensionless_pattern(pattern: str, ext_glob: str) -> str:
    """Turn a directory-like pattern into one that matches source files.

    ``src`` -> ``src/**/*.{py,pyi}``, ``**`` -> ``**/*.{py,pyi}``,
    ``src/**`` -> ``src/**/*.{py,pyi}``, ``src/*`` -> ``src/*.{py,pyi}``.
    Patterns whose last segment already has an extension are kept as-is.
    """
    normalized = normalize_glob_value(pattern).rstrip("/")
    if not normalized:
        return ""
    if normalized == ".":
        normalized = "**"
    if has_extension(normalized):
        return normalized
    if not is_glob_pattern(normalized):
        return f"{normalized}/**/*{ext_glob}"
    if normalized == "**":
        return f"**/*{ext_glob}"
    if normalized.endswith("/**"):
        return f"{normalized}/*{ext_glob}"
    return f"{normalized}{ext_glob}"


def _sorted_unique(patterns: Iterable[str]) -> list[str]:
    return sorted({p for p in patterns if p})


def normalize_include_patterns(patterns: Iterable[str], ext_glob: str) -> list[str]:
    return _sorted_unique(expand_extensionless_pattern(p, ext_glob) for p in patterns)


def normalize_exclude_patterns(patterns: Iterable[str]) -> list[str]:
    return _sorted_unique(normalize_glob_value(p).rstrip("/") for p in patterns)


def _shadows(exclude: str, include: str) -> bool:
    """True when *exclude* would hide files that *include* asks for.

    Besides textual overlap, an exclude without a literal prefix
    (``**/migrations``) shadows any include whose literal prefix it matches.
    """
    if patterns_overlap(include, exclude):
        return True
    prefix = pattern_prefix(include)
    if not prefix or pattern_prefix(exclude):
        return False
    return glob_match(prefix, exclude) or glob_match(prefix, f"{exclude}/**")


def _descriptor_sort_key(
    descriptor: ProjectDescriptor,
) -> tuple[str, tuple[str, ...], tuple[str, ...]]:
    return (str(descriptor.base_dir), descriptor.include, descriptor.exclude)


def build_scope_patterns(
    descriptors: Iterable[ProjectDescriptor],
    force_include: Iterable[str] = (),
    *,
    root: Path,
    force_include_base: Path | None = None,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> ScopePatterns:
    """Resolve the effective ``files`` / ``ignore`` globs for a set of projects.

    Args:
        descriptors: Projects contributing include/exclude globs.
        force_include: Globs that must be linted even if some project
            excludes them. Relative to *force_include_base*.
        root: Directory every output pattern is relative to.
        force_include_base: Where *force_include* is declared (default *root*).
        extensions: Source file extensions used to expand directory-like
            includes.

    An exclude of one project is dropped when it overlaps another project's
    include, and any exclude overlapping a force-include is dropped too.
    A project with no excludes contributes ``DEFAULT_IGNORE_PATTERNS``.
    """
    ext_glob = extension_glob(extensions)
    force_base = force_include_base or root

    rebased_force = [rebase_pattern(p, base_dir=force_base, root=root) for p in force_include]
    normalized_force = normalize_include_patterns(rebased_force, ext_glob)
    raw_force = normalize_exclude_patterns(rebased_force)

    includes_by_project: list[list[str]] = []
    excludes_by_project: list[list[str]] = []
    for descriptor in sorted(descriptors, key=_descriptor_sort_key):
        raw_include = [
            rebase_pattern(p, base_dir=descriptor.base_dir, root=root) for p in descriptor.include
        ]
        raw_include = [p for p in raw_include if p]
        if not raw_include:
            raw_include = [rebase_pattern("**/*", base_dir=descriptor.base_dir, root=root)]
        includes_by_project.append(normalize_include_patterns(raw_include, ext_glob))
        excludes_by_project.append(
            normalize_exclude_patterns(
                rebase_pattern(p, base_dir=descriptor.base_dir, root=root)
                for p in descriptor.exclude
            )
        )

    all_includes = [p for group in includes_by_project for p in group]
    files = _sorted_unique([*all_includes, *normalized_force])

    candidates: list[str] = []
    for index, excludes in enumerate(excludes_by_project):
        if not excludes:
            candidates.extend(DEFAULT_IGNORE_PATTERNS)
            continue
        other_includes = [
            p for other, group in enumerate(includes_by_project) if other != index for p in group
        ]
        candidates.extend(
            exclude
            for exclude in excludes
            if not any(_shadows(exclude, include) for include in other_includes)
        )

    forced = [*normalized_force, *raw_force]
    file_set = set(files)
    ignore = [
        p
        for p in _sorted_unique(candidates)
        if p not in file_set and not any(_shadows(p, f) for f in forced)
    ]
    return ScopePatterns(files=tuple(files), ignore=tuple(ignore))
