"""File discovery for lint domains.

Turns user-facing patterns (plain paths, directories, or globs) into the
concrete files a domain tool should check. Every returned path is
root-relative with forward slashes, deduplicated, and sorted.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from lintctl.scope.globbing import (
    glob_match,
    is_glob_pattern,
    normalize_glob_value,
    rebase_pattern,
)

# Directories never descended into while walking a search root.
SKIP_DIRS = frozenset(
    {
        ".git",
        "node_modules",
        "dist",
        ".venv",
        "__pycache__",
        ".mypy_cache",
        ".ruff_cache",
        ".tox",
    }
)

__all__ = [
    "SKIP_DIRS",
    "collect_files_by_extensions",
    "is_glob_pattern",
    "pattern_to_search_root",
    "relativize",
    "resolve_files_from_patterns",
    "resolve_search_roots",
]


# ---------------------------------------------------------------------------
# Search roots
# ---------------------------------------------------------------------------


def pattern_to_search_root(pattern: str, root: Path) -> Path:
    """Return the directory to walk for *pattern*.

    Plain paths are their own search root; for a glob this is the longest
    leading run of literal segments (or *root* when the glob starts with one).
    """
    normalized = normalize_glob_value(pattern)
    if not is_glob_pattern(normalized):
        return Path(os.path.normpath(root / normalized)) if normalized else root
    literal: list[str] = []
    for segment in normalized.split("/"):
        if is_glob_pattern(segment):
            break
        literal.append(segment)
    prefix = "/".join(literal)
    return Path(os.path.normpath(root / prefix)) if prefix else root


def resolve_search_roots(patterns: Iterable[str], root: Path) -> list[Path]:
    """Return the existing search roots for *patterns*, deduplicated and sorted."""
    roots = {pattern_to_search_root(p, root) for p in patterns if normalize_glob_value(p)}
    return sorted(r for r in roots if r.exists())


# ---------------------------------------------------------------------------
# Walking
# ---------------------------------------------------------------------------


def _normalize_extensions(extensions: Iterable[str]) -> frozenset[str]:
    return frozenset(f".{e.strip().lstrip('.').lower()}" for e in extensions if e.strip())


def _iter_files(search_root: Path) -> Iterator[Path]:
    if search_root.is_file():
        yield search_root
        return
    if not search_root.is_dir():
        return
    # Unreadable directories are skipped silently by os.walk.
    for dirpath, dirnames, filenames in os.walk(search_root):
        dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRS)
        for name in sorted(filenames):
            yield Path(dirpath) / name


def collect_files_by_extensions(
    search_roots: Iterable[Path],
    extensions: Iterable[str],
) -> list[Path]:
    """Walk *search_roots* and return files whose extension is in *extensions*.

    Extensions may be given with or without the leading dot and match
    case-insensitively. A search root that is itself a file is included
    when its extension matches.
    """
    wanted = _normalize_extensions(extensions)
    found: set[Path] = set()
    for search_root in search_roots:
        for path in _iter_files(search_root):
            if path.suffix.lower() in wanted:
                found.add(path)
    return sorted(found)


# ---------------------------------------------------------------------------
# Pattern resolution
# ---------------------------------------------------------------------------


def relativize(path: Path, root: Path) -> str:
    """Express *path* relative to *root* with forward slashes."""
    relative = os.path.relpath(path, root).replace(os.sep, "/")
    return relative or "."


def _is_ignored(path: str, ignore: Sequence[str]) -> bool:
    for pattern in ignore:
        normalized = normalize_glob_value(pattern).rstrip("/")
        if not normalized:
            continue
        if glob_match(path, normalized) or glob_match(path, f"{normalized}/**"):
            return True
    return False


def resolve_files_from_patterns(
    patterns: Iterable[str],
    extensions: Iterable[str],
    *,
    root: Path | None = None,
    ignore: Sequence[str] = (),
) -> list[str]:
    """Resolve *patterns* to concrete root-relative files.

    - An existing file named without glob characters is taken as-is, even
      when its extension is not in *extensions*.
    - An existing directory is walked for *extensions*.
    - A glob is reduced to its search root, walked, and each candidate is
      matched against the full glob.

    Anything matching an *ignore* glob (or lying under an ignored plain
    directory) is dropped.
    """
    base = root or Path.cwd()
    extension_list = list(extensions)
    matched: set[str] = set()

    for pattern in patterns:
        normalized = normalize_glob_value(pattern)
        if not normalized:
            continue

        if not is_glob_pattern(normalized):
            target = base / normalized
            if target.is_file():
                matched.add(relativize(target, base))
            elif target.is_dir():
                walked = collect_files_by_extensions([target], extension_list)
                matched.update(relativize(p, base) for p in walked)
            continue

        search_root = pattern_to_search_root(normalized, base)
        if not search_root.exists():
            continue
        match_pattern = normalized
        if Path(normalized).is_absolute():
            match_pattern = rebase_pattern(normalized, base_dir=base, root=base)
        for candidate in collect_files_by_extensions([search_root], extension_list):
            relative = relativize(candidate, base)
            if glob_match(relative, match_pattern):
                matched.add(relative)

    if ignore:
        matched = {path for path in matched if not _is_ignored(path, ignore)}
    return sorted(matched)
