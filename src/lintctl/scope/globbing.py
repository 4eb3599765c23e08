"""Glob helpers: normalization, brace expansion, matching, and prefix overlap.

Patterns use forward slashes. ``**`` matches zero or more whole path
segments; every other segment is matched with :func:`fnmatch.fnmatchcase`.
"""

from __future__ import annotations

import os
import re
from fnmatch import fnmatchcase
from pathlib import Path

GLOB_META_PATTERN = re.compile(r"[*?[\]{}()!+@]")


def is_glob_pattern(value: str) -> bool:
    """Return True when *value* contains any glob metacharacter."""
    return GLOB_META_PATTERN.search(value) is not None


def normalize_glob_value(value: str) -> str:
    """Trim, switch to forward slashes, and drop one leading ``./``."""
    normalized = value.strip().replace("\\", "/")
    if normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


def rebase_pattern(pattern: str, *, base_dir: Path, root: Path) -> str:
    """Re-express *pattern*, written relative to *base_dir*, relative to *root*.

    Pure path arithmetic: nothing is read from disk. Returns ``"."`` for the
    root itself and ``""`` for a blank pattern.
    """
    normalized = normalize_glob_value(pattern)
    if not normalized:
        return ""
    absolute = os.path.normpath(os.path.join(os.fspath(base_dir), normalized))
    relative = os.path.relpath(absolute, os.fspath(root)).replace(os.sep, "/")
    return normalize_glob_value(relative) or "."


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives (nested groups included) into plain patterns.

    Groups without a top-level comma, and unbalanced braces, are left as
    literal text.
    """
    start = pattern.find("{")
    while start != -1:
        depth = 0
        options: list[str] = []
        last = start + 1
        end = -1
        for index in range(start, len(pattern)):
            char = pattern[index]
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    options.append(pattern[last:index])
                    end = index
                    break
            elif char == "," and depth == 1:
                options.append(pattern[last:index])
                last = index + 1
        if end == -1:
            return [pattern]
        if len(options) > 1:
            prefix, suffix = pattern[:start], pattern[end + 1 :]
            expanded: list[str] = []
            for option in options:
                expanded.extend(expand_braces(f"{prefix}{option}{suffix}"))
            return list(dict.fromkeys(expanded))
        start = pattern.find("{", end + 1)
    return [pattern]


def _match_segments(path: list[str], pattern: list[str]) -> bool:
    if not pattern:
        return not path
    head, rest = pattern[0], pattern[1:]
    if head == "**":
        # zero segments, then one more at a time
        return any(_match_segments(path[i:], rest) for i in range(len(path) + 1))
    if not path:
        return False
    return fnmatchcase(path[0], head) and _match_segments(path[1:], rest)


def glob_match(path: str, pattern: str) -> bool:
    """Return True when the forward-slash *path* matches *pattern*.

    Dot-files match like any other name.
    """
    path_segments = [s for s in normalize_glob_value(path).split("/") if s]
    for alternative in expand_braces(normalize_glob_value(pattern)):
        segments = [s for s in alternative.split("/") if s]
        if _match_segments(path_segments, segments):
            return True
    return False


def pattern_prefix(pattern: str) -> str:
    """Return the leading non-glob segments of *pattern*, joined with ``/``."""
    literal: list[str] = []
    for segment in normalize_glob_value(pattern).split("/"):
        if not segment:
            continue
        if is_glob_pattern(segment):
            break
        literal.append(segment)
    return "/".join(literal)


def patterns_overlap(left: str, right: str) -> bool:
    """Textual overlap test used to keep ``ignore`` from shadowing ``files``.

    Equal patterns overlap. Otherwise the literal prefixes must be equal, or
    one must be a whole-segment prefix of the other. A pattern with no
    literal prefix overlaps nothing.
    """
    if left == right:
        return True
    left_prefix = pattern_prefix(left)
    right_prefix = pattern_prefix(right)
    if not left_prefix or not right_prefix:
        return False
    return (
        left_prefix == right_prefix
        or left_prefix.startswith(f"{right_prefix}/")
        or right_prefix.startswith(f"{left_prefix}/")
    )
