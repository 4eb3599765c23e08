"""Look up and spawn the external lint tools.

All process and PATH access for domain plugins goes through this module,
so tests can monkeypatch a single seam.
"""

from __future__ import annotations

import importlib.util
import logging
import shutil
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path

logger = logging.getLogger(__name__)

# Stays under the Windows command-line limit of 32767 characters.
ARGV_CHAR_LIMIT = 30_000


def command_exists(command: str) -> bool:
    """Return True when *command* resolves to an executable on ``PATH``."""
    return shutil.which(command) is not None


def module_available(module: str) -> bool:
    """Return True when *module* is importable by the current interpreter."""
    return importlib.util.find_spec(module) is not None


def python_module_command(module: str, *args: str) -> list[str]:
    """Build the argv that runs ``python -m <module>`` with this interpreter."""
    return [sys.executable, "-m", module, *args]


def run_tool(
    argv: Sequence[str],
    *,
    cwd: Path,
    timeout: float | None = None,
) -> int:
    """Run *argv* in the foreground with inherited stdio and return its exit code.

    Raises:
        OSError: the executable could not be started.
        subprocess.TimeoutExpired: *timeout* elapsed first.
    """
    logger.debug("Spawning %s (cwd=%s)", " ".join(argv), cwd)
    completed = subprocess.run(list(argv), cwd=cwd, check=False, timeout=timeout)
    return completed.returncode


def batch_arguments(
    prefix: Sequence[str],
    files: Sequence[str],
    *,
    limit: int | None = None,
) -> list[list[str]]:
    """Split *files* into argv lists of ``prefix + chunk`` that fit in *limit* characters.

    Length counts every argument plus one separator. A file too long to share
    a command line still gets one to itself. No files yields no commands.
    """
    budget = ARGV_CHAR_LIMIT if limit is None else limit
    base = sum(len(arg) + 1 for arg in prefix)
    batches: list[list[str]] = []
    chunk: list[str] = []
    size = base
    for path in files:
        cost = len(path) + 1
        if chunk and size + cost > budget:
            batches.append([*prefix, *chunk])
            chunk, size = [], base
        chunk.append(path)
        size += cost
    if chunk:
        batches.append([*prefix, *chunk])
    return batches


def run_tool_batched(
    prefix: Sequence[str],
    files: Sequence[str],
    *,
    cwd: Path,
    timeout: float | None = None,
    limit: int | None = None,
) -> int:
    """Run ``prefix + files`` in as many :func:`run_tool` calls as the limit needs.

    Every batch runs even after one fails; the highest exit code is returned.
    *timeout* applies to each batch.

    Raises:
        OSError: the executable could not be started.
        subprocess.TimeoutExpired: a batch ran past *timeout*.
    """
    batches = batch_arguments(prefix, files, limit=limit)
    if len(batches) > 1:
        logger.debug("Splitting %d files into %d invocations", len(files), len(batches))
    return max((run_tool(argv, cwd=cwd, timeout=timeout) for argv in batches), default=0)
