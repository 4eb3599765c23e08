"""Small helpers shared by the engine and the built-in plugins."""

from __future__ import annotations


def normalize_log_detail(detail: object) -> str:
    """Collapse an error (or any value) to a single log-friendly line."""
    text = str(detail).strip()
    return " | ".join(line.strip() for line in text.splitlines() if line.strip())
