"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from lintctl.output.console import create_console, get_output, style_for_action

if TYPE_CHECKING:
    from rich.console import Console

    from lintctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    A failed result still renders its data, after the error line.
    """
    console = create_console()
    renderer = _OP_RENDERERS.get(result.op)

    if result.ok:
        (renderer or _render_generic)(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
        if renderer is not None and result.data:
            renderer(result, console, verbose=verbose)

    if verbose:
        _render_meta(console, result)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op == "domains":
        return "\n".join(d["domain"] for d in result.data.get("domains", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    console.print(Text("OK", style="lint.ok"), Text(f"  {result.op}", style="lint.op"))


def _action_text(action: str) -> Text:
    return Text(action, style=style_for_action(action))


def _yes_no(value: Any) -> str:
    if value is None:
        return "-"
    return "yes" if value else "no"


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a span tree, slow spans highlighted."""
    prefix = " " * indent
    duration = span_data.get("duration_ms", 0.0)
    style = "bold red" if duration > 1000 else "yellow" if duration > 100 else "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {span_data.get('name', '?')}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="lint.error"),
        Text(f"  {result.op}", style="lint.op"),
        Text(" — "),
        msg,
        sep="",
    )

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Op renderers ──────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        console.print(Text(f"  {key}: ", style="lint.key"), str(value), sep="")


def _render_domains(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the registered domains in execution order."""
    domains = result.data.get("domains", [])
    if not domains:
        console.print("No lint domains registered.")
        return

    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Domain", style="lint.domain", no_wrap=True)
    table.add_column("Description")
    for entry in domains:
        table.add_row(entry["domain"], entry["description"])
    console.print(table)


def _render_explain(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render one row per domain: selection, detection, and the planned action."""
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Domain", style="lint.domain", no_wrap=True)
    table.add_column("Source")
    table.add_column("Explicit")
    table.add_column("Relevant")
    table.add_column("Available")
    table.add_column("Action", no_wrap=True)
    table.add_column("Reason", style="lint.reason")
    if verbose:
        table.add_column("Files", justify="right")

    for row in result.data.get("decisions", []):
        cells: list[Any] = [
            row["domain"],
            row["source"],
            _yes_no(row["explicit"]),
            _yes_no(row["relevant"]),
            _yes_no(row["available"]),
            _action_text(row["action"]),
            row.get("reason") or "",
        ]
        if verbose:
            cells.append(str(row.get("files", 0)))
        table.add_row(*cells)
    console.print(table)

    will_fail = result.data.get("will_fail", [])
    if will_fail:
        console.print(f"[lint.error]Would fail:[/lint.error] {', '.join(will_fail)}")


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render per-domain outcomes of a run."""
    rows = result.data.get("domains", [])
    if result.ok:
        _status_line(console, result)
    if not rows:
        console.print("No lint domains selected.")
        return

    for row in rows:
        if row["failed"]:
            status = Text("FAIL", style="lint.error")
        elif row["ran"]:
            status = Text("PASS", style="lint.ok")
        else:
            status = Text("SKIP", style="lint.action.skip")
        line = Text("  ")
        line.append_text(status)
        line.append(f"  {row['domain']:<9}", style="lint.domain")
        line.append_text(_action_text(row["action"]))
        if row.get("detail"):
            line.append(f"  {row['detail']}", style="lint.reason")
        console.print(line)

    ran = len(result.data.get("ran", []))
    failed = len(result.data.get("failed", []))
    console.print(f"\n{ran} ran, {failed} failed")


_Renderer = Callable[..., None]

_OP_RENDERERS: dict[str, _Renderer] = {
    "check": _render_check,
    "explain": _render_explain,
    "domains": _render_domains,
}
