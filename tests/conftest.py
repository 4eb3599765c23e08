"""Shared pytest fixtures and test helpers for lintctl tests."""

from __future__ import annotations

from collections.abc import Callable, Generator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from lintctl.config.settings import LintSettings
from lintctl.domain.types import AvailabilityKind, LintDomain
from lintctl.engine.models import Detection, DomainRunResult, ExecutionContext
from lintctl.infrastructure import tools
from lintctl.services.telemetry import _current_span, disable_telemetry


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """Verbose CLI runs turn telemetry on; never let it leak between tests."""
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary project with one file per built-in domain.

    This is the single source of truth for the sample project layout.
    """
    write(tmp_path / "pyproject.toml", '[tool.ruff]\ninclude = ["src/**/*"]\n')
    write(tmp_path / "src" / "pkg" / "__init__.py", "")
    write(tmp_path / "src" / "pkg" / "core.py", "VALUE = 1\n")
    write(tmp_path / "scripts" / "build.sh", "#!/bin/sh\necho build\n")
    write(tmp_path / "README.md", "# Sample\n")
    write(tmp_path / "docs" / "guide.md", "# Guide\n")
    write(tmp_path / "flake.nix", "{ }\n")
    return tmp_path


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the sample project and ignore any outer lintctl config.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command test
    classes.
    """
    monkeypatch.chdir(project_root)
    monkeypatch.delenv("LINTCTL_CONFIG", raising=False)


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def make_context(
    project_root: Path, recording_logger: RecordingLogger
) -> Callable[..., ExecutionContext]:
    """Factory for an ExecutionContext rooted at the sample project."""

    def factory(**overrides: Any) -> ExecutionContext:
        values: dict[str, Any] = {
            "root": project_root,
            "settings": LintSettings(project_root=project_root),
            "logger": recording_logger,
        }
        values.update(overrides)
        return ExecutionContext(**values)

    return factory


@pytest.fixture
def fake_tools(monkeypatch: pytest.MonkeyPatch) -> FakeTools:
    """Replace tool lookup and spawning with an in-memory fake."""
    fake = FakeTools()
    monkeypatch.setattr(tools, "command_exists", fake.command_exists)
    monkeypatch.setattr(tools, "module_available", fake.module_available)
    monkeypatch.setattr(tools, "run_tool", fake.run_tool)
    return fake


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write(path: Path, content: str) -> Path:
    """Write *content* to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class RecordingLogger:
    """Minimal structlog stand-in that keeps every call."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict[str, Any]]] = []

    def bind(self, **_kw: Any) -> RecordingLogger:
        return self

    def _log(self, level: str, event: str, **kw: Any) -> None:
        self.records.append((level, event, kw))

    def debug(self, event: str, **kw: Any) -> None:
        self._log("debug", event, **kw)

    def info(self, event: str, **kw: Any) -> None:
        self._log("info", event, **kw)

    def warning(self, event: str, **kw: Any) -> None:
        self._log("warning", event, **kw)

    def error(self, event: str, **kw: Any) -> None:
        self._log("error", event, **kw)

    def at(self, level: str) -> list[tuple[str, dict[str, Any]]]:
        return [(event, kw) for lvl, event, kw in self.records if lvl == level]


@dataclass
class FakeTools:
    """Records spawned commands; availability and exit codes are configurable."""

    commands: set[str] = field(default_factory=lambda: {"shellcheck", "nixfmt"})
    modules: set[str] = field(default_factory=lambda: {"ruff", "mdformat"})
    exit_codes: dict[str, int] = field(default_factory=dict)
    raises: dict[str, Exception] = field(default_factory=dict)
    calls: list[list[str]] = field(default_factory=list)

    def command_exists(self, command: str) -> bool:
        return command in self.commands

    def module_available(self, module: str) -> bool:
        return module in self.modules

    def run_tool(self, argv: Any, *, cwd: Path, timeout: float | None = None) -> int:
        argv = list(argv)
        self.calls.append(argv)
        name = self.tool_name(argv)
        if name in self.raises:
            raise self.raises[name]
        return self.exit_codes.get(name, 0)

    @staticmethod
    def tool_name(argv: list[str]) -> str:
        if len(argv) > 2 and argv[1] == "-m":
            return argv[2]
        return Path(argv[0]).name

    def called(self, name: str) -> list[list[str]]:
        return [argv for argv in self.calls if self.tool_name(argv) == name]


@dataclass
class FakeDomainPlugin:
    """Configurable LintDomainPlugin for engine tests."""

    domain: LintDomain
    description: str = "fake domain"
    detection: Detection | Exception | None = None
    run_result: DomainRunResult | Exception = field(
        default_factory=lambda: DomainRunResult(had_failure=False)
    )
    detect_calls: int = 0
    run_calls: int = 0

    def detect(self, context: ExecutionContext) -> Detection:
        self.detect_calls += 1
        if isinstance(self.detection, Exception):
            raise self.detection
        return self.detection or make_detection()

    def run(self, context: ExecutionContext, detection: Detection) -> DomainRunResult:
        self.run_calls += 1
        if isinstance(self.run_result, Exception):
            raise self.run_result
        return self.run_result


def make_detection(
    *,
    relevant: bool = True,
    available: bool = True,
    kind: AvailabilityKind = AvailabilityKind.REQUIRED,
    files: tuple[str, ...] = ("a",),
) -> Detection:
    return Detection(
        relevant=relevant,
        relevance_reason=None if relevant else "nothing to check",
        available=available,
        availability_kind=kind,
        unavailable_reason=None if available else "tool missing",
        matched_files=files if relevant else (),
    )
