"""Tests for the domains CLI command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from lintctl.cli import cli


@pytest.mark.usefixtures("_isolated_project")
class TestDomainsCommand:
    def test_table(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["domains"])
        assert result.exit_code == 0
        assert "Lint Python sources with ruff." in result.output
        positions = [result.output.index(d) for d in ("python", "shell", "markdown", "nix")]
        assert positions == sorted(positions)

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "domains"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["data"]["count"] == 4
        assert [d["domain"] for d in data["data"]["domains"]] == [
            "python",
            "shell",
            "markdown",
            "nix",
        ]

    def test_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "domains"])
        assert result.exit_code == 0
        assert result.stdout.split() == ["python", "shell", "markdown", "nix"]
