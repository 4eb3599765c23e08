"""Tests for the root CLI group and global flags."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from lintctl import __version__
from lintctl.cli import cli
from tests.conftest import write


@pytest.mark.usefixtures("_isolated_project")
class TestRootGroup:
    def test_no_args_prints_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        for command in ("check", "explain", "domains"):
            assert command in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_global_flags(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--help"])
        for flag in ("--json", "--quiet", "--verbose", "--log-json", "--config"):
            assert flag in result.output

    def test_invalid_config_is_usage_error(self, cli_runner: CliRunner, project_root) -> None:
        write(project_root / "lintctl.toml", "[python\n")
        result = cli_runner.invoke(cli, ["domains"])
        assert result.exit_code == 1
        assert "Invalid TOML" in result.output

    def test_explicit_config_sets_project_root(
        self, cli_runner: CliRunner, project_root, fake_tools
    ) -> None:
        config = write(project_root / "conf" / "lintctl.toml", '[scope]\nroot = ".."\n')
        result = cli_runner.invoke(cli, ["-c", str(config), "check", "-d", "shell"])
        assert result.exit_code == 0, result.output
        assert fake_tools.calls == [["shellcheck", "scripts/build.sh"]]

    def test_root_flag_overrides_cwd(
        self, cli_runner: CliRunner, project_root, fake_tools, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(project_root / "docs")
        result = cli_runner.invoke(cli, ["--root", str(project_root), "check", "-d", "nix"])
        assert result.exit_code == 0, result.output
        assert fake_tools.calls == [["nixfmt", "--check", "flake.nix"]]

    def test_short_help_flag(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check", "-h"])
        assert result.exit_code == 0
        assert "--skip-domain" in result.output
