"""Hook implementation contributing the four built-in lint domains."""

from __future__ import annotations

from lintctl.engine.contracts import LintDomainPlugin
from lintctl.plugins.builtins.markdown import MarkdownDomainPlugin
from lintctl.plugins.builtins.nix import NixDomainPlugin
from lintctl.plugins.builtins.python import PythonDomainPlugin
from lintctl.plugins.builtins.shell import ShellDomainPlugin
from lintctl.plugins.hookspecs import hookimpl


class BuiltinDomainsPlugin:
    """Registers python, shell, markdown, and nix."""

    @hookimpl
    def lintctl_register_domains(self) -> list[LintDomainPlugin]:
        return [
            PythonDomainPlugin(),
            ShellDomainPlugin(),
            MarkdownDomainPlugin(),
            NixDomainPlugin(),
        ]
