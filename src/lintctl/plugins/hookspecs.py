"""Pluggy hook specifications for lintctl.

One setup-time hook lets plugins contribute lint domain implementations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from lintctl.engine.contracts import LintDomainPlugin

hookspec = pluggy.HookspecMarker("lintctl")
hookimpl = pluggy.HookimplMarker("lintctl")


class LintctlHookSpec:
    """Hook specifications for the lintctl plugin system."""

    @hookspec
    def lintctl_register_domains(self) -> list[LintDomainPlugin] | None:
        """Return domain plugin instances to add to the registry."""
