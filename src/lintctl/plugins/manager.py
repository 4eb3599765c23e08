"""Plugin discovery, loading, and domain collection.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints
in the ``lintctl.plugins`` group; built-in domains are registered directly.
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING

import pluggy

from lintctl.engine.contracts import LintDomainPlugin
from lintctl.engine.registry import DomainRegistry, create_registry
from lintctl.plugins.hookspecs import LintctlHookSpec

if TYPE_CHECKING:
    from collections.abc import Iterable

PROJECT_NAME = "lintctl"
ENTRY_POINT_GROUP = "lintctl.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and domain collection."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(LintctlHookSpec)
        self._loaded: bool = False

    def discover_and_load(self) -> list[str]:
        """Load plugins from the ``lintctl.plugins`` entry-point group.

        Returns a list of registered plugin names.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly (e.g. the built-in domains)."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def get_plugins(self) -> list[object]:
        """Return all registered plugins."""
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Domain collection
    # ------------------------------------------------------------------

    def collect_domain_plugins(self) -> list[LintDomainPlugin]:
        """Gather domain implementations from every registered plugin.

        A plugin whose hook raises or returns something other than a list
        of domain plugins is skipped with a warning.
        """
        collected: list[LintDomainPlugin] = []
        for plugin in self._pm.get_plugins():
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            collected.extend(self._domains_from(plugin, plugin_name))
        return collected

    def build_registry(self) -> DomainRegistry:
        """Build the domain registry from every registered plugin.

        Raises:
            DuplicateDomainError: two plugins provide the same domain.
        """
        return create_registry(self.collect_domain_plugins())

    @staticmethod
    def _domains_from(plugin: object, plugin_name: str) -> Iterable[LintDomainPlugin]:
        hook = getattr(plugin, "lintctl_register_domains", None)
        if hook is None:
            return []

        try:
            contributed = hook()
        except Exception:
            logger.warning(
                "Failed to collect lint domains from plugin %s",
                plugin_name,
                exc_info=True,
            )
            return []

        if contributed is None:
            return []
        if not isinstance(contributed, (list, tuple)):
            logger.warning("Plugin %s returned non-list domain registrations", plugin_name)
            return []

        domains: list[LintDomainPlugin] = []
        for candidate in contributed:
            if isinstance(candidate, LintDomainPlugin):
                domains.append(candidate)
            else:
                logger.warning(
                    "Skipping invalid lint domain %r from plugin %s",
                    candidate,
                    plugin_name,
                )
        return domains

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            if not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("lintctl")`` sets a ``lintctl_impl``
        attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, "lintctl_impl", None):
                return True
        return False
