"""Domain registry — one plugin per domain id, built once per process."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from lintctl.domain.types import CANONICAL_ORDER, LintDomain
from lintctl.engine.contracts import LintDomainPlugin
from lintctl.errors import DuplicateDomainError, UnknownDomainError

DomainRegistry = Mapping[LintDomain, LintDomainPlugin]


def create_registry(plugins: Iterable[LintDomainPlugin]) -> DomainRegistry:
    """Index *plugins* by domain id.

    Raises:
        DuplicateDomainError: two plugins declare the same domain.
    """
    registry: dict[LintDomain, LintDomainPlugin] = {}
    for plugin in plugins:
        domain = LintDomain(plugin.domain)
        if domain in registry:
            raise DuplicateDomainError(domain)
        registry[domain] = plugin
    return MappingProxyType(registry)


def get_plugin(registry: DomainRegistry, domain: LintDomain | str) -> LintDomainPlugin:
    """Look up the plugin for *domain*, raising ``UnknownDomainError`` when absent."""
    try:
        return registry[LintDomain(domain)]
    except (KeyError, ValueError):
        raise UnknownDomainError(str(domain)) from None


def list_domains(
    registry: DomainRegistry,
    order: Iterable[LintDomain] = CANONICAL_ORDER,
) -> list[dict[str, str]]:
    """Return ``{domain, description}`` for each registered domain in *order*."""
    return [
        {"domain": domain.value, "description": registry[domain].description}
        for domain in order
        if domain in registry
    ]
