"""Turn ``--domain`` / ``--skip-domain`` / target flags into a DomainSelection."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from lintctl.domain.types import CANONICAL_ORDER, LintDomain, SelectionSource
from lintctl.engine.models import DomainSelection


def resolve_domain_selection(
    domains: Iterable[LintDomain | str] = (),
    skip_domains: Iterable[LintDomain | str] = (),
    targets: Mapping[LintDomain, Sequence[str]] | None = None,
) -> DomainSelection:
    """Resolve which domains are selected and which were asked for explicitly.

    Precedence:

    1. ``--domain`` given: exactly those domains, all explicit.
    2. No ``--domain`` and no ``--skip-domain``, but some target flags: the
       targeted domains.
    3. Otherwise every domain.

    ``--skip-domain`` is then removed from the selection. A domain whose
    target flag was supplied counts as explicitly requested whenever it is
    still selected.
    """
    domain_flags = [LintDomain(d) for d in domains]
    skipped = {LintDomain(d) for d in skip_domains}
    targeted = [d for d in CANONICAL_ORDER if (targets or {}).get(d)]

    sources: dict[LintDomain, SelectionSource] = {}
    if domain_flags:
        selected = set(domain_flags)
        sources = dict.fromkeys(domain_flags, SelectionSource.DOMAIN_FLAG)
    elif not skipped and targeted:
        selected = set(targeted)
        sources = dict.fromkeys(targeted, SelectionSource.TARGET_FLAG)
    else:
        selected = set(CANONICAL_ORDER)
        sources = dict.fromkeys(CANONICAL_ORDER, SelectionSource.DEFAULT)

    for domain in skipped:
        selected.discard(domain)
        sources.pop(domain, None)

    explicit = (set(domain_flags) | set(targeted)) & selected
    return DomainSelection(
        selected=frozenset(selected),
        explicitly_requested=frozenset(explicit),
        sources=sources,
    )
