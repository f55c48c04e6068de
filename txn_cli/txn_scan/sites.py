"""Map a page address to a human-readable source label."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

GENERIC_SOURCE = "Generic"


@dataclass(frozen=True, slots=True)
class SiteRule:
    pattern: str
    label: str

    def matches(self, url: str) -> bool:
        return self.pattern.lower() in url.lower()


DEFAULT_SITE_RULES: tuple[SiteRule, ...] = (
    SiteRule("chase.com", "Chase"),
    SiteRule("bankofamerica.com", "Bank of America"),
    SiteRule("wellsfargo.com", "Wells Fargo"),
    SiteRule("capitalone.com", "Capital One"),
    SiteRule("citibank.com", "Citibank"),
)


def build_site_rules(extra: Iterable[object] = ()) -> tuple[SiteRule, ...]:
    """Return configured rules ahead of the defaults.

    ``extra`` holds objects exposing ``pattern`` and ``label`` attributes,
    such as the site entries of the loaded configuration.
    """

    configured = tuple(
        SiteRule(pattern=str(rule.pattern), label=str(rule.label)) for rule in extra  # type: ignore[attr-defined]
    )
    return configured + DEFAULT_SITE_RULES


def detect_site(
    url: str | None,
    rules: Sequence[SiteRule] = DEFAULT_SITE_RULES,
    *,
    default: str = GENERIC_SOURCE,
) -> str:
    """Return the label of the first rule matching ``url``."""

    if not url:
        return default
    for rule in rules:
        if rule.matches(url):
            return rule.label
    return default
