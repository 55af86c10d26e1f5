"""
Best-effort guess of the privacy regime that governs a site.

Rules are evaluated in order and the first match wins: country-code TLD of the host
first, then regulation keywords in the markup, then GLOBAL.
"""
from __future__ import annotations

from urllib.parse import urlparse

from .models import Jurisdiction

_EU_TLDS = frozenset({
    "de", "fr", "es", "it", "nl", "be", "at", "pt", "pl", "se", "fi", "dk",
    "ie", "gr", "cz", "ro", "hu", "bg", "hr", "sk", "si", "lt", "lv", "ee",
    "cy", "lu", "mt", "eu",
})

TLD_RULES: tuple[tuple[frozenset[str], Jurisdiction], ...] = (
    (_EU_TLDS, Jurisdiction.EU_GDPR),
    (frozenset({"uk", "co.uk"}), Jurisdiction.UK_DPA),
    (frozenset({"br", "com.br"}), Jurisdiction.BR_LGPD),
    (frozenset({"ca"}), Jurisdiction.CA_PIPEDA),
    (frozenset({"au", "com.au"}), Jurisdiction.AU_PRIVACY),
)

COMPOUND_TLDS = frozenset({"co.uk", "com.br", "com.au"})

KEYWORD_RULES: tuple[tuple[tuple[str, ...], Jurisdiction], ...] = (
    (("gdpr", "rgpd", "dsgvo"), Jurisdiction.EU_GDPR),
    (("ccpa", "california"), Jurisdiction.US_CCPA),
    (("lgpd",), Jurisdiction.BR_LGPD),
)


def _hostname(url: str) -> str | None:
    try:
        return urlparse(url).hostname
    except ValueError:
        return None


def extract_tld(url: str) -> str | None:
    host = _hostname(url or "")
    if not host:
        return None
    parts = [p for p in host.lower().split(".") if p]
    if len(parts) < 2:
        return None
    compound = ".".join(parts[-2:])
    if compound in COMPOUND_TLDS:
        return compound
    return parts[-1]


def jurisdiction_from_tld(tld: str | None) -> Jurisdiction | None:
    if not tld:
        return None
    for tlds, jurisdiction in TLD_RULES:
        if tld in tlds:
            return jurisdiction
    return None


def jurisdiction_from_keywords(markup: str | None) -> Jurisdiction | None:
    html = (markup or "").lower()
    for keywords, jurisdiction in KEYWORD_RULES:
        if any(k in html for k in keywords):
            return jurisdiction
    return None


def detect_jurisdiction(markup: str, url: str) -> Jurisdiction:
    return (
        jurisdiction_from_tld(extract_tld(url))
        or jurisdiction_from_keywords(markup)
        or Jurisdiction.GLOBAL
    )
