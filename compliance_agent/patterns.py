"""
Keyword and signature tables used by the compliance checks.

Each entry is a named set of case-insensitive regex fragments. Adding a locale or
a consent/tracker vendor only means adding a fragment here; the checks look the
sets up by name and never embed keywords themselves.
"""
from __future__ import annotations

import re

PATTERN_SETS: dict[str, tuple[str, ...]] = {
    "privacy": (
        r"privacy",
        r"privacidad",
        r"datenschutz",
        r"confidentialit",
        r"privacidade",
        r"politique.*confidentialit",
    ),
    "terms": (
        r"terms",
        r"condiciones",
        r"nutzungsbedingungen",
        r"conditions.*utilisation",
        r"termos",
    ),
    "cookie_banner": (
        r"cookie-consent",
        r"cookie-banner",
        r"cookie-notice",
        r"cookieconsent",
        r"cc-window",
        r"gdpr",
        r"onetrust",
        r"cookiebot",
        r"quantcast",
    ),
    "contact": (
        r"contact",
        r"contacto",
        r"kontakt",
        r"mailto:",
        r"@[a-z0-9.-]+\.[a-z]{2,}",
    ),
    "tracker": (
        r"google-analytics",
        r"googletagmanager",
        r"gtag",
        r"fbq",
        r"facebook.*pixel",
        r"hotjar",
        r"mixpanel",
        r"segment\.com",
        r"analytics\.js",
    ),
}

OPT_OUT_PHRASES: tuple[str, ...] = ("unsubscribe", "opt-out", "opt out", "darse de baja")


def _compile(fragments: tuple[str, ...]) -> re.Pattern[str]:
    return re.compile("(?:" + "|".join(fragments) + ")", re.IGNORECASE)


_COMPILED: dict[str, re.Pattern[str]] = {name: _compile(frags) for name, frags in PATTERN_SETS.items()}


def pattern(name: str) -> re.Pattern[str]:
    return _COMPILED[name]


def matches(name: str, text: str | None) -> bool:
    if not text:
        return False
    return _COMPILED[name].search(text) is not None


def mentions_privacy(text: str | None) -> bool:
    return matches("privacy", text)


def mentions_terms(text: str | None) -> bool:
    return matches("terms", text)


def mentions_cookie_banner(text: str | None) -> bool:
    return matches("cookie_banner", text)


def mentions_contact(text: str | None) -> bool:
    return matches("contact", text)


def is_tracker(text: str | None) -> bool:
    return matches("tracker", text)


def mentions_opt_out(text: str | None) -> bool:
    lowered = (text or "").lower()
    return any(p in lowered for p in OPT_OUT_PHRASES)


def is_cookie_policy_reference(text: str | None) -> bool:
    lowered = (text or "").lower()
    return "cookie" in lowered and ("policy" in lowered or "politic" in lowered)
