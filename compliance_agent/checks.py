"""
The ten compliance checks.

Every check is a pure function of the parsed page and the scanned URL and returns
its issue record together with the raw signals it looked at. Checks that depend on
another check's signal (tracker disclosure, form disclosure) recompute it from the
page through the shared ``has_*`` helpers instead of reading earlier results, so
each one can be evaluated on its own.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from . import patterns
from .models import IssueRecord
from .page import ParsedPage


@dataclass(frozen=True)
class CheckOutcome:
    issue: IssueRecord
    details: dict[str, Any] = field(default_factory=dict)


Check = Callable[[ParsedPage, str], CheckOutcome]


def _issue(code: str, title: str, description: str, severity: int, passed: bool) -> IssueRecord:
    return IssueRecord(code=code, title=title, description=description, severity=severity, passed=passed)


def _any_link_matches(page: ParsedPage, predicate: Callable[[str], bool]) -> bool:
    return any(predicate(link.attr("href")) or predicate(link.text) for link in page.links)


def has_privacy_link(page: ParsedPage) -> bool:
    return _any_link_matches(page, patterns.mentions_privacy)


def has_terms_link(page: ParsedPage) -> bool:
    return _any_link_matches(page, patterns.mentions_terms)


def has_cookie_banner(page: ParsedPage) -> bool:
    return patterns.mentions_cookie_banner(page.markup)


def has_contact_info(page: ParsedPage) -> bool:
    return patterns.mentions_contact(page.markup) or _any_link_matches(page, patterns.mentions_contact)


def has_trackers(page: ParsedPage) -> bool:
    return any(patterns.is_tracker(s.attr("src")) or patterns.is_tracker(s.script) for s in page.scripts)


def has_cookie_policy_link(page: ParsedPage) -> bool:
    return _any_link_matches(page, patterns.is_cookie_policy_reference)


def check_privacy_policy(page: ParsedPage, url: str) -> CheckOutcome:
    found = has_privacy_link(page)
    return CheckOutcome(
        _issue(
            "MISSING_PRIVACY_POLICY",
            "Missing Privacy Policy",
            "Your website does not have a visible Privacy Policy link. "
            "Required by GDPR, CCPA, and most data protection laws.",
            15,
            found,
        ),
        {"hasPrivacyPolicy": found},
    )


def check_terms(page: ParsedPage, url: str) -> CheckOutcome:
    found = has_terms_link(page)
    return CheckOutcome(
        _issue(
            "MISSING_TERMS",
            "Missing Terms of Service",
            "No Terms of Service or Terms and Conditions link was found on your website.",
            10,
            found,
        ),
        {"hasTerms": found},
    )


def check_cookie_consent(page: ParsedPage, url: str) -> CheckOutcome:
    found = has_cookie_banner(page)
    return CheckOutcome(
        _issue(
            "MISSING_COOKIE_CONSENT",
            "Missing Cookie Consent Banner",
            "No cookie consent mechanism detected. "
            "GDPR requires explicit consent before setting non-essential cookies.",
            15,
            found,
        ),
        {"hasCookieConsent": found},
    )


def check_contact_info(page: ParsedPage, url: str) -> CheckOutcome:
    found = has_contact_info(page)
    return CheckOutcome(
        _issue(
            "NO_CONTACT_INFO",
            "No Contact Information",
            "No visible contact email, form, or address found. "
            "Most regulations require users to be able to contact you.",
            8,
            found,
        ),
        {"hasContactInfo": found},
    )


def check_third_party_tracking(page: ParsedPage, url: str) -> CheckOutcome:
    trackers = has_trackers(page)
    disclosed = trackers and (has_privacy_link(page) or has_cookie_banner(page))
    return CheckOutcome(
        _issue(
            "THIRD_PARTY_COOKIES",
            "Third-Party Tracking Without Disclosure",
            "Third-party scripts (analytics, ads, pixels) detected but not disclosed "
            "in a privacy or cookie policy.",
            12,
            not (trackers and not disclosed),
        ),
        {"hasTrackers": trackers, "trackersDisclosed": disclosed},
    )


def check_https(page: ParsedPage, url: str) -> CheckOutcome:
    secure = (url or "").startswith("https://")
    return CheckOutcome(
        _issue(
            "NO_HTTPS",
            "Not Using HTTPS",
            "Your website is not served over HTTPS. Unencrypted connections put user data at risk.",
            10,
            secure,
        ),
        {"isHttps": secure},
    )


def check_cookie_policy(page: ParsedPage, url: str) -> CheckOutcome:
    # No trackers counts as a pass even without a policy page; first-party
    # cookies are not detected from static markup.
    found = has_cookie_policy_link(page)
    return CheckOutcome(
        _issue(
            "MISSING_COOKIE_POLICY",
            "Missing Cookie Policy",
            "Cookies are being set but no separate Cookie Policy page was found.",
            8,
            found or not has_trackers(page),
        ),
        {"hasCookiePolicy": found},
    )


def check_data_collection_disclosure(page: ParsedPage, url: str) -> CheckOutcome:
    forms = bool(page.forms)
    return CheckOutcome(
        _issue(
            "NO_DATA_COLLECTION_DISCLOSURE",
            "No Data Collection Disclosure",
            "Forms collecting user data found but no disclosure about what data is collected "
            "or how it's used.",
            10,
            not forms or has_privacy_link(page),
        ),
        {"hasForms": forms},
    )


def check_opt_out(page: ParsedPage, url: str) -> CheckOutcome:
    opt_out = patterns.mentions_opt_out(page.markup)
    return CheckOutcome(
        _issue(
            "NO_OPT_OUT",
            "No Opt-Out Mechanism",
            "No unsubscribe or opt-out mechanism found for marketing communications.",
            7,
            opt_out or not page.forms,
        ),
        {"hasOptOut": opt_out},
    )


def check_accessibility_basics(page: ParsedPage, url: str) -> CheckOutcome:
    images = page.images
    with_alt = sum(1 for img in images if img.attr("alt").strip())
    passed = not images or with_alt / len(images) > 0.5
    return CheckOutcome(
        _issue(
            "NO_ACCESSIBILITY_BASICS",
            "Missing Basic Accessibility",
            "Basic accessibility features (alt text on images) are missing from key elements.",
            5,
            passed,
        ),
        {"totalImages": len(images), "imagesWithAlt": with_alt},
    )


# Evaluation and reporting order.
CHECKS: tuple[Check, ...] = (
    check_privacy_policy,
    check_terms,
    check_cookie_consent,
    check_contact_info,
    check_third_party_tracking,
    check_https,
    check_cookie_policy,
    check_data_collection_disclosure,
    check_opt_out,
    check_accessibility_basics,
)
