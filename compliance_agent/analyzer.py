from __future__ import annotations

from typing import Any

from .checks import CHECKS, Check
from .jurisdiction import detect_jurisdiction
from .logger import get_logger
from .models import AnalysisResult, IssueRecord
from .page import ParsedPage
from .scoring import compliance_score

log = get_logger(__name__)


def analyze(page: ParsedPage, url: str, checks: tuple[Check, ...] = CHECKS) -> AnalysisResult:
    """
    Run every compliance check against an already parsed page.

    Pure: no network, no clock, and ``page`` is never modified, so the same page
    and URL always produce the same result.
    """
    issues: list[IssueRecord] = []
    details: dict[str, Any] = {}

    for check in checks:
        outcome = check(page, url)
        issues.append(outcome.issue)
        details.update(outcome.details)

    score = compliance_score(issues)
    jurisdiction = detect_jurisdiction(page.markup, url)
    details["detectedJurisdiction"] = jurisdiction.value

    log.debug("Analyzed %s: score=%d jurisdiction=%s", url, score, jurisdiction.value)

    return AnalysisResult(
        score=score,
        issues=tuple(issues),
        details=details,
        jurisdiction=jurisdiction,
    )
