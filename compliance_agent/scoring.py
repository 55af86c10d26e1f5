from __future__ import annotations

from typing import Iterable

from .models import IssueRecord, RiskLevel


def _clamp_score(score: int) -> int:
    return max(0, min(100, int(score)))


def total_weight(issues: Iterable[IssueRecord]) -> int:
    return sum(i.severity for i in issues)


def earned_weight(issues: Iterable[IssueRecord]) -> int:
    return sum(i.severity for i in issues if i.passed)


def compliance_score(issues: Iterable[IssueRecord]) -> int:
    """
    Share of the severity weight earned by passing checks, as 0-100 rounded half up.
    """
    issues = list(issues)
    total = total_weight(issues)
    if total <= 0:
        return 0
    earned = earned_weight(issues)
    # integer form of floor(100 * earned / total + 0.5)
    return _clamp_score((200 * earned + total) // (2 * total))


def risk_level_for(score: int) -> RiskLevel:
    if score >= 80:
        return "LOW"
    if score >= 50:
        return "MEDIUM"
    return "HIGH"
