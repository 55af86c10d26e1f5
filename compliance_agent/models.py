from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

RiskLevel = Literal["LOW", "MEDIUM", "HIGH"]


class Jurisdiction(str, Enum):
    EU_GDPR = "EU_GDPR"
    US_CCPA = "US_CCPA"
    BR_LGPD = "BR_LGPD"
    CA_PIPEDA = "CA_PIPEDA"
    UK_DPA = "UK_DPA"
    AU_PRIVACY = "AU_PRIVACY"
    GLOBAL = "GLOBAL"

    @property
    def display_name(self) -> str:
        return _JURISDICTION_NAMES[self]


_JURISDICTION_NAMES = {
    Jurisdiction.EU_GDPR: "European Union - GDPR",
    Jurisdiction.US_CCPA: "United States - CCPA",
    Jurisdiction.BR_LGPD: "Brazil - LGPD",
    Jurisdiction.CA_PIPEDA: "Canada - PIPEDA",
    Jurisdiction.UK_DPA: "United Kingdom - UK DPA",
    Jurisdiction.AU_PRIVACY: "Australia - Privacy Act",
    Jurisdiction.GLOBAL: "Global / Multi-jurisdictional",
}


class IssueRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    title: str
    description: str
    severity: int
    passed: bool


class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100)
    issues: tuple[IssueRecord, ...]
    # raw signals behind each check, kept for audit/debugging
    details: dict[str, Any]
    jurisdiction: Jurisdiction


class ScanRequest(BaseModel):
    url: str = Field(..., min_length=1)


class AnalyzeHtmlRequest(BaseModel):
    url: str = Field(..., min_length=1)
    html: str


class ScanResponse(BaseModel):
    url: str
    score: int
    issues: list[IssueRecord]
    details: dict[str, Any]
    recommendations: list[str]
    jurisdiction: Jurisdiction
    jurisdiction_name: str
    risk_level: RiskLevel

    # metadata
    scanned_at: str
    cached: bool = False
