"""
Pydantic models for the Link Audit service.

This module provides the persisted report format and the API response contracts:
- LinkOutcome / Report: one validation run for one locale, stored as <locale>.json
- Insight: severity, summary and recommendations derived from a Report
- LocaleSummary / ReportsSummary: cross-locale aggregate
- ComparisonResponse: side-by-side reports for several locales
- HealthResponse: liveness probe payload

Field names are camelCase because they are the on-disk and on-the-wire JSON keys
consumed by the dashboard.

All models use Pydantic v2 syntax.
"""

from datetime import datetime, timezone
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from link_audit.models.enums import InsightSource, Severity


def utc_timestamp() -> str:
    """Current time as an ISO-8601 string with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# =============================================================================
# Report Models
# =============================================================================


class LinkOutcome(BaseModel):
    """
    One evaluated link that failed validation.

    Only produced for links that passed eligibility filtering.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "page": "https://example.com/",
                "url": "https://example.com/missing",
                "status": 404,
                "responseTime": 132,
            }
        }
    )

    page: str = Field(..., description="URL of the page the link was found on")
    url: str = Field(..., description="Absolute HTTP(S) target")
    status: int = Field(
        ...,
        description="HTTP status code, or 0 when the request itself failed"
    )
    responseTime: float = Field(
        default=0,
        ge=0,
        description="Response time in milliseconds (0 if unknown)"
    )


class Report(BaseModel):
    """
    One validation run for one locale.

    For a finalized report, totalLinks == successCount + len(brokenLinks).
    skipped counts links excluded before any request and is independent of
    totalLinks.
    """
    model_config = ConfigDict(
        validate_assignment=True,
        json_schema_extra={
            "example": {
                "platform": "Web",
                "locale": "en-IN",
                "environment": "Production",
                "pagesScanned": 1,
                "totalLinks": 10,
                "successCount": 9,
                "brokenLinks": [
                    {
                        "page": "https://example.com/",
                        "url": "https://example.com/missing",
                        "status": 404,
                        "responseTime": 132,
                    }
                ],
                "skipped": 2,
                "timestamp": "2026-01-15T09:30:00.000Z",
            }
        },
    )

    platform: str = Field(default="Web", description="Platform label")
    locale: str = Field(..., min_length=1, description="Locale identifier, also the report file name")
    environment: str = Field(default="Development", description="Environment label")
    pagesScanned: int = Field(default=0, ge=0, description="Pages scanned in the run")
    totalLinks: int = Field(default=0, ge=0, description="Eligible links evaluated")
    successCount: int = Field(default=0, ge=0, description="Links that resolved successfully")
    brokenLinks: List[LinkOutcome] = Field(
        default_factory=list,
        description="Links that failed, in completion order"
    )
    skipped: int = Field(default=0, ge=0, description="Links excluded before evaluation")
    timestamp: str = Field(default_factory=utc_timestamp, description="ISO-8601 generation time")

    @property
    def success_rate(self) -> float:
        """Success percentage, 0 when no links were evaluated."""
        if self.totalLinks == 0:
            return 0.0
        return self.successCount / self.totalLinks * 100

    def count_status(self, status: int) -> int:
        return sum(1 for link in self.brokenLinks if link.status == status)

    def count_server_errors(self) -> int:
        return sum(1 for link in self.brokenLinks if 500 <= link.status < 600)


# =============================================================================
# Insight Models
# =============================================================================


class Insight(BaseModel):
    """
    Severity, summary and recommended actions derived from a Report.

    Computed on demand and never stored. Optional fields are only populated by
    the path that knows them: the AI path fills the analysis fields, the
    rule-based path fills successRate and brokenLinksCount.
    """
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    enabled: bool = Field(default=True, description="Whether insights were produced")
    source: InsightSource = Field(default=InsightSource.RULES, description="Producing path")
    severity: Severity = Field(..., description="Critical, High, Medium or Low")
    summary: str = Field(..., description="One-line summary")
    recommendedActions: List[str] = Field(default_factory=list)
    successRate: Optional[str] = Field(default=None, description="Percentage with 2 decimals")
    brokenLinksCount: Optional[int] = Field(default=None, ge=0)
    mostAffectedPages: Optional[List[str]] = None
    commonPatterns: Optional[List[str]] = None
    rootCauseAnalysis: Optional[str] = None
    timestamp: Optional[str] = None


class InsightResponse(BaseModel):
    """Insight computed for one stored locale report."""
    locale: str
    insights: Insight


# =============================================================================
# Cross-Locale Models
# =============================================================================


class LocaleSummary(BaseModel):
    """Per-locale row of the cross-locale summary."""
    locale: str
    successRate: str = Field(..., description="Percentage with 2 decimals")
    brokenLinks: int = Field(..., ge=0)
    successCount: int = Field(..., ge=0)


class ReportsSummary(BaseModel):
    """
    Aggregate over every stored report.

    averageSuccessRate is the mean of the per-locale rates formatted with 2
    decimals, or the integer 0 when no locales exist.
    """
    totalLocales: int = Field(default=0, ge=0)
    locales: List[LocaleSummary] = Field(default_factory=list)
    totalBrokenLinks: int = Field(default=0, ge=0)
    totalSuccessful: int = Field(default=0, ge=0)
    averageSuccessRate: Union[str, int] = 0


class ComparisonResponse(BaseModel):
    """Reports for the requested locales that have a stored file."""
    localesCompared: List[str] = Field(default_factory=list)
    reports: List[Report] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str
    timestamp: str
