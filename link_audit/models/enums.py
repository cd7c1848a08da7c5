"""
Enumeration definitions for the Link Audit service.

All enums inherit from both `str` and `Enum` so they serialize as plain strings
inside Pydantic models and JSON responses.
"""

from enum import Enum


class LinkClassification(str, Enum):
    """
    Outcome class of one HTTP status returned for a validated link.

    - success: 200, 201, 204, 301, 302, 307 or 308
    - broken_404: the target was not found
    - broken_5xx: the target server failed (500-599)
    - broken_other: any other status, including request-level failures
    """
    SUCCESS = "success"
    BROKEN_404 = "broken_404"
    BROKEN_5XX = "broken_5xx"
    BROKEN_OTHER = "broken_other"

    @property
    def is_broken(self) -> bool:
        return self is not LinkClassification.SUCCESS


class SkipReason(str, Enum):
    """Why a candidate link element was excluded before any request."""
    NO_ANCHOR = "no_anchor"
    EMPTY_HREF = "empty_href"
    NON_HTTP_HREF = "non_http_href"


class Severity(str, Enum):
    """
    Coarse severity label derived from a report's success rate.

    Rule-based thresholds:
    - Critical: success rate < 50%
    - High: success rate < 80%
    - Medium: success rate < 95%
    - Low: everything else
    """
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class InsightSource(str, Enum):
    """Which path produced an Insight."""
    AI = "ai"
    RULES = "rules"
