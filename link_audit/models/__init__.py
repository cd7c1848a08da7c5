"""
Package initialization file for Link Audit models.

Re-exports the Pydantic schemas and enumerations so other modules can import
them from link_audit.models directly.

Usage:
    from link_audit.models import Report, LinkOutcome, Severity
"""

# =============================================================================
# Enums
# =============================================================================

from link_audit.models.enums import (
    InsightSource,
    LinkClassification,
    Severity,
    SkipReason,
)

# =============================================================================
# Schemas
# =============================================================================

from link_audit.models.schemas import (
    ComparisonResponse,
    HealthResponse,
    Insight,
    InsightResponse,
    LinkOutcome,
    LocaleSummary,
    Report,
    ReportsSummary,
    utc_timestamp,
)


__all__ = [
    # Enums
    'InsightSource',
    'LinkClassification',
    'Severity',
    'SkipReason',
    # Report models
    'LinkOutcome',
    'Report',
    # Insight models
    'Insight',
    'InsightResponse',
    # Cross-locale models
    'LocaleSummary',
    'ReportsSummary',
    'ComparisonResponse',
    'HealthResponse',
    # Helpers
    'utc_timestamp',
]
