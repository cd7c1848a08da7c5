"""
Link Audit Services Module

Each service has a single responsibility and is consumed by the API layer
(link_audit/api/) or the validation job (link_audit/jobs/).

Services:
- link_classifier: Link eligibility and HTTP status classification
- report_aggregator: Per-run counters and broken-link collection
- report_store: One JSON report per locale on disk
- report_summary: Cross-locale summary and comparison
- insight_generator: AI insights with a rule-based fallback
- link_validator: Candidate collection, per-link requests and the join barrier
"""

# =============================================================================
# Link Classifier Exports
# =============================================================================

from link_audit.services.link_classifier import (
    REQUEST_FAILED_STATUS,
    SUCCESS_STATUSES,
    EligibleLink,
    LinkCandidate,
    SkippedLink,
    classify_link,
    classify_status,
)

# =============================================================================
# Report Aggregator / Store / Summary Exports
# =============================================================================

from link_audit.services.report_aggregator import ReportAggregator, new_report
from link_audit.services.report_store import (
    CorruptReportError,
    ReportNotFoundError,
    ReportStore,
    ReportStoreError,
)
from link_audit.services.report_summary import (
    build_summary,
    compare_locales,
    summarize_store,
)

# =============================================================================
# Insight Generator Exports
# =============================================================================

from link_audit.services.insight_generator import (
    InsightGenerator,
    rule_based_insights,
    severity_for_rate,
)

# =============================================================================
# Link Validator Exports
# =============================================================================

from link_audit.services.link_validator import (
    build_http_client,
    check_link,
    collect_candidates,
    validate_page_links,
)


__all__ = [
    'REQUEST_FAILED_STATUS',
    'SUCCESS_STATUSES',
    'EligibleLink',
    'LinkCandidate',
    'SkippedLink',
    'classify_link',
    'classify_status',
    'ReportAggregator',
    'new_report',
    'CorruptReportError',
    'ReportNotFoundError',
    'ReportStore',
    'ReportStoreError',
    'build_summary',
    'compare_locales',
    'summarize_store',
    'InsightGenerator',
    'rule_based_insights',
    'severity_for_rate',
    'build_http_client',
    'check_link',
    'collect_candidates',
    'validate_page_links',
]
