"""
Link Audit API package.

Router modules:
- reports: Per-locale reports, cross-locale summary, comparison and insights
"""

from link_audit.api.reports import router as reports_router

__all__ = [
    "reports_router",
]
