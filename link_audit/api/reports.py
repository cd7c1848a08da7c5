"""
FastAPI router for link validation reports.

Endpoints (mounted under /api/reports):
- GET /                    cross-locale summary
- GET /compare/{locales}   full reports for a comma-separated locale list
- GET /{locale}            stored report for one locale
- GET /{locale}/insights   insight derived from one locale's report

All endpoints are read-only lookups against the ReportStore; each request is
independent. Errors are rendered as {"error": ...} by the application's
exception handlers.
"""

import logging

from fastapi import APIRouter, HTTPException, Path

from link_audit.core.dependencies import InsightGeneratorDep, ReportStoreDep
from link_audit.models.schemas import (
    ComparisonResponse,
    InsightResponse,
    Report,
    ReportsSummary,
)
from link_audit.services.report_store import (
    CorruptReportError,
    ReportNotFoundError,
    ReportStore,
    ReportStoreError,
)
from link_audit.services.report_summary import compare_locales, summarize_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reports", tags=["reports"])


# =============================================================================
# Helper Functions
# =============================================================================


def _load_or_raise(store: ReportStore, locale: str) -> Report:
    """
    Load one report, translating store errors into HTTP errors.

    Raises:
        HTTPException: 404 if no report exists, 500 if it cannot be read
    """
    try:
        return store.load(locale)
    except ReportNotFoundError:
        raise HTTPException(status_code=404, detail=f"No report found for locale: {locale}")
    except CorruptReportError as e:
        logger.error(f"Error reading report: {e}")
        raise HTTPException(status_code=500, detail="Failed to read report")
    except ReportStoreError:
        logger.exception(f"Error reading report for {locale}")
        raise HTTPException(status_code=500, detail="Failed to read report")


# =============================================================================
# Endpoint Implementations
# =============================================================================


@router.get("", response_model=ReportsSummary)
async def get_summary(store: ReportStoreDep) -> ReportsSummary:
    """
    Summary across every stored locale report.

    An unreadable reports directory yields the empty summary.
    """
    try:
        return summarize_store(store)
    except OSError as e:
        logger.warning(f"Reports directory unavailable ({e}), returning empty summary")
        return ReportsSummary()


@router.get("/compare/{locales}", response_model=ComparisonResponse)
async def compare_reports(
    store: ReportStoreDep,
    locales: str = Path(..., description="Comma-separated locale identifiers"),
) -> ComparisonResponse:
    """
    Compare several locales.

    Locales without a stored report are silently omitted from `reports` but
    still listed in `localesCompared`.
    """
    try:
        return compare_locales(store, locales)
    except OSError:
        logger.exception("Error comparing locales")
        raise HTTPException(status_code=500, detail="Failed to compare locales")


@router.get("/{locale}", response_model=Report)
async def get_report(store: ReportStoreDep, locale: str) -> Report:
    return _load_or_raise(store, locale)


@router.get("/{locale}/insights", response_model=InsightResponse)
async def get_report_insights(
    store: ReportStoreDep,
    generator: InsightGeneratorDep,
    locale: str,
) -> InsightResponse:
    """
    Insight for one locale, regenerated on every request.

    Uses the AI path when an OpenAI key is configured and falls back to the
    rule-based insight otherwise.
    """
    report = _load_or_raise(store, locale)
    insights = await generator.generate(report)
    return InsightResponse(locale=report.locale, insights=insights)
