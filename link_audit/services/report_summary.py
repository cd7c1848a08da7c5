"""
Cross-locale report derivations used by the Report API.

- build_summary: per-locale success rate and counts plus overall totals
- summarize_store: build_summary over every readable report in a store
- compare_locales: full reports for a comma-separated locale list, omitting
  locales with no readable report
"""

import logging
from typing import Iterable, List

from link_audit.models.schemas import (
    ComparisonResponse,
    LocaleSummary,
    Report,
    ReportsSummary,
)
from link_audit.services.report_store import (
    CorruptReportError,
    ReportNotFoundError,
    ReportStore,
    ReportStoreError,
)

logger = logging.getLogger(__name__)


def build_summary(reports: Iterable[Report]) -> ReportsSummary:
    summary = ReportsSummary()

    for report in reports:
        summary.locales.append(
            LocaleSummary(
                locale=report.locale,
                successRate=f"{report.success_rate:.2f}",
                brokenLinks=len(report.brokenLinks),
                successCount=report.successCount,
            )
        )
        summary.totalBrokenLinks += len(report.brokenLinks)
        summary.totalSuccessful += report.successCount

    summary.totalLocales = len(summary.locales)
    if summary.locales:
        # Averages the already-rounded per-locale rates
        rates = [float(item.successRate) for item in summary.locales]
        summary.averageSuccessRate = f"{sum(rates) / len(rates):.2f}"

    return summary


def summarize_store(store: ReportStore) -> ReportsSummary:
    """
    Summary over every stored report.

    Corrupt or unreadable files are logged and left out so the remaining
    locales are still summarized. Only a failure to list the reports
    directory propagates.
    """
    reports: List[Report] = []
    for locale in store.list_sorted():
        try:
            reports.append(store.load(locale))
        except ReportNotFoundError:
            # Removed between listing and reading
            continue
        except CorruptReportError as e:
            logger.warning(f"Skipping report in summary: {e}")
        except ReportStoreError as e:
            logger.error(f"Skipping unreadable report in summary: {e}")
    return build_summary(reports)


def parse_locale_list(locales: str) -> List[str]:
    return [locale.strip() for locale in locales.split(",")]


def compare_locales(store: ReportStore, locales: str) -> ComparisonResponse:
    """
    Reports for each requested locale that has a stored file.

    Args:
        store: Report store to read from
        locales: Comma-separated locale identifiers, e.g. "en-IN,fr-FR"

    Returns:
        ComparisonResponse listing every requested locale and the reports found
    """
    locale_list = parse_locale_list(locales)
    comparison = ComparisonResponse(localesCompared=locale_list)

    for locale in locale_list:
        try:
            comparison.reports.append(store.load(locale))
        except ReportNotFoundError:
            continue
        except CorruptReportError as e:
            logger.warning(f"Omitting report from comparison: {e}")
        except ReportStoreError as e:
            logger.error(f"Omitting unreadable report from comparison: {e}")

    return comparison
