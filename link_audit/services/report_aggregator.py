"""
Report Aggregator Service

Accumulates per-link outcomes for one locale/run into a single Report.

Lifecycle:
1. new_report() creates a Report with zeroed counters and a start timestamp
2. record_skip() / record_eligible() are called while the page is scanned
3. record_outcome() is called as each per-link request settles, in any order
4. finalize() attaches the collected broken links; only then is the report
   safe to persist

totalLinks counts attempted evaluations, so record_eligible() must run before
the corresponding request is issued. Once every issued request has settled,
totalLinks == successCount + len(brokenLinks).
"""

import logging
from typing import List

from link_audit.models.enums import LinkClassification
from link_audit.models.schemas import LinkOutcome, Report

logger = logging.getLogger(__name__)


def new_report(
    locale: str,
    environment: str = "Development",
    platform: str = "Web",
    pages_scanned: int = 1,
) -> Report:
    """Create an empty report for one run. The timestamp records the start time."""
    return Report(
        platform=platform,
        locale=locale,
        environment=environment,
        pagesScanned=pages_scanned,
    )


class ReportAggregator:
    """
    Mutable accumulator around a single in-progress Report.

    Broken links are collected off to the side and only assigned to the report
    by finalize(), so a report observed before finalize() always has an empty
    brokenLinks list.
    """

    def __init__(self, report: Report):
        self.report = report
        self._broken: List[LinkOutcome] = []
        self._finalized = False

    @classmethod
    def start(
        cls,
        locale: str,
        environment: str = "Development",
        platform: str = "Web",
        pages_scanned: int = 1,
    ) -> "ReportAggregator":
        return cls(new_report(locale, environment, platform, pages_scanned))

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def pending(self) -> int:
        """Eligible links whose outcome has not been recorded yet."""
        return self.report.totalLinks - self.report.successCount - len(self._broken)

    def record_skip(self) -> None:
        self._ensure_open()
        self.report.skipped += 1

    def record_eligible(self) -> None:
        self._ensure_open()
        self.report.totalLinks += 1

    def record_outcome(self, classification: LinkClassification, outcome: LinkOutcome) -> None:
        """
        Record a settled request.

        Args:
            classification: Outcome class of the response status
            outcome: Page, URL, status and response time of the request
        """
        self._ensure_open()
        if classification is LinkClassification.SUCCESS:
            self.report.successCount += 1
        else:
            self._broken.append(outcome)

    def finalize(self) -> Report:
        """
        Attach the collected broken links and close the aggregator.

        Returns:
            The completed report

        Raises:
            RuntimeError: If called twice, or while outcomes are still pending
        """
        self._ensure_open()
        if self.pending:
            raise RuntimeError(
                f"Cannot finalize report for {self.report.locale}: "
                f"{self.pending} link checks have not settled"
            )
        self.report.brokenLinks = list(self._broken)
        self._finalized = True
        return self.report

    def _ensure_open(self) -> None:
        if self._finalized:
            raise RuntimeError(f"Report for {self.report.locale} is already finalized")
