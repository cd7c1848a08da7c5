"""
Link validation run.

One run scans one page for one locale:
1. Launch headless Chromium with the configured viewport
2. Navigate to the base URL and wait for the page to settle
3. Dismiss the cookie banner when a consent selector is configured
4. Validate every link matched by the link selector (see services.link_validator)
5. Log the summary and save the report as <reports_dir>/<locale>.json

A run whose navigation or consent click fails is retried RUN_RETRIES times
before giving up. Nothing is saved for a failed run.

Usage:
    link-audit-validate --locale fr-FR --base-url https://example.com/fr/
    python -m link_audit.jobs.link_validation
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from link_audit.core.config import Settings, get_settings
from link_audit.models.schemas import Report
from link_audit.services.link_validator import (
    build_http_client,
    log_report_summary,
    validate_page_links,
)
from link_audit.services.report_aggregator import ReportAggregator
from link_audit.services.report_store import ReportStore

logger = logging.getLogger(__name__)


class LinkValidationError(RuntimeError):
    """Every attempt of a validation run failed."""


async def scan_page(settings: Settings) -> Report:
    """Run a single attempt and return the finalized report."""
    aggregator = ReportAggregator.start(
        locale=settings.locale,
        environment=settings.environment,
        platform=settings.platform,
    )

    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(headless=True)
        try:
            context = await browser.new_context(
                viewport={"width": settings.viewport_width, "height": settings.viewport_height},
            )
            page = await context.new_page()
            await page.goto(
                settings.base_url,
                wait_until="load",
                timeout=settings.page_load_timeout_seconds * 1000,
            )
            await page.wait_for_timeout(settings.settle_delay_seconds * 1000)

            if settings.consent_selector:
                await page.click(settings.consent_selector)

            async with build_http_client(
                settings.request_timeout_seconds, settings.max_concurrent_requests
            ) as client:
                return await validate_page_links(
                    page,
                    settings.link_selector,
                    aggregator,
                    client,
                    timeout=settings.request_timeout_seconds,
                    max_concurrency=settings.max_concurrent_requests,
                )
        finally:
            await browser.close()


async def run_link_validation(
    settings: Settings,
    store: Optional[ReportStore] = None,
) -> Report:
    """
    Validate the configured page and persist the report.

    Args:
        settings: Run configuration (base URL, locale, selectors, timeouts)
        store: Destination store; defaults to one rooted at settings.reports_dir

    Returns:
        The saved report

    Raises:
        LinkValidationError: If every attempt failed
        ReportStoreError: If the report could not be written
    """
    store = store or ReportStore(settings.reports_dir)
    attempts = 1 + max(settings.run_retries, 0)

    report: Optional[Report] = None
    for attempt in range(1, attempts + 1):
        try:
            report = await scan_page(settings)
            break
        except PlaywrightError as e:
            logger.warning(f"Validation attempt {attempt}/{attempts} for {settings.base_url} failed: {e}")

    if report is None:
        raise LinkValidationError(
            f"Link validation for {settings.base_url} failed after {attempts} attempts"
        )

    log_report_summary(report)
    path = store.save(report)
    logger.info(f"Report saved for locale {report.locale}: {path}")
    return report


# =============================================================================
# Command Line Entry Point
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="link-audit-validate",
        description="Validate the links on one page and save a per-locale JSON report.",
    )
    parser.add_argument("--base-url", help="Page to scan (overrides BASE_URL)")
    parser.add_argument("--locale", help="Locale identifier and report file name (overrides LOCALE)")
    parser.add_argument("--environment", help="Environment label (overrides ENVIRONMENT)")
    parser.add_argument("--selector", help="CSS selector for link elements (overrides LINK_SELECTOR)")
    parser.add_argument("--reports-dir", type=Path, help="Report directory (overrides REPORTS_DIR)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log skipped links")
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    overrides = {
        "base_url": args.base_url,
        "locale": args.locale,
        "environment": args.environment,
        "link_selector": args.selector,
        "reports_dir": args.reports_dir,
    }
    return settings.model_copy(update={k: v for k, v in overrides.items() if v is not None})


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    settings = apply_overrides(get_settings(), args)
    try:
        asyncio.run(run_link_validation(settings))
    except LinkValidationError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
