"""
Link Validator Service

Validates every link matched by a selector on an already-loaded page:

1. Candidate elements are read from the page in one round-trip (anchor
   ancestor, resolved href, text)
2. Each candidate goes through classify_link(); skipped ones are counted
3. Each eligible link is counted, then one GET request is issued for it
   without waiting for earlier requests, at most max_concurrency at a time
4. All requests are gathered as a single join point, after which the report
   is finalized

Requests never raise on HTTP error statuses and carry a fixed overall timeout.
A timeout or transport failure is recorded as a broken link with status 0.

The page only needs a `url` attribute and an async `eval_on_selector_all`,
which a Playwright Page provides.
"""

import asyncio
import logging
import time
from typing import Any, List, Tuple

import httpx

from link_audit.models.enums import LinkClassification
from link_audit.models.schemas import LinkOutcome, Report
from link_audit.services.link_classifier import (
    REQUEST_FAILED_STATUS,
    EligibleLink,
    LinkCandidate,
    SkippedLink,
    classify_link,
    classify_status,
)
from link_audit.services.report_aggregator import ReportAggregator

logger = logging.getLogger(__name__)


DEFAULT_REQUEST_TIMEOUT_SECONDS = 20.0
DEFAULT_MAX_CONCURRENT_REQUESTS = 20

USER_AGENT = "link-audit/1.0"

# Runs in the browser against every element matched by the selector
CANDIDATE_SCRIPT = """
elements => elements.map(element => {
  const anchor = element.closest('a');
  return {
    hasAnchor: Boolean(anchor),
    href: anchor ? (anchor.href || anchor.getAttribute('href') || '') : '',
    text: (element.textContent || '').trim(),
  };
})
"""


def build_http_client(
    timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
    max_connections: int = DEFAULT_MAX_CONCURRENT_REQUESTS,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=timeout,
        limits=httpx.Limits(max_connections=max_connections),
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
    )


async def collect_candidates(page: Any, selector: str) -> List[LinkCandidate]:
    rows = await page.eval_on_selector_all(selector, CANDIDATE_SCRIPT)
    return [
        LinkCandidate(
            has_anchor=bool(row.get("hasAnchor")),
            href=row.get("href") or None,
            text=row.get("text") or "",
        )
        for row in rows
    ]


async def check_link(
    client: httpx.AsyncClient,
    link: EligibleLink,
    timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
) -> Tuple[LinkClassification, LinkOutcome]:
    """
    Fetch one eligible link and classify the result.

    Args:
        client: Shared async HTTP client
        link: Eligible link (target URL and the page it was found on)
        timeout: Overall deadline for the request, in seconds

    Returns:
        Tuple of (classification, outcome)
    """
    started = time.perf_counter()
    try:
        response = await asyncio.wait_for(client.get(link.url), timeout=timeout)
        status = response.status_code
    except asyncio.TimeoutError:
        logger.warning(f"Timed out after {timeout:g}s: {link.url}")
        status = REQUEST_FAILED_STATUS
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning(f"Request failed for {link.url}: {e!r}")
        status = REQUEST_FAILED_STATUS
    elapsed_ms = round((time.perf_counter() - started) * 1000)

    outcome = LinkOutcome(page=link.page, url=link.url, status=status, responseTime=elapsed_ms)
    return classify_status(status), outcome


async def validate_page_links(
    page: Any,
    selector: str,
    aggregator: ReportAggregator,
    client: httpx.AsyncClient,
    timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
    max_concurrency: int = DEFAULT_MAX_CONCURRENT_REQUESTS,
) -> Report:
    """
    Validate every link matched by `selector` on `page` and finalize the report.

    Args:
        page: Loaded page exposing `url` and `eval_on_selector_all`
        selector: CSS selector for candidate link elements
        aggregator: Open aggregator for this run
        client: Shared async HTTP client
        timeout: Per-request deadline, in seconds
        max_concurrency: Requests allowed in flight at once

    Returns:
        The finalized report
    """
    page_url = page.url
    candidates = await collect_candidates(page, selector)
    logger.info(f"Found {len(candidates)} candidate links on {page_url}")

    # The deadline starts once a slot is held, not while queued
    slots = asyncio.Semaphore(max_concurrency)

    async def check_and_record(link: EligibleLink) -> None:
        async with slots:
            classification, outcome = await check_link(client, link, timeout)
        aggregator.record_outcome(classification, outcome)
        if classification.is_broken:
            logger.info(f"Broken link ({outcome.status}): {outcome.url}")

    checks = []
    for candidate in candidates:
        decision = classify_link(candidate, page_url)
        if isinstance(decision, SkippedLink):
            aggregator.record_skip()
            logger.debug(
                f"Skipped ({decision.reason.value}): {decision.href or '(empty)'} -> \"{decision.text}\""
            )
            continue
        aggregator.record_eligible()
        checks.append(check_and_record(decision))

    await asyncio.gather(*checks)
    return aggregator.finalize()


def log_report_summary(report: Report) -> None:
    logger.info("-" * 31)
    logger.info("Link Validation Summary")
    logger.info(f"Platform: {report.platform}")
    logger.info(f"Locale: {report.locale}")
    logger.info(f"Environment: {report.environment}")
    logger.info(f"Total Links: {report.totalLinks}")
    logger.info(f"Successfully validated: {report.successCount}")
    logger.info(f"Broken Links: {len(report.brokenLinks)}")
    logger.info(f"Skipped: {report.skipped}")
    logger.info("-" * 31)
