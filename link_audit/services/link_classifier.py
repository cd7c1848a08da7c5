"""
Link Classifier Service

Pure decisions over a single candidate link:
- classify_link: is the element validation-eligible (anchor ancestor, absolute
  HTTP(S) href) or skipped, and why
- classify_status: which outcome class an HTTP status falls into

Neither function performs I/O. The caller fetches each eligible link without
raising on non-2xx statuses and with a fixed per-request timeout.
"""

import re
from dataclasses import dataclass
from typing import FrozenSet, Optional, Union

from link_audit.models.enums import LinkClassification, SkipReason


# =============================================================================
# Constants
# =============================================================================

SUCCESS_STATUSES: FrozenSet[int] = frozenset({200, 201, 204, 301, 302, 307, 308})

# Status recorded when the request itself failed (timeout, DNS, refused, ...)
REQUEST_FAILED_STATUS = 0

_HTTP_URL_PATTERN = re.compile(r"^https?://", re.IGNORECASE)


# =============================================================================
# Candidate and Result Types
# =============================================================================

@dataclass(frozen=True)
class LinkCandidate:
    """
    A link element as read from the page.

    Attributes:
        has_anchor: Whether the element has an enclosing <a> (itself included).
        href: The anchor's resolved href, falling back to the raw attribute.
        text: Visible text of the element, used only for logging.
    """
    has_anchor: bool
    href: Optional[str] = None
    text: str = ""


@dataclass(frozen=True)
class EligibleLink:
    url: str
    page: str


@dataclass(frozen=True)
class SkippedLink:
    reason: SkipReason
    href: Optional[str] = None
    text: str = ""


LinkDecision = Union[EligibleLink, SkippedLink]


# =============================================================================
# Classification
# =============================================================================

def classify_link(candidate: LinkCandidate, page_url: str) -> LinkDecision:
    """
    Decide whether a candidate link is eligible for HTTP validation.

    A link is skipped when it has no enclosing anchor, when its href is empty,
    or when the href is not an absolute http:// or https:// URL (scheme matched
    case-insensitively).

    Args:
        candidate: Link element data read from the page
        page_url: URL of the page currently being scanned

    Returns:
        EligibleLink carrying the href and page URL, or SkippedLink with a reason
    """
    if not candidate.has_anchor:
        return SkippedLink(reason=SkipReason.NO_ANCHOR, text=candidate.text)

    href = (candidate.href or "").strip()
    if not href:
        return SkippedLink(reason=SkipReason.EMPTY_HREF, text=candidate.text)

    if not _HTTP_URL_PATTERN.match(href):
        return SkippedLink(reason=SkipReason.NON_HTTP_HREF, href=href, text=candidate.text)

    return EligibleLink(url=href, page=page_url)


def classify_status(status: int) -> LinkClassification:
    """
    Map an HTTP status to its outcome class.

    404 is checked before the success set so it can never be reported as a
    success.

    >>> classify_status(404)
    <LinkClassification.BROKEN_404: 'broken_404'>
    >>> classify_status(503)
    <LinkClassification.BROKEN_5XX: 'broken_5xx'>
    """
    if status == 404:
        return LinkClassification.BROKEN_404
    if status in SUCCESS_STATUSES:
        return LinkClassification.SUCCESS
    if 500 <= status < 600:
        return LinkClassification.BROKEN_5XX
    return LinkClassification.BROKEN_OTHER
