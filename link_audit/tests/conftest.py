"""
Pytest Configuration and Shared Fixtures for Link Audit Tests.

This module provides fixtures for all tests, supporting:
- Async test execution with pytest-asyncio
- Report factories matching the on-disk report format
- A temporary ReportStore per test
- A fake page standing in for a Playwright Page
- A fake OpenAI client exposing chat.completions.create
- A FastAPI TestClient wired to the temporary store

Dependencies:
- pytest
- pytest-asyncio
- httpx (MockTransport, TestClient transport)
"""

from types import SimpleNamespace
from typing import Any, Callable, Dict, Iterator, List, Optional

import pytest
from fastapi.testclient import TestClient

from link_audit.models.schemas import LinkOutcome, Report
from link_audit.services.insight_generator import InsightGenerator
from link_audit.services.report_store import ReportStore


# ============================================================
# PYTEST HOOKS
# ============================================================

def pytest_configure(config) -> None:
    """
    Register custom markers.

    - integration: tests that need a real browser or network access
    """
    config.addinivalue_line(
        'markers',
        'integration: marks tests requiring a browser or network access'
    )


# ============================================================
# REPORT FIXTURES
# ============================================================

def make_report(
    locale: str = "en-IN",
    total_links: int = 10,
    success_count: int = 9,
    broken_statuses: Optional[List[int]] = None,
    skipped: int = 0,
    environment: str = "Production",
    pages_scanned: int = 1,
) -> Report:
    """
    Build a finalized report whose counters are consistent with its broken list.

    When broken_statuses is omitted, one 404 is generated per missing success.
    """
    if broken_statuses is None:
        broken_statuses = [404] * (total_links - success_count)
    broken = [
        LinkOutcome(
            page="https://example.com/",
            url=f"https://example.com/broken/{index}",
            status=status,
            responseTime=100 + index,
        )
        for index, status in enumerate(broken_statuses)
    ]
    return Report(
        platform="Web",
        locale=locale,
        environment=environment,
        pagesScanned=pages_scanned,
        totalLinks=total_links,
        successCount=success_count,
        brokenLinks=broken,
        skipped=skipped,
        timestamp="2026-01-15T09:30:00.000Z",
    )


@pytest.fixture
def report_factory() -> Callable[..., Report]:
    return make_report


@pytest.fixture
def sample_report() -> Report:
    return make_report()


@pytest.fixture
def report_store(tmp_path) -> ReportStore:
    return ReportStore(tmp_path / "reports")


# ============================================================
# BROWSER FIXTURES
# ============================================================

class FakePage:
    """
    Minimal stand-in for a Playwright Page.

    Returns pre-baked candidate rows from eval_on_selector_all and records the
    selectors it was asked for.
    """

    def __init__(self, url: str, rows: List[Dict[str, Any]]):
        self.url = url
        self.rows = rows
        self.selectors: List[str] = []

    async def eval_on_selector_all(self, selector: str, expression: str) -> List[Dict[str, Any]]:
        self.selectors.append(selector)
        return self.rows


def anchor_row(href: Optional[str], text: str = "link") -> Dict[str, Any]:
    return {"hasAnchor": True, "href": href or "", "text": text}


def orphan_row(text: str = "orphan") -> Dict[str, Any]:
    return {"hasAnchor": False, "href": "", "text": text}


@pytest.fixture
def fake_page_factory() -> Callable[..., FakePage]:
    def _factory(rows: List[Dict[str, Any]], url: str = "https://example.com/") -> FakePage:
        return FakePage(url, rows)
    return _factory


# ============================================================
# OPENAI FIXTURES
# ============================================================

class FakeCompletions:
    """Records calls and returns a canned reply, or raises a canned error."""

    def __init__(self, reply: Optional[str] = None, error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAIClient:
    def __init__(self, reply: Optional[str] = None, error: Optional[Exception] = None):
        self.completions = FakeCompletions(reply=reply, error=error)
        self.chat = SimpleNamespace(completions=self.completions)


@pytest.fixture
def fake_openai_factory() -> Callable[..., FakeOpenAIClient]:
    return FakeOpenAIClient


# ============================================================
# API FIXTURES
# ============================================================

@pytest.fixture
def api_client(report_store) -> Iterator[TestClient]:
    """
    TestClient against the application with the store pointed at tmp_path
    and insights forced onto the rule-based path.
    """
    from link_audit.core.dependencies import get_insight_generator, get_report_store
    from link_audit.main import app

    app.dependency_overrides[get_report_store] = lambda: report_store
    app.dependency_overrides[get_insight_generator] = lambda: InsightGenerator(api_key=None)
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
    app.dependency_overrides.clear()
