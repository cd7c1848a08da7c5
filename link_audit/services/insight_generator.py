"""
Insight Generator Service

Turns a link validation Report into an Insight: severity, one-line summary and
recommended actions.

Two paths:
- AI path: when an OpenAI credential is configured, the report's key figures
  and its first five broken links are sent to a chat model which is asked for a
  JSON object. The first JSON object in the reply becomes the Insight.
- Rule-based path: success rate mapped to severity by fixed thresholds, three
  generic recommended actions, and a formatted summary sentence.

The rule-based path is used whenever the AI path is not configured, the call
fails, or the reply cannot be parsed. generate() never raises.

Severity thresholds (success rate in percent):
    < 50  -> Critical
    < 80  -> High
    < 95  -> Medium
    else  -> Low
"""

import json
import logging
import re
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from openai import AsyncOpenAI
from pydantic import ValidationError

from link_audit.models.enums import InsightSource, Severity
from link_audit.models.schemas import Insight, Report, utc_timestamp

if TYPE_CHECKING:
    from link_audit.core.config import Settings

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

SEVERITY_THRESHOLDS = (
    (50.0, Severity.CRITICAL),
    (80.0, Severity.HIGH),
    (95.0, Severity.MEDIUM),
)

DEFAULT_RECOMMENDED_ACTIONS: List[str] = [
    "Review broken links and update navigation",
    "Test cross-locale redirects",
    "Monitor server health for 5xx errors",
]

PROMPT_BROKEN_LINK_LIMIT = 5

SYSTEM_PROMPT = (
    "You are an expert QA analyst specializing in link validation and web performance."
)

_JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


# =============================================================================
# Rule-Based Path
# =============================================================================

def severity_for_rate(success_rate: float) -> Severity:
    for upper_bound, severity in SEVERITY_THRESHOLDS:
        if success_rate < upper_bound:
            return severity
    return Severity.LOW


def rule_based_insights(report: Report) -> Insight:
    """
    Deterministic insight computed from the report's counters alone.

    >>> insight = rule_based_insights(Report(locale="xx", totalLinks=0))
    >>> insight.successRate, insight.severity.value
    ('0.00', 'Critical')
    """
    broken_count = len(report.brokenLinks)
    success_rate = report.success_rate

    return Insight(
        enabled=True,
        source=InsightSource.RULES,
        severity=severity_for_rate(success_rate),
        successRate=f"{success_rate:.2f}",
        brokenLinksCount=broken_count,
        recommendedActions=list(DEFAULT_RECOMMENDED_ACTIONS),
        summary=(
            f"{broken_count} broken links detected across {report.pagesScanned} pages "
            f"({success_rate:.2f}% success rate)"
        ),
    )


# =============================================================================
# AI Path Helpers
# =============================================================================

def build_prompt(report: Report) -> str:
    """Natural-language prompt embedding the report's key figures."""
    top_broken = "\n".join(
        f"- {link.url} ({link.status})"
        for link in report.brokenLinks[:PROMPT_BROKEN_LINK_LIMIT]
    )

    return f"""
Analyze this link validation report and provide actionable insights:

Locale: {report.locale}
Environment: {report.environment}
Pages Scanned: {report.pagesScanned}
Total Links: {report.totalLinks}
Successful: {report.successCount}
Broken (404): {report.count_status(404)}
Server Errors (5xx): {report.count_server_errors()}
Skipped: {report.skipped}

Top broken links:
{top_broken}

Provide in JSON format:
{{
  "severity": "Critical|High|Medium|Low",
  "mostAffectedPages": ["page1", "page2"],
  "commonPatterns": ["pattern1", "pattern2"],
  "rootCauseAnalysis": "brief explanation",
  "recommendedActions": ["action1", "action2"],
  "summary": "one-line summary"
}}
"""


def extract_json_object(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Parse the first brace-delimited JSON object found in free text.

    Returns:
        The parsed object, or None if there is no parsable object
    """
    if not text:
        return None
    match = _JSON_OBJECT_PATTERN.search(text)
    if not match:
        return None
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def parse_ai_insights(text: Optional[str]) -> Optional[Insight]:
    """
    Build an AI-sourced Insight from a model reply.

    Returns:
        The Insight, or None if the reply has no usable JSON object
    """
    data = extract_json_object(text)
    if data is None:
        return None

    severity = data.get("severity")
    if isinstance(severity, str):
        data["severity"] = severity.strip().capitalize()

    try:
        return Insight.model_validate({
            **data,
            "enabled": True,
            "source": InsightSource.AI,
            "timestamp": utc_timestamp(),
        })
    except ValidationError as e:
        logger.warning(f"AI insight reply did not match the expected shape: {e.error_count()} errors")
        return None


# =============================================================================
# Generator
# =============================================================================

class InsightGenerator:
    """
    Produces an Insight per report, preferring the AI path when configured.

    Args:
        api_key: OpenAI credential. None disables the AI path.
        model: Chat model name.
        temperature: Sampling temperature.
        max_tokens: Completion token cap.
        client: Pre-built client exposing chat.completions.create (used in tests).
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4",
        temperature: float = 0.7,
        max_tokens: int = 500,
        client: Optional[Any] = None,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        if client is None and api_key:
            client = AsyncOpenAI(api_key=api_key)
        self._client = client

    @classmethod
    def from_settings(cls, settings: "Settings") -> "InsightGenerator":
        return cls(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            temperature=settings.openai_temperature,
            max_tokens=settings.openai_max_tokens,
        )

    @property
    def ai_enabled(self) -> bool:
        return self._client is not None

    async def generate(self, report: Report) -> Insight:
        """
        Produce an Insight for a report.

        Falls back to rule_based_insights() when the AI path is disabled, the
        call fails, or the reply is unparseable.
        """
        if not self.ai_enabled:
            logger.debug("OpenAI not configured, using rule-based insights")
            return rule_based_insights(report)

        try:
            reply = await self._complete(build_prompt(report))
        except Exception:
            logger.exception(f"Error generating AI insights for {report.locale}")
            return rule_based_insights(report)

        insight = parse_ai_insights(reply)
        if insight is None:
            logger.warning(f"Unparseable AI insight reply for {report.locale}, using rule-based insights")
            return rule_based_insights(report)
        return insight

    async def _complete(self, prompt: str) -> Optional[str]:
        response = await self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        return response.choices[0].message.content
