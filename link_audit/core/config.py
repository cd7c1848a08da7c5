"""
Settings and environment management module for the Link Audit service.

This module provides centralized configuration management using pydantic-settings,
which automatically loads settings from environment variables and .env files.

Key Features:
- Environment variable validation and type coercion
- Sensible defaults for local development
- Singleton pattern via @lru_cache for efficient access
- Optional OpenAI credential (absence disables AI insights)

Environment Variables:
- PORT / HOST: Report API listen address (default 0.0.0.0:3000)
- REPORTS_DIR: Directory holding one <locale>.json report per locale
- OPENAI_API_KEY: Credential for AI insights (optional)
- BASE_URL, LOCALE, ENVIRONMENT, PLATFORM: Identifiers consumed by a validation run
- LINK_SELECTOR, CONSENT_SELECTOR: What the run scans and what it clicks first

Usage:
    from link_audit.core.config import get_settings

    settings = get_settings()
    reports_dir = settings.reports_dir
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        port: Report API listen port.
        host: Report API listen host.
        reports_dir: Directory where per-locale report files live.
        cors_origins: Origins allowed to call the Report API.
        openai_api_key: OpenAI credential. None disables AI insights.
        openai_model: Chat model used for insights.
        openai_temperature: Sampling temperature for insights.
        openai_max_tokens: Completion token cap for insights.
        base_url: Page scanned by a validation run.
        locale: Locale identifier recorded on the report (also its file name).
        environment: Environment label recorded on the report.
        platform: Platform label recorded on the report.
        link_selector: CSS selector for candidate link elements.
        consent_selector: Optional cookie banner button clicked before scanning.
        request_timeout_seconds: Per-link request timeout.
        max_concurrent_requests: Link checks allowed in flight at once.
        page_load_timeout_seconds: Navigation timeout for the scanned page.
        settle_delay_seconds: Wait after navigation before scanning.
        viewport_width: Browser viewport width.
        viewport_height: Browser viewport height.
        run_retries: Extra attempts for a run whose navigation fails.
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=False,
    )

    # =========================================================================
    # Report API
    # =========================================================================

    port: int = 3000
    host: str = '0.0.0.0'
    reports_dir: Path = Path('reports')
    cors_origins: List[str] = ['*']

    # =========================================================================
    # OpenAI Integration (Optional - for AI insights)
    # =========================================================================

    # Rule-based insights are served whenever this is unset
    openai_api_key: Optional[str] = None
    openai_model: str = 'gpt-4'
    openai_temperature: float = 0.7
    openai_max_tokens: int = 500

    # =========================================================================
    # Validation Run
    # =========================================================================

    base_url: str = 'https://automated-vehicle-inspection.michelin.com/'
    locale: str = 'en-US'
    environment: str = 'Development'
    platform: str = 'Web'

    link_selector: str = 'header a span'
    consent_selector: Optional[str] = None

    request_timeout_seconds: float = 20.0
    max_concurrent_requests: int = 20
    page_load_timeout_seconds: float = 60.0
    settle_delay_seconds: float = 2.0

    viewport_width: int = 1280
    viewport_height: int = 800

    run_retries: int = 1


@lru_cache()
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Returns:
        Settings: The cached settings instance.

    Note:
        To refresh settings in tests, clear the cache:
        >>> get_settings.cache_clear()
    """
    return Settings()
