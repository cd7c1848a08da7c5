"""
FastAPI dependency injection module for the Link Audit service.

Dependencies Provided:
- get_settings_dependency: Returns the cached Settings singleton
- get_report_store: ReportStore rooted at the configured reports directory
- get_insight_generator: Cached InsightGenerator configured from Settings
- SettingsDep / ReportStoreDep / InsightGeneratorDep: Annotated aliases

Endpoints take these as parameters so tests can swap them through
app.dependency_overrides:

    app.dependency_overrides[get_report_store] = lambda: ReportStore(tmp_path)
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from link_audit.core.config import Settings, get_settings
from link_audit.services.insight_generator import InsightGenerator
from link_audit.services.report_store import ReportStore


# =============================================================================
# Settings Dependency
# =============================================================================

def get_settings_dependency() -> Settings:
    """
    Return the Settings singleton instance.

    Thin wrapper around get_settings() so tests can override it.
    """
    return get_settings()


SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]


# =============================================================================
# Service Dependencies
# =============================================================================

def get_report_store(settings: SettingsDep) -> ReportStore:
    return ReportStore(settings.reports_dir)


@lru_cache()
def get_insight_generator() -> InsightGenerator:
    """
    Return the process-wide InsightGenerator.

    Cached like get_settings() so every request shares one OpenAI client and
    its connection pool.
    """
    return InsightGenerator.from_settings(get_settings())


ReportStoreDep = Annotated[ReportStore, Depends(get_report_store)]
InsightGeneratorDep = Annotated[InsightGenerator, Depends(get_insight_generator)]
