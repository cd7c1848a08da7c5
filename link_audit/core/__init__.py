"""
Core infrastructure package for the Link Audit service.

Provides:
- Configuration management via pydantic-settings
- FastAPI dependency injection utilities

Usage:
    from link_audit.core import get_settings, ReportStoreDep
"""

from link_audit.core.config import Settings, get_settings
from link_audit.core.dependencies import (
    InsightGeneratorDep,
    ReportStoreDep,
    SettingsDep,
    get_insight_generator,
    get_report_store,
    get_settings_dependency,
)

__all__ = [
    'Settings',
    'get_settings',
    'get_settings_dependency',
    'get_report_store',
    'get_insight_generator',
    'SettingsDep',
    'ReportStoreDep',
    'InsightGeneratorDep',
]
