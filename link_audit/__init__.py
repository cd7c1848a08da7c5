"""
Link Audit Package.

Browser-driven link validation with per-locale JSON reports, a small FastAPI
reporting service, and optional AI-generated insights.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration and dependencies
    - models: Pydantic schemas and enums
    - services: Classification, aggregation, storage and insight services
    - jobs: The link validation run and its command line entry point
    - dashboard: Static dashboard assets served by the API
"""

__version__ = "1.0.0"
