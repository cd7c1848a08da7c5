"""
Link Audit jobs.

- link_validation: scan one page, validate its links and save the locale report
"""

from link_audit.jobs.link_validation import (
    LinkValidationError,
    main,
    run_link_validation,
    scan_page,
)

__all__ = [
    'LinkValidationError',
    'main',
    'run_link_validation',
    'scan_page',
]
