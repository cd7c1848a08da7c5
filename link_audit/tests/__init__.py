'''
Link Audit Test Suite

Test Modules:
-------------
- test_link_classifier.py: eligibility filtering and status classification
- test_report_aggregator.py: counters, skip accounting, finalize barrier
- test_report_store.py: round-trip, overwrite, missing/corrupt files, listing
- test_insight_generator.py: severity thresholds, prompt, AI parsing, fallback
- test_link_validator.py: per-link requests against httpx.MockTransport
- test_link_validation_job.py: run retries, persistence, command line
- test_reports_api.py: HTTP contract of the reporting service

Running Tests:
--------------
    pip install -e ".[test]"
    pytest
'''

__all__ = []
