"""
Report Store Service

Persists one JSON report per locale under a reports directory and reads them
back. The file name is the locale verbatim (case preserved) plus ".json"; a
later save for the same locale fully replaces the earlier file.

Writes go to a temporary file in the same directory which is then renamed over
the target, so a reader never observes a partially written report and a failed
write never touches another locale's file.

Errors:
- ReportStoreError (an IOError): the filesystem refused the write
- ReportNotFoundError: no report exists for the locale
- CorruptReportError: the file exists but is not a valid report
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Set, Union

from pydantic import ValidationError

from link_audit.models.schemas import Report

logger = logging.getLogger(__name__)

REPORT_SUFFIX = ".json"


# =============================================================================
# Errors
# =============================================================================

class ReportStoreError(IOError):
    """Base error for report storage failures."""


class ReportNotFoundError(ReportStoreError):
    def __init__(self, locale: str):
        super().__init__(f"No report found for locale: {locale}")
        self.locale = locale


class CorruptReportError(ReportStoreError):
    def __init__(self, locale: str, reason: str):
        super().__init__(f"Report for locale {locale} is corrupt: {reason}")
        self.locale = locale
        self.reason = reason


# =============================================================================
# Store
# =============================================================================

class ReportStore:
    """
    Flat-file report storage keyed by locale.

    Args:
        reports_dir: Directory holding <locale>.json files. Created on first save.
    """

    def __init__(self, reports_dir: Union[str, Path]):
        self.reports_dir = Path(reports_dir)

    def path_for(self, locale: str) -> Path:
        """
        Resolve the file path for a locale.

        Raises:
            ReportNotFoundError: If the locale cannot be used as a file name
        """
        if not _is_valid_locale(locale):
            raise ReportNotFoundError(locale)
        return self.reports_dir / f"{locale}{REPORT_SUFFIX}"

    def save(self, report: Report) -> Path:
        """
        Write a report, replacing any earlier report for the same locale.

        Returns:
            Path of the written file

        Raises:
            ValueError: If the report's locale cannot be used as a file name
            ReportStoreError: If the directory or file cannot be written
        """
        if not _is_valid_locale(report.locale):
            raise ValueError(f"Invalid locale for report file name: {report.locale!r}")

        target = self.reports_dir / f"{report.locale}{REPORT_SUFFIX}"
        payload = json.dumps(report.model_dump(mode="json"), indent=2, ensure_ascii=False)

        try:
            self.reports_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.reports_dir,
                prefix=f".{report.locale}.",
                suffix=".tmp",
            )
        except OSError as e:
            raise ReportStoreError(f"Cannot write report for {report.locale}: {e}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, target)
        except OSError as e:
            _discard(tmp_name)
            raise ReportStoreError(f"Cannot write report for {report.locale}: {e}") from e

        logger.info(f"Report saved: {target}")
        return target

    def load(self, locale: str) -> Report:
        """
        Read and parse the report for a locale.

        Raises:
            ReportNotFoundError: If no report file exists for the locale
            CorruptReportError: If the file is not valid JSON or not a valid report
        """
        path = self.path_for(locale)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            raise ReportNotFoundError(locale) from None
        except OSError as e:
            raise ReportStoreError(f"Cannot read report for {locale}: {e}") from e

        try:
            data = json.loads(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise CorruptReportError(locale, f"invalid UTF-8 at byte {e.start}") from e
        except json.JSONDecodeError as e:
            raise CorruptReportError(locale, f"invalid JSON ({e.msg})") from e

        try:
            return Report.model_validate(data)
        except ValidationError as e:
            raise CorruptReportError(locale, f"{e.error_count()} schema errors") from e

    def exists(self, locale: str) -> bool:
        if not _is_valid_locale(locale):
            return False
        return (self.reports_dir / f"{locale}{REPORT_SUFFIX}").is_file()

    def list_all(self) -> Set[str]:
        """
        Locales with a stored report, derived from file names.

        A missing reports directory yields an empty set.
        """
        if not self.reports_dir.is_dir():
            return set()
        return {
            path.name[: -len(REPORT_SUFFIX)]
            for path in self.reports_dir.iterdir()
            if path.is_file()
            and path.name.endswith(REPORT_SUFFIX)
            and not path.name.startswith(".")
        }

    def list_sorted(self) -> List[str]:
        return sorted(self.list_all())


# =============================================================================
# Helpers
# =============================================================================

def _is_valid_locale(locale: str) -> bool:
    # Dot-prefixed names are reserved for in-flight temporary files
    if not locale or locale.startswith("."):
        return False
    if "/" in locale or "\\" in locale or "\x00" in locale:
        return False
    return True


def _discard(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
