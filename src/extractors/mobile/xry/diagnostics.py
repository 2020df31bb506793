"""
Diagnostics channel for XRY parsing.

Every discarded line, unrecognized key, ambiguous value and segmentation
anomaly is reported here. Findings are logged with the report path and kept
in an ExtractionWarningCollector; none of them raise.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from core.enums import Severity
from core.logging import get_logger
from ..._shared.extraction_warnings import (
    CATEGORY_XRY,
    SEVERITY_ERROR,
    SEVERITY_INFO,
    SEVERITY_WARNING,
    ExtractionWarningCollector,
)

__all__ = ["XryDiagnostics"]

LOGGER = get_logger("extractors.mobile.xry")

_LOG_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.SEVERE: logging.ERROR,
}

_COLLECTOR_SEVERITIES = {
    Severity.INFO: SEVERITY_INFO,
    Severity.WARNING: SEVERITY_WARNING,
    Severity.SEVERE: SEVERITY_ERROR,
}


class XryDiagnostics:
    """
    Reports parse findings for one report.

    Log output of INFO findings is throttled after max_logged of them;
    WARNING and SEVERE findings are always logged. The collector records
    everything.
    """

    def __init__(
        self,
        parser_name: str,
        report_path: Optional[Path] = None,
        collector: Optional[ExtractionWarningCollector] = None,
        *,
        artifact_type: Optional[str] = None,
        max_logged: int = 50,
    ):
        self.parser_name = parser_name
        self.report_path = report_path
        self.collector = collector
        self.artifact_type = artifact_type
        self.max_logged = max_logged
        self._counts: Dict[Severity, int] = {severity: 0 for severity in Severity}
        self._logged = 0
        self._suppressed = False

    def info(self, warning_type: str, message: str, **context: Any) -> None:
        self.report(Severity.INFO, warning_type, message, **context)

    def warning(self, warning_type: str, message: str, **context: Any) -> None:
        self.report(Severity.WARNING, warning_type, message, **context)

    def severe(self, warning_type: str, message: str, **context: Any) -> None:
        self.report(Severity.SEVERE, warning_type, message, **context)

    def report(
        self,
        severity: Severity,
        warning_type: str,
        message: str,
        *,
        item_name: str = "",
        item_value: Optional[str] = None,
        **context: Any,
    ) -> None:
        """
        Record one finding.

        Args:
            severity: INFO, WARNING or SEVERE
            warning_type: WARNING_TYPE_* constant
            message: Human readable description
            item_name: Key, line or reference the finding is about
            item_value: Raw value or pair text
            **context: Extra values kept with the collected warning
        """
        self._counts[severity] += 1
        self._log(severity, message)

        if self.collector is not None:
            self.collector.add_warning(
                warning_type,
                item_name,
                severity=_COLLECTOR_SEVERITIES[severity],
                category=CATEGORY_XRY,
                artifact_type=self.artifact_type,
                source_file=str(self.report_path) if self.report_path else None,
                item_value=item_value,
                context_json=context or None,
            )

    def _log(self, severity: Severity, message: str) -> None:
        location = f" ({self.report_path})" if self.report_path else ""
        if severity is Severity.INFO:
            self._logged += 1
            if self._logged > self.max_logged:
                if not self._suppressed:
                    self._suppressed = True
                    LOGGER.info("[%s] Suppressing further informational parse diagnostics%s",
                                self.parser_name, location)
                return
        LOGGER.log(_LOG_LEVELS[severity], "[%s] %s%s", self.parser_name, message, location)

    @property
    def counts(self) -> Dict[str, int]:
        return {str(severity): count for severity, count in self._counts.items()}

    @property
    def total(self) -> int:
        return sum(self._counts.values())

    @property
    def has_findings(self) -> bool:
        """True if anything other than INFO was reported."""
        return bool(self._counts[Severity.WARNING] or self._counts[Severity.SEVERE])
