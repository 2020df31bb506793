"""
Exceptions for extractor modules.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ExtractorError(Exception):
    """Base exception for extractor errors."""
    pass


class IngestionFailedError(ExtractorError):
    """Raised when ingestion phase fails."""
    pass


class ConfigurationError(ExtractorError):
    """Raised when extractor configuration is invalid."""
    pass


class ReportReadError(ExtractorError):
    """Raised when an XRY report stream cannot be read.

    Aborts processing of the current report; never retried.
    """

    def __init__(self, message: str, report_path: Optional[Path] = None):
        self.report_path = report_path
        if report_path is not None:
            message = f"{message} [{report_path}]"
        super().__init__(message)


class NoMoreEntitiesError(ExtractorError):
    """Raised when next()/peek() is called on an exhausted entity reader."""
    pass


class UnsupportedReportError(ExtractorError):
    """Raised when no parser exists for an XRY report type."""

    def __init__(self, report_type: str):
        self.report_type = report_type
        super().__init__(f"XRY report type '{report_type}' is not supported")
