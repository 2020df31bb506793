"""
Modular extractor system for forensic analysis.

Each extractor is a self-contained module with:
- Metadata (name, category, capabilities)
- Ingestion logic (parse input into an artifact sink)
- Run summaries (counts and parse warnings)

Folder Structure:
- mobile/          Mobile acquisition reports (xry/)
- _shared/         Shared utilities (extraction_warnings)
"""

from .base import BaseExtractor, ExtractorMetadata
from .callbacks import ExtractorCallbacks, LoggingCallbacks
from .exceptions import (
    ExtractorError,
    IngestionFailedError,
    ConfigurationError,
    ReportReadError,
    NoMoreEntitiesError,
    UnsupportedReportError,
)

from . import mobile

__all__ = [
    'BaseExtractor',
    'ExtractorMetadata',
    'ExtractorCallbacks',
    'LoggingCallbacks',
    'ExtractorError',
    'IngestionFailedError',
    'ConfigurationError',
    'ReportReadError',
    'NoMoreEntitiesError',
    'UnsupportedReportError',
    'mobile',
]
