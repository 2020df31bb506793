"""
Shared utilities for extractors.

- extraction_warnings: Collect parse findings for the run summary

Design Principle:
    Extractors are self-contained modules, independent from src/core/.
    These utilities are specifically for extractors to maintain modularity.
"""

from .extraction_warnings import (
    ExtractionWarning,
    ExtractionWarningCollector,
    CATEGORY_XRY,
    SEVERITY_INFO,
    SEVERITY_WARNING,
    SEVERITY_ERROR,
)

__all__ = [
    "ExtractionWarning",
    "ExtractionWarningCollector",
    "CATEGORY_XRY",
    "SEVERITY_INFO",
    "SEVERITY_WARNING",
    "SEVERITY_ERROR",
]
