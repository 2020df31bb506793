"""
Extraction warnings utilities for extractors.

This module provides utilities for collecting and reporting malformed lines,
unrecognized keys, segmentation anomalies and other findings encountered
while parsing. These warnings help investigators understand what data was
encountered but not fully parsed, enabling continuous improvement of parsers.

Usage:
    from extractors._shared.extraction_warnings import ExtractionWarningCollector

    collector = ExtractionWarningCollector(
        extractor_name="mobile_xry",
        run_id=run_id,
    )
    collector.add_warning(
        WARNING_TYPE_UNRECOGNIZED_KEY,
        "ringtone",
        source_file="Calls.txt",
    )
    collector.write_json(output_dir / "warnings.json")
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


# =============================================================================
# Warning Type Constants
# =============================================================================

WARNING_TYPE_MALFORMED_LINE = "malformed_line"
WARNING_TYPE_UNRECOGNIZED_KEY = "unrecognized_key"
WARNING_TYPE_EMPTY_VALUE = "empty_value"
WARNING_TYPE_UNRECOGNIZED_VALUE = "unrecognized_value"
WARNING_TYPE_UNHANDLED_KEY = "unhandled_key"
WARNING_TYPE_DATETIME_PARSE_ERROR = "datetime_parse_error"
WARNING_TYPE_INVALID_META_VALUE = "invalid_meta_value"
WARNING_TYPE_REFERENCE_REUSED = "reference_reused"
WARNING_TYPE_SEGMENT_NUMBER_MISSING = "segment_number_missing"
WARNING_TYPE_SEGMENT_OUT_OF_ORDER = "segment_out_of_order"
WARNING_TYPE_UNSUPPORTED_REPORT = "unsupported_report"
WARNING_TYPE_REPORT_READ_ERROR = "report_read_error"

# Category Constants
CATEGORY_XRY = "xry"

# Severity Constants
SEVERITY_INFO = "info"
SEVERITY_WARNING = "warning"
SEVERITY_ERROR = "error"


# =============================================================================
# Warning Data Class
# =============================================================================

@dataclass
class ExtractionWarning:
    """A single extraction warning record."""

    warning_type: str
    item_name: str
    severity: str = SEVERITY_WARNING
    category: Optional[str] = None
    artifact_type: Optional[str] = None
    source_file: Optional[str] = None
    item_value: Optional[str] = None
    context_json: Optional[Dict[str, Any]] = None

    def to_dict(self, run_id: str, extractor_name: str) -> Dict[str, Any]:
        """Convert to dict for summary output."""
        return {
            "run_id": run_id,
            "extractor_name": extractor_name,
            "warning_type": self.warning_type,
            "severity": self.severity,
            "category": self.category,
            "artifact_type": self.artifact_type,
            "source_file": self.source_file,
            "item_name": self.item_name,
            "item_value": self.item_value,
            "context_json": self.context_json,
        }


# =============================================================================
# Warning Collector Class
# =============================================================================

@dataclass
class ExtractionWarningCollector:
    """
    Collects extraction warnings for batch output.

    Accumulate warnings while parsing, then write them all at the end.
    The collector outlives individual reports so one run summary covers a
    whole report folder.

    Example:
        collector = ExtractionWarningCollector(
            extractor_name="mobile_xry",
            run_id=run_id,
        )

        # During parsing...
        collector.add_warning(WARNING_TYPE_EMPTY_VALUE, "tel", source_file="Calls.txt")

        # At the end
        collector.write_json(output_dir / "ingestion_xry.json")
    """

    extractor_name: str
    run_id: str
    _warnings: List[ExtractionWarning] = field(default_factory=list)

    def add_warning(
        self,
        warning_type: str,
        item_name: str,
        *,
        severity: str = SEVERITY_WARNING,
        category: Optional[str] = None,
        artifact_type: Optional[str] = None,
        source_file: Optional[str] = None,
        item_value: Optional[str] = None,
        context_json: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Add a warning to the collection.

        Args:
            warning_type: Type of warning (use WARNING_TYPE_* constants)
            item_name: Name of the unknown/problematic item
            severity: info/warning/error (default: warning)
            category: Category (use CATEGORY_* constants)
            artifact_type: Artifact type being extracted
            source_file: Source report path
            item_value: Value or additional details
            context_json: Additional context as dict
        """
        self._warnings.append(ExtractionWarning(
            warning_type=warning_type,
            item_name=item_name,
            severity=severity,
            category=category,
            artifact_type=artifact_type,
            source_file=source_file,
            item_value=item_value,
            context_json=context_json,
        ))

    def add_read_error(self, source_file: str, details: str) -> None:
        """Convenience method for report files that could not be read."""
        self.add_warning(
            warning_type=WARNING_TYPE_REPORT_READ_ERROR,
            item_name=Path(source_file).name,
            severity=SEVERITY_ERROR,
            category=CATEGORY_XRY,
            source_file=source_file,
            item_value=details,
        )

    def add_unsupported_report(self, source_file: str, report_type: str) -> None:
        """Convenience method for report files no parser handles."""
        self.add_warning(
            warning_type=WARNING_TYPE_UNSUPPORTED_REPORT,
            item_name=report_type,
            severity=SEVERITY_INFO,
            category=CATEGORY_XRY,
            source_file=source_file,
        )

    @property
    def warnings(self) -> List[ExtractionWarning]:
        """Collected warnings, oldest first."""
        return list(self._warnings)

    @property
    def warning_count(self) -> int:
        """Number of warnings collected."""
        return len(self._warnings)

    @property
    def has_errors(self) -> bool:
        """True if any error-severity warnings collected."""
        return any(w.severity == SEVERITY_ERROR for w in self._warnings)

    @property
    def has_warnings(self) -> bool:
        """True if any warnings collected (any severity)."""
        return len(self._warnings) > 0

    def get_counts_by_severity(self) -> Dict[str, int]:
        """Get warning counts by severity level."""
        counts = {SEVERITY_INFO: 0, SEVERITY_WARNING: 0, SEVERITY_ERROR: 0}
        for w in self._warnings:
            counts[w.severity] = counts.get(w.severity, 0) + 1
        return counts

    def get_counts_by_type(self) -> Dict[str, int]:
        """Get warning counts keyed by warning type."""
        counts: Dict[str, int] = {}
        for w in self._warnings:
            counts[w.warning_type] = counts.get(w.warning_type, 0) + 1
        return counts

    def to_dicts(self) -> List[Dict[str, Any]]:
        """Serialize every collected warning."""
        return [w.to_dict(self.run_id, self.extractor_name) for w in self._warnings]

    def write_json(self, path: Path) -> int:
        """
        Write all collected warnings to a JSON file.

        Args:
            path: Destination file (parent directories are created)

        Returns:
            Number of warnings written
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "run_id": self.run_id,
            "extractor_name": self.extractor_name,
            "counts": self.get_counts_by_severity(),
            "warnings": self.to_dicts(),
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        return len(self._warnings)

    def clear(self) -> None:
        """Clear all collected warnings without saving."""
        self._warnings.clear()
