"""
Folder-level processing of XRY exports.

An XRY export folder holds one text report per artifact category
(``Calls.txt``, ``Messages-SMS.txt``, ...). Each report is opened, routed to
a fresh parser by its report type and parsed into the sink. Cancellation is
honoured between reports only. A report that cannot be read is recorded as
failed and the remaining reports are still parsed.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from core.config import XryConfig
from core.enums import ExtractionStatus
from core.logging import get_logger
from sdk.base import ArtifactSink
from sdk.records import RecordCollector

from ..._shared.extraction_warnings import ExtractionWarningCollector
from ...callbacks import ExtractorCallbacks
from ...exceptions import ReportReadError, UnsupportedReportError
from .diagnostics import XryDiagnostics
from .factory import get_parser
from .reader import XryFileReader, report_type_from_filename

__all__ = ["XryReportProcessor", "XryProcessingResult", "XryReportResult"]

LOGGER = get_logger("extractors.mobile.xry.processor")


@dataclass
class XryReportResult:
    """Outcome of one report file."""

    path: Path
    report_type: str
    status: ExtractionStatus
    artifact_type: Optional[str] = None
    artifacts: int = 0
    diagnostics: Dict[str, int] = field(default_factory=dict)
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "report_type": self.report_type,
            "status": str(self.status),
            "artifact_type": self.artifact_type,
            "artifacts": self.artifacts,
            "diagnostics": dict(self.diagnostics),
            "error": self.error,
        }


@dataclass
class XryProcessingResult:
    """Outcome of a folder run."""

    reports: List[XryReportResult] = field(default_factory=list)
    cancelled: bool = False

    @property
    def counts(self) -> Dict[str, int]:
        """Artifacts emitted per artifact type."""
        counts: Dict[str, int] = {}
        for report in self.reports:
            if report.artifact_type:
                counts[report.artifact_type] = counts.get(report.artifact_type, 0) + report.artifacts
        return counts

    @property
    def total_artifacts(self) -> int:
        return sum(report.artifacts for report in self.reports)

    @property
    def skipped(self) -> List[XryReportResult]:
        return [r for r in self.reports if r.status is ExtractionStatus.SKIPPED]

    @property
    def failed(self) -> List[XryReportResult]:
        return [r for r in self.reports if r.status is ExtractionStatus.ERROR]

    def to_dict(self) -> dict:
        return {
            "cancelled": self.cancelled,
            "counts": self.counts,
            "total_artifacts": self.total_artifacts,
            "reports": [report.to_dict() for report in self.reports],
        }


class XryReportProcessor:
    """
    Parses every supported report in an XRY export folder.

    Example:
        >>> sink = RecordCollector()
        >>> processor = XryReportProcessor(Path("export"), sink, XryConfig(), LoggingCallbacks())
        >>> result = processor.process()
        >>> result.counts
        {'call_log': 12, 'message': 40}
    """

    def __init__(
        self,
        folder: Path,
        sink: ArtifactSink,
        config: Optional[XryConfig] = None,
        callbacks: Optional[ExtractorCallbacks] = None,
        collector: Optional[ExtractionWarningCollector] = None,
    ):
        self.folder = Path(folder)
        self.sink = sink
        self.config = config or XryConfig()
        self.callbacks = callbacks
        self.collector = collector

    def discover_reports(self) -> List[Path]:
        """Report files directly inside the folder, sorted by name."""
        if not self.folder.is_dir():
            return []
        extensions = {ext.lower() for ext in self.config.report_extensions}
        return sorted(
            path for path in self.folder.iterdir()
            if path.is_file() and path.suffix.lower() in extensions
        )

    def process(self) -> XryProcessingResult:
        """
        Parse all discovered reports.

        Raises:
            Exception: Anything the sink raises
        """
        result = XryProcessingResult()
        reports = self.discover_reports()
        if not reports:
            LOGGER.warning("No XRY reports found in %s", self.folder)
            return result

        total = len(reports)
        for index, report_path in enumerate(reports):
            if self.callbacks is not None and self.callbacks.is_cancelled():
                LOGGER.info("XRY processing cancelled after %d of %d reports", index, total)
                result.cancelled = True
                break
            if self.callbacks is not None:
                self.callbacks.on_progress(index, total, f"Parsing {report_path.name}")
            result.reports.append(self.process_report(report_path))

        if self.callbacks is not None and not result.cancelled:
            self.callbacks.on_progress(total, total, "XRY reports parsed")
        return result

    def process_report(self, report_path: Path) -> XryReportResult:
        """
        Parse one report file with a fresh parser and diagnostics.

        An unreadable report yields an ERROR result; records it emitted
        before the failure stay in the sink.
        """
        try:
            return self._parse_report(report_path)
        except ReportReadError as e:
            LOGGER.error("Aborted XRY report %s: %s", report_path.name, e)
            if self.collector is not None:
                self.collector.add_read_error(str(report_path), str(e))
            if self.callbacks is not None:
                self.callbacks.on_error(f"Cannot read XRY report {report_path.name}", str(e))
            return XryReportResult(
                path=report_path,
                report_type=report_type_from_filename(report_path),
                status=ExtractionStatus.ERROR,
                error=str(e),
            )

    def _parse_report(self, report_path: Path) -> XryReportResult:
        with XryFileReader(report_path, self.config.default_encoding) as reader:
            try:
                parser = get_parser(reader.report_type)
            except UnsupportedReportError:
                LOGGER.info("Skipping XRY report %s: type '%s' is not supported",
                            report_path.name, reader.report_type)
                if self.collector is not None:
                    self.collector.add_unsupported_report(str(report_path), reader.report_type)
                return XryReportResult(
                    path=report_path,
                    report_type=reader.report_type,
                    status=ExtractionStatus.SKIPPED,
                )

            if self.callbacks is not None:
                self.callbacks.on_step(f"Parsing {reader.report_type} report {report_path.name}")

            diagnostics = XryDiagnostics(
                parser.parser_name,
                report_path,
                self.collector,
                artifact_type=parser.artifact_type,
                max_logged=self.config.max_logged_info,
            )
            if isinstance(self.sink, RecordCollector):
                self.sink.source_path = str(report_path)

            emitted = parser.parse(reader, self.sink, diagnostics)

        LOGGER.info("Parsed %s: %d %s artifact(s), %d diagnostic(s)",
                    report_path.name, emitted, parser.artifact_type, diagnostics.total)
        return XryReportResult(
            path=report_path,
            report_type=reader.report_type,
            status=ExtractionStatus.PARTIAL if diagnostics.has_findings else ExtractionStatus.OK,
            artifact_type=parser.artifact_type,
            artifacts=emitted,
            diagnostics=diagnostics.counts,
        )
