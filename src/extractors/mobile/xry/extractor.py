"""
XRY Mobile Report Extractor

Ingests the text reports of an XRY mobile extraction export folder.

Supported report types:
- Calls -> call logs
- Contacts/Contacts -> contacts
- Messages/SMS -> messages (segmented messages are reassembled)
- Web/Bookmarks -> web bookmarks

Other report types in the folder are skipped and listed in the run summary.
XRY has already acquired the device, so this extractor has no extraction
phase; ingestion parses the export folder straight into an artifact sink.
"""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from core.config import XryConfig
from core.logging import get_logger
from sdk.base import ArtifactSink
from sdk.records import RecordCollector

from ..._shared.extraction_warnings import ExtractionWarningCollector
from ...base import BaseExtractor, ExtractorMetadata
from ...callbacks import ExtractorCallbacks
from ...exceptions import ConfigurationError, IngestionFailedError
from .processor import XryReportProcessor

LOGGER = get_logger("extractors.mobile.xry.extractor")

SUMMARY_FILE_NAME = "ingestion_xry.json"


class MobileXryExtractor(BaseExtractor):
    """Parses XRY export folders into messages, call logs, contacts and bookmarks."""

    @property
    def metadata(self) -> ExtractorMetadata:
        return ExtractorMetadata(
            name="mobile_xry",
            display_name="XRY Mobile Reports",
            description="Messages, calls, contacts and web bookmarks from XRY text exports",
            category="mobile",
            requires_tools=[],
            can_extract=False,
            can_ingest=True,
        )

    def can_run_ingestion(self, input_dir: Path) -> tuple[bool, str]:
        if not input_dir.is_dir():
            return False, f"Input folder not found: {input_dir}"
        processor = XryReportProcessor(input_dir, sink=RecordCollector())
        if not processor.discover_reports():
            return False, "No XRY reports found"
        return True, ""

    def get_output_dir(self, case_root: Path, evidence_label: str, config: Optional[Dict[str, Any]] = None) -> Path:
        return case_root / "evidences" / evidence_label / "xry"

    def run_ingestion(
        self,
        input_dir: Path,
        output_dir: Path,
        sink: ArtifactSink,
        config: Dict[str, Any],
        callbacks: ExtractorCallbacks
    ) -> Dict[str, int]:
        """
        Parse every supported report in input_dir into sink.

        Args:
            input_dir: XRY export folder
            output_dir: Where the run summary is written
            sink: Receives built artifacts
            config: Ingestion configuration; "xry" holds an XryConfig or a
                dict of its fields, "run_id" overrides the generated id
            callbacks: Progress and logging callbacks

        Returns:
            Dictionary with artifact counts by type.

        Raises:
            ConfigurationError: If the "xry" configuration is invalid
            IngestionFailedError: If none of the reports can be read
        """
        xry_config = self._resolve_config(config)
        run_id = config.get("run_id") or self._generate_run_id()
        collector = ExtractionWarningCollector(extractor_name=self.metadata.name, run_id=run_id)
        start_time = datetime.now(timezone.utc)

        callbacks.on_step("Discovering XRY reports")
        processor = XryReportProcessor(input_dir, sink, xry_config, callbacks, collector)

        result = processor.process()
        if result.reports and len(result.failed) == len(result.reports):
            LOGGER.info("XRY ingestion failed for %s (run %s)", input_dir, run_id)
            details = "; ".join(report.error or "" for report in result.failed)
            callbacks.on_error("Ingestion failed: no XRY report could be read", details)
            raise IngestionFailedError(f"No readable XRY report in {input_dir}")

        if result.cancelled:
            status = "cancelled"
        elif result.failed:
            status = "partial"
        else:
            status = "success"
        LOGGER.info("XRY ingestion %s for %s (run %s)", status, input_dir, run_id)

        counts = result.counts
        if result.cancelled:
            callbacks.on_log("XRY ingestion cancelled by user", "warning")
        callbacks.on_log(
            f"Ingested {result.total_artifacts} artifacts from {len(result.reports)} reports "
            f"({collector.warning_count} parse warnings)"
        )

        if xry_config.write_summary:
            summary_path = output_dir / SUMMARY_FILE_NAME
            self._write_summary(summary_path, run_id, start_time, status, result.to_dict(), collector)
            LOGGER.info("Wrote XRY ingestion summary to %s", summary_path)

        return counts

    def _resolve_config(self, config: Dict[str, Any]) -> XryConfig:
        value = config.get("xry")
        if value is None:
            return XryConfig()
        if isinstance(value, XryConfig):
            return value
        if isinstance(value, dict):
            try:
                return XryConfig(**value)
            except TypeError as e:
                raise ConfigurationError(f"Invalid xry configuration: {e}") from e
        raise ConfigurationError(f"Invalid xry configuration type: {type(value).__name__}")

    def _write_summary(
        self,
        path: Path,
        run_id: str,
        start_time: datetime,
        status: str,
        result: Dict[str, Any],
        collector: ExtractionWarningCollector,
    ) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "run_id": run_id,
            "extractor": self.metadata.name,
            "version": self.metadata.version,
            "started_utc": start_time.replace(microsecond=0).isoformat(),
            "finished_utc": datetime.now(timezone.utc).replace(microsecond=0).isoformat(),
            "status": status,
            **result,
            "warning_counts": collector.get_counts_by_severity(),
            "warnings": collector.to_dicts(),
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def _generate_run_id(self) -> str:
        """Generate unique run ID: timestamp + UUID4 prefix."""
        ts = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        uid = uuid.uuid4().hex[:8]
        return f"{ts}_{uid}"

