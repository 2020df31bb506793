"""Tests for MobileXryExtractor."""

import json

import pytest

from core.config import XryConfig
from extractors.exceptions import ConfigurationError, IngestionFailedError
from extractors.mobile import MobileXryExtractor
from extractors.mobile.xry.extractor import SUMMARY_FILE_NAME
from sdk.records import RecordCollector


@pytest.fixture
def extractor():
    return MobileXryExtractor()


class TestMetadata:

    def test_metadata(self, extractor):
        meta = extractor.metadata
        assert meta.name == "mobile_xry"
        assert meta.category == "mobile"
        assert meta.can_ingest is True
        assert meta.can_extract is False
        assert meta.requires_tools == []

    def test_output_dir(self, extractor, tmp_path):
        assert extractor.get_output_dir(tmp_path, "pixel-4a") == tmp_path / "evidences" / "pixel-4a" / "xry"

    def test_can_run_ingestion(self, extractor, xry_export, tmp_path):
        assert extractor.can_run_ingestion(xry_export) == (True, "")

        ok, reason = extractor.can_run_ingestion(tmp_path / "missing")
        assert not ok
        assert "not found" in reason

        empty = tmp_path / "empty"
        empty.mkdir()
        assert extractor.can_run_ingestion(empty) == (False, "No XRY reports found")


class TestRunIngestion:

    def test_counts_and_summary(self, extractor, xry_export, tmp_path, recording_callbacks):
        sink = RecordCollector()
        output_dir = tmp_path / "out"
        counts = extractor.run_ingestion(xry_export, output_dir, sink, {"run_id": "run_1"}, recording_callbacks)

        assert counts == {"call_log": 2, "contact": 1, "message": 2, "web_bookmark": 1}
        assert len(sink.records) == 6
        assert recording_callbacks.steps[0] == "Discovering XRY reports"

        summary = json.loads((output_dir / SUMMARY_FILE_NAME).read_text(encoding="utf-8"))
        assert summary["run_id"] == "run_1"
        assert summary["extractor"] == "mobile_xry"
        assert summary["status"] == "success"
        assert summary["counts"] == counts
        assert len(summary["reports"]) == 5
        unsupported = [w for w in summary["warnings"] if w["warning_type"] == "unsupported_report"]
        assert unsupported[0]["item_name"] == "device/general information"
        assert unsupported[0]["run_id"] == "run_1"

    def test_summary_disabled(self, extractor, xry_export, tmp_path, recording_callbacks):
        config = {"xry": {"write_summary": False}}
        extractor.run_ingestion(xry_export, tmp_path / "out", RecordCollector(), config, recording_callbacks)
        assert not (tmp_path / "out" / SUMMARY_FILE_NAME).exists()

    def test_accepts_config_object(self, extractor, xry_export, tmp_path, recording_callbacks):
        config = {"xry": XryConfig(report_extensions=[".xml"]), "run_id": "run_2"}
        counts = extractor.run_ingestion(xry_export, tmp_path / "out", RecordCollector(), config,
                                         recording_callbacks)
        # export.xml has no supported report type
        assert counts == {}

    def test_generated_run_id(self, extractor, xry_export, tmp_path, recording_callbacks):
        extractor.run_ingestion(xry_export, tmp_path / "out", RecordCollector(), {}, recording_callbacks)
        summary = json.loads((tmp_path / "out" / SUMMARY_FILE_NAME).read_text(encoding="utf-8"))
        assert len(summary["run_id"].split("_")) == 3

    def test_cancelled_run(self, extractor, xry_export, tmp_path, recording_callbacks):
        recording_callbacks.cancel_after = 1
        counts = extractor.run_ingestion(xry_export, tmp_path / "out", RecordCollector(), {},
                                         recording_callbacks)
        assert counts == {"call_log": 2}
        summary = json.loads((tmp_path / "out" / SUMMARY_FILE_NAME).read_text(encoding="utf-8"))
        assert summary["status"] == "cancelled"
        assert ("XRY ingestion cancelled by user", "warning") in recording_callbacks.logs

    @pytest.mark.parametrize("bad_config", [{"xry": {"unknown": 1}}, {"xry": "fast"}])
    def test_invalid_config(self, extractor, xry_export, tmp_path, recording_callbacks, bad_config):
        with pytest.raises(ConfigurationError):
            extractor.run_ingestion(xry_export, tmp_path / "out", RecordCollector(), bad_config,
                                    recording_callbacks)

    def test_unreadable_report(self, extractor, tmp_path, recording_callbacks):
        folder = tmp_path / "export"
        folder.mkdir()
        (folder / "Calls.txt").write_bytes(b"XRY Report\n[Type]\tCalls\n\nCall #1\n[To]\t\xc3\x28\n")

        with pytest.raises(IngestionFailedError):
            extractor.run_ingestion(folder, tmp_path / "out", RecordCollector(), {}, recording_callbacks)
        assert recording_callbacks.errors[0][0] == "Cannot read XRY report Calls.txt"
        assert recording_callbacks.errors[-1][0] == "Ingestion failed: no XRY report could be read"
        assert not (tmp_path / "out" / SUMMARY_FILE_NAME).exists()

    def test_partial_run(self, extractor, xry_export, tmp_path, recording_callbacks):
        (xry_export / "Calls-Missed.txt").write_bytes(b"XRY Report\n[Type]\tCalls\n\nCall #1\n[To]\t\xc3\x28\n")
        counts = extractor.run_ingestion(xry_export, tmp_path / "out", RecordCollector(), {},
                                         recording_callbacks)
        assert counts == {"call_log": 2, "contact": 1, "message": 2, "web_bookmark": 1}

        summary = json.loads((tmp_path / "out" / SUMMARY_FILE_NAME).read_text(encoding="utf-8"))
        assert summary["status"] == "partial"
        [failed] = [r for r in summary["reports"] if r["status"] == "error"]
        assert failed["path"].endswith("Calls-Missed.txt")
        assert failed["error"]
        assert any(w["warning_type"] == "report_read_error" for w in summary["warnings"])


def test_extractor_is_exported_from_package():
    from extractors.mobile.xry import MobileXryExtractor as exported

    assert exported is MobileXryExtractor
