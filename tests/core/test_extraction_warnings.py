"""
Test suite for the extraction warning collector.

Covers collection, counting and JSON output of findings reported while
parsing XRY reports.
"""

import json

import pytest

from extractors._shared.extraction_warnings import (
    CATEGORY_XRY,
    SEVERITY_ERROR,
    SEVERITY_INFO,
    SEVERITY_WARNING,
    WARNING_TYPE_EMPTY_VALUE,
    WARNING_TYPE_MALFORMED_LINE,
    WARNING_TYPE_UNSUPPORTED_REPORT,
    ExtractionWarningCollector,
)


@pytest.fixture
def collector():
    return ExtractionWarningCollector(extractor_name="mobile_xry", run_id="run_42")


class TestExtractionWarningCollector:
    """Tests for ExtractionWarningCollector."""

    def test_empty_collector(self, collector):
        assert collector.warning_count == 0
        assert not collector.has_warnings
        assert not collector.has_errors
        assert collector.get_counts_by_severity() == {
            SEVERITY_INFO: 0, SEVERITY_WARNING: 0, SEVERITY_ERROR: 0,
        }

    def test_add_warning_defaults(self, collector):
        collector.add_warning(WARNING_TYPE_EMPTY_VALUE, "tel", source_file="Calls.txt")
        [warning] = collector.warnings
        assert warning.severity == SEVERITY_WARNING
        assert warning.category is None
        assert warning.source_file == "Calls.txt"
        assert collector.has_warnings

    def test_add_unsupported_report(self, collector):
        collector.add_unsupported_report("export/Device.txt", "device/general information")
        [warning] = collector.warnings
        assert warning.warning_type == WARNING_TYPE_UNSUPPORTED_REPORT
        assert warning.severity == SEVERITY_INFO
        assert warning.category == CATEGORY_XRY
        assert warning.item_name == "device/general information"

    def test_counts(self, collector):
        collector.add_warning(WARNING_TYPE_MALFORMED_LINE, "a")
        collector.add_warning(WARNING_TYPE_MALFORMED_LINE, "b", severity=SEVERITY_ERROR)
        collector.add_warning(WARNING_TYPE_EMPTY_VALUE, "c", severity=SEVERITY_INFO)

        assert collector.has_errors
        assert collector.get_counts_by_type() == {
            WARNING_TYPE_MALFORMED_LINE: 2,
            WARNING_TYPE_EMPTY_VALUE: 1,
        }
        assert collector.get_counts_by_severity() == {
            SEVERITY_INFO: 1, SEVERITY_WARNING: 1, SEVERITY_ERROR: 1,
        }

    def test_warnings_returns_copy(self, collector):
        collector.add_warning(WARNING_TYPE_MALFORMED_LINE, "a")
        collector.warnings.clear()
        assert collector.warning_count == 1

    def test_to_dicts_carries_run(self, collector):
        collector.add_warning(WARNING_TYPE_EMPTY_VALUE, "tel", context_json={"line": 4})
        [row] = collector.to_dicts()
        assert row["run_id"] == "run_42"
        assert row["extractor_name"] == "mobile_xry"
        assert row["context_json"] == {"line": 4}

    def test_write_json(self, collector, tmp_path):
        collector.add_warning(WARNING_TYPE_EMPTY_VALUE, "tel")
        collector.add_warning(WARNING_TYPE_MALFORMED_LINE, "x")
        path = tmp_path / "out" / "warnings.json"

        assert collector.write_json(path) == 2
        payload = json.loads(path.read_text(encoding="utf-8"))
        assert payload["run_id"] == "run_42"
        assert len(payload["warnings"]) == 2
        # Written warnings are kept
        assert collector.warning_count == 2

    def test_clear(self, collector):
        collector.add_warning(WARNING_TYPE_EMPTY_VALUE, "tel")
        collector.clear()
        assert collector.warning_count == 0
