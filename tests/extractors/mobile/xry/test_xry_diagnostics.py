"""Tests for XryDiagnostics."""

import logging
from pathlib import Path

from extractors._shared.extraction_warnings import (
    CATEGORY_XRY,
    SEVERITY_ERROR,
    WARNING_TYPE_MALFORMED_LINE,
    WARNING_TYPE_SEGMENT_NUMBER_MISSING,
    WARNING_TYPE_UNHANDLED_KEY,
)
from extractors.mobile.xry.calls import XryCallsParser
from extractors.mobile.xry.diagnostics import XryDiagnostics
from sdk.records import RecordCollector


def test_findings_are_collected(warning_collector):
    diagnostics = XryDiagnostics("XRY DSP", Path("Calls.txt"), warning_collector, artifact_type="call_log")
    diagnostics.warning(WARNING_TYPE_MALFORMED_LINE, "bad line", item_name="garbage", line=3)

    [warning] = warning_collector.warnings
    assert warning.warning_type == WARNING_TYPE_MALFORMED_LINE
    assert warning.category == CATEGORY_XRY
    assert warning.artifact_type == "call_log"
    assert warning.source_file == "Calls.txt"
    assert warning.item_name == "garbage"
    assert warning.context_json == {"line": 3}


def test_severe_maps_to_error(warning_collector):
    diagnostics = XryDiagnostics("XRY DSP", None, warning_collector)
    diagnostics.severe(WARNING_TYPE_SEGMENT_NUMBER_MISSING, "no segment")
    assert warning_collector.has_errors
    assert warning_collector.warnings[0].severity == SEVERITY_ERROR
    assert warning_collector.warnings[0].source_file is None


def test_counts_and_findings():
    diagnostics = XryDiagnostics("XRY DSP")
    diagnostics.info(WARNING_TYPE_UNHANDLED_KEY, "later")
    assert diagnostics.total == 1
    assert not diagnostics.has_findings

    diagnostics.warning(WARNING_TYPE_MALFORMED_LINE, "bad")
    assert diagnostics.has_findings
    assert diagnostics.counts == {"info": 1, "warning": 1, "severe": 0}


def test_info_log_output_is_throttled(caplog, warning_collector):
    diagnostics = XryDiagnostics("XRY DSP", Path("Calls.txt"), warning_collector, max_logged=2)
    with caplog.at_level(logging.INFO, logger="xrysifter"):
        for index in range(5):
            diagnostics.info(WARNING_TYPE_UNHANDLED_KEY, f"unhandled key {index}")
        diagnostics.warning(WARNING_TYPE_MALFORMED_LINE, "bad line")
        diagnostics.severe(WARNING_TYPE_SEGMENT_NUMBER_MISSING, "missing segment")

    messages = [record.getMessage() for record in caplog.records]
    assert messages == [
        "[XRY DSP] unhandled key 0 (Calls.txt)",
        "[XRY DSP] unhandled key 1 (Calls.txt)",
        "[XRY DSP] Suppressing further informational parse diagnostics (Calls.txt)",
        "[XRY DSP] bad line (Calls.txt)",
        "[XRY DSP] missing segment (Calls.txt)",
    ]
    # The collector keeps everything
    assert warning_collector.warning_count == 7
    assert diagnostics.counts == {"info": 5, "warning": 1, "severe": 0}


def test_warning_logged_after_many_info_findings(caplog, make_reader):
    body = "".join(f"Call #{index}\n[Index]\t{index}\n[To]\t111\n\n" for index in range(1, 61))
    body += "Call #61\n[Time]\tnot a date\n[To]\t222\n"
    diagnostics = XryDiagnostics("XRY DSP", Path("Calls.txt"), max_logged=50)

    with caplog.at_level(logging.INFO, logger="xrysifter"):
        XryCallsParser().parse(make_reader(body), RecordCollector(), diagnostics)

    assert diagnostics.counts["info"] == 60
    assert "Suppressing further informational parse diagnostics" in caplog.text
    [warning] = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert "date time formatting of call logs" in warning.getMessage()
