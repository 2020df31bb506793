"""Tests for src/core/enums.py - Core enumerations."""

import json

import pytest

from core.enums import (
    ArtifactType,
    AttributeType,
    CallMediaType,
    CommunicationDirection,
    ExtractionStatus,
    MessageReadStatus,
    Severity,
)


class TestArtifactType:
    """Tests for ArtifactType enum."""

    def test_artifact_values(self):
        assert ArtifactType.MESSAGE == "message"
        assert ArtifactType.CALL_LOG == "call_log"
        assert ArtifactType.CONTACT == "contact"
        assert ArtifactType.WEB_BOOKMARK == "web_bookmark"

    def test_parsers_advertise_artifact_types(self):
        from extractors.mobile.xry.factory import get_parser, supported_report_types

        for report_type in supported_report_types():
            assert isinstance(get_parser(report_type).artifact_type, ArtifactType)


class TestAttributeType:
    """Tests for AttributeType enum."""

    @pytest.mark.parametrize("member,value", [
        (AttributeType.PHONE_NUMBER_FROM, "phone_number_from"),
        (AttributeType.NAME_PERSON, "name_person"),
        (AttributeType.DATETIME_START, "datetime_start"),
        (AttributeType.IS_DELETED, "is_deleted"),
    ])
    def test_values(self, member, value):
        assert member == value

    def test_values_are_unique(self):
        values = [member.value for member in AttributeType]
        assert len(values) == len(set(values))


class TestDirectionAndStatus:
    """Tests for direction, read status and media enums."""

    def test_unknown_members(self):
        assert CommunicationDirection.UNKNOWN == "unknown"
        assert MessageReadStatus.UNKNOWN == "unknown"
        assert CallMediaType.UNKNOWN == "unknown"

    def test_string_comparison(self):
        """Verify enum can be compared with strings."""
        assert CommunicationDirection.INCOMING == "incoming"
        assert "read" == MessageReadStatus.READ

    def test_json_serialization(self):
        """StrEnum members serialize as plain strings."""
        payload = json.dumps({"direction": CommunicationDirection.OUTGOING})
        assert payload == '{"direction": "outgoing"}'


class TestExtractionStatus:
    """Tests for ExtractionStatus enum."""

    def test_values(self):
        assert ExtractionStatus.OK == "ok"
        assert ExtractionStatus.PARTIAL == "partial"
        assert ExtractionStatus.ERROR == "error"
        assert ExtractionStatus.SKIPPED == "skipped"

    def test_str(self):
        assert str(ExtractionStatus.PARTIAL) == "partial"


class TestSeverity:
    """Tests for Severity enum."""

    def test_order_of_definition(self):
        assert list(Severity) == [Severity.INFO, Severity.WARNING, Severity.SEVERE]
