"""Tests for record conversion and the bundled artifact sinks."""

import io
import json

from core.enums import (
    AttributeType,
    CallMediaType,
    CommunicationDirection,
    MessageReadStatus,
)
from extractors.mobile.xry.records import (
    Attribute,
    CallLog,
    Contact,
    Message,
    WebBookmark,
)
from sdk import ArtifactSink, EmittedRecord
from sdk.records import (
    JsonlRecordSink,
    RecordCollector,
    make_call_log_record,
    make_contact_record,
    make_message_record,
    make_web_bookmark_record,
)

MESSAGE = Message(
    message_type="XRY DSP",
    direction=CommunicationDirection.INCOMING,
    sender_id="+46701234567",
    recipient_ids=(),
    date_time=631315434,
    read_status=MessageReadStatus.READ,
    subject="",
    text="Hello World",
    thread_id="",
    other_attributes=(Attribute(AttributeType.NAME_PERSON, "Alice", "XRY DSP"),),
)

CALL = CallLog(
    direction=CommunicationDirection.OUTGOING,
    caller_id="",
    callee_ids=("111", "222"),
    start_time=0,
    end_time=0,
    media_type=CallMediaType.UNKNOWN,
    other_attributes=(),
)


class TestRecordConversion:

    def test_message_record(self):
        record = make_message_record(MESSAGE, source_path="Messages-SMS.txt")
        assert record.kind == "message"
        assert record.data == {
            "message_type": "XRY DSP",
            "direction": "incoming",
            "sender_id": "+46701234567",
            "recipient_ids": [],
            "ts_utc": "1990-01-02T21:23:54+00:00",
            "read_status": "read",
            "subject": None,
            "text": "Hello World",
            "thread_id": None,
            "attributes": [{"type": "name_person", "value": "Alice", "source": "XRY DSP"}],
            "source_path": "Messages-SMS.txt",
        }

    def test_call_log_unknown_times(self):
        data = make_call_log_record(CALL).data
        assert data["start_utc"] is None
        assert data["end_utc"] is None
        assert data["caller_id"] is None
        assert data["callee_ids"] == ["111", "222"]
        assert data["media_type"] == "unknown"
        assert data["source_path"] is None

    def test_contact_record(self):
        contact = Contact("Alice", "", "", "+4670", "", ())
        data = make_contact_record(contact).data
        assert data["name"] == "Alice"
        assert data["mobile_phone_number"] == "+4670"
        assert data["phone_number"] is None

    def test_web_bookmark_record(self):
        bookmark = WebBookmark("https://example.com/", "", 0, "Chrome", ())
        record = make_web_bookmark_record(bookmark)
        assert record.kind == "web_bookmark"
        assert record.data["url"] == "https://example.com/"
        assert record.data["title"] is None
        assert record.data["created_utc"] is None


class TestRecordCollector:

    def test_is_an_artifact_sink(self):
        assert isinstance(RecordCollector(), ArtifactSink)

    def test_collects_and_counts(self):
        sink = RecordCollector()
        sink.source_path = "Calls.txt"
        sink.add_call_log(CALL)
        sink.add_call_log(CALL)
        sink.source_path = "Messages-SMS.txt"
        sink.add_message(MESSAGE)

        assert sink.counts() == {"call_log": 2, "message": 1}
        assert [r.data["source_path"] for r in sink.by_kind("call_log")] == ["Calls.txt", "Calls.txt"]
        assert sink.by_kind("message")[0].data["source_path"] == "Messages-SMS.txt"
        assert sink.by_kind("contact") == []

    def test_emit_accepts_prebuilt_records(self):
        sink = RecordCollector()
        sink.emit(EmittedRecord(kind="custom", data={"a": 1}))
        assert sink.counts() == {"custom": 1}


class TestJsonlRecordSink:

    def test_writes_one_line_per_record(self):
        stream = io.StringIO()
        sink = JsonlRecordSink(stream)
        sink.add_message(MESSAGE)
        sink.add_call_log(CALL)

        lines = stream.getvalue().splitlines()
        assert sink.written == 2
        assert sink.counts() == {"message": 1, "call_log": 1}
        # Records are streamed, not kept
        assert sink.records == []
        first = json.loads(lines[0])
        assert first["kind"] == "message"
        assert first["text"] == "Hello World"

    def test_open_creates_parent(self, tmp_path):
        path = tmp_path / "nested" / "records.jsonl"
        sink = JsonlRecordSink.open(path)
        sink.add_web_bookmark(WebBookmark("https://exämple.com/", "", 0, "", ()))
        sink.close()
        assert json.loads(path.read_text(encoding="utf-8"))["url"] == "https://exämple.com/"
