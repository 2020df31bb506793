from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, Dict, Iterable, List, Optional

from .base import EmittedRecord

if TYPE_CHECKING:
    from extractors.mobile.xry.records import Attribute, CallLog, Contact, Message, WebBookmark


def make_message_record(message: "Message", *, source_path: Optional[str] = None) -> EmittedRecord:
    data: Dict[str, Any] = {
        "message_type": message.message_type,
        "direction": str(message.direction),
        "sender_id": message.sender_id or None,
        "recipient_ids": list(message.recipient_ids),
        "ts_utc": _serialize_epoch(message.date_time),
        "read_status": str(message.read_status),
        "subject": message.subject or None,
        "text": message.text or None,
        "thread_id": message.thread_id or None,
        "attributes": _serialize_attributes(message.other_attributes),
        "source_path": source_path,
    }
    return EmittedRecord(kind="message", data=data)


def make_call_log_record(call_log: "CallLog", *, source_path: Optional[str] = None) -> EmittedRecord:
    data: Dict[str, Any] = {
        "direction": str(call_log.direction),
        "caller_id": call_log.caller_id or None,
        "callee_ids": list(call_log.callee_ids),
        "start_utc": _serialize_epoch(call_log.start_time),
        "end_utc": _serialize_epoch(call_log.end_time),
        "media_type": str(call_log.media_type),
        "attributes": _serialize_attributes(call_log.other_attributes),
        "source_path": source_path,
    }
    return EmittedRecord(kind="call_log", data=data)


def make_contact_record(contact: "Contact", *, source_path: Optional[str] = None) -> EmittedRecord:
    data: Dict[str, Any] = {
        "name": contact.name or None,
        "phone_number": contact.phone_number or None,
        "home_phone_number": contact.home_phone_number or None,
        "mobile_phone_number": contact.mobile_phone_number or None,
        "email_address": contact.email_address or None,
        "attributes": _serialize_attributes(contact.other_attributes),
        "source_path": source_path,
    }
    return EmittedRecord(kind="contact", data=data)


def make_web_bookmark_record(
    bookmark: "WebBookmark",
    *,
    source_path: Optional[str] = None,
) -> EmittedRecord:
    data: Dict[str, Any] = {
        "url": bookmark.url,
        "title": bookmark.title or None,
        "created_utc": _serialize_epoch(bookmark.creation_time),
        "prog_name": bookmark.prog_name or None,
        "attributes": _serialize_attributes(bookmark.other_attributes),
        "source_path": source_path,
    }
    return EmittedRecord(kind="web_bookmark", data=data)


class RecordCollector:
    """
    In-memory ArtifactSink.

    Converts every record into an EmittedRecord. source_path is attached to
    each record and can be switched between reports.
    """

    def __init__(self) -> None:
        self.records: List[EmittedRecord] = []
        self.source_path: Optional[str] = None
        self._counts: Dict[str, int] = {}

    def add_message(self, message: "Message") -> None:
        self.emit(make_message_record(message, source_path=self.source_path))

    def add_call_log(self, call_log: "CallLog") -> None:
        self.emit(make_call_log_record(call_log, source_path=self.source_path))

    def add_contact(self, contact: "Contact") -> None:
        self.emit(make_contact_record(contact, source_path=self.source_path))

    def add_web_bookmark(self, bookmark: "WebBookmark") -> None:
        self.emit(make_web_bookmark_record(bookmark, source_path=self.source_path))

    def emit(self, record: EmittedRecord) -> None:
        self.records.append(record)
        self._count(record)

    def by_kind(self, kind: str) -> List[EmittedRecord]:
        return [record for record in self.records if record.kind == kind]

    def counts(self) -> Dict[str, int]:
        return dict(self._counts)

    def _count(self, record: EmittedRecord) -> None:
        self._counts[record.kind] = self._counts.get(record.kind, 0) + 1


class JsonlRecordSink(RecordCollector):
    """ArtifactSink writing one JSON object per record to a text stream."""

    def __init__(self, stream: IO[str]) -> None:
        super().__init__()
        self.stream = stream
        self.written = 0

    @classmethod
    def open(cls, path: Path) -> "JsonlRecordSink":
        path.parent.mkdir(parents=True, exist_ok=True)
        return cls(path.open("w", encoding="utf-8"))

    def emit(self, record: EmittedRecord) -> None:
        self.stream.write(json.dumps({"kind": record.kind, **record.data}, ensure_ascii=False))
        self.stream.write("\n")
        self.written += 1
        self._count(record)

    def close(self) -> None:
        self.stream.close()


def _serialize_attributes(attributes: Iterable["Attribute"]) -> List[Dict[str, Any]]:
    return [attribute.to_dict() for attribute in attributes]


def _serialize_epoch(seconds: int) -> Optional[str]:
    """Render epoch seconds as ISO-8601 UTC; 0 means unknown."""
    if not seconds:
        return None
    return _serialize_datetime(datetime.fromtimestamp(seconds, tz=timezone.utc))


def _serialize_datetime(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).replace(microsecond=0).isoformat()
