"""Artifact sink SDK exports."""

from .base import ArtifactSink, EmittedRecord  # noqa: F401
from .records import (  # noqa: F401
    JsonlRecordSink,
    RecordCollector,
    make_call_log_record,
    make_contact_record,
    make_message_record,
    make_web_bookmark_record,
)
