"""
XRY Messages/SMS report parser.

Message entities may be segmented: a long SMS is exported as consecutive
entities sharing a ``[Reference Number]``. The parser stitches their text
back together before emitting a single message.

Key routing:
- ``[Tel]``/``[Number]`` under ``From`` -> sender, under ``To`` or
  ``Participant`` -> recipient, otherwise a phone number attribute
- ``[From]``/``[To]`` -> sender/recipient
- ``[Time]`` -> date time (seconds since epoch)
- ``[Type]`` -> direction, ``[Status]`` -> read status or deleted flag
- ``[Text]``/``[Message]`` -> text
- other typed keys -> other attributes
"""
from __future__ import annotations

from enum import StrEnum
from typing import List

from core.enums import ArtifactType, AttributeType, CommunicationDirection, MessageReadStatus
from core.logging import get_logger
from sdk.base import ArtifactSink

from ..._shared.extraction_warnings import (
    WARNING_TYPE_UNHANDLED_KEY,
    WARNING_TYPE_UNRECOGNIZED_VALUE,
)
from .catalog import PARSER_NAME, XryCatalog, XryMetaKey, lookup
from .compiler import EntityCompiler
from .diagnostics import XryDiagnostics
from .key_value import XryKeyValuePair
from .reader import XryEntityReader
from .records import Attribute, MessageBuilder
from .segments import SegmentStitcher
from .timestamps import epoch_or_warn

__all__ = ["MessageKey", "MessageNamespace", "MESSAGES_CATALOG", "XryMessagesParser"]

LOGGER = get_logger("extractors.mobile.xry.messages")


class MessageKey(StrEnum):
    DELETED = "deleted"
    DIRECTION = "direction"
    MESSAGE = "message"
    NAME_MATCHED = "name (matched)"
    TEXT = "text"
    TIME = "time"
    SERVICE_CENTER = "service center"
    FROM = "from"
    TO = "to"
    STORAGE = "storage"
    NUMBER = "number"
    TYPE = "type"
    TEL = "tel"
    FOLDER = "folder"
    NAME = "name"
    INDEX = "index"
    STATUS = "status"


class MessageNamespace(StrEnum):
    FROM = "from"
    PARTICIPANT = "participant"
    TO = "to"
    NONE = ""


MESSAGES_CATALOG = XryCatalog.build(
    {
        MessageKey.DELETED: AttributeType.IS_DELETED,
        MessageKey.DIRECTION: AttributeType.DIRECTION,
        MessageKey.MESSAGE: AttributeType.TEXT,
        MessageKey.NAME_MATCHED: AttributeType.NAME_PERSON,
        MessageKey.TEXT: AttributeType.TEXT,
        MessageKey.TIME: AttributeType.DATETIME,
        MessageKey.SERVICE_CENTER: AttributeType.PHONE_NUMBER,
        MessageKey.FROM: AttributeType.PHONE_NUMBER_FROM,
        MessageKey.TO: AttributeType.PHONE_NUMBER_TO,
        # Need special processing or more data to find a type
        MessageKey.STORAGE: None,
        MessageKey.NUMBER: None,
        MessageKey.TYPE: None,
        MessageKey.TEL: None,
        MessageKey.FOLDER: None,
        MessageKey.NAME: None,
        MessageKey.INDEX: None,
        MessageKey.STATUS: None,
    },
    namespaces=MessageNamespace,
    meta_keys=XryMetaKey,
    text_keys=(MessageKey.TEXT, MessageKey.MESSAGE),
)

# Type values that carry no direction
IGNORED_TYPES = frozenset({"deliver", "submit", "status report"})
# Status values with no read status counterpart
IGNORED_STATUSES = frozenset({"sending failed", "unsent", "sent"})


class XryMessagesParser:
    """
    Parses Messages/SMS reports into Message records.

    Not reusable across threads; parse() creates the per-report segment
    state on every call.
    """

    parser_name = PARSER_NAME
    artifact_type = ArtifactType.MESSAGE
    catalog = MESSAGES_CATALOG

    def parse(self, reader: XryEntityReader, sink: ArtifactSink, diagnostics: XryDiagnostics) -> int:
        """
        Parse every message entity of reader and hand the messages to sink.

        Returns:
            Number of messages emitted

        Raises:
            ReportReadError: If the report stream fails
        """
        LOGGER.info("[%s] Processing report at [ %s ]", self.parser_name, reader.report_path)

        stitcher = SegmentStitcher(reader, self.catalog, diagnostics)
        compiler = EntityCompiler(self.catalog, diagnostics, stitcher=stitcher)

        emitted = 0
        while reader.has_next():
            entity = reader.next()
            builder = MessageBuilder(message_type=self.parser_name)
            for pair in compiler.compile(entity):
                self.add_to_builder(builder, pair, diagnostics)

            if builder.is_empty():
                continue
            sink.add_message(builder.build())
            emitted += 1
        return emitted

    def add_to_builder(
        self,
        builder: MessageBuilder,
        pair: XryKeyValuePair,
        diagnostics: XryDiagnostics,
    ) -> None:
        key = lookup(MessageKey, pair.key)
        if key is None:
            return
        namespace = lookup(MessageNamespace, pair.namespace) or MessageNamespace.NONE
        normalized_value = pair.value.strip().lower()

        if key in (MessageKey.TEL, MessageKey.NUMBER):
            if namespace is MessageNamespace.FROM:
                builder.set_sender_id(pair.value)
            elif namespace in (MessageNamespace.TO, MessageNamespace.PARTICIPANT):
                builder.add_recipient_id(pair.value)
            else:
                builder.add_other_attribute(
                    Attribute(AttributeType.PHONE_NUMBER, pair.value, self.parser_name))
        # Later XRY versions write the namespaces as keys
        elif key is MessageKey.FROM:
            builder.set_sender_id(pair.value)
        elif key is MessageKey.TO:
            builder.add_recipient_id(pair.value)
        elif key is MessageKey.TIME:
            seconds = epoch_or_warn(pair, diagnostics, "messages")
            if seconds is not None:
                builder.set_date_time(seconds)
        elif key is MessageKey.TYPE:
            if normalized_value == "incoming":
                builder.set_direction(CommunicationDirection.INCOMING)
            elif normalized_value == "outgoing":
                builder.set_direction(CommunicationDirection.OUTGOING)
            elif normalized_value not in IGNORED_TYPES:
                self._unrecognized_value(pair, diagnostics)
        elif key is MessageKey.STATUS:
            if normalized_value == "read":
                builder.set_read_status(MessageReadStatus.READ)
            elif normalized_value == "unread":
                builder.set_read_status(MessageReadStatus.UNREAD)
            elif normalized_value == "deleted":
                builder.add_other_attribute(
                    Attribute(AttributeType.IS_DELETED, pair.value, self.parser_name))
            elif normalized_value not in IGNORED_STATUSES:
                self._unrecognized_value(pair, diagnostics)
        elif key in (MessageKey.TEXT, MessageKey.MESSAGE):
            builder.set_text(pair.value)
        else:
            attribute_type = self.catalog.attribute_type(key)
            if attribute_type is not None:
                builder.add_other_attribute(
                    Attribute(attribute_type, pair.value, self.parser_name))
            else:
                diagnostics.info(
                    WARNING_TYPE_UNHANDLED_KEY,
                    f"Key value pair (in brackets) [ {pair} ] was recognized but more data "
                    "or time is needed to finish implementation. Discarding...",
                    item_name=pair.key,
                    item_value=pair.value,
                )

    def _unrecognized_value(self, pair: XryKeyValuePair, diagnostics: XryDiagnostics) -> None:
        diagnostics.warning(
            WARNING_TYPE_UNRECOGNIZED_VALUE,
            f"Unrecognized value for key pair [ {pair} ].",
            item_name=pair.key,
            item_value=pair.value,
        )

    def can_process(self, pair: XryKeyValuePair) -> bool:
        return self.catalog.can_process(pair)

    def is_namespace(self, line: str) -> bool:
        return self.catalog.is_namespace(line)
