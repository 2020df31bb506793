"""
XRY Calls report parser.

The first number seen under ``From`` (or in a ``[From]`` key) becomes the
caller id; further ones are kept as phone-number-from attributes. Calls
with neither caller nor callee are still emitted when anything else was
recognized, with direction and start time moved into the attribute bag.
"""
from __future__ import annotations

from enum import StrEnum
from typing import List

from core.enums import ArtifactType, AttributeType, CommunicationDirection
from sdk.base import ArtifactSink

from ..._shared.extraction_warnings import WARNING_TYPE_UNHANDLED_KEY
from .catalog import PARSER_NAME, XryCatalog, lookup
from .diagnostics import XryDiagnostics
from .key_value import XryKeyValuePair
from .reader import XryEntityReader
from .records import Attribute, CallLogBuilder
from .single_entity import parse_single_entities
from .timestamps import epoch_or_warn

__all__ = ["CallKey", "CallNamespace", "CALLS_CATALOG", "XryCallsParser"]


class CallKey(StrEnum):
    NAME_MATCHED = "name (matched)"
    TIME = "time"
    DIRECTION = "direction"
    CALL_TYPE = "call type"
    NUMBER = "number"
    TEL = "tel"
    TO = "to"
    FROM = "from"
    DELETED = "deleted"
    DURATION = "duration"
    STORAGE = "storage"
    INDEX = "index"
    TYPE = "type"
    NAME = "name"


class CallNamespace(StrEnum):
    TO = "to"
    FROM = "from"
    NONE = ""


CALLS_CATALOG = XryCatalog.build(
    {
        CallKey.NAME_MATCHED: AttributeType.NAME,
        CallKey.TIME: None,
        CallKey.DIRECTION: None,
        CallKey.CALL_TYPE: None,
        CallKey.NUMBER: None,
        CallKey.TEL: None,
        CallKey.TO: None,
        CallKey.FROM: None,
        CallKey.DELETED: AttributeType.IS_DELETED,
        CallKey.DURATION: None,
        CallKey.STORAGE: None,
        CallKey.INDEX: None,
        CallKey.TYPE: None,
        CallKey.NAME: AttributeType.NAME,
    },
    namespaces=CallNamespace,
)


class XryCallsParser:
    """Parses Calls reports into CallLog records."""

    parser_name = PARSER_NAME
    artifact_type = ArtifactType.CALL_LOG
    catalog = CALLS_CATALOG

    def parse(self, reader: XryEntityReader, sink: ArtifactSink, diagnostics: XryDiagnostics) -> int:
        return parse_single_entities(reader, self, sink, diagnostics)

    def can_process(self, pair: XryKeyValuePair) -> bool:
        return self.catalog.can_process(pair)

    def is_namespace(self, line: str) -> bool:
        return self.catalog.is_namespace(line)

    def make_artifact(
        self,
        pairs: List[XryKeyValuePair],
        sink: ArtifactSink,
        diagnostics: XryDiagnostics,
    ) -> bool:
        builder = CallLogBuilder()
        for pair in pairs:
            self.add_to_builder(builder, pair, diagnostics)

        if not builder.has_caller_id() and not builder.callee_ids:
            # No parties: keep what we have as plain attributes
            if builder.direction is not CommunicationDirection.UNKNOWN:
                builder.add_other_attribute(Attribute(
                    AttributeType.DIRECTION, str(builder.direction), self.parser_name))
                builder.set_direction(CommunicationDirection.UNKNOWN)
            if builder.start_time > 0:
                builder.add_other_attribute(Attribute(
                    AttributeType.DATETIME_START, builder.start_time, self.parser_name))
                builder.set_start_time(0)

        if builder.is_empty():
            return False
        sink.add_call_log(builder.build())
        return True

    def add_to_builder(
        self,
        builder: CallLogBuilder,
        pair: XryKeyValuePair,
        diagnostics: XryDiagnostics,
    ) -> None:
        key = lookup(CallKey, pair.key)
        if key is None:
            return
        namespace = lookup(CallNamespace, pair.namespace) or CallNamespace.NONE

        if key in (CallKey.TEL, CallKey.NUMBER):
            if namespace is CallNamespace.FROM:
                self._add_caller(builder, pair)
            elif namespace is CallNamespace.TO:
                builder.add_callee_id(pair.value)
            else:
                builder.add_other_attribute(
                    Attribute(AttributeType.PHONE_NUMBER, pair.value, self.parser_name))
        # Later XRY versions write the namespaces as keys
        elif key is CallKey.TO:
            builder.add_callee_id(pair.value)
        elif key is CallKey.FROM:
            self._add_caller(builder, pair)
        elif key is CallKey.TIME:
            seconds = epoch_or_warn(pair, diagnostics, "call logs")
            if seconds is not None:
                builder.set_start_time(seconds)
        elif key is CallKey.DIRECTION:
            if pair.value.strip().lower() == "incoming":
                builder.set_direction(CommunicationDirection.INCOMING)
            else:
                builder.set_direction(CommunicationDirection.OUTGOING)
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

    def _add_caller(self, builder: CallLogBuilder, pair: XryKeyValuePair) -> None:
        if builder.has_caller_id():
            builder.add_other_attribute(
                Attribute(AttributeType.PHONE_NUMBER_FROM, pair.value, self.parser_name))
        else:
            builder.set_caller_id(pair.value)
