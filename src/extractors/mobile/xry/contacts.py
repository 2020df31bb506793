"""XRY Contacts/Contacts report parser. Contact reports have no namespaces."""
from __future__ import annotations

from enum import StrEnum
from typing import List

from core.enums import ArtifactType, AttributeType
from sdk.base import ArtifactSink

from ..._shared.extraction_warnings import WARNING_TYPE_UNHANDLED_KEY
from .catalog import PARSER_NAME, XryCatalog, lookup
from .diagnostics import XryDiagnostics
from .key_value import XryKeyValuePair
from .reader import XryEntityReader
from .records import Attribute, ContactBuilder
from .single_entity import parse_single_entities

__all__ = ["ContactKey", "CONTACTS_CATALOG", "XryContactsParser"]


class ContactKey(StrEnum):
    NAME = "name"
    TEL = "tel"
    MOBILE = "mobile"
    HOME = "home"
    RELATED_APPLICATION = "related application"
    ADDRESS_HOME = "address home"
    EMAIL_HOME = "email home"
    DELETED = "deleted"
    STORAGE = "storage"
    OTHER = "other"
    PICTURE = "picture"
    INDEX = "index"
    ACCOUNT_NAME = "account name"


CONTACTS_CATALOG = XryCatalog.build({
    ContactKey.NAME: None,
    ContactKey.TEL: None,
    ContactKey.MOBILE: None,
    ContactKey.HOME: None,
    ContactKey.RELATED_APPLICATION: AttributeType.PROG_NAME,
    ContactKey.ADDRESS_HOME: AttributeType.LOCATION,
    ContactKey.EMAIL_HOME: AttributeType.EMAIL_HOME,
    ContactKey.DELETED: AttributeType.IS_DELETED,
    # Ignored until more export samples are available
    ContactKey.STORAGE: None,
    ContactKey.OTHER: None,
    ContactKey.PICTURE: None,
    ContactKey.INDEX: None,
    ContactKey.ACCOUNT_NAME: None,
})


class XryContactsParser:
    """Parses Contacts/Contacts reports into Contact records."""

    parser_name = PARSER_NAME
    artifact_type = ArtifactType.CONTACT
    catalog = CONTACTS_CATALOG

    def parse(self, reader: XryEntityReader, sink: ArtifactSink, diagnostics: XryDiagnostics) -> int:
        return parse_single_entities(reader, self, sink, diagnostics)

    def can_process(self, pair: XryKeyValuePair) -> bool:
        return self.catalog.can_process(pair)

    def is_namespace(self, line: str) -> bool:
        return False

    def make_artifact(
        self,
        pairs: List[XryKeyValuePair],
        sink: ArtifactSink,
        diagnostics: XryDiagnostics,
    ) -> bool:
        builder = ContactBuilder()
        for pair in pairs:
            self.add_to_builder(builder, pair, diagnostics)

        if builder.is_empty():
            return False
        sink.add_contact(builder.build())
        return True

    def add_to_builder(
        self,
        builder: ContactBuilder,
        pair: XryKeyValuePair,
        diagnostics: XryDiagnostics,
    ) -> None:
        key = lookup(ContactKey, pair.key)
        if key is ContactKey.NAME:
            builder.set_name(pair.value)
        elif key is ContactKey.TEL:
            builder.set_phone_number(pair.value)
        elif key is ContactKey.MOBILE:
            builder.set_mobile_phone_number(pair.value)
        elif key is ContactKey.HOME:
            builder.set_home_phone_number(pair.value)
        elif key is not None and self.catalog.attribute_type(key) is not None:
            builder.add_other_attribute(
                Attribute(self.catalog.attribute_type(key), pair.value, self.parser_name))
        else:
            diagnostics.info(
                WARNING_TYPE_UNHANDLED_KEY,
                f"Key value pair (in brackets) [ {pair} ] was recognized but we need more "
                "data or time to finish implementation. Discarding...",
                item_name=pair.key,
                item_value=pair.value,
            )
