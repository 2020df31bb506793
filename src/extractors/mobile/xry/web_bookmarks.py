"""XRY Web/Bookmarks report parser. Only bookmarks with a URL are emitted."""
from __future__ import annotations

from enum import StrEnum
from typing import List

from core.enums import ArtifactType, AttributeType
from sdk.base import ArtifactSink

from .catalog import PARSER_NAME, XryCatalog, lookup
from .diagnostics import XryDiagnostics
from .key_value import XryKeyValuePair
from .reader import XryEntityReader
from .records import Attribute, WebBookmarkBuilder
from .single_entity import parse_single_entities

__all__ = ["BookmarkKey", "WEB_BOOKMARKS_CATALOG", "XryWebBookmarksParser"]


class BookmarkKey(StrEnum):
    APPLICATION = "application"
    DOMAIN = "domain"
    WEB_ADDRESS = "web address"


WEB_BOOKMARKS_CATALOG = XryCatalog.build({
    BookmarkKey.APPLICATION: None,
    BookmarkKey.DOMAIN: AttributeType.DOMAIN,
    BookmarkKey.WEB_ADDRESS: None,
})


class XryWebBookmarksParser:
    """Parses Web/Bookmarks reports into WebBookmark records."""

    parser_name = PARSER_NAME
    artifact_type = ArtifactType.WEB_BOOKMARK
    catalog = WEB_BOOKMARKS_CATALOG

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
        builder = WebBookmarkBuilder()
        for pair in pairs:
            key = lookup(BookmarkKey, pair.key)
            if key is BookmarkKey.APPLICATION:
                builder.set_prog_name(pair.value)
            elif key is BookmarkKey.WEB_ADDRESS:
                builder.set_url(pair.value)
            elif key is BookmarkKey.DOMAIN:
                builder.add_other_attribute(
                    Attribute(AttributeType.DOMAIN, pair.value, self.parser_name))

        if builder.is_empty():
            return False
        sink.add_web_bookmark(builder.build())
        return True
