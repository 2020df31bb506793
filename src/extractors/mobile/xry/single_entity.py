"""
Shared processing loop for report formats where one entity is one record.

Calls, contacts and web bookmarks never segment their entities, so their
parsers only differ in catalog and in how pairs become an artifact. Each of
them satisfies SingleEntityFormat and hands itself to parse_single_entities().
"""
from __future__ import annotations

from typing import List, Protocol

from core.logging import get_logger
from sdk.base import ArtifactSink

from .catalog import XryCatalog
from .compiler import EntityCompiler
from .diagnostics import XryDiagnostics
from .key_value import XryKeyValuePair
from .reader import XryEntityReader

__all__ = ["SingleEntityFormat", "parse_single_entities"]

LOGGER = get_logger("extractors.mobile.xry.single_entity")


class SingleEntityFormat(Protocol):
    """Capabilities a single-entity report format supplies."""

    parser_name: str
    catalog: XryCatalog

    def can_process(self, pair: XryKeyValuePair) -> bool:
        ...

    def is_namespace(self, line: str) -> bool:
        ...

    def make_artifact(
        self,
        pairs: List[XryKeyValuePair],
        sink: ArtifactSink,
        diagnostics: XryDiagnostics,
    ) -> bool:
        """Build and emit one artifact; return True if something was emitted."""
        ...


def parse_single_entities(
    reader: XryEntityReader,
    report_format: SingleEntityFormat,
    sink: ArtifactSink,
    diagnostics: XryDiagnostics,
) -> int:
    """
    Run report_format over every entity of reader.

    Entities that compile to no processable pairs emit nothing.

    Returns:
        Number of artifacts handed to the sink

    Raises:
        ReportReadError: If the underlying stream fails
    """
    LOGGER.info("[%s] Processing report at [ %s ]",
                report_format.parser_name, reader.report_path)

    compiler = EntityCompiler(
        report_format.catalog, diagnostics, is_namespace=report_format.is_namespace
    )
    emitted = 0
    for entity in reader:
        pairs = [pair for pair in compiler.compile(entity) if report_format.can_process(pair)]
        if not pairs:
            continue
        if report_format.make_artifact(pairs, sink, diagnostics):
            emitted += 1
    return emitted
