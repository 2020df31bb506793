"""
Segment reassembly for XRY message entities.

A long message may be exported as several consecutive entities that share a
``[Reference Number]`` and carry ascending ``[Segment Number]`` values. The
stitcher consumes those continuation entities from the reader and returns
their text so the message can be emitted as one artifact.

Anomalies (segments out of order, missing segment numbers, a reference
number seen again later in the report) are reported as diagnostics and never
stop processing. A reference number that reappears after unrelated entities
yields a second, otherwise duplicate, artifact.
"""
from __future__ import annotations

from collections import deque
from typing import List, Optional, Sequence, Set

from core.logging import get_logger
from ..._shared.extraction_warnings import (
    WARNING_TYPE_INVALID_META_VALUE,
    WARNING_TYPE_REFERENCE_REUSED,
    WARNING_TYPE_SEGMENT_NUMBER_MISSING,
    WARNING_TYPE_SEGMENT_OUT_OF_ORDER,
)
from .catalog import XryCatalog, XryMetaKey
from .diagnostics import XryDiagnostics
from .key_value import XryKeyValuePair, collect_continuation, is_pair
from .reader import XryEntity, XryEntityReader

__all__ = ["SegmentStitcher"]

LOGGER = get_logger("extractors.mobile.xry.segments")


class SegmentStitcher:
    """
    Stitches segmented message text for one report parse.

    The set of seen reference numbers belongs to this instance; create a new
    stitcher for every report.
    """

    def __init__(self, reader: XryEntityReader, catalog: XryCatalog, diagnostics: XryDiagnostics):
        self.reader = reader
        self.catalog = catalog
        self.diagnostics = diagnostics
        self.seen_references: Set[int] = set()
        self.segments_consumed = 0

    def meta_value(self, lines: Sequence[str], meta_key: XryMetaKey) -> Optional[int]:
        """
        Return the integer value of the first pair carrying meta_key.

        Non-integer values are reported and skipped; scanning continues.
        """
        for line in lines:
            if not is_pair(line):
                continue
            pair = XryKeyValuePair.from_line(line)
            if not pair.has_key(meta_key):
                continue
            try:
                return int(pair.value)
            except ValueError:
                self.diagnostics.severe(
                    WARNING_TYPE_INVALID_META_VALUE,
                    f"Value [ {pair.value} ] for meta key [ {meta_key} ] was not an integer.",
                    item_name=str(meta_key),
                    item_value=pair.value,
                )
        return None

    def stitch(self, entity: XryEntity) -> List[str]:
        """
        Consume the continuation segments that follow entity.

        Args:
            entity: The entity whose text-bearing pair is being finalized

        Returns:
            Text fragments from the consumed segments, in report order
        """
        reference_number = self.meta_value(entity.lines, XryMetaKey.REFERENCE_NUMBER)
        if reference_number is None:
            return []

        LOGGER.info("Message entity appears to be segmented with reference number [ %d ]",
                    reference_number)

        if reference_number in self.seen_references:
            self.diagnostics.severe(
                WARNING_TYPE_REFERENCE_REUSED,
                f"This reference [ {reference_number} ] has already been seen. This means "
                "that the segments are not contiguous. Any segments contiguous with this one "
                "will be aggregated and another (otherwise duplicate) artifact will be created.",
                item_name=str(reference_number),
            )
        self.seen_references.add(reference_number)

        segment_number = self.meta_value(entity.lines, XryMetaKey.SEGMENT_NUMBER)
        if segment_number is None:
            self.diagnostics.severe(
                WARNING_TYPE_SEGMENT_NUMBER_MISSING,
                f"No segment number was found on the message entity with reference "
                f"number [ {reference_number} ]",
                item_name=str(reference_number),
            )
            return []

        fragments: List[str] = []
        current_segment = segment_number
        while self.reader.has_next():
            next_entity = self.reader.peek()
            next_reference = self.meta_value(next_entity.lines, XryMetaKey.REFERENCE_NUMBER)
            if next_reference is None or next_reference != reference_number:
                # Belongs to a different message; leave it for the caller
                break

            self.reader.next()
            self.segments_consumed += 1
            next_segment = self.meta_value(next_entity.lines, XryMetaKey.SEGMENT_NUMBER)

            if next_segment is None:
                self.diagnostics.severe(
                    WARNING_TYPE_SEGMENT_NUMBER_MISSING,
                    f"Segment [ {next_entity.title} ] with reference number [ {reference_number} ] "
                    "did not have a segment number associated with it. It cannot be determined "
                    "if the reconstructed text will be in order.",
                    item_name=str(reference_number),
                )
            elif next_segment != current_segment + 1:
                self.diagnostics.severe(
                    WARNING_TYPE_SEGMENT_OUT_OF_ORDER,
                    f"Contiguous segments are not ascending incrementally. Encountered segment "
                    f"[ {next_segment} ] after segment [ {current_segment} ]. This means the "
                    "reconstructed text will be out of order.",
                    item_name=str(reference_number),
                    item_value=str(next_segment),
                    previous_segment=current_segment,
                )

            fragments.extend(self._segment_text(next_entity))

            if next_segment is not None:
                current_segment = next_segment

        return fragments

    def _segment_text(self, entity: XryEntity) -> List[str]:
        fragments: List[str] = []
        lines = deque(entity.body)
        while lines:
            line = lines.popleft()
            if not is_pair(line):
                continue
            pair = XryKeyValuePair.from_line(line)
            if not self.catalog.is_text_key(pair.key):
                continue
            if pair.value:
                fragments.append(pair.value)
            fragments.extend(collect_continuation(lines, self.catalog.is_namespace))
        return fragments
