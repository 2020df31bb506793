"""
Entity-to-pairs compilation.

Turns one XRY entity into the list of valid key/value pairs it carries:

- the title line is skipped
- namespace lines switch the namespace applied to following pairs
- lines that are not pairs are discarded with a diagnostic
- meta keys, unrecognized keys and empty values are discarded
- lines following a valid pair that are neither pairs nor namespace lines
  are joined onto its value (values that wrapped in the export)
- text-bearing pairs are extended with segmented continuation entities when
  a SegmentStitcher is configured
"""
from __future__ import annotations

from collections import deque
from typing import Callable, List, Optional

from core.logging import get_logger
from ..._shared.extraction_warnings import (
    WARNING_TYPE_EMPTY_VALUE,
    WARNING_TYPE_MALFORMED_LINE,
    WARNING_TYPE_UNRECOGNIZED_KEY,
)
from .catalog import XryCatalog
from .diagnostics import XryDiagnostics
from .key_value import XryKeyValuePair, collect_continuation, is_pair
from .reader import XryEntity
from .segments import SegmentStitcher

__all__ = ["EntityCompiler"]

LOGGER = get_logger("extractors.mobile.xry.compiler")


class EntityCompiler:
    """
    Compiles entities of one report format into key/value pairs.

    Example:
        >>> compiler = EntityCompiler(CALLS_CATALOG, diagnostics)
        >>> pairs = compiler.compile(reader.next())
    """

    def __init__(
        self,
        catalog: XryCatalog,
        diagnostics: XryDiagnostics,
        stitcher: Optional[SegmentStitcher] = None,
        is_namespace: Optional[Callable[[str], bool]] = None,
    ):
        self.catalog = catalog
        self.diagnostics = diagnostics
        self.stitcher = stitcher
        self.is_namespace = is_namespace or catalog.is_namespace

    def compile(self, entity: XryEntity) -> List[XryKeyValuePair]:
        LOGGER.debug("[%s] Processing [ %s ]", self.diagnostics.parser_name, entity.title)

        lines = deque(entity.body)
        result: List[XryKeyValuePair] = []
        namespace = ""
        while lines:
            line = lines.popleft()
            if self.is_namespace(line):
                namespace = line.strip()
                continue

            if not is_pair(line):
                self.diagnostics.warning(
                    WARNING_TYPE_MALFORMED_LINE,
                    f"Expected a key value pair on this line (in brackets) [ {line.strip()} ], "
                    "but one was not detected. Discarding...",
                    item_name=line.strip(),
                    entity=entity.title,
                )
                continue

            pair = XryKeyValuePair.from_line(line, namespace)
            if not self.validate(pair):
                continue

            parts = [pair.value]
            parts.extend(collect_continuation(lines, self.is_namespace))

            if self.stitcher is not None and self.catalog.is_text_key(pair.key):
                parts.extend(self.stitcher.stitch(entity))

            result.append(pair.with_value(" ".join(parts)))

        return result

    def validate(self, pair: XryKeyValuePair) -> bool:
        """True if the pair should be kept for artifact building."""
        if self.catalog.is_meta_key(pair.key):
            # Read separately by the segment stitcher
            return False

        if not self.catalog.is_key(pair.key):
            self.diagnostics.warning(
                WARNING_TYPE_UNRECOGNIZED_KEY,
                f"The following key, value pair (in brackets) [ {pair} ], "
                "was not recognized. Discarding...",
                item_name=pair.key,
                item_value=str(pair),
            )
            return False

        if not pair.value:
            self.diagnostics.warning(
                WARNING_TYPE_EMPTY_VALUE,
                f"The following key (in brackets) [ {pair.key} ] was recognized, "
                "but the value was empty. Discarding...",
                item_name=pair.key,
            )
            return False

        return True
