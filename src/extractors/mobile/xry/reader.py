"""
Entity readers for XRY reports.

An XRY report is a sequence of entities: blocks of non-blank lines separated
by one or more blank lines. The first line of every entity is its title.
Exported report files additionally start with a header entity describing the
report (including its ``[Type]``).

Readers support one-entity lookahead: peek() returns the next entity without
consuming it, and the following next() returns that same object without
re-reading the stream.
"""
from __future__ import annotations

import codecs
import re
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterable, Iterator, List, Optional, Tuple

from core.logging import get_logger
from ...exceptions import NoMoreEntitiesError, ReportReadError
from .key_value import XryKeyValuePair, is_pair, normalize_name

__all__ = [
    "XryEntity",
    "XryEntityReader",
    "XryFileReader",
    "detect_encoding",
    "is_xry_report",
    "report_type_from_filename",
]

LOGGER = get_logger("extractors.mobile.xry.reader")

HEADER_TYPE_KEY = "type"

# Data entities are numbered: "Call #1", "SMS #12"
DATA_TITLE_PATTERN = re.compile(r"#\s*\d+\s*$")


@dataclass(frozen=True, slots=True)
class XryEntity:
    """One titled block of lines from an XRY report."""

    lines: Tuple[str, ...]

    @classmethod
    def from_text(cls, text: str) -> "XryEntity":
        return cls(tuple(line.rstrip("\r") for line in text.split("\n")))

    @property
    def title(self) -> str:
        return self.lines[0].strip() if self.lines else ""

    @property
    def body(self) -> Tuple[str, ...]:
        """All lines after the title."""
        return self.lines[1:]

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def is_numbered(self) -> bool:
        """True for data entity titles such as ``SMS #3``."""
        return DATA_TITLE_PATTERN.search(self.title) is not None


class XryEntityReader:
    """
    Reads entities from an iterable of text lines.

    Example:
        >>> reader = XryEntityReader(io.StringIO(report_text))
        >>> while reader.has_next():
        ...     entity = reader.next()
    """

    def __init__(self, lines: Iterable[str], report_path: Optional[Path] = None):
        self.report_path = report_path
        self._lines = iter(lines)
        self._peeked: Optional[XryEntity] = None
        self._exhausted = False
        self._first_line = True
        self._line_count = 0
        self._entity_count = 0

    def has_next(self) -> bool:
        """True if another entity is available."""
        return self._fill() is not None

    def next(self) -> XryEntity:
        """Consume and return the next entity."""
        entity = self._fill()
        if entity is None:
            raise NoMoreEntitiesError("No more entities in XRY report")
        self._peeked = None
        self._entity_count += 1
        return entity

    def peek(self) -> XryEntity:
        """Return the next entity without consuming it."""
        entity = self._fill()
        if entity is None:
            raise NoMoreEntitiesError("No more entities in XRY report")
        return entity

    def __iter__(self) -> Iterator[XryEntity]:
        while self.has_next():
            yield self.next()

    @property
    def stats(self) -> dict:
        return {
            "lines_read": self._line_count,
            "entities_consumed": self._entity_count,
        }

    def _fill(self) -> Optional[XryEntity]:
        # Single-slot cache: read only when empty
        if self._peeked is None and not self._exhausted:
            self._peeked = self._read_entity()
        return self._peeked

    def _read_entity(self) -> Optional[XryEntity]:
        block: List[str] = []
        while True:
            line = self._read_line()
            if line is None:
                self._exhausted = True
                break
            if not line.strip():
                if block:
                    break
                continue
            block.append(line)

        if not block:
            return None
        return XryEntity(tuple(block))

    def _read_line(self) -> Optional[str]:
        try:
            line = next(self._lines)
        except StopIteration:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise ReportReadError(
                f"Failed to read XRY report after line {self._line_count}: {exc}",
                self.report_path,
            ) from exc

        self._line_count += 1
        if self._first_line:
            self._first_line = False
            line = line.lstrip("\ufeff")
        return line.rstrip("\r\n")


def detect_encoding(path: Path, default: str = "utf-8") -> str:
    """
    Detect the text encoding of an XRY report from its byte order mark.

    XRY writes UTF-16 LE with a BOM by default; UTF-8 exports may carry a BOM.

    Raises:
        ReportReadError: If the file cannot be opened
    """
    try:
        with path.open("rb") as handle:
            head = handle.read(4)
    except OSError as exc:
        raise ReportReadError(f"Cannot open XRY report: {exc}", path) from exc

    if head.startswith(codecs.BOM_UTF16_LE) or head.startswith(codecs.BOM_UTF16_BE):
        return "utf-16"
    if head.startswith(codecs.BOM_UTF8):
        return "utf-8-sig"
    return default


def report_type_from_filename(path: Path) -> str:
    """
    Derive a report type from an export file name.

    Example:
        >>> report_type_from_filename(Path("Messages-SMS.txt"))
        'messages/sms'
    """
    return normalize_name(path.stem).replace("-", "/")


class XryFileReader(XryEntityReader):
    """
    Entity reader over an exported XRY report file.

    The header entity is consumed on open; report_type comes from its
    ``[Type]`` pair, falling back to the file name. A numbered first entity
    (``Call #1``) is data, not a header, and is left for the caller.

    Example:
        >>> with XryFileReader(Path("Calls.txt")) as reader:
        ...     for entity in reader:
        ...         print(entity.title)
    """

    def __init__(self, report_path: Path, default_encoding: str = "utf-8"):
        report_path = Path(report_path)
        self.encoding = detect_encoding(report_path, default_encoding)
        try:
            self._handle: IO[str] = report_path.open("r", encoding=self.encoding, newline=None)
        except (OSError, LookupError) as exc:
            raise ReportReadError(f"Cannot open XRY report: {exc}", report_path) from exc

        super().__init__(self._handle, report_path=report_path)

        try:
            self.header: Optional[XryEntity] = None
            if self.has_next() and not self.peek().is_numbered:
                self.header = self.next()
        except ReportReadError:
            self.close()
            raise

        if self.header is None:
            LOGGER.warning("XRY report has no header entity: %s", report_path)
        self.header_pairs: Tuple[XryKeyValuePair, ...] = tuple(
            XryKeyValuePair.from_line(line)
            for line in (self.header.lines if self.header else ())
            if is_pair(line)
        )
        # Header is not a data entity
        self._entity_count = 0
        self.report_type = self._resolve_report_type()

    def _resolve_report_type(self) -> str:
        for pair in self.header_pairs:
            if pair.has_key(HEADER_TYPE_KEY) and pair.value:
                return normalize_name(pair.value)
        return report_type_from_filename(self.report_path)

    def close(self) -> None:
        self._handle.close()

    def __enter__(self) -> "XryFileReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def is_xry_report(path: Path, extensions: Iterable[str] = (".txt",)) -> bool:
    """
    True if path looks like an exported XRY report.

    Checks the extension and that the header entity carries at least one
    key/value pair. Unreadable files are not reports.
    """
    path = Path(path)
    allowed = {ext.lower() for ext in extensions}
    if not path.is_file() or path.suffix.lower() not in allowed:
        return False
    try:
        with XryFileReader(path) as reader:
            return bool(reader.header_pairs)
    except ReportReadError:
        return False
