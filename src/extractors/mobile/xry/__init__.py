"""
XRY report parsing.

Pipeline, leaf to root:
    reader (entities) -> key_value (pairs) -> compiler (+ segments)
    -> records (builders) -> format parsers -> sink

Usage:
    from extractors.mobile.xry import XryFileReader, get_parser

    with XryFileReader(path) as reader:
        parser = get_parser(reader.report_type)
        parser.parse(reader, sink, XryDiagnostics(parser.parser_name, path))
"""

from .calls import XryCallsParser
from .contacts import XryContactsParser
from .diagnostics import XryDiagnostics
from .extractor import MobileXryExtractor
from .factory import get_parser, normalize_report_type, supports
from .key_value import XryKeyValuePair
from .messages import XryMessagesParser
from .processor import XryProcessingResult, XryReportProcessor
from .reader import XryEntity, XryEntityReader, XryFileReader, is_xry_report
from .records import CallLog, Contact, Message, WebBookmark
from .timestamps import DateTimeParseError, to_epoch_seconds
from .web_bookmarks import XryWebBookmarksParser

__all__ = [
    "CallLog",
    "Contact",
    "DateTimeParseError",
    "Message",
    "MobileXryExtractor",
    "WebBookmark",
    "XryCallsParser",
    "XryContactsParser",
    "XryDiagnostics",
    "XryEntity",
    "XryEntityReader",
    "XryFileReader",
    "XryKeyValuePair",
    "XryMessagesParser",
    "XryProcessingResult",
    "XryReportProcessor",
    "XryWebBookmarksParser",
    "get_parser",
    "is_xry_report",
    "normalize_report_type",
    "supports",
    "to_epoch_seconds",
]
