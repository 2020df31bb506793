"""
Report type to parser mapping.

Report types come from the ``[Type]`` pair of a report header (e.g.
``Messages/SMS``) or the export file name (``Messages-SMS.txt``); both are
normalized so ``-`` and ``/`` are interchangeable and case is ignored.
"""
from __future__ import annotations

from typing import Callable, Dict, Union

from ...exceptions import UnsupportedReportError
from .calls import XryCallsParser
from .contacts import XryContactsParser
from .key_value import normalize_name
from .messages import XryMessagesParser
from .web_bookmarks import XryWebBookmarksParser

__all__ = ["XryParser", "get_parser", "normalize_report_type", "supported_report_types", "supports"]

XryParser = Union[XryCallsParser, XryContactsParser, XryMessagesParser, XryWebBookmarksParser]

_PARSERS: Dict[str, Callable[[], XryParser]] = {
    "calls": XryCallsParser,
    "contacts/contacts": XryContactsParser,
    "messages/sms": XryMessagesParser,
    "web/bookmarks": XryWebBookmarksParser,
}


def normalize_report_type(report_type: str) -> str:
    """
    Normalize a report type for lookup.

    Example:
        >>> normalize_report_type(" Messages-SMS ")
        'messages/sms'
    """
    parts = normalize_name(report_type).replace("-", "/").split("/")
    return "/".join(part.strip() for part in parts)


def supports(report_type: str) -> bool:
    return normalize_report_type(report_type) in _PARSERS


def supported_report_types() -> list[str]:
    return sorted(_PARSERS)


def get_parser(report_type: str) -> XryParser:
    """
    Return a fresh parser for report_type.

    Raises:
        UnsupportedReportError: If no parser handles the type
    """
    factory = _PARSERS.get(normalize_report_type(report_type))
    if factory is None:
        raise UnsupportedReportError(report_type)
    return factory()
