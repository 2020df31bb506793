"""Tests for report type routing."""

import pytest

from extractors.exceptions import UnsupportedReportError
from extractors.mobile.xry.calls import XryCallsParser
from extractors.mobile.xry.contacts import XryContactsParser
from extractors.mobile.xry.factory import (
    get_parser,
    normalize_report_type,
    supported_report_types,
    supports,
)
from extractors.mobile.xry.messages import XryMessagesParser
from extractors.mobile.xry.web_bookmarks import XryWebBookmarksParser


@pytest.mark.parametrize("report_type,parser_cls", [
    ("Calls", XryCallsParser),
    ("Contacts/Contacts", XryContactsParser),
    ("Messages/SMS", XryMessagesParser),
    ("messages-sms", XryMessagesParser),
    (" Web / Bookmarks ", XryWebBookmarksParser),
])
def test_get_parser(report_type, parser_cls):
    assert isinstance(get_parser(report_type), parser_cls)


def test_parsers_are_fresh_instances():
    assert get_parser("Calls") is not get_parser("Calls")


def test_unsupported_type():
    with pytest.raises(UnsupportedReportError) as exc_info:
        get_parser("Device/General Information")
    assert exc_info.value.report_type == "Device/General Information"
    assert not supports("Device/General Information")


def test_normalize_report_type():
    assert normalize_report_type("Messages-SMS") == "messages/sms"
    assert normalize_report_type("CALLS") == "calls"


def test_supported_report_types():
    assert supported_report_types() == ["calls", "contacts/contacts", "messages/sms", "web/bookmarks"]
    assert all(supports(report_type) for report_type in supported_report_types())
