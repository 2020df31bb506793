from pathlib import Path

import pytest

SAMPLE_CALLS = """\
XRY Report
[Type]\tCalls

Call #1
[Direction]\tIncoming
From
[Tel]\t+46701234567
[Name (Matched)]\tAlice
[Time]\t1/3/1990 1:23:54 AM UTC+4

Call #2
[Direction]\tOutgoing
To
[Tel]\t+46709876543
[Time]\t6/21/2019 11:05:02 PM (Device)
"""

SAMPLE_MESSAGES = """\
XRY Report
[Type]\tMessages/SMS

SMS #1
[Type]\tIncoming
[Status]\tRead
From
[Tel]\t+46701234567
[Text]\tSee you at
  the station
[Time]\t2/14/2020 8:00:00 AM UTC (Network)

SMS #2
[Type]\tOutgoing
To
[Tel]\t+46709876543
[Reference Number]\t7
[Segment Number]\t1
[Text]\tHello

SMS #3
[Reference Number]\t7
[Segment Number]\t2
[Text]\tWorld
"""

SAMPLE_CONTACTS = """\
XRY Report
[Type]\tContacts/Contacts

Contact #1
[Name]\tAlice
[Mobile]\t+46701234567
[Email Home]\talice@example.com
"""

SAMPLE_BOOKMARKS = """\
XRY Report
[Type]\tWeb/Bookmarks

Bookmark #1
[Web Address]\thttps://example.com/
[Domain]\texample.com
[Application]\tChrome
"""

SAMPLE_UNSUPPORTED = """\
XRY Report
[Type]\tDevice/General Information

General #1
[IMEI]\t356938035643809
"""


@pytest.fixture()
def xry_export(tmp_path: Path) -> Path:
    """Create an XRY export folder with one report per supported type plus one unsupported."""
    folder = tmp_path / "xry_export"
    folder.mkdir()
    (folder / "Calls.txt").write_text(SAMPLE_CALLS, encoding="utf-8")
    (folder / "Messages-SMS.txt").write_bytes(SAMPLE_MESSAGES.encode("utf-16"))
    (folder / "Contacts-Contacts.txt").write_text(SAMPLE_CONTACTS, encoding="utf-8")
    (folder / "Web-Bookmarks.txt").write_text(SAMPLE_BOOKMARKS, encoding="utf-8")
    (folder / "Device-General Information.txt").write_text(SAMPLE_UNSUPPORTED, encoding="utf-8")
    (folder / "export.xml").write_text("<xry/>", encoding="utf-8")
    return folder
