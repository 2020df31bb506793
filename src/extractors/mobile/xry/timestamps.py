"""
Date/time normalization for XRY report values.

XRY writes times in the device's US-style locale followed by optional zone
annotations, for example::

    1/3/1990 1:23:54 AM UTC+4
    6/21/2019 11:05:02 PM (Device)
    2/14/2020 8:00:00 AM UTC (Network)
    3/5/2021 4:30:00 PM (GMT-7) GMT-7 (-07:00)

Dates are month first. A trailing ``(Device)`` or ``(Network)`` locale
marker, and everything after it, is ignored. ``UTC`` is treated as ``GMT``
(they differ by under a second). Values without any zone are taken as GMT+0.
"""
from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from ..._shared.extraction_warnings import WARNING_TYPE_DATETIME_PARSE_ERROR

__all__ = [
    "DateTimeParseError",
    "remove_datetime_locale",
    "parse_xry_datetime",
    "to_epoch_seconds",
    "try_epoch_seconds",
    "epoch_or_warn",
]

LOCALE_MARKERS = ("(device)", "(network)")

# GMT, GMT+4, GMT-07:00, GMT+5:30:15
_GMT_OFFSET = r"GMT(?:[+-]\d{1,2}(?::\d{2}(?::\d{2})?)?)?"

DATETIME_PATTERN = re.compile(
    r"^(?P<month>\d{1,2})/(?P<day>\d{1,2})/(?P<year>\d{1,4})"
    r"\s+(?P<hour>\d{1,2}):(?P<minute>\d{1,2}):(?P<second>\d{1,2})"
    r"\s+(?P<meridiem>AM|PM)"
    rf"(?:\s+\((?P<paren_zone>{_GMT_OFFSET})\))?"
    rf"(?:\s+(?P<zone>{_GMT_OFFSET}))?"
    r"(?:\s+\((?P<iso_offset>Z|[+-]\d{2}:\d{2})\))?$",
    re.IGNORECASE,
)

_OFFSET_PATTERN = re.compile(r"^([+-])(\d{1,2})(?::(\d{2}))?(?::(\d{2}))?$")


class DateTimeParseError(ValueError):
    """Raised when an XRY date/time value does not match the expected layout."""

    def __init__(self, value: str, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Cannot parse XRY date time [ {value} ]: {reason}")


def remove_datetime_locale(value: str) -> str:
    """
    Strip a (Device)/(Network) locale marker and everything after it.

    Example:
        >>> remove_datetime_locale("6/21/2019 11:05:02 PM (Device)")
        '6/21/2019 11:05:02 PM '
    """
    result = value
    for marker in LOCALE_MARKERS:
        index = result.lower().find(marker)
        if index != -1:
            result = result[:index]
    return result


def _parse_offset(text: str, original: str) -> timedelta:
    """Parse '+4', '-07:00', '+5:30:15' or 'Z' into a timedelta."""
    if text.upper() == "Z" or text == "":
        return timedelta(0)
    match = _OFFSET_PATTERN.match(text)
    if match is None:
        raise DateTimeParseError(original, f"invalid offset {text!r}")
    sign, hours, minutes, seconds = match.groups()
    delta = timedelta(hours=int(hours), minutes=int(minutes or 0), seconds=int(seconds or 0))
    if delta > timedelta(hours=18):
        raise DateTimeParseError(original, f"offset out of range {text!r}")
    return -delta if sign == "-" else delta


def _gmt_offset(zone: str, original: str) -> timedelta:
    return _parse_offset(zone[3:], original)


def parse_xry_datetime(value: str) -> datetime:
    """
    Parse an XRY date/time value into a timezone-aware datetime.

    Raises:
        DateTimeParseError: If the value deviates from the expected layout
    """
    cleaned = " ".join(remove_datetime_locale(value).split())
    cleaned = cleaned.replace("UTC", "GMT")

    match = DATETIME_PATTERN.match(cleaned)
    if match is None:
        raise DateTimeParseError(value, "layout not recognized")

    offsets: List[timedelta] = []
    if match.group("paren_zone"):
        offsets.append(_gmt_offset(match.group("paren_zone"), value))
    if match.group("zone"):
        offsets.append(_gmt_offset(match.group("zone"), value))
    if match.group("iso_offset"):
        offsets.append(_parse_offset(match.group("iso_offset"), value))
    if len(set(offsets)) > 1:
        raise DateTimeParseError(value, "conflicting zone offsets")

    hour = int(match.group("hour"))
    if not 1 <= hour <= 12:
        raise DateTimeParseError(value, f"hour {hour} is not a 12-hour clock value")
    hour = hour % 12
    if match.group("meridiem").upper() == "PM":
        hour += 12

    # No zone information: assume GMT+0
    tz = timezone(offsets[0]) if offsets else timezone.utc
    try:
        return datetime(
            int(match.group("year")),
            int(match.group("month")),
            int(match.group("day")),
            hour,
            int(match.group("minute")),
            int(match.group("second")),
            tzinfo=tz,
        )
    except ValueError as exc:
        raise DateTimeParseError(value, str(exc)) from exc


def to_epoch_seconds(value: str) -> int:
    """
    Normalize an XRY date/time value to seconds since the Unix epoch.

    Example:
        >>> to_epoch_seconds("1/3/1990 1:23:54 AM UTC+4")
        631315434
    """
    return int(parse_xry_datetime(value).timestamp())


def try_epoch_seconds(value: str) -> Optional[int]:
    """Like to_epoch_seconds() but returns None on parse failure."""
    try:
        return to_epoch_seconds(value)
    except DateTimeParseError:
        return None


def epoch_or_warn(pair, diagnostics, record_kind: str) -> Optional[int]:
    """
    Normalize a time pair's value, reporting failures as a diagnostic.

    Returns None when the value cannot be parsed; the caller leaves the
    field unset.
    """
    try:
        return to_epoch_seconds(pair.value)
    except DateTimeParseError as exc:
        diagnostics.warning(
            WARNING_TYPE_DATETIME_PARSE_ERROR,
            f"Assumption about the date time formatting of {record_kind} is not right. "
            f"Here is the pair [ {pair} ] ({exc.reason})",
            item_name=pair.key,
            item_value=pair.value,
        )
        return None
