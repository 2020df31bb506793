"""
Core Enumerations

Centralized enum definitions for consistent typing across the codebase.
Using StrEnum (Python 3.11+) for string-based enums that serialize naturally.
"""

from enum import StrEnum


class ArtifactType(StrEnum):
    """Artifact kinds handed to the artifact sink."""

    MESSAGE = "message"
    CALL_LOG = "call_log"
    CONTACT = "contact"
    WEB_BOOKMARK = "web_bookmark"


class AttributeType(StrEnum):
    """Typed extra fields carried in a record's other-attributes bag."""

    # Phone numbers
    PHONE_NUMBER = "phone_number"
    PHONE_NUMBER_FROM = "phone_number_from"
    PHONE_NUMBER_TO = "phone_number_to"

    # People
    NAME = "name"
    NAME_PERSON = "name_person"
    EMAIL_HOME = "email_home"
    LOCATION = "location"

    # Message content
    TEXT = "text"
    DIRECTION = "direction"
    IS_DELETED = "is_deleted"

    # Time
    DATETIME = "datetime"
    DATETIME_START = "datetime_start"

    # Applications and web
    PROG_NAME = "prog_name"
    DOMAIN = "domain"


class CommunicationDirection(StrEnum):
    """Direction of a message or call relative to the device."""

    INCOMING = "incoming"
    OUTGOING = "outgoing"
    UNKNOWN = "unknown"


class MessageReadStatus(StrEnum):
    """Read state of a message."""

    READ = "read"
    UNREAD = "unread"
    UNKNOWN = "unknown"


class CallMediaType(StrEnum):
    """Media carried by a call."""

    AUDIO = "audio"
    VIDEO = "video"
    UNKNOWN = "unknown"


class ExtractionStatus(StrEnum):
    """Status values for per-report processing."""

    OK = "ok"
    PARTIAL = "partial"  # Report parsed, some lines discarded
    ERROR = "error"
    SKIPPED = "skipped"


class Severity(StrEnum):
    """Diagnostic severity for parse findings."""

    INFO = "info"
    WARNING = "warning"
    SEVERE = "severe"
