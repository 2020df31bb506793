"""
Artifact records built from XRY entities.

Each record kind has a mutable builder that accumulates fields while the
entity's key/value pairs are routed, and a frozen record produced by
build(). Builders expose is_empty(); empty records are never emitted.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple, Union

from core.enums import (
    AttributeType,
    CallMediaType,
    CommunicationDirection,
    MessageReadStatus,
)

__all__ = [
    "Attribute",
    "Message",
    "MessageBuilder",
    "CallLog",
    "CallLogBuilder",
    "Contact",
    "ContactBuilder",
    "WebBookmark",
    "WebBookmarkBuilder",
]


@dataclass(frozen=True, slots=True)
class Attribute:
    """A typed extra field kept in a record's other-attributes bag."""

    type: AttributeType
    value: Union[str, int]
    source: str = ""

    def to_dict(self) -> dict:
        return {"type": str(self.type), "value": self.value, "source": self.source}


# =============================================================================
# Messages
# =============================================================================

@dataclass(frozen=True, slots=True)
class Message:
    message_type: str
    direction: CommunicationDirection
    sender_id: str
    recipient_ids: Tuple[str, ...]
    date_time: int  # seconds since epoch, 0 = unknown
    read_status: MessageReadStatus
    subject: str
    text: str
    thread_id: str
    other_attributes: Tuple[Attribute, ...]


@dataclass
class MessageBuilder:
    """
    Accumulates message fields.

    message_type names the producing parser and does not count towards
    is_empty().
    """

    message_type: str = ""
    direction: CommunicationDirection = CommunicationDirection.UNKNOWN
    sender_id: str = ""
    recipient_ids: List[str] = field(default_factory=list)
    date_time: int = 0
    read_status: MessageReadStatus = MessageReadStatus.UNKNOWN
    subject: str = ""
    text: str = ""
    thread_id: str = ""
    other_attributes: List[Attribute] = field(default_factory=list)

    def set_direction(self, direction: CommunicationDirection) -> None:
        self.direction = direction

    def set_sender_id(self, sender_id: str) -> None:
        self.sender_id = sender_id

    def add_recipient_id(self, recipient_id: str) -> None:
        self.recipient_ids.append(recipient_id)

    def set_date_time(self, date_time: int) -> None:
        self.date_time = date_time

    def set_read_status(self, status: MessageReadStatus) -> None:
        self.read_status = status

    def set_text(self, text: str) -> None:
        self.text = text

    def add_other_attribute(self, attribute: Attribute) -> None:
        self.other_attributes.append(attribute)

    def is_empty(self) -> bool:
        return (
            not self.sender_id
            and not self.recipient_ids
            and self.date_time == 0
            and self.direction is CommunicationDirection.UNKNOWN
            and self.read_status is MessageReadStatus.UNKNOWN
            and not self.subject
            and not self.text
            and not self.thread_id
            and not self.other_attributes
        )

    def build(self) -> Message:
        return Message(
            message_type=self.message_type,
            direction=self.direction,
            sender_id=self.sender_id,
            recipient_ids=tuple(self.recipient_ids),
            date_time=self.date_time,
            read_status=self.read_status,
            subject=self.subject,
            text=self.text,
            thread_id=self.thread_id,
            other_attributes=tuple(self.other_attributes),
        )


# =============================================================================
# Call logs
# =============================================================================

@dataclass(frozen=True, slots=True)
class CallLog:
    direction: CommunicationDirection
    caller_id: str
    callee_ids: Tuple[str, ...]
    start_time: int  # seconds since epoch, 0 = unknown
    end_time: int
    media_type: CallMediaType
    other_attributes: Tuple[Attribute, ...]


@dataclass
class CallLogBuilder:
    direction: CommunicationDirection = CommunicationDirection.UNKNOWN
    caller_id: str = ""
    callee_ids: List[str] = field(default_factory=list)
    start_time: int = 0
    end_time: int = 0
    media_type: CallMediaType = CallMediaType.UNKNOWN
    other_attributes: List[Attribute] = field(default_factory=list)

    def set_direction(self, direction: CommunicationDirection) -> None:
        self.direction = direction

    def has_caller_id(self) -> bool:
        return bool(self.caller_id)

    def set_caller_id(self, caller_id: str) -> None:
        self.caller_id = caller_id

    def add_callee_id(self, callee_id: str) -> None:
        self.callee_ids.append(callee_id)

    def set_start_time(self, start_time: int) -> None:
        self.start_time = start_time

    def add_other_attribute(self, attribute: Attribute) -> None:
        self.other_attributes.append(attribute)

    def is_empty(self) -> bool:
        return (
            not self.caller_id
            and not self.callee_ids
            and self.direction is CommunicationDirection.UNKNOWN
            and self.start_time == 0
            and self.end_time == 0
            and not self.other_attributes
        )

    def build(self) -> CallLog:
        return CallLog(
            direction=self.direction,
            caller_id=self.caller_id,
            callee_ids=tuple(self.callee_ids),
            start_time=self.start_time,
            end_time=self.end_time,
            media_type=self.media_type,
            other_attributes=tuple(self.other_attributes),
        )


# =============================================================================
# Contacts
# =============================================================================

@dataclass(frozen=True, slots=True)
class Contact:
    name: str
    phone_number: str
    home_phone_number: str
    mobile_phone_number: str
    email_address: str
    other_attributes: Tuple[Attribute, ...]


@dataclass
class ContactBuilder:
    name: str = ""
    phone_number: str = ""
    home_phone_number: str = ""
    mobile_phone_number: str = ""
    email_address: str = ""
    other_attributes: List[Attribute] = field(default_factory=list)

    def set_name(self, name: str) -> None:
        self.name = name

    def set_phone_number(self, phone_number: str) -> None:
        self.phone_number = phone_number

    def set_home_phone_number(self, phone_number: str) -> None:
        self.home_phone_number = phone_number

    def set_mobile_phone_number(self, phone_number: str) -> None:
        self.mobile_phone_number = phone_number

    def add_other_attribute(self, attribute: Attribute) -> None:
        self.other_attributes.append(attribute)

    def is_empty(self) -> bool:
        return (
            not self.name
            and not self.phone_number
            and not self.home_phone_number
            and not self.mobile_phone_number
            and not self.email_address
            and not self.other_attributes
        )

    def build(self) -> Contact:
        return Contact(
            name=self.name,
            phone_number=self.phone_number,
            home_phone_number=self.home_phone_number,
            mobile_phone_number=self.mobile_phone_number,
            email_address=self.email_address,
            other_attributes=tuple(self.other_attributes),
        )


# =============================================================================
# Web bookmarks
# =============================================================================

@dataclass(frozen=True, slots=True)
class WebBookmark:
    url: str
    title: str
    creation_time: int
    prog_name: str
    other_attributes: Tuple[Attribute, ...]


@dataclass
class WebBookmarkBuilder:
    url: str = ""
    title: str = ""
    creation_time: int = 0
    prog_name: str = ""
    other_attributes: List[Attribute] = field(default_factory=list)

    def set_url(self, url: str) -> None:
        self.url = url

    def set_prog_name(self, prog_name: str) -> None:
        self.prog_name = prog_name

    def add_other_attribute(self, attribute: Attribute) -> None:
        self.other_attributes.append(attribute)

    def is_empty(self) -> bool:
        # Only the URL is required
        return not self.url

    def build(self) -> WebBookmark:
        return WebBookmark(
            url=self.url,
            title=self.title,
            creation_time=self.creation_time,
            prog_name=self.prog_name,
            other_attributes=tuple(self.other_attributes),
        )
