from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Protocol, runtime_checkable

if TYPE_CHECKING:
    from extractors.mobile.xry.records import CallLog, Contact, Message, WebBookmark


@dataclass(slots=True)
class EmittedRecord:
    kind: str
    data: Dict[str, Any]


@runtime_checkable
class ArtifactSink(Protocol):
    """
    Receives records built from parsed reports.

    Exceptions raised by a sink propagate to the caller of the parser and
    abort the current report.
    """

    def add_message(self, message: "Message") -> None:
        ...

    def add_call_log(self, call_log: "CallLog") -> None:
        ...

    def add_contact(self, contact: "Contact") -> None:
        ...

    def add_web_bookmark(self, bookmark: "WebBookmark") -> None:
        ...
