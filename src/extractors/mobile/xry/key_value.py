"""
Key/value line tokenizer for XRY report entities.

Every data line of an XRY entity has the form::

    [Key]   Value

where the key sits inside square brackets and the value is free text. A
line consisting solely of a namespace label (``From``, ``To``,
``Participant``) scopes the pairs that follow it.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Deque, Iterable, List

__all__ = [
    "XryKeyValuePair",
    "collect_continuation",
    "is_pair",
    "is_namespace",
    "normalize_name",
]

# Leading bracketed key, then the value portion (may be empty)
PAIR_PATTERN = re.compile(r"^\[([^\[\]]*\S[^\[\]]*)\](.*)$")


def normalize_name(name: str) -> str:
    """Normalize a key or namespace label for catalog matching."""
    return name.strip().lower()


def is_pair(line: str) -> bool:
    """True iff the trimmed line starts with a non-empty bracketed key."""
    return PAIR_PATTERN.match(line.strip()) is not None


def is_namespace(line: str, namespaces: Iterable[str]) -> bool:
    """True iff the trimmed line equals one of the namespace labels, ignoring case."""
    normalized = normalize_name(line)
    if not normalized:
        return False
    return any(normalized == normalize_name(namespace) for namespace in namespaces)


@dataclass(frozen=True, slots=True)
class XryKeyValuePair:
    """
    A single parsed ``[key] value`` line.

    Attributes:
        key: Key text from inside the brackets, trimmed (original case)
        value: Value text, trimmed (original case)
        namespace: Namespace in effect for this line ("" when none)
    """

    key: str
    value: str
    namespace: str = ""

    @classmethod
    def from_line(cls, line: str, namespace: str = "") -> "XryKeyValuePair":
        """
        Parse a pair line.

        Callers filter with is_pair() first; non-pair lines raise ValueError.
        """
        match = PAIR_PATTERN.match(line.strip())
        if match is None:
            raise ValueError(f"Line is not an XRY key value pair: {line!r}")
        return cls(
            key=match.group(1).strip(),
            value=match.group(2).strip(),
            namespace=namespace.strip(),
        )

    @property
    def normalized_key(self) -> str:
        return normalize_name(self.key)

    @property
    def normalized_namespace(self) -> str:
        return normalize_name(self.namespace)

    def has_key(self, name: str) -> bool:
        """Case-insensitive comparison against a key display name."""
        return self.normalized_key == normalize_name(name)

    def with_value(self, value: str) -> "XryKeyValuePair":
        return XryKeyValuePair(key=self.key, value=value, namespace=self.namespace)

    def __str__(self) -> str:
        if self.namespace:
            return f"{self.namespace} : [{self.key}] {self.value}"
        return f"[{self.key}] {self.value}"


def collect_continuation(lines: Deque[str], is_namespace_line: Callable[[str], bool]) -> List[str]:
    """
    Pop the lines that continue a wrapped value.

    Consumes lines from the front of the queue until the next pair or
    namespace line. Returns the trimmed, non-empty lines in order.
    """
    parts: List[str] = []
    while lines and not is_pair(lines[0]) and not is_namespace_line(lines[0]):
        line = lines.popleft().strip()
        if line:
            parts.append(line)
    return parts
