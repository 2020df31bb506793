"""
Closed key catalogs for XRY report formats.

Each report format declares its recognized keys as a StrEnum whose values are
the key display names, together with an immutable table mapping every key to
the attribute type it produces (None when the key needs special handling or
is not mapped yet). Namespaces and meta keys are StrEnums as well.

Example:
    class BookmarkKey(StrEnum):
        DOMAIN = "domain"
        WEB_ADDRESS = "web address"

    CATALOG = XryCatalog.build({
        BookmarkKey.DOMAIN: AttributeType.DOMAIN,
        BookmarkKey.WEB_ADDRESS: None,
    })
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Type, TypeVar

from core.enums import AttributeType

from .key_value import XryKeyValuePair, is_namespace, normalize_name

__all__ = ["PARSER_NAME", "XryCatalog", "XryMetaKey", "lookup"]

# Source label attached to every attribute and diagnostic
PARSER_NAME = "XRY DSP"

E = TypeVar("E", bound=StrEnum)


class XryMetaKey(StrEnum):
    """Keys that govern segment reassembly rather than artifact content."""

    REFERENCE_NUMBER = "reference number"
    SEGMENT_COUNT = "segments"
    SEGMENT_NUMBER = "segment number"


def lookup(enum_cls: Type[E], name: str) -> Optional[E]:
    """Return the enum member whose display name matches, or None."""
    try:
        return enum_cls(normalize_name(name))
    except ValueError:
        return None


@dataclass(frozen=True)
class XryCatalog:
    """Static recognition tables for one report format."""

    key_types: Mapping[str, Optional[AttributeType]]
    namespaces: frozenset
    meta_keys: frozenset = frozenset()
    text_keys: frozenset = frozenset()

    @classmethod
    def build(
        cls,
        key_types: Mapping[StrEnum, Optional[AttributeType]],
        *,
        namespaces: Iterable[str] = (),
        meta_keys: Iterable[str] = (),
        text_keys: Iterable[str] = (),
    ) -> "XryCatalog":
        return cls(
            key_types=MappingProxyType({str(key): attr for key, attr in key_types.items()}),
            namespaces=frozenset(str(ns) for ns in namespaces if str(ns)),
            meta_keys=frozenset(str(key) for key in meta_keys),
            text_keys=frozenset(str(key) for key in text_keys),
        )

    def is_key(self, name: str) -> bool:
        return normalize_name(name) in self.key_types

    def is_meta_key(self, name: str) -> bool:
        return normalize_name(name) in self.meta_keys

    def is_text_key(self, name: str) -> bool:
        return normalize_name(name) in self.text_keys

    def is_namespace(self, line: str) -> bool:
        return is_namespace(line, self.namespaces)

    def attribute_type(self, name: str) -> Optional[AttributeType]:
        return self.key_types.get(normalize_name(name))

    def can_process(self, pair: XryKeyValuePair) -> bool:
        """True if the pair's key is a recognized, non-meta key."""
        return self.is_key(pair.key) and not self.is_meta_key(pair.key)
