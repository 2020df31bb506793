"""
Mobile extractors - reports produced by mobile forensic acquisition tools.

This module provides extractors for:
- XRY: Messages, calls, contacts and web bookmarks from XRY text exports

Usage:
    from extractors.mobile.xry import MobileXryExtractor
"""

from __future__ import annotations

from .xry import MobileXryExtractor

__all__ = [
    "MobileXryExtractor",
]
