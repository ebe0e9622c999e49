#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sectionconf/parsers/__init__.py
"""Parsers that build a Configuration from text or binary input."""

from sectionconf.parsers.base import BaseParser
from sectionconf.parsers.binary import BinaryParser, BinaryReader
from sectionconf.parsers.comments import CommentDetector, CommentMatch
from sectionconf.parsers.text import TextParser

__all__ = [
    "BaseParser",
    "BinaryParser",
    "BinaryReader",
    "CommentDetector",
    "CommentMatch",
    "TextParser",
]
