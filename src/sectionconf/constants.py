#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sectionconf/constants.py
"""Constants shared by the sectionconf parsers, renderers and document model.

Text grammar
------------
The characters below define the line grammar::

    ; pre-comment for the section
    [Section] # trailing comment
    Name = "Value" ; trailing comment

Binary layout
-------------
Counts are 4-byte signed little-endian integers. Strings are UTF-8 bytes
prefixed with their byte length as a 7-bit variable-length integer.
"""

from __future__ import annotations

# Text grammar
DEFAULT_COMMENT_CHARS: tuple[str, ...] = ("#", ";", "'")
ESCAPE_CHAR = "\\"
QUOTE_CHAR = '"'
SECTION_OPEN = "["
SECTION_CLOSE = "]"
ASSIGNMENT_OPERATOR = "="

# Characters that carry structural meaning and can never act as comment delimiters
RESERVED_COMMENT_CHARS: frozenset[str] = frozenset(
    {ESCAPE_CHAR, QUOTE_CHAR, SECTION_OPEN, SECTION_CLOSE, ASSIGNMENT_OPERATOR}
)

DEFAULT_GLOBAL_SECTION_NAME = "General"
DEFAULT_CASE_SENSITIVE = True

# I/O
DEFAULT_ENCODING = "utf-8"
DEFAULT_FALLBACK_ENCODINGS: tuple[str, ...] = ("utf-8", "utf-8-sig", "latin-1")
DEFAULT_NEWLINE = "\n"

# Binary layout
INT32_FORMAT = "<i"
INT32_SIZE = 4
INT32_MAX = 2**31 - 1
VARINT_GROUP_BITS = 7
VARINT_CONTINUATION = 0x80
VARINT_MAX_GROUPS = 5
DEFAULT_MAX_STRING_BYTES = 16 * 1024 * 1024
