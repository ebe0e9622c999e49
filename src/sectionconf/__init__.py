"""sectionconf - ordered, comment-preserving INI-style configuration documents.

sectionconf reads line-oriented configuration text into an ordered document
of sections and settings, writes it back in canonical form, and encodes the
same document in a compact binary layout.

Key Features
------------
- Ordered sections and settings with lookup-or-create indexing
- Per-document case-sensitivity and comment-delimiter policy
- Trailing comments and pre-comments kept on the entity they annotate
- Quoted values may contain comment delimiters (``Host = "local;host"``)
- Line-numbered parse errors; no partial documents
- Binary encoding of names and raw values

Examples
--------
Round trip through text:

    >>> from sectionconf import dumps, load_text
    >>> config = load_text("[Server]\\n; Listen port\\nPort = 8080\\n")
    >>> config["Server"]["Port"].value
    '8080'
    >>> print(dumps(config), end="")
    [Server]
    ; Listen port
    Port = 8080

Binary encoding:

    >>> from sectionconf import dump_binary, load_binary
    >>> load_binary(dump_binary(config)).to_dict()
    {'Server': {'Port': '8080'}}

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "sectionconf requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from sectionconf.api import dump_binary, dumps, load, load_binary, load_text, save, save_binary
from sectionconf.exceptions import (
    DecodeError,
    ParsingError,
    RenderingError,
    SectionConfError,
    StructureError,
    ValidationError,
)
from sectionconf.logging_utils import disable_logging, enable_logging
from sectionconf.model import Comment, Configuration, Section, Setting
from sectionconf.options import (
    BinaryParserOptions,
    BinaryRendererOptions,
    ConfigurationOptions,
    TextParserOptions,
    TextRendererOptions,
)
from sectionconf.progress import ProgressCallback, ProgressEvent

__all__ = [
    "__version__",
    "load",
    "load_text",
    "load_binary",
    "dumps",
    "save",
    "dump_binary",
    "save_binary",
    "Comment",
    "Configuration",
    "Section",
    "Setting",
    "ConfigurationOptions",
    "TextParserOptions",
    "TextRendererOptions",
    "BinaryParserOptions",
    "BinaryRendererOptions",
    "SectionConfError",
    "ValidationError",
    "StructureError",
    "ParsingError",
    "DecodeError",
    "RenderingError",
    "ProgressCallback",
    "ProgressEvent",
    "enable_logging",
    "disable_logging",
]
