#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sectionconf/options/text.py
"""Options for configuration text parsing and rendering.

The parser options control how the line grammar is read (escape handling,
input encoding); the renderer options control the canonical text layout
(pre-comment restoration, value quoting, line endings, output encoding).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sectionconf.constants import DEFAULT_ENCODING, DEFAULT_NEWLINE
from sectionconf.exceptions import ValidationError
from sectionconf.options.base import BaseParserOptions, BaseRendererOptions


@dataclass(frozen=True)
class TextParserOptions(BaseParserOptions):
    """Configuration options for text parsing.

    Parameters
    ----------
    strip_escapes : bool, default = False
        If True, every ``\\`` that escapes a comment delimiter is removed from
        section names, setting names and values (``C:\\temp \\; x`` becomes
        ``C:\\temp ; x``). If False, the text is kept exactly as written.
    encoding : str or None, default = None
        Encoding used to decode byte input. None means detect it.

    """

    strip_escapes: bool = field(
        default=False,
        metadata={"help": "Remove the backslash from escaped comment delimiters", "importance": "core"},
    )
    encoding: str | None = field(
        default=None,
        metadata={"help": "Input encoding (auto-detected when omitted)", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate options by calling parent validation."""
        super().__post_init__()


@dataclass(frozen=True)
class TextRendererOptions(BaseRendererOptions):
    """Configuration options for text rendering.

    Parameters
    ----------
    emit_pre_comments : bool, default = True
        If True, pre-comments are written as comment lines directly above
        their section header or setting. If False they are dropped, as older
        writers of this format did.
    quote_values : bool, default = True
        If True, values that would read back differently (they contain a
        comment delimiter or start/end with whitespace) are wrapped in double
        quotes.
    newline : str, default = "\\n"
        Line terminator used in the output.
    encoding : str, default = "utf-8"
        Encoding used when the output is a path or a binary stream.

    """

    emit_pre_comments: bool = field(
        default=True,
        metadata={"help": "Write pre-comments above their section or setting", "importance": "core"},
    )
    quote_values: bool = field(
        default=True,
        metadata={"help": "Quote values that contain comment delimiters or edge whitespace", "importance": "core"},
    )
    newline: str = field(
        default=DEFAULT_NEWLINE,
        metadata={"help": "Line terminator", "importance": "advanced"},
    )
    encoding: str = field(
        default=DEFAULT_ENCODING,
        metadata={"help": "Output encoding for files and binary streams", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate the line terminator and encoding.

        Raises
        ------
        ValidationError
            If ``newline`` is not one of ``\\n``, ``\\r\\n`` or ``\\r``, or the
            encoding is empty.

        """
        super().__post_init__()
        if self.newline not in ("\n", "\r\n", "\r"):
            raise ValidationError(
                f"newline must be one of '\\n', '\\r\\n' or '\\r', got {self.newline!r}",
                parameter_name="newline",
                parameter_value=self.newline,
            )
        if not self.encoding:
            raise ValidationError(
                "encoding must not be empty", parameter_name="encoding", parameter_value=self.encoding
            )
