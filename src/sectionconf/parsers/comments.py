#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sectionconf/parsers/comments.py
"""Comment detection for single configuration lines.

The detector decides whether a trimmed line carries a comment and where the
comment starts. It looks only at the first delimiter on the line:

- a delimiter preceded by ``\\`` is escaped, and the whole line is then
  treated as comment-free
- a delimiter with a ``"`` somewhere before it and a ``"`` at or after it is
  treated as part of a quoted value

The quote check only asks whether a quote exists on each side. It does not
pair quotes, so ``a = "x" ; "y"`` is read as having no comment. Existing
files depend on this behavior.

Examples
--------
    >>> detector = CommentDetector()
    >>> detector.detect('Host = "local;host"') is None
    True
    >>> match = detector.detect("Port = 8080 # default")
    >>> match.index, match.comment.symbol, match.comment.text
    (12, '#', 'default')

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from sectionconf.constants import DEFAULT_COMMENT_CHARS, ESCAPE_CHAR, QUOTE_CHAR
from sectionconf.model import Comment


@dataclass(frozen=True)
class CommentMatch:
    """A comment found on a line.

    Parameters
    ----------
    comment : Comment
        The parsed comment
    index : int
        Position of the delimiter in the trimmed line

    """

    comment: Comment
    index: int

    @property
    def is_pre_comment(self) -> bool:
        """Return True when the comment fills the whole line."""
        return self.index == 0


def is_in_quote_marks(line: str, index: int) -> bool:
    """Return True if a quote occurs before ``index`` and another at or after it."""
    return QUOTE_CHAR in line[:index] and QUOTE_CHAR in line[index:]


class CommentDetector:
    """Find the comment on a trimmed configuration line.

    Parameters
    ----------
    comment_chars : iterable of str, default = ("#", ";", "'")
        Delimiters that start a comment

    """

    def __init__(self, comment_chars: Iterable[str] = DEFAULT_COMMENT_CHARS):
        self.comment_chars: frozenset[str] = frozenset(comment_chars)

    def find_delimiter(self, line: str) -> int:
        """Return the index of the first comment delimiter in ``line``, or -1."""
        for index, char in enumerate(line):
            if char in self.comment_chars:
                return index
        return -1

    def detect(self, line: str) -> Optional[CommentMatch]:
        """Classify ``line``.

        Parameters
        ----------
        line : str
            A line with surrounding whitespace already removed

        Returns
        -------
        CommentMatch or None
            The comment and the delimiter position, or None when the line has
            no comment (no delimiter, an escaped delimiter, or a delimiter
            inside quotes)

        """
        index = self.find_delimiter(line)
        if index < 0:
            return None

        if index > 0 and line[index - 1] == ESCAPE_CHAR:
            return None

        if is_in_quote_marks(line, index):
            return None

        return CommentMatch(comment=Comment(symbol=line[index], text=line[index + 1 :].strip()), index=index)

    def unescape(self, text: str) -> str:
        """Drop the ``\\`` in front of every escaped comment delimiter."""
        if ESCAPE_CHAR not in text:
            return text
        for char in self.comment_chars:
            text = text.replace(ESCAPE_CHAR + char, char)
        return text
