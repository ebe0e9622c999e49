#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sectionconf/parsers/text.py
"""Configuration text parser.

This module turns INI-like configuration text into a
:class:`~sectionconf.model.Configuration`. The whole input is read first and
then processed line by line:

1. Surrounding whitespace is removed and blank lines are skipped.
2. The :class:`~sectionconf.parsers.comments.CommentDetector` looks for a
   comment. A line that is only a comment is queued as a pre-comment for the
   next section or setting; otherwise the comment is cut off and kept as the
   line's trailing comment.
3. What remains is a section header (``[Name]``) or a setting
   (``Name = Value``).

The first error aborts the parse with a
:class:`~sectionconf.exceptions.ParsingError` carrying the 1-based line
number.

Examples
--------
Input::

    ; Server settings
    [Server]
    Host = "local;host"   # quoted, so ';' is part of the value
    Port = 8080

    >>> config = TextParser().parse(text)
    >>> config["Server"]["Host"].value
    'local;host'
    >>> config["Server"].pre_comments[0].text
    'Server settings'

"""

from __future__ import annotations

import logging
import re
from typing import Optional

from sectionconf.constants import ASSIGNMENT_OPERATOR, QUOTE_CHAR, SECTION_CLOSE, SECTION_OPEN
from sectionconf.exceptions import ParsingError, SectionConfError
from sectionconf.model import Comment, Configuration, Section, Setting
from sectionconf.options.text import TextParserOptions
from sectionconf.parsers.base import BaseParser, ParserInput
from sectionconf.parsers.comments import CommentDetector
from sectionconf.progress import ProgressCallback

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> list[str]:
    """Split ``text`` on ``\\r\\n``, ``\\r`` and ``\\n`` only."""
    lines = _LINE_BREAK.split(text)
    # A trailing line break does not open another line
    if lines and lines[-1] == "":
        lines.pop()
    return lines


class TextParser(BaseParser):
    r"""Parse configuration text into a Configuration.

    Parameters
    ----------
    options : TextParserOptions or None, default = None
        Parser configuration options
    progress_callback : ProgressCallback or None, default = None
        Optional callback for progress updates

    Examples
    --------
    Basic parsing:

        >>> config = TextParser().parse("[server]\nhost = localhost\nport = 8080")
        >>> config["server"].to_dict()
        {'host': 'localhost', 'port': '8080'}

    Settings before the first header, collected in the global section:

        >>> from sectionconf.options import ConfigurationOptions
        >>> options = TextParserOptions(configuration=ConfigurationOptions(implicit_section=True))
        >>> TextParser(options).parse("debug = true").global_section.to_dict()
        {'debug': 'true'}

    """

    def __init__(self, options: TextParserOptions | None = None, progress_callback: Optional[ProgressCallback] = None):
        """Initialize the text parser with options and progress callback."""
        BaseParser._validate_options_type(options, TextParserOptions, "text parser")
        options = options or TextParserOptions()
        super().__init__(options, progress_callback)
        self.options: TextParserOptions = options
        self.detector = CommentDetector(options.configuration.comment_chars)

    def parse(self, input_data: ParserInput) -> Configuration:
        """Parse configuration input.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], IO[str] or bytes
            ``str`` is treated as configuration text. Use a ``Path`` (or
            :func:`sectionconf.api.load`) to read a file.

        Returns
        -------
        Configuration
            The parsed document

        Raises
        ------
        ParsingError
            If the text violates the grammar or the input cannot be decoded
        FileError
            If a path cannot be read

        """
        try:
            content = self._load_text_content(input_data, self.options.encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise ParsingError(f"Could not decode configuration input: {e}", original_error=e) from e
        return self.parse_text(content)

    def parse_text(self, text: str) -> Configuration:
        """Parse configuration text that is already in memory.

        Raises
        ------
        ParsingError
            On the first line that violates the grammar

        """
        lines = split_lines(text)
        total = len(lines)
        self._emit_progress("started", "Parsing configuration text", current=0, total=total)

        config = Configuration(self.options.configuration)
        current_section: Optional[Section] = None
        pre_comments: list[Comment] = []

        try:
            for line_number, raw_line in enumerate(lines, start=1):
                line = raw_line.strip()
                if not line:
                    continue

                comment: Optional[Comment] = None
                match = self.detector.detect(line)
                if match is not None:
                    if match.is_pre_comment:
                        pre_comments.append(match.comment)
                        continue
                    comment = match.comment
                    line = line[: match.index].strip()

                if self.options.strip_escapes:
                    line = self.detector.unescape(line)

                if line.startswith(SECTION_OPEN):
                    if current_section is not None:
                        self._section_done(current_section, line_number, total)
                    current_section = self._parse_section(line, line_number, config)
                    current_section.comment = comment
                    current_section.pre_comments = pre_comments
                    pre_comments = []
                    config.add(current_section)
                    logger.debug("Line %d: section '%s'", line_number, current_section.name)
                else:
                    setting = self._parse_setting(line, line_number)
                    target = self._target_section(setting, line_number, current_section, config)
                    setting.comment = comment
                    setting.pre_comments = pre_comments
                    pre_comments = []
                    target.add(setting)
                    logger.debug("Line %d: setting '%s' in section '%s'", line_number, setting.name, target.name)
        except ParsingError as e:
            self._emit_progress("error", "Configuration parsing failed", total=total, error=e.message)
            raise
        except SectionConfError as e:
            # Model validation failures surface with the offending line
            self._emit_progress("error", "Configuration parsing failed", total=total, error=e.message)
            raise ParsingError(e.message, line_number=line_number, original_error=e) from e

        if current_section is not None:
            self._section_done(current_section, total, total)
        if pre_comments:
            logger.debug("Dropping %d pre-comment(s) at end of input", len(pre_comments))

        self._emit_progress("finished", f"Parsed {config.section_count} section(s)", current=total, total=total)
        return config

    def _section_done(self, section: Section, current: int, total: int) -> None:
        self._emit_progress(
            "item_done",
            f"Section '{section.name}'",
            current=current,
            total=total,
            item_type="section",
            name=section.name,
        )

    def _parse_section(self, line: str, line_number: int, config: Configuration) -> Section:
        """Parse a ``[Name]`` header and check it is not a duplicate."""
        closing_index = line.find(SECTION_CLOSE)
        if closing_index < 0:
            raise ParsingError("closing bracket missing.", line_number)

        unexpected = line[closing_index + 1 :].strip()
        if unexpected:
            raise ParsingError(f"unexpected token '{unexpected}'", line_number)

        name = line[1:closing_index].strip()
        if not name:
            raise ParsingError("section name expected.", line_number)

        # Parse-time duplicate detection compares names exactly
        if config._find_index(name, case_sensitive=True) >= 0:
            raise ParsingError(f"The section '{name}' was already declared in the configuration.", line_number)

        return Section(name)

    def _parse_setting(self, line: str, line_number: int) -> Setting:
        """Parse a ``Name = Value`` assignment."""
        assign_index = line.find(ASSIGNMENT_OPERATOR)
        if assign_index < 0:
            raise ParsingError("setting assignment expected.", line_number)

        name = line[:assign_index].strip()
        if not name:
            raise ParsingError("setting name expected.", line_number)

        # Quote marks around the value are dropped to give a clean raw value
        value = line[assign_index + 1 :].strip().strip(QUOTE_CHAR)
        return Setting(name, value)

    def _target_section(
        self, setting: Setting, line_number: int, current_section: Optional[Section], config: Configuration
    ) -> Section:
        """Return the section a setting belongs to, checking for duplicates."""
        target = current_section if current_section is not None else config.global_section
        if target is None:
            raise ParsingError(f"The setting '{setting.name}' has to be in a section.", line_number)

        if target._find_index(setting.name, case_sensitive=True) >= 0:
            raise ParsingError(f"The setting '{setting.name}' was already declared in the section.", line_number)

        return target


def parse_text(text: str, options: TextParserOptions | None = None) -> Configuration:
    """Parse configuration text with a throwaway :class:`TextParser`."""
    return TextParser(options).parse_text(text)
