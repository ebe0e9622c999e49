#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sectionconf/renderers/text.py
"""Configuration text rendering.

This module provides the TextRenderer class, which writes a
:class:`~sectionconf.model.Configuration` back out in canonical form:

- pre-comments (if enabled) on their own lines above the entity
- ``[Name]`` headers and ``Name = Value`` settings, each followed by its
  trailing comment
- one blank line after every section, never two in a row
- settings of the implicit global section first, without a header

Values that would read back differently are quoted, so parsing the output
with the same configuration options yields the same section names, setting
names and raw values.

Examples
--------
Input configuration::

    Server (comment "; main")
        Host = local;host
        Port = 8080 (pre-comment "; Listen port")

Output::

    [Server] ; main
    Host = "local;host"
    ; Listen port
    Port = 8080

"""

from __future__ import annotations

import logging
from typing import Optional

from sectionconf.constants import ASSIGNMENT_OPERATOR, QUOTE_CHAR, SECTION_CLOSE, SECTION_OPEN
from sectionconf.exceptions import RenderingError
from sectionconf.model import Comment, Configuration, Section, Setting
from sectionconf.options.text import TextRendererOptions
from sectionconf.parsers.comments import CommentDetector
from sectionconf.renderers.base import BaseRenderer, RendererOutput

logger = logging.getLogger(__name__)

_LINE_BREAK_CHARS = ("\r", "\n")


class TextRenderer(BaseRenderer):
    """Render a Configuration as configuration text.

    Parameters
    ----------
    options : TextRendererOptions or None, default = None
        Text rendering options

    Examples
    --------
        >>> from sectionconf.model import Configuration
        >>> config = Configuration()
        >>> config["server"]["port"].value = "8080"
        >>> print(TextRenderer().render_to_string(config), end="")
        [server]
        port = 8080

    """

    def __init__(self, options: TextRendererOptions | None = None):
        """Initialize the text renderer with options."""
        BaseRenderer._validate_options_type(options, TextRendererOptions, "text renderer")
        options = options or TextRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: TextRendererOptions = options

    def render(self, config: Configuration, output: RendererOutput) -> None:
        """Render the configuration to a file path or stream.

        Parameters
        ----------
        config : Configuration
            Configuration to render
        output : str, Path, IO[bytes] or IO[str]
            Output destination; text is encoded with ``options.encoding``
            for paths and binary streams

        """
        text = self.render_to_string(config)
        self.write_output(text, output, encoding=self.options.encoding)

    def render_to_string(self, config: Configuration) -> str:
        """Render the configuration to a string.

        Returns
        -------
        str
            Configuration text, ending with a single line terminator, or an
            empty string for a configuration without content

        Raises
        ------
        RenderingError
            If a name, value or comment cannot be written in the line grammar

        """
        config = self._validate_configuration(config)
        detector = CommentDetector(config.options.comment_chars)
        lines: list[str] = []

        for section in config:
            if config.is_global(section):
                # Global settings precede the first header and have no header of their own
                if section.comment is not None:
                    logger.warning(
                        "Dropping trailing comment of '%s': it would not be read back as a comment", section.name
                    )
                if section.pre_comments:
                    logger.warning(
                        "Dropping %d pre-comment(s) of '%s': the global section is written without a header",
                        len(section.pre_comments),
                        section.name,
                    )
                for setting in section:
                    self._render_setting(setting, detector, lines)
                lines.append("")
                continue

            self._render_pre_comments(section.pre_comments, detector, lines)
            lines.append(self._render_header(section, detector))
            for setting in section:
                self._render_setting(setting, detector, lines)
            lines.append("")

        lines = self._collapse_blank_lines(lines)
        if not lines:
            return ""
        newline = self.options.newline
        return newline.join(lines) + newline

    @staticmethod
    def _collapse_blank_lines(lines: list[str]) -> list[str]:
        """Reduce runs of blank lines to one and drop blank lines at either end."""
        collapsed: list[str] = []
        for line in lines:
            if not line and (not collapsed or not collapsed[-1]):
                continue
            collapsed.append(line)
        while collapsed and not collapsed[-1]:
            collapsed.pop()
        return collapsed

    def _render_pre_comments(self, comments: list[Comment], detector: CommentDetector, lines: list[str]) -> None:
        if not self.options.emit_pre_comments:
            return
        for comment in comments:
            lines.append(self._comment_text(comment, detector))

    def _render_header(self, section: Section, detector: CommentDetector) -> str:
        name = section.name
        if SECTION_CLOSE in name:
            raise RenderingError(f"Section name '{name}' cannot contain '{SECTION_CLOSE}'", rendering_stage="section")
        self._check_name(name, "section", detector)
        return self._attach_comment(f"{SECTION_OPEN}{name}{SECTION_CLOSE}", section.comment, detector, name)

    def _render_setting(self, setting: Setting, detector: CommentDetector, lines: list[str]) -> None:
        name = setting.name
        if ASSIGNMENT_OPERATOR in name or name.startswith(SECTION_OPEN):
            raise RenderingError(
                f"Setting name '{name}' cannot contain '{ASSIGNMENT_OPERATOR}' or start with '{SECTION_OPEN}'",
                rendering_stage="setting",
            )
        self._check_name(name, "setting", detector)

        value = setting.value
        if any(char in value for char in _LINE_BREAK_CHARS):
            raise RenderingError(f"Value of setting '{name}' spans several lines", rendering_stage="setting")

        line = f"{name} {ASSIGNMENT_OPERATOR} {value}".rstrip()
        if self.options.quote_values and (value != value.strip() or detector.detect(line) is not None):
            line = f"{name} {ASSIGNMENT_OPERATOR} {QUOTE_CHAR}{value}{QUOTE_CHAR}"

        self._render_pre_comments(setting.pre_comments, detector, lines)
        lines.append(self._attach_comment(line, setting.comment, detector, name))

    @staticmethod
    def _check_name(name: str, kind: str, detector: CommentDetector) -> None:
        if any(char in name for char in _LINE_BREAK_CHARS) or name != name.strip():
            raise RenderingError(
                f"The {kind} name {name!r} has surrounding whitespace or line breaks", rendering_stage=kind
            )
        if detector.detect(name) is not None:
            raise RenderingError(f"The {kind} name {name!r} contains a comment delimiter", rendering_stage=kind)

    def _attach_comment(self, line: str, comment: Optional[Comment], detector: CommentDetector, owner: str) -> str:
        """Append a trailing comment if it will be read back as one."""
        if comment is None:
            return line
        candidate = f"{line} {self._comment_text(comment, detector)}"
        match = detector.detect(candidate)
        if match is None or match.index != len(line) + 1:
            # Quote marks on the line hide the delimiter from the reader
            logger.warning("Dropping trailing comment of '%s': it would not be read back as a comment", owner)
            return line
        return candidate

    @staticmethod
    def _comment_text(comment: Comment, detector: CommentDetector) -> str:
        if comment.symbol not in detector.comment_chars:
            raise RenderingError(
                f"Comment symbol {comment.symbol!r} is not one of the configured comment chars",
                rendering_stage="comment",
            )
        text = str(comment)
        if any(char in text for char in _LINE_BREAK_CHARS):
            raise RenderingError("Comment text spans several lines", rendering_stage="comment")
        return text


def serialize(config: Configuration, options: TextRendererOptions | None = None) -> str:
    """Render ``config`` to text with a throwaway :class:`TextRenderer`."""
    return TextRenderer(options).render_to_string(config)
