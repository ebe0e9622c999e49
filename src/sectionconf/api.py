"""The exported load and save functions for configuration documents."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/sectionconf/api.py
import logging
from pathlib import Path
from typing import IO, Optional, Union

from sectionconf.exceptions import ValidationError
from sectionconf.model import Configuration
from sectionconf.options.binary import BinaryParserOptions, BinaryRendererOptions
from sectionconf.options.text import TextParserOptions, TextRendererOptions
from sectionconf.parsers.binary import BinaryParser
from sectionconf.parsers.text import TextParser
from sectionconf.progress import ProgressCallback
from sectionconf.renderers.binary import BinaryRenderer
from sectionconf.renderers.text import TextRenderer

logger = logging.getLogger(__name__)

SourceType = Union[str, Path, IO[bytes], IO[str], bytes]
DestinationType = Union[str, Path, IO[bytes], IO[str]]


def load_text(
    text: str,
    options: Optional[TextParserOptions] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> Configuration:
    """Parse configuration text held in memory.

    Parameters
    ----------
    text : str
        Configuration text
    options : TextParserOptions, optional
        Parser options, including the policy of the returned configuration
    progress_callback : ProgressCallback, optional
        Optional callback for progress updates

    Returns
    -------
    Configuration
        The parsed document

    Raises
    ------
    ValidationError
        If ``text`` is None or not a string
    ParsingError
        If the text violates the line grammar

    Examples
    --------
        >>> config = load_text("[Server]\\n; Listen port\\nPort = 8080\\n")
        >>> config["Server"]["Port"].value
        '8080'

    """
    if text is None:
        raise ValidationError("Configuration text must not be None", parameter_name="text")
    if not isinstance(text, str):
        raise ValidationError(
            f"Configuration text must be a string, got {type(text).__name__}",
            parameter_name="text",
            parameter_value=text,
        )
    return TextParser(options, progress_callback).parse_text(text)


def load(
    source: SourceType,
    encoding: Optional[str] = None,
    options: Optional[TextParserOptions] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> Configuration:
    """Load configuration text from a file, bytes or a stream.

    Parameters
    ----------
    source : str, Path, bytes, IO[bytes] or IO[str]
        A path (``str`` or ``Path``), raw bytes, or an open stream. Use
        :func:`load_text` for text already in memory.
    encoding : str, optional
        Input encoding. Overrides ``options.encoding``; when both are None
        the encoding is detected.
    options : TextParserOptions, optional
        Parser options
    progress_callback : ProgressCallback, optional
        Optional callback for progress updates

    Returns
    -------
    Configuration
        The parsed document

    Raises
    ------
    FileNotFoundError
        If the path does not exist
    ParsingError
        If the content cannot be decoded or violates the line grammar

    """
    options = options or TextParserOptions()
    if encoding is not None:
        options = options.create_updated(encoding=encoding)

    if isinstance(source, str):
        source = Path(source)
    logger.debug("Loading configuration from %s", source if isinstance(source, Path) else type(source).__name__)
    return TextParser(options, progress_callback).parse(source)


def load_binary(
    source: Union[str, Path, IO[bytes], bytes],
    options: Optional[BinaryParserOptions] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> Configuration:
    """Decode a binary configuration from bytes, a path or a binary stream.

    Raises
    ------
    DecodeError
        If the data is truncated or malformed
    FileNotFoundError
        If the path does not exist

    """
    return BinaryParser(options, progress_callback).parse(source)


def dumps(config: Configuration, options: Optional[TextRendererOptions] = None) -> str:
    """Render a configuration as text.

    Raises
    ------
    RenderingError
        If a name, value or comment cannot be written in the line grammar

    """
    return TextRenderer(options).render_to_string(config)


def save(
    config: Configuration,
    destination: DestinationType,
    encoding: Optional[str] = None,
    options: Optional[TextRendererOptions] = None,
) -> None:
    """Write a configuration as text to a path or stream.

    Parameters
    ----------
    config : Configuration
        Configuration to write
    destination : str, Path, IO[bytes] or IO[str]
        Output path or open stream (left open)
    encoding : str, optional
        Output encoding; overrides ``options.encoding``
    options : TextRendererOptions, optional
        Renderer options

    Raises
    ------
    OutputWriteError
        If the path cannot be written

    """
    options = options or TextRendererOptions()
    if encoding is not None:
        options = options.create_updated(encoding=encoding)
    TextRenderer(options).render(config, destination)


def dump_binary(config: Configuration, options: Optional[BinaryRendererOptions] = None) -> bytes:
    """Encode a configuration in the binary layout."""
    return BinaryRenderer(options).render_to_bytes(config)


def save_binary(
    config: Configuration,
    destination: Union[str, Path, IO[bytes]],
    options: Optional[BinaryRendererOptions] = None,
) -> None:
    """Write the binary encoding of a configuration to a path or binary stream.

    Raises
    ------
    OutputWriteError
        If the path cannot be written

    """
    BinaryRenderer(options).render(config, destination)
