#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sectionconf/parsers/base.py
"""Base classes for configuration parsers.

This module defines the abstract base class shared by the text and binary
parsers. It provides option validation, progress reporting and loading of
the supported input types.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any, Optional, Union

from sectionconf.exceptions import FileAccessError, FileNotFoundError, InvalidOptionsError, ValidationError
from sectionconf.model import Configuration
from sectionconf.options.base import BaseParserOptions
from sectionconf.progress import ProgressCallback, ProgressEvent
from sectionconf.utils.encoding import decode_text, normalize_stream_to_bytes, normalize_stream_to_text

logger = logging.getLogger(__name__)

ParserInput = Union[str, Path, IO[bytes], IO[str], bytes]


class BaseParser(ABC):
    """Abstract base class for configuration parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options
    progress_callback : ProgressCallback or None, default = None
        Optional callback for progress updates during parsing

    Notes
    -----
    A parser builds its document locally and returns it only on success, so
    a failed parse never exposes a partially built configuration.

    """

    def __init__(self, options: BaseParserOptions | None = None, progress_callback: Optional[ProgressCallback] = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options
        self.progress_callback: Optional[ProgressCallback] = progress_callback

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: ParserInput) -> Configuration:
        """Parse the input into a configuration.

        Returns
        -------
        Configuration
            The fully parsed document

        Raises
        ------
        ParsingError or DecodeError
            If the input is malformed
        FileError
            If an input path cannot be read

        """
        raise NotImplementedError

    def _emit_progress(self, event_type: str, message: str, current: int = 0, total: int = 0, **metadata: Any) -> None:
        """Emit a progress event to the callback if registered.

        Exceptions raised by the callback are logged and swallowed so that a
        faulty observer cannot abort parsing.
        """
        if not self.progress_callback:
            return

        try:
            event = ProgressEvent(
                event_type=event_type,  # type: ignore[arg-type]
                message=message,
                current=current,
                total=total,
                metadata=metadata,
            )
            self.progress_callback(event)
        except Exception as e:
            logger.warning(f"Progress callback raised exception: {e}", exc_info=True)

    @staticmethod
    def _read_file_bytes(path: Path) -> bytes:
        """Read a whole file, translating OS errors into library errors."""
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            if not path.exists():
                raise FileNotFoundError(str(path), original_error=e) from e
            raise FileAccessError(str(path), original_error=e) from e

    @staticmethod
    def _load_text_content(input_data: ParserInput, encoding: str | None = None) -> str:
        """Load text from the supported input types.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], IO[str] or bytes
            ``str`` is configuration text; ``Path`` is a file to read;
            ``bytes`` and binary streams are decoded
        encoding : str or None, default None
            Encoding for byte input; None means detect it

        Returns
        -------
        str
            The configuration text

        """
        if isinstance(input_data, str):
            return input_data
        if isinstance(input_data, (bytes, bytearray)):
            return decode_text(bytes(input_data), encoding)
        if isinstance(input_data, Path):
            return decode_text(BaseParser._read_file_bytes(input_data), encoding)
        if hasattr(input_data, "read"):
            return normalize_stream_to_text(input_data, encoding)
        raise ValidationError(
            f"Unsupported input type: {type(input_data).__name__}",
            parameter_name="input_data",
            parameter_value=input_data,
        )

    @staticmethod
    def _load_bytes_content(input_data: ParserInput) -> bytes:
        """Load raw bytes from the supported input types.

        ``str`` and ``Path`` are file paths here; text streams are encoded as
        UTF-8.
        """
        if isinstance(input_data, (bytes, bytearray, memoryview)):
            return bytes(input_data)
        if isinstance(input_data, (str, Path)):
            return BaseParser._read_file_bytes(Path(input_data))
        if hasattr(input_data, "read"):
            return normalize_stream_to_bytes(input_data)
        raise ValidationError(
            f"Unsupported input type: {type(input_data).__name__}",
            parameter_name="input_data",
            parameter_value=input_data,
        )
