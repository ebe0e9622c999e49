#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sectionconf/parsers/binary.py
"""Binary configuration decoder.

Layout (no magic number, no version tag)::

    int32   section count
    repeat section count times:
        string  section name
        int32   setting count
        repeat setting count times:
            string  setting name
            string  raw value

``int32`` is a 4-byte signed little-endian integer. ``string`` is UTF-8
bytes preceded by their length written as a 7-bit variable-length integer
(low-order group first, high bit set on every byte but the last).

Comments are not part of the layout. Any short read or malformed field
raises :class:`~sectionconf.exceptions.DecodeError` and no configuration is
returned.

With ``implicit_section=True`` the decoded configuration starts with its
global section, as every such configuration does. A stored section named
like the global section fills it wherever it appears in the data, so data
written under other options, with that section after others, decodes with
it moved to the front. The other sections keep their stored order.
"""

from __future__ import annotations

import logging
import struct
from typing import Optional

from sectionconf.constants import (
    INT32_FORMAT,
    INT32_SIZE,
    VARINT_CONTINUATION,
    VARINT_GROUP_BITS,
    VARINT_MAX_GROUPS,
)
from sectionconf.exceptions import DecodeError, SectionConfError, TruncatedDataError
from sectionconf.model import Configuration, Section, Setting
from sectionconf.options.binary import BinaryParserOptions
from sectionconf.parsers.base import BaseParser, ParserInput
from sectionconf.progress import ProgressCallback

logger = logging.getLogger(__name__)


class BinaryReader:
    """Cursor over an in-memory buffer that reads the codec's primitives.

    Parameters
    ----------
    data : bytes
        Buffer to read
    max_string_bytes : int
        Largest accepted string length

    """

    def __init__(self, data: bytes, max_string_bytes: int):
        self._data = memoryview(data)
        self._max_string_bytes = max_string_bytes
        self.offset = 0

    @property
    def remaining(self) -> int:
        """Return the number of unread bytes."""
        return len(self._data) - self.offset

    def _take(self, size: int) -> bytes:
        if size > self.remaining:
            raise TruncatedDataError(expected=size, available=self.remaining, offset=self.offset)
        chunk = self._data[self.offset : self.offset + size].tobytes()
        self.offset += size
        return chunk

    def read_int32(self) -> int:
        """Read a 4-byte signed little-endian integer."""
        (value,) = struct.unpack(INT32_FORMAT, self._take(INT32_SIZE))
        return value

    def read_count(self, what: str) -> int:
        """Read an int32 that must not be negative."""
        start = self.offset
        count = self.read_int32()
        if count < 0:
            raise DecodeError(f"Negative {what} count {count}", offset=start)
        return count

    def read_varint(self) -> int:
        """Read a 7-bit variable-length unsigned integer."""
        start = self.offset
        value = 0
        for group in range(VARINT_MAX_GROUPS):
            byte = self._take(1)[0]
            value |= (byte & (VARINT_CONTINUATION - 1)) << (group * VARINT_GROUP_BITS)
            if not byte & VARINT_CONTINUATION:
                return value
        raise DecodeError("String length prefix is too long", offset=start)

    def read_string(self) -> str:
        """Read a length-prefixed UTF-8 string."""
        start = self.offset
        length = self.read_varint()
        if length > self._max_string_bytes:
            raise DecodeError(
                f"String length {length} exceeds the limit of {self._max_string_bytes} bytes", offset=start
            )
        raw = self._take(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Invalid UTF-8 in string: {e.reason}", offset=start, original_error=e) from e


class BinaryParser(BaseParser):
    """Decode the binary configuration layout.

    Parameters
    ----------
    options : BinaryParserOptions or None, default = None
        Decoding options. ``options.configuration`` is the policy of the
        returned configuration.
    progress_callback : ProgressCallback or None, default = None
        Optional callback for progress updates

    Examples
    --------
        >>> from sectionconf.renderers.binary import BinaryRenderer
        >>> data = BinaryRenderer().render_to_bytes(config)
        >>> BinaryParser().parse(data).to_dict() == config.to_dict()
        True

    """

    def __init__(
        self, options: BinaryParserOptions | None = None, progress_callback: Optional[ProgressCallback] = None
    ):
        """Initialize the binary parser with options and progress callback."""
        BaseParser._validate_options_type(options, BinaryParserOptions, "binary parser")
        options = options or BinaryParserOptions()
        super().__init__(options, progress_callback)
        self.options: BinaryParserOptions = options

    def parse(self, input_data: ParserInput) -> Configuration:
        """Decode binary configuration data.

        Parameters
        ----------
        input_data : bytes, str, Path or IO[bytes]
            Raw data, a file path, or a binary stream

        Returns
        -------
        Configuration
            The decoded document (names and raw values only)

        Raises
        ------
        DecodeError
            If the data is truncated or malformed
        FileError
            If a path cannot be read

        """
        return self.parse_bytes(self._load_bytes_content(input_data))

    def parse_bytes(self, data: bytes) -> Configuration:
        """Decode a complete in-memory buffer.

        Raises
        ------
        DecodeError
            If the data is truncated or malformed

        """
        reader = BinaryReader(data, self.options.max_string_bytes)
        config = Configuration(self.options.configuration)

        try:
            section_count = reader.read_count("section")
            self._emit_progress("started", "Decoding binary configuration", current=0, total=section_count)

            seen_global = False
            for section_index in range(section_count):
                section = self._read_section(reader, config, seen_global)
                seen_global = seen_global or config.is_global(section)
                for _ in range(reader.read_count("setting")):
                    self._read_setting(reader, section)
                self._emit_progress(
                    "item_done",
                    f"Section '{section.name}'",
                    current=section_index + 1,
                    total=section_count,
                    item_type="section",
                    name=section.name,
                )

            if reader.remaining and not self.options.allow_trailing_data:
                raise DecodeError(f"{reader.remaining} unexpected byte(s) after the last section", offset=reader.offset)
        except DecodeError as e:
            self._emit_progress("error", "Binary decoding failed", error=e.message)
            raise

        logger.debug("Decoded %d section(s) from %d byte(s)", section_count, len(data))
        self._emit_progress(
            "finished", f"Decoded {section_count} section(s)", current=section_count, total=section_count
        )
        return config

    @staticmethod
    def _read_section(reader: BinaryReader, config: Configuration, seen_global: bool) -> Section:
        start = reader.offset
        name = reader.read_string()
        if not name:
            raise DecodeError("Empty section name", offset=start)

        global_section = config.global_section
        if global_section is not None and name == global_section.name:
            # The implicit section already exists; fill it instead of adding a copy
            if seen_global:
                raise DecodeError(f"Duplicate section '{name}'", offset=start)
            return global_section

        section = Section(name)
        try:
            config.add(section)
        except SectionConfError as e:
            raise DecodeError(f"Duplicate section '{name}'", offset=start, original_error=e) from e
        return section

    @staticmethod
    def _read_setting(reader: BinaryReader, section: Section) -> None:
        start = reader.offset
        name = reader.read_string()
        value = reader.read_string()
        if not name:
            raise DecodeError("Empty setting name", offset=start)
        try:
            section.add(Setting(name, value))
        except SectionConfError as e:
            raise DecodeError(
                f"Duplicate setting '{name}' in section '{section.name}'", offset=start, original_error=e
            ) from e


def decode(data: bytes, options: BinaryParserOptions | None = None) -> Configuration:
    """Decode ``data`` with a throwaway :class:`BinaryParser`."""
    return BinaryParser(options).parse_bytes(data)
