#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sectionconf/renderers/binary.py
"""Binary configuration encoder.

Writes the layout read by :mod:`sectionconf.parsers.binary`: the section
count, then for every section its name, setting count and the name/value
pairs of its settings, all in declaration order. Comments are never
written. The layout carries no version tag, so any change to it is a
breaking change.
"""

from __future__ import annotations

import logging
import struct
from io import BytesIO
from pathlib import Path
from typing import IO

from sectionconf.constants import INT32_FORMAT, INT32_MAX, VARINT_CONTINUATION, VARINT_GROUP_BITS
from sectionconf.exceptions import RenderingError, ValidationError
from sectionconf.model import Configuration
from sectionconf.options.binary import BinaryRendererOptions
from sectionconf.renderers.base import BaseRenderer, RendererOutput
from sectionconf.utils.io_utils import is_binary_stream

logger = logging.getLogger(__name__)


class BinaryWriter:
    """Append the codec's primitives to a binary stream.

    Parameters
    ----------
    stream : IO[bytes]
        Destination stream

    """

    def __init__(self, stream: IO[bytes]):
        self.stream = stream

    def write_int32(self, value: int) -> None:
        """Write a 4-byte signed little-endian integer."""
        if not 0 <= value <= INT32_MAX:
            raise RenderingError(f"Count {value} does not fit the binary layout", rendering_stage="binary")
        self.stream.write(struct.pack(INT32_FORMAT, value))

    def write_varint(self, value: int) -> None:
        """Write a 7-bit variable-length unsigned integer."""
        if value < 0:
            raise RenderingError(f"Cannot encode negative length {value}", rendering_stage="binary")
        encoded = bytearray()
        while value >= VARINT_CONTINUATION:
            encoded.append((value & (VARINT_CONTINUATION - 1)) | VARINT_CONTINUATION)
            value >>= VARINT_GROUP_BITS
        encoded.append(value)
        self.stream.write(bytes(encoded))

    def write_string(self, text: str) -> None:
        """Write a length-prefixed UTF-8 string."""
        try:
            raw = text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise RenderingError(f"Cannot encode {text!r} as UTF-8", rendering_stage="binary", original_error=e) from e
        if len(raw) > INT32_MAX:
            raise RenderingError("String too long for the binary layout", rendering_stage="binary")
        self.write_varint(len(raw))
        self.stream.write(raw)


class BinaryRenderer(BaseRenderer):
    """Encode a Configuration in the binary layout.

    Parameters
    ----------
    options : BinaryRendererOptions or None, default = None
        Binary rendering options

    Examples
    --------
        >>> from sectionconf.model import Configuration
        >>> config = Configuration()
        >>> config["A"]["x"].value = "1"
        >>> BinaryRenderer().render_to_bytes(config)
        b'\\x01\\x00\\x00\\x00\\x01A\\x01\\x00\\x00\\x00\\x01x\\x011'

    """

    def __init__(self, options: BinaryRendererOptions | None = None):
        """Initialize the binary renderer with options."""
        BaseRenderer._validate_options_type(options, BinaryRendererOptions, "binary renderer")
        options = options or BinaryRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: BinaryRendererOptions = options

    def render(self, config: Configuration, output: RendererOutput) -> None:
        """Encode the configuration to a file path or binary stream.

        Raises
        ------
        ValidationError
            If ``output`` is a text stream

        """
        if not isinstance(output, (str, Path)) and hasattr(output, "write") and not is_binary_stream(output):
            raise ValidationError(
                "Binary output needs a path or a binary stream", parameter_name="output", parameter_value=output
            )
        self.write_output(self.render_to_bytes(config), output)

    def render_to_bytes(self, config: Configuration) -> bytes:
        """Encode the configuration.

        Returns
        -------
        bytes
            The encoded configuration

        Raises
        ------
        RenderingError
            If a count or string does not fit the layout

        """
        config = self._validate_configuration(config)
        buffer = BytesIO()
        writer = BinaryWriter(buffer)

        writer.write_int32(config.section_count)
        for section in config:
            writer.write_string(section.name)
            writer.write_int32(section.setting_count)
            for setting in section:
                writer.write_string(setting.name)
                writer.write_string(setting.value)

        data = buffer.getvalue()
        logger.debug("Encoded %d section(s) into %d byte(s)", config.section_count, len(data))
        return data


def encode(config: Configuration, options: BinaryRendererOptions | None = None) -> bytes:
    """Encode ``config`` with a throwaway :class:`BinaryRenderer`."""
    return BinaryRenderer(options).render_to_bytes(config)
