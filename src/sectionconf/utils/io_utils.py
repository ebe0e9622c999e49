#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sectionconf/utils/io_utils.py
"""I/O utilities for handling output destinations.

Renderers hand their finished text or bytes to :func:`write_content`, which
knows how to write to paths and to text or binary file-like objects.
"""

from __future__ import annotations

import io
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Union, cast

from sectionconf.constants import DEFAULT_ENCODING


def is_binary_stream(output: object) -> bool:
    """Guess whether a file-like object expects bytes.

    Concrete buffer types are checked first, then the io base classes, then
    the ``mode`` attribute. Unknown objects are treated as text streams.
    """
    if isinstance(output, BytesIO):
        return True
    if isinstance(output, StringIO):
        return False
    if isinstance(output, io.TextIOBase):
        return False
    if isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
        return True
    mode = getattr(output, "mode", "")
    return isinstance(mode, str) and "b" in mode


def write_content(
    content: Union[str, bytes],
    output: Union[str, Path, IO[bytes], IO[str]],
    encoding: str = DEFAULT_ENCODING,
) -> None:
    """Write content to a path or file-like object.

    Parameters
    ----------
    content : str or bytes
        Content to write
    output : str, Path, IO[bytes] or IO[str]
        Destination. Paths are opened, written and closed; streams are
        written to and left open.
    encoding : str, default "utf-8"
        Encoding used when text must become bytes (paths and binary streams)
        or bytes must become text (text streams)

    Raises
    ------
    TypeError
        If the content or output type is not supported
    OSError
        If a path cannot be written

    """
    if not isinstance(content, (str, bytes)):
        raise TypeError(f"Content must be str or bytes, got {type(content)}")

    if isinstance(output, (str, Path)):
        output_path = Path(output)
        if isinstance(content, str):
            # newline="" keeps the renderer's line terminators untouched
            with open(output_path, "w", encoding=encoding, newline="") as f:
                f.write(content)
        else:
            with open(output_path, "wb") as f:
                f.write(content)
        return

    if hasattr(output, "write"):
        if is_binary_stream(output):
            binary_output = cast(IO[bytes], output)
            binary_output.write(content.encode(encoding) if isinstance(content, str) else content)
        else:
            text_output = cast(IO[str], output)
            text_output.write(content.decode(encoding) if isinstance(content, bytes) else content)
        return

    raise TypeError(f"Unsupported output type: {type(output)}")


__all__ = ["is_binary_stream", "write_content"]
