#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sectionconf/utils/encoding.py
"""Character encoding detection and handling utilities.

Configuration files arrive as bytes from disk or streams. When the caller
does not name an encoding, chardet is asked first and a short list of
fallback encodings is tried afterwards.
"""

from __future__ import annotations

import logging
from typing import IO, Optional, Sequence

import chardet

from sectionconf.constants import DEFAULT_FALLBACK_ENCODINGS

logger = logging.getLogger(__name__)


def detect_encoding(
    data: bytes,
    sample_size: int = 8192,
    confidence_threshold: float = 0.7,
) -> str | None:
    """Detect character encoding of binary data using chardet.

    Parameters
    ----------
    data : bytes
        Binary data to analyze
    sample_size : int, default 8192
        Number of bytes to sample for detection (uses first N bytes)
    confidence_threshold : float, default 0.7
        Minimum confidence level (0.0-1.0) required to trust detection

    Returns
    -------
    str | None
        Detected encoding name, or None if detection fails or the confidence
        is below the threshold

    """
    if not data:
        return None

    sample = data[:sample_size]
    result = chardet.detect(sample)

    encoding = result.get("encoding") if result else None
    if not encoding:
        logger.debug("chardet: No encoding detected")
        return None

    confidence = result.get("confidence") or 0.0
    logger.debug("chardet detected encoding: %s (confidence: %.2f)", encoding, confidence)

    if confidence >= confidence_threshold:
        return encoding

    logger.debug("chardet confidence %.2f below threshold %s", confidence, confidence_threshold)
    return None


def read_text_with_encoding_detection(
    data: bytes,
    fallback_encodings: Optional[Sequence[str]] = None,
    use_chardet: bool = True,
) -> str:
    """Read binary data as text with automatic encoding detection.

    Attempts to decode binary data using:
    1. chardet-based detection (if enabled)
    2. Fallback encodings in order
    3. Final fallback with error replacement

    Parameters
    ----------
    data : bytes
        Binary data to decode
    fallback_encodings : sequence of str, optional
        Encodings to try in order. Defaults to utf-8, utf-8-sig, latin-1.
    use_chardet : bool, default True
        Whether to attempt chardet-based detection first

    Returns
    -------
    str
        Decoded text content

    """
    if fallback_encodings is None:
        fallback_encodings = DEFAULT_FALLBACK_ENCODINGS

    # A UTF-8 byte order mark is never part of the configuration text
    if data.startswith(b"\xef\xbb\xbf"):
        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            logger.debug(f"Byte order mark present but data is not UTF-8: {e}")

    if use_chardet:
        detected_encoding = detect_encoding(data)
        if detected_encoding:
            try:
                text = data.decode(detected_encoding)
                logger.debug(f"Successfully decoded with chardet-detected encoding: {detected_encoding}")
                return text
            except (UnicodeDecodeError, LookupError) as e:
                logger.debug(f"Failed to decode with chardet-detected encoding {detected_encoding}: {e}")

    for encoding in fallback_encodings:
        try:
            text = data.decode(encoding)
            logger.debug(f"Successfully decoded with encoding: {encoding}")
            return text
        except UnicodeDecodeError as e:
            logger.debug(f"Failed to decode with {encoding}: {e}")
        except LookupError as e:
            logger.debug(f"Unknown encoding {encoding}: {e}")

    logger.warning("All encoding attempts failed, using utf-8 with error replacement")
    return data.decode("utf-8", errors="replace")


def decode_text(data: bytes, encoding: str | None = None) -> str:
    """Decode ``data`` with an explicit encoding, or detect it when None.

    Raises
    ------
    UnicodeDecodeError
        If an explicit encoding cannot decode the data
    LookupError
        If the explicit encoding is unknown

    """
    if encoding is None:
        return read_text_with_encoding_detection(data)
    return data.decode(encoding)


def normalize_stream_to_text(stream: IO[bytes] | IO[str], encoding: str | None = None) -> str:
    """Read a text or binary stream and return its content as text.

    Binary streams are decoded with ``encoding`` or, when None, by detection.

    Raises
    ------
    TypeError
        If stream.read() returns something other than bytes or str

    """
    content = stream.read()

    if isinstance(content, bytes):
        return decode_text(content, encoding)
    elif isinstance(content, str):
        return content
    else:
        raise TypeError(f"Stream read() returned unexpected type {type(content).__name__}. Expected bytes or str.")


def normalize_stream_to_bytes(stream: IO[bytes] | IO[str], encoding: str = "utf-8") -> bytes:
    """Read a text or binary stream and return its content as bytes.

    Raises
    ------
    TypeError
        If stream.read() returns something other than bytes or str

    """
    content = stream.read()

    if isinstance(content, bytes):
        return content
    elif isinstance(content, str):
        return content.encode(encoding)
    else:
        raise TypeError(f"Stream read() returned unexpected type {type(content).__name__}. Expected bytes or str.")
