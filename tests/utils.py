"""Test utilities for the sectionconf test suite.

This module provides sample configuration text, helpers for building raw
binary payloads by hand, and comparison helpers for parsed documents.
"""

import struct
import tempfile
from pathlib import Path

from sectionconf.model import Configuration

SAMPLE_CONFIG_TEXT = """; Connection settings
[Server] ; main
Host = "local;host"
; Listen port
Port = 8080
Path = C:\\temp \\; notacomment

# Client section
[Client]
Name = sectionconf
Retries = 3 # attempts
"""


def int32(value: int) -> bytes:
    """Encode a little-endian signed 32-bit count."""
    return struct.pack("<i", value)


def string_field(text: str) -> bytes:
    """Encode a UTF-8 string with a one-byte length prefix (short strings only)."""
    raw = text.encode("utf-8")
    assert len(raw) < 0x80, "helper only builds single-byte length prefixes"
    return bytes([len(raw)]) + raw


def binary_payload(sections: list[tuple[str, list[tuple[str, str]]]]) -> bytes:
    """Build binary configuration data from ``(name, [(setting, value), ...])`` pairs."""
    data = bytearray(int32(len(sections)))
    for name, settings in sections:
        data += string_field(name)
        data += int32(len(settings))
        for setting_name, value in settings:
            data += string_field(setting_name)
            data += string_field(value)
    return bytes(data)


def snapshot(config: Configuration) -> list[tuple[str, list[tuple[str, str]]]]:
    """Return section names with their ordered ``(name, value)`` pairs."""
    return [(section.name, section.items()) for section in config]


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp())


def cleanup_test_dir(temp_dir: Path) -> None:
    """Clean up test directory and files."""
    import shutil

    if temp_dir.exists():
        shutil.rmtree(temp_dir)
