#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sectionconf/options/binary.py
"""Options for the binary configuration codec."""

from __future__ import annotations

from dataclasses import dataclass, field

from sectionconf.constants import DEFAULT_MAX_STRING_BYTES
from sectionconf.exceptions import ValidationError
from sectionconf.options.base import BaseParserOptions, BaseRendererOptions


@dataclass(frozen=True)
class BinaryParserOptions(BaseParserOptions):
    """Configuration options for binary decoding.

    Parameters
    ----------
    max_string_bytes : int, default = 16 MiB
        Largest string length prefix accepted before the data is treated as
        malformed.
    allow_trailing_data : bool, default = False
        If True, bytes left over after the last section are ignored instead of
        raising DecodeError.

    """

    max_string_bytes: int = field(
        default=DEFAULT_MAX_STRING_BYTES,
        metadata={"help": "Maximum accepted string length in bytes", "type": int, "importance": "security"},
    )
    allow_trailing_data: bool = field(
        default=False,
        metadata={"help": "Ignore bytes after the last section", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValidationError
            If ``max_string_bytes`` is not positive.

        """
        super().__post_init__()
        if self.max_string_bytes <= 0:
            raise ValidationError(
                f"max_string_bytes must be positive, got {self.max_string_bytes}",
                parameter_name="max_string_bytes",
                parameter_value=self.max_string_bytes,
            )


@dataclass(frozen=True)
class BinaryRendererOptions(BaseRendererOptions):
    """Configuration options for binary encoding.

    The layout is fixed, so there is nothing to configure yet. The class
    exists so the binary renderer validates its options like every other
    renderer.
    """
