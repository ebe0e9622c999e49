#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sectionconf/options/__init__.py
"""Option classes for sectionconf parsers, renderers and documents."""

from sectionconf.options.base import (
    BaseParserOptions,
    BaseRendererOptions,
    CloneFrozenMixin,
    ConfigurationOptions,
)
from sectionconf.options.binary import BinaryParserOptions, BinaryRendererOptions
from sectionconf.options.text import TextParserOptions, TextRendererOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "BinaryParserOptions",
    "BinaryRendererOptions",
    "CloneFrozenMixin",
    "ConfigurationOptions",
    "TextParserOptions",
    "TextRendererOptions",
]
