#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sectionconf/renderers/__init__.py
"""Renderers that write a Configuration as text or binary data."""

from sectionconf.renderers.base import BaseRenderer
from sectionconf.renderers.binary import BinaryRenderer, BinaryWriter
from sectionconf.renderers.text import TextRenderer

__all__ = ["BaseRenderer", "BinaryRenderer", "BinaryWriter", "TextRenderer"]
