#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sectionconf/utils/__init__.py
"""Encoding and I/O helpers used by the parsers and renderers."""
