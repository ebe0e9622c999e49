#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sectionconf/model/__init__.py
"""Document model: configurations, sections, settings and comments."""

from sectionconf.model.nodes import Comment, Configuration, Section, Setting

__all__ = ["Comment", "Configuration", "Section", "Setting"]
