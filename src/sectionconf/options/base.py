"""Base classes for configuration, parser and renderer options.

This module defines the foundation classes for the immutable option objects
used throughout sectionconf. Every policy that affects lookup, parsing or
serialization lives on one of these frozen dataclasses; there is no
process-wide mutable state.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from sectionconf.constants import (
    DEFAULT_CASE_SENSITIVE,
    DEFAULT_COMMENT_CHARS,
    DEFAULT_GLOBAL_SECTION_NAME,
    RESERVED_COMMENT_CHARS,
)
from sectionconf.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class ConfigurationOptions(CloneFrozenMixin):
    """Policy shared by a configuration document and everything that reads or writes it.

    Parameters
    ----------
    case_sensitive : bool, default = True
        Whether section and setting names are compared case-sensitively by
        ``get``, ``get_or_insert``, indexing, membership tests and ``remove``.
    comment_chars : tuple[str, ...], default = ("#", ";", "'")
        Characters that introduce a comment. Each entry must be exactly one
        character and may not be one of the structural characters
        (``\\``, ``"``, ``[``, ``]``, ``=``).
    implicit_section : bool, default = False
        If True, every configuration holds a non-removable global section that
        receives settings declared before the first section header.
    global_section_name : str, default = "General"
        Name of the implicit global section.

    """

    case_sensitive: bool = field(
        default=DEFAULT_CASE_SENSITIVE,
        metadata={"help": "Compare section and setting names case-sensitively", "importance": "core"},
    )
    comment_chars: tuple[str, ...] = field(
        default=DEFAULT_COMMENT_CHARS,
        metadata={"help": "Characters that start a comment", "importance": "core"},
    )
    implicit_section: bool = field(
        default=False,
        metadata={"help": "Keep a global section for settings declared before any header", "importance": "advanced"},
    )
    global_section_name: str = field(
        default=DEFAULT_GLOBAL_SECTION_NAME,
        metadata={"help": "Name of the implicit global section", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate the comment delimiter set and global section name.

        Raises
        ------
        ValidationError
            If the delimiter set is empty or holds an invalid entry, or the
            global section name is empty.

        """
        # Accept any iterable of characters but store an immutable tuple
        if isinstance(self.comment_chars, str) or not isinstance(self.comment_chars, tuple):
            object.__setattr__(self, "comment_chars", tuple(self.comment_chars))

        if not self.comment_chars:
            raise ValidationError(
                "The comment chars must not be empty.",
                parameter_name="comment_chars",
                parameter_value=self.comment_chars,
            )
        for char in self.comment_chars:
            if not isinstance(char, str) or len(char) != 1:
                raise ValidationError(
                    f"Comment chars must be single characters, got {char!r}",
                    parameter_name="comment_chars",
                    parameter_value=self.comment_chars,
                )
            if char in RESERVED_COMMENT_CHARS or char.isspace():
                raise ValidationError(
                    f"{char!r} cannot be used as a comment char",
                    parameter_name="comment_chars",
                    parameter_value=self.comment_chars,
                )

        if not self.global_section_name or not self.global_section_name.strip():
            raise ValidationError(
                "The global section name must not be empty.",
                parameter_name="global_section_name",
                parameter_value=self.global_section_name,
            )

    def fold_name(self, name: str) -> str:
        """Return the comparison key for ``name`` under this policy."""
        return name if self.case_sensitive else name.casefold()

    def names_equal(self, first: str, second: str) -> bool:
        """Compare two names under this policy."""
        return self.fold_name(first) == self.fold_name(second)


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for all parser options.

    Parameters
    ----------
    configuration : ConfigurationOptions
        Policy given to the configuration the parser builds

    Notes
    -----
    Subclasses should define format-specific parsing options as frozen dataclass fields.

    """

    configuration: ConfigurationOptions = field(
        default_factory=ConfigurationOptions,
        metadata={"help": "Case, comment and global-section policy of the parsed document", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate option types.

        Raises
        ------
        ValidationError
            If ``configuration`` is not a ConfigurationOptions instance.

        """
        if not isinstance(self.configuration, ConfigurationOptions):
            raise ValidationError(
                "configuration must be a ConfigurationOptions instance",
                parameter_name="configuration",
                parameter_value=self.configuration,
            )


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options.

    Renderers take their case and comment policy from the configuration they
    render, so the base class carries no fields of its own.

    Notes
    -----
    Subclasses should define format-specific rendering options as frozen dataclass fields.

    """

    def __post_init__(self) -> None:
        """Validate option values in subclasses."""
        pass
