#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sectionconf/model/nodes.py
"""Document model for configuration files.

A :class:`Configuration` is an ordered collection of :class:`Section`
objects, and each section is an ordered collection of :class:`Setting`
objects. Sections and settings may carry a trailing :class:`Comment` and a
list of pre-comments (comment lines written directly above them).

Lookup Contract
---------------
Both containers expose the same operations:

- ``get(name)`` returns the entity or None
- ``get_or_insert(name)`` returns the entity, creating and appending an empty
  one when it is missing
- ``container[name]`` is ``get_or_insert``; ``container[index]`` is
  bounds-checked positional access
- ``add(entity)`` appends, failing if the same object is already present or
  a sibling with an equal name exists
- ``remove(name_or_entity)`` fails if nothing matches

Assigning ``name`` on a stored section or setting is checked the same way
as ``add``: a name equal to a sibling's raises ValidationError. A section
added to a configuration must not hold two settings whose names are equal
under the configuration's case policy.

Name comparison follows the ``case_sensitive`` flag of the container's
:class:`~sectionconf.options.ConfigurationOptions`. Case-sensitive is the
default.

Examples
--------
    >>> config = Configuration()
    >>> config["Server"]["Port"].value = "8080"
    >>> config["Server"].get("Port").value
    '8080'
    >>> [section.name for section in config]
    ['Server']

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Generic, Iterator, Optional, TypeVar, Union

from sectionconf.constants import ASSIGNMENT_OPERATOR, SECTION_CLOSE, SECTION_OPEN
from sectionconf.exceptions import StructureError, ValidationError
from sectionconf.options.base import ConfigurationOptions

logger = logging.getLogger(__name__)


def _validate_name(name: object, kind: str) -> str:
    """Return ``name`` if it is a non-empty string, otherwise raise ValidationError."""
    if name is None:
        raise ValidationError(f"The {kind} name must not be None.", parameter_name="name", parameter_value=name)
    if not isinstance(name, str):
        raise ValidationError(
            f"The {kind} name must be a string, got {type(name).__name__}",
            parameter_name="name",
            parameter_value=name,
        )
    if not name:
        raise ValidationError(f"The {kind} name must not be empty.", parameter_name="name", parameter_value=name)
    return name


@dataclass(frozen=True)
class Comment:
    """A comment: the delimiter it was written with plus its trimmed text.

    Parameters
    ----------
    symbol : str
        The single delimiter character (for example ``;`` or ``#``)
    text : str
        Comment text without the delimiter, trimmed

    """

    symbol: str
    text: str = ""

    def __post_init__(self) -> None:
        """Validate the delimiter."""
        if not isinstance(self.symbol, str) or len(self.symbol) != 1:
            raise ValidationError(
                f"Comment symbol must be a single character, got {self.symbol!r}",
                parameter_name="symbol",
                parameter_value=self.symbol,
            )
        if not isinstance(self.text, str):
            raise ValidationError("Comment text must be a string", parameter_name="text", parameter_value=self.text)

    def __str__(self) -> str:
        return f"{self.symbol} {self.text}" if self.text else self.symbol


@dataclass(eq=False)
class Setting:
    """A named raw value inside a section.

    The value is kept exactly as parsed or assigned; turning it into a
    number, boolean or other type is the caller's job.

    Parameters
    ----------
    name : str
        Setting name, non-empty
    value : str, default = ""
        Raw string value
    comment : Comment or None, default = None
        Trailing comment written on the setting's line
    pre_comments : list[Comment], default = empty list
        Comment lines written directly above the setting

    Notes
    -----
    Settings compare by identity. Two settings with the same name and value
    are still distinct entities.

    Renaming a stored setting is checked against its siblings; a name that
    clashes under the section's case policy raises ValidationError and the
    old name is kept.

    """

    name: str
    value: str = ""
    comment: Optional[Comment] = None
    pre_comments: list[Comment] = field(default_factory=list)
    _owners: list = field(default_factory=list, init=False, repr=False)

    def __setattr__(self, key: str, value: object) -> None:
        if key == "name":
            value = _validate_name(value, "setting")
            for owner in getattr(self, "_owners", ()):
                owner._check_rename(self, value)
        super().__setattr__(key, value)

    def __post_init__(self) -> None:
        """Validate the value type."""
        if self.value is None:
            self.value = ""
        elif not isinstance(self.value, str):
            raise ValidationError(
                f"Setting values are raw strings, got {type(self.value).__name__}",
                parameter_name="value",
                parameter_value=self.value,
            )

    def to_string(self, include_comment: bool = False) -> str:
        """Render the setting as a ``name = value`` line.

        Parameters
        ----------
        include_comment : bool, default = False
            Append the trailing comment, if any

        Returns
        -------
        str
            The rendered line

        """
        line = f"{self.name} {ASSIGNMENT_OPERATOR} {self.value}".rstrip()
        if include_comment and self.comment is not None:
            line = f"{line} {self.comment}"
        return line

    def __str__(self) -> str:
        return self.to_string()


_T = TypeVar("_T", "Setting", "Section")


class _NamedContainer(Generic[_T]):
    """Ordered, name-indexed container shared by Section and Configuration."""

    _child_cls: type
    _child_kind = "element"
    _owner_kind = "container"

    def __init__(self, options: Optional[ConfigurationOptions] = None):
        self._children: list[_T] = []
        self._options = options or ConfigurationOptions()

    @property
    def options(self) -> ConfigurationOptions:
        """Return the policy used for name comparison."""
        return self._options

    def _create(self, name: str) -> _T:
        return self._child_cls(name)

    def _adopt(self, child: _T) -> None:
        """Hook run before a child is stored."""

    def _check_replaceable(self, child: _T) -> None:
        """Hook run before a stored child is replaced."""

    def _check_removable(self, child: _T) -> None:
        """Hook run before a stored child is removed."""

    def _attach(self, child: _T) -> None:
        child._owners.append(self)

    def _detach(self, child: _T) -> None:
        child._owners = [owner for owner in child._owners if owner is not self]

    def _check_rename(self, child: _T, new_name: str) -> None:
        """Raise ValidationError if ``child`` may not be renamed to ``new_name``."""
        clash = self._find_index(new_name)
        if clash >= 0 and self._children[clash] is not child:
            raise ValidationError(
                f"Cannot rename {self._child_kind} '{child.name}': "
                f"a {self._child_kind} named '{new_name}' already exists in the {self._owner_kind}.",
                parameter_name="name",
                parameter_value=new_name,
            )

    def _find_index(self, name: str, case_sensitive: Optional[bool] = None) -> int:
        if case_sensitive is None:
            case_sensitive = self._options.case_sensitive
        if case_sensitive:
            for index, child in enumerate(self._children):
                if child.name == name:
                    return index
        else:
            key = name.casefold()
            for index, child in enumerate(self._children):
                if child.name.casefold() == key:
                    return index
        return -1

    def _index_of(self, child: _T) -> int:
        for index, candidate in enumerate(self._children):
            if candidate is child:
                return index
        return -1

    def _check_child(self, child: object) -> _T:
        if child is None:
            raise ValidationError(
                f"The {self._child_kind} must not be None.", parameter_name=self._child_kind, parameter_value=child
            )
        if not isinstance(child, self._child_cls):
            raise ValidationError(
                f"Expected a {self._child_cls.__name__}, got {type(child).__name__}",
                parameter_name=self._child_kind,
                parameter_value=child,
            )
        return child  # type: ignore[return-value]

    def _check_index(self, index: int) -> int:
        if isinstance(index, bool) or not isinstance(index, int):
            raise ValidationError(
                f"Index must be an integer, got {type(index).__name__}", parameter_name="index", parameter_value=index
            )
        if index < 0 or index >= len(self._children):
            raise IndexError(f"{self._child_kind} index {index} out of range (0..{len(self._children) - 1})")
        return index

    # Query

    def __iter__(self) -> Iterator[_T]:
        return iter(list(self._children))

    def __len__(self) -> int:
        return len(self._children)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return self._find_index(item) >= 0
        return self._index_of(item) >= 0  # type: ignore[arg-type]

    def get(self, name: str) -> Optional[_T]:
        """Return the child called ``name`` under the case policy, or None.

        Parameters
        ----------
        name : str
            Name to look up

        Returns
        -------
        Setting, Section or None
            The matching child, if any

        """
        _validate_name(name, self._child_kind)
        index = self._find_index(name)
        return self._children[index] if index >= 0 else None

    def get_or_insert(self, name: str) -> _T:
        """Return the child called ``name``, creating and appending it if missing.

        The returned object is always the stored one, so changes made to it are
        visible through later lookups.

        Parameters
        ----------
        name : str
            Name to look up

        Returns
        -------
        Setting or Section
            The existing or newly appended child

        """
        child = self.get(name)
        if child is None:
            child = self._create(name)
            self.add(child)
            logger.debug("Created %s '%s'", self._child_kind, name)
        return child

    def index(self, item: Union[str, _T]) -> int:
        """Return the position of a child given by name or by reference.

        Raises
        ------
        ValidationError
            If no such child exists

        """
        if isinstance(item, str):
            position = self._find_index(_validate_name(item, self._child_kind))
        else:
            position = self._index_of(item)
        if position < 0:
            raise ValidationError(
                f"The specified {self._child_kind} does not exist in the {self._owner_kind}.",
                parameter_name=self._child_kind,
                parameter_value=item,
            )
        return position

    def __getitem__(self, key: Union[int, str]) -> _T:
        if isinstance(key, str):
            return self.get_or_insert(key)
        return self._children[self._check_index(key)]

    # Mutation

    def add(self, child: _T) -> None:
        """Append ``child``.

        Raises
        ------
        ValidationError
            If this exact object is already stored, or a sibling with an equal
            name (under the case policy) exists.

        """
        child = self._check_child(child)
        if self._index_of(child) >= 0:
            raise ValidationError(
                f"The specified {self._child_kind} already exists in the {self._owner_kind}.",
                parameter_name=self._child_kind,
                parameter_value=child,
            )
        if self._find_index(child.name) >= 0:
            raise ValidationError(
                f"A {self._child_kind} named '{child.name}' already exists in the {self._owner_kind}.",
                parameter_name=self._child_kind,
                parameter_value=child,
            )
        self._adopt(child)
        self._attach(child)
        self._children.append(child)

    def __setitem__(self, key: Union[int, str], child: _T) -> None:
        child = self._check_child(child)
        if isinstance(key, str):
            self._set_by_name(key, child)
        else:
            self._set_by_index(self._check_index(key), child)

    def _set_by_name(self, name: str, child: _T) -> None:
        _validate_name(name, self._child_kind)
        if not self._options.names_equal(name, child.name):
            raise ValidationError(
                f"Cannot store {self._child_kind} '{child.name}' under the name '{name}'.",
                parameter_name="name",
                parameter_value=name,
            )
        index = self._find_index(name)
        if index < 0:
            self.add(child)
        else:
            self._set_by_index(index, child)

    def _set_by_index(self, index: int, child: _T) -> None:
        current = self._children[index]
        if current is child:
            return
        if self._index_of(child) >= 0:
            raise ValidationError(
                f"The specified {self._child_kind} already exists in the {self._owner_kind}.",
                parameter_name=self._child_kind,
                parameter_value=child,
            )
        clash = self._find_index(child.name)
        if clash >= 0 and clash != index:
            raise ValidationError(
                f"A {self._child_kind} named '{child.name}' already exists in the {self._owner_kind}.",
                parameter_name=self._child_kind,
                parameter_value=child,
            )
        self._check_replaceable(current)
        self._adopt(child)
        self._detach(current)
        self._attach(child)
        self._children[index] = child

    def remove(self, item: Union[str, _T]) -> None:
        """Remove a child given by name (under the case policy) or by reference.

        Raises
        ------
        ValidationError
            If the name is empty or no such child exists
        StructureError
            If the child is structurally protected

        """
        if item is None:
            raise ValidationError(f"The {self._child_kind} must not be None.", parameter_name=self._child_kind)
        position = self.index(item)
        self._check_removable(self._children[position])
        removed = self._children.pop(position)
        self._detach(removed)
        logger.debug("Removed %s '%s'", self._child_kind, removed.name)

    def __delitem__(self, key: Union[int, str]) -> None:
        if isinstance(key, str):
            self.remove(key)
        else:
            self.remove(self._children[self._check_index(key)])

    def clear(self) -> None:
        """Remove every child."""
        for child in self._children:
            self._detach(child)
        self._children.clear()


class Section(_NamedContainer[Setting]):
    """A named, ordered group of settings.

    Parameters
    ----------
    name : str
        Section name, non-empty
    settings : iterable of Setting, optional
        Initial settings, appended in order
    comment : Comment or None, default = None
        Trailing comment written on the header line
    pre_comments : list[Comment] or None, default = None
        Comment lines written directly above the header
    options : ConfigurationOptions or None, default = None
        Name comparison policy. A section added to a configuration takes over
        the configuration's policy.

    """

    _child_cls = Setting
    _child_kind = "setting"
    _owner_kind = "section"

    def __init__(
        self,
        name: str,
        settings: Optional[list[Setting]] = None,
        comment: Optional[Comment] = None,
        pre_comments: Optional[list[Comment]] = None,
        options: Optional[ConfigurationOptions] = None,
    ):
        super().__init__(options)
        self._owners: list[Configuration] = []
        self._name = _validate_name(name, "section")
        self.comment: Optional[Comment] = comment
        self.pre_comments: list[Comment] = list(pre_comments or [])
        for setting in settings or []:
            self.add(setting)

    @property
    def name(self) -> str:
        """Return the section name."""
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        value = _validate_name(value, "section")
        for owner in self._owners:
            owner._check_rename(self, value)
        self._name = value

    @property
    def setting_count(self) -> int:
        """Return the number of settings."""
        return len(self._children)

    def items(self) -> list[tuple[str, str]]:
        """Return ``(name, raw value)`` pairs in declaration order."""
        return [(setting.name, setting.value) for setting in self._children]

    def to_dict(self) -> dict[str, str]:
        """Return an ordered ``name -> raw value`` mapping."""
        return dict(self.items())

    def to_string(self, include_comment: bool = False) -> str:
        """Render the section header line.

        Parameters
        ----------
        include_comment : bool, default = False
            Append the trailing comment, if any

        """
        header = f"{SECTION_OPEN}{self.name}{SECTION_CLOSE}"
        if include_comment and self.comment is not None:
            header = f"{header} {self.comment}"
        return header

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Section(name={self.name!r}, settings={len(self._children)})"


class Configuration(_NamedContainer[Section]):
    """An ordered collection of sections.

    Parameters
    ----------
    options : ConfigurationOptions or None, default = None
        Case, comment and global-section policy. With
        ``implicit_section=True`` the configuration starts with a global
        section that cannot be removed or replaced, only cleared.

    Examples
    --------
        >>> from sectionconf.options import ConfigurationOptions
        >>> config = Configuration(ConfigurationOptions(implicit_section=True))
        >>> config.global_section.name
        'General'
        >>> config.remove("General")
        Traceback (most recent call last):
        ...
        sectionconf.exceptions.StructureError: The global section may not be removed.

    """

    _child_cls = Section
    _child_kind = "section"
    _owner_kind = "configuration"

    def __init__(self, options: Optional[ConfigurationOptions] = None):
        super().__init__(options)
        self._global_section: Optional[Section] = None
        if self._options.implicit_section:
            self._global_section = Section(self._options.global_section_name, options=self._options)
            self._attach(self._global_section)
            self._children.append(self._global_section)

    def _create(self, name: str) -> Section:
        return Section(name, options=self._options)

    def _adopt(self, child: Section) -> None:
        seen: dict[str, str] = {}
        for setting in child:
            key = self._options.fold_name(setting.name)
            if key in seen:
                raise ValidationError(
                    f"Section '{child.name}' holds settings '{seen[key]}' and '{setting.name}', "
                    "which have the same name under the configuration's case policy.",
                    parameter_name=self._child_kind,
                    parameter_value=child,
                )
            seen[key] = setting.name
        # Sections follow the case policy of the configuration that holds them
        child._options = self._options

    def _check_replaceable(self, child: Section) -> None:
        if child is self._global_section:
            raise StructureError("The global section may not be replaced.")

    def _check_removable(self, child: Section) -> None:
        if child is self._global_section:
            raise StructureError("The global section may not be removed.")

    @property
    def global_section(self) -> Optional[Section]:
        """Return the implicit global section, or None when it is disabled."""
        return self._global_section

    @property
    def section_count(self) -> int:
        """Return the number of sections, including the global section."""
        return len(self._children)

    def sections(self) -> list[Section]:
        """Return the sections in declaration order."""
        return list(self._children)

    def is_global(self, section: Section) -> bool:
        """Return True if ``section`` is this configuration's implicit global section."""
        return section is not None and section is self._global_section

    def clear(self) -> None:
        """Remove every section; the global section is kept but emptied."""
        if self._global_section is None:
            super().clear()
            return
        self._global_section.clear()
        for section in self._children:
            if section is not self._global_section:
                self._detach(section)
        self._children = [self._global_section]

    def to_dict(self) -> dict[str, dict[str, str]]:
        """Return an ordered ``section -> {name -> raw value}`` mapping."""
        return {section.name: section.to_dict() for section in self._children}

    def __repr__(self) -> str:
        return f"Configuration(sections={[section.name for section in self._children]!r})"
