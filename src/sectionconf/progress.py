#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sectionconf/progress.py
"""Progress callback system for parsing and rendering.

Embedders that load large configuration files can follow the parser's
progress through a callback.

Examples
--------
    >>> from sectionconf.api import load_text
    >>> from sectionconf.progress import ProgressEvent
    >>>
    >>> def handler(event: ProgressEvent) -> None:
    ...     print(event)
    >>>
    >>> config = load_text("[A]\\nx = 1", progress_callback=handler)
    [STARTED] Parsing configuration text (0/2)
    [ITEM_DONE] Section 'A' (2/2)
    [FINISHED] Parsed 1 section(s) (2/2)

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Literal

EventType = Literal["started", "item_done", "finished", "error"]


@dataclass
class ProgressEvent:
    """Progress event emitted by parsers and renderers.

    Parameters
    ----------
    event_type : EventType
        Type of progress event:

        - "started": work has begun; ``total`` holds the number of lines or
          sections to process when known
        - "item_done": a section has been completed; ``metadata["item_type"]``
          is ``"section"`` and ``metadata["name"]`` its name
        - "finished": work completed successfully
        - "error": work failed; ``metadata["error"]`` holds the message

    message : str
        Human-readable description of the event
    current : int, default 0
        Current progress position
    total : int, default 0
        Total items to process. Set to 0 if unknown.
    metadata : dict, default empty
        Additional event-specific information

    """

    event_type: EventType
    message: str
    current: int = 0
    total: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return human-readable string representation."""
        progress = f"({self.current}/{self.total})" if self.total > 0 else ""
        return f"[{self.event_type.upper()}] {self.message} {progress}".strip()


# Type alias for progress callback functions
ProgressCallback = Callable[[ProgressEvent], None]
"""Type alias for progress callback functions.

A progress callback is any callable that accepts a ProgressEvent and returns None.
Exceptions raised by a callback are logged and never interrupt parsing.
"""
