"""Opt-in log output for the ``sectionconf`` logger hierarchy.

Every module logs through ``logging.getLogger(__name__)``, so all records
land under the ``sectionconf`` logger. Importing the package installs no
handlers. An embedding application that wants to see parser and renderer
records without touching its own root configuration calls
:func:`enable_logging`; :func:`disable_logging` undoes it.

Examples
--------
    >>> from sectionconf.logging_utils import enable_logging, disable_logging
    >>> logger = enable_logging("DEBUG")
    >>> logger.name
    'sectionconf'
    >>> disable_logging()

"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER_NAME = "sectionconf"

_HANDLER_MARKER = "_sectionconf_handler"


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def _installed_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [handler for handler in logger.handlers if getattr(handler, _HANDLER_MARKER, False)]


def disable_logging() -> None:
    """Remove the handlers installed by :func:`enable_logging`.

    Handlers added to the ``sectionconf`` logger by anyone else are left in
    place. The logger goes back to propagating with an unset level.
    """
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    for handler in _installed_handlers(logger):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def enable_logging(
    log_level: int | str = logging.INFO,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    stream: Optional[TextIO] = None,
    propagate: bool = False,
) -> logging.Logger:
    """Send records of the ``sectionconf`` loggers to a stream and optionally a file.

    Calling it again replaces the handlers from the previous call instead of
    stacking them. The root logger is never modified.

    Parameters
    ----------
    log_level : int | str, default logging.INFO
        Numeric logging level or level name (e.g., "DEBUG"). Unknown names
        resolve to INFO.
    log_file : str, optional
        Path of a file that receives the same records, opened for appending
    trace_mode : bool, default False
        When true, emit timestamps and logger names, so records can be traced
        to the parser or renderer module that wrote them
    stream : TextIO, optional
        Console stream, ``sys.stderr`` when omitted
    propagate : bool, default False
        Whether records also reach handlers of ancestor loggers. Left off so
        that an application already logging to the root does not see every
        record twice.

    Returns
    -------
    logging.Logger
        The ``sectionconf`` package logger

    """
    resolved_level = _resolve_level(log_level)

    disable_logging()
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    logger.setLevel(resolved_level)
    logger.propagate = propagate

    format_str = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s" if trace_mode else "%(levelname)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S" if trace_mode else None
    formatter = logging.Formatter(format_str, datefmt=date_format)

    def install(handler: logging.Handler) -> None:
        setattr(handler, _HANDLER_MARKER, True)
        handler.setLevel(resolved_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    install(logging.StreamHandler(stream or sys.stderr))

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not open log file %s: %s", log_file, exc)
        else:
            install(file_handler)
            logger.info("Logging to file: %s", log_file)

    return logger
