"""
Logging configuration for the hdf5stack library.

The library never configures output on its own: importing it attaches a
NullHandler to the ``hdf5stack`` logger and nothing else. Applications (and
the ``h52tif``/``tif2h5`` console scripts) opt in with
:func:`configure_logging`.

Example usage in calling scripts:
    >>> import logging
    >>> from hdf5stack.logging import configure_logging
    >>> configure_logging(level=logging.DEBUG)

Example usage inside the library:
    >>> from hdf5stack.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Resolved dimensions %s", dims)
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

LIBRARY_LOGGER_NAME = "hdf5stack"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger that lives under the hdf5stack logger hierarchy.

    Args:
        name: The logger name, typically ``__name__`` of the calling module.
              If None, returns the root hdf5stack logger.

    Returns:
        A logger instance for the specified name
    """
    if name is None:
        return logging.getLogger(LIBRARY_LOGGER_NAME)

    if name.startswith(LIBRARY_LOGGER_NAME):
        return logging.getLogger(name)

    return logging.getLogger(f"{LIBRARY_LOGGER_NAME}.{name}")


def configure_logging(
    level: Union[int, str] = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
    stream: Optional[object] = None,
) -> None:
    """
    Send hdf5stack log records somewhere visible.

    Args:
        level: Logging level (e.g. logging.DEBUG, "DEBUG", "debug")
        format_string: Format for log records, defaults to ``DEFAULT_FORMAT``
        handler: Handler to install. If None, a StreamHandler is created.
        stream: Stream for the default StreamHandler (default: sys.stderr).
                Ignored when ``handler`` is given.

    Calling this more than once replaces the previously installed handler.
    """
    if format_string is None:
        format_string = DEFAULT_FORMAT

    if isinstance(level, str):
        level = getattr(logging, level.upper())

    logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    logger.setLevel(level)

    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)

    if handler.formatter is None:
        handler.setFormatter(logging.Formatter(format_string))

    handler.setLevel(level)

    logger.handlers.clear()
    logger.addHandler(handler)


def _setup_library_logging() -> None:
    logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())


_setup_library_logging()
