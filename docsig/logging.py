"""Logging for docsig.

The library logs under the ``docsig`` hierarchy and stays silent until an
application calls :func:`configure_logging`.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "docsig"
_CONSOLE_FORMAT = "[docsig] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logging.getLogger(_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the docsig hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def log_level(*, verbose: bool = False, quiet: bool = False) -> int:
    """DEBUG when verbose, WARNING when quiet, INFO otherwise."""
    if verbose and quiet:
        raise ValueError("verbose and quiet are mutually exclusive")
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send docsig records to stderr and, optionally, to ``log_file``.

    Calling it again replaces the handlers installed by the previous call.
    """
    level = log_level(verbose=verbose, quiet=quiet)
    logger = logging.getLogger(_LOGGER_NAME)
    # The file sink records everything; the console honours the chosen level.
    logger.setLevel(logging.DEBUG if log_file is not None else level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(logging.DEBUG)
        sink.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(sink)

    return logger


__all__ = ["configure_logging", "get_logger", "log_level"]
