"""Logging setup for the idlir command line.

Library modules only create loggers under the ``idlir`` namespace. Handlers
are attached here, to the ``idlir`` package logger, so running the command
line never touches the root logger of a program that embeds idlir.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from idlir.constants import DEFAULT_LOG_LEVEL, LOG_LEVELS
from idlir.exceptions import FileError, ValidationError

PACKAGE_LOGGER = "idlir"

PLAIN_FORMAT = "idlir: %(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(log_level: str = DEFAULT_LOG_LEVEL, verbose: bool = False, trace: bool = False) -> int:
    """Combine the ``--log-level``, ``--verbose`` and ``--trace`` flags.

    ``--trace`` always means DEBUG. ``--verbose`` means DEBUG unless
    ``--log-level`` was moved off its default, in which case the explicit
    level wins.

    Raises
    ------
    ValidationError
        If ``log_level`` is not a level name

    """
    if trace or (verbose and log_level.upper() == DEFAULT_LOG_LEVEL):
        return logging.DEBUG
    if log_level.upper() not in LOG_LEVELS:
        raise ValidationError(f"Unknown log level: {log_level}", parameter_name="log_level", parameter_value=log_level)
    return logging.getLevelName(log_level.upper())


def configure_logging(
    level: int,
    log_file: Optional[Union[str, Path]] = None,
    trace: bool = False,
) -> logging.Logger:
    """Attach stderr and optional file handlers to the ``idlir`` logger.

    Calling this again replaces the handlers of the previous call.

    Parameters
    ----------
    level : int
        Logging level for the logger and its handlers
    log_file : str or Path, optional
        File that receives the same records as stderr, opened for appending
    trace : bool, default False
        Use timestamps and logger names in the record format

    Returns
    -------
    logging.Logger
        The configured ``idlir`` logger

    Raises
    ------
    FileError
        If ``log_file`` cannot be opened

    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(level)
    package_logger.propagate = False

    if trace:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(PLAIN_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as e:
            raise FileError(f"Cannot open log file {log_file}: {e}", file_path=str(log_file), original_error=e) from e

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    if log_file is not None:
        package_logger.debug("Logging to file: %s", log_file)
    return package_logger
