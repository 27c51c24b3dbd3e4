"""Error reporting and logging setup for fizzy-md.

This module provides:
- configure_logging: Handlers for the fizzy_md logger (stderr, optional file)
- handle_error: Formatted error messages with context and optional stack traces

fizzy-md shares stdout and stderr with fizzy, so by default it logs only
warnings and errors; everything else is debug output enabled through
FIZZY_MD_LOG_LEVEL.
"""

import logging
import sys
import traceback
from typing import TextIO

from fizzy_md.core.exceptions import DelegateNotFoundError, FizzyMdError

PROGRAM_NAME = "fizzy-md"

LOGGER_NAME = "fizzy_md"


def configure_logging(log_level: int | str, log_file: str | None = None) -> logging.Logger:
    """Configure handlers on the package logger.

    Only the ``fizzy_md`` logger is touched, so the root logger stays as the
    host environment left it. Calling this again replaces earlier handlers.

    Args:
        log_level: Numeric logging level or name (e.g. "debug")
        log_file: Optional path to a log file for teeing log output

    Returns:
        The configured package logger
    """
    resolved_level = (
        log_level
        if isinstance(log_level, int)
        else getattr(logging, str(log_level).upper(), logging.WARNING)
    )

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolved_level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(f"{PROGRAM_NAME} %(levelname)s: %(message)s")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(
                logging.Formatter("[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s")
            )
            logger.addHandler(file_handler)

    return logger


def handle_error(error: Exception, verbose: bool = False, stream: TextIO | None = None) -> None:
    """Format and display error message with context.

    Displays the error to stderr prefixed with the program name, followed by
    the context fields of FizzyMdError exceptions and, for a missing delegate,
    installation guidance. When verbose mode is enabled, also displays the
    full stack trace.

    Args:
        error: Exception to display
        verbose: Whether to show stack trace (default False)
        stream: Output stream (default sys.stderr at call time)

    Example:
        try:
            # ... rewrite arguments ...
        except FizzyMdError as e:
            handle_error(e, verbose=True)
    """
    if stream is None:
        stream = sys.stderr

    message = error.message if isinstance(error, FizzyMdError) else str(error)
    print(f"{PROGRAM_NAME} error: {message}", file=stream)

    if isinstance(error, FizzyMdError) and error.context:
        print("Context:", file=stream)
        for key, value in error.context.items():
            print(f"  {key}: {value}", file=stream)

    if isinstance(error, DelegateNotFoundError) and error.guidance:
        print(error.guidance, file=stream)

    if verbose:
        print("\nStack trace:", file=stream)
        traceback.print_exception(type(error), error, error.__traceback__, file=stream)
