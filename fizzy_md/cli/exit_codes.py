"""Exit code constants for fizzy-md.

fizzy-md only chooses its own exit code when it fails before or while
launching fizzy. Once fizzy has run, its exit status is returned untouched,
so these codes apply only to fizzy-md's own failures.

Exit codes:
    0: SUCCESS - Version printed, stdin converted, or fizzy exited 0
    1: UNEXPECTED_ERROR - Unexpected error, or fizzy could not be found or started
    2: USAGE_ERROR - An intercepted flag was given without a value
    3: READ_ERROR - A file-valued flag's file could not be read
    4: CONVERSION_ERROR - Markdown conversion failed
    5: TEMP_FILE_ERROR - A temporary HTML file could not be written
    6: CONFIG_ERROR - Configuration file or environment error
"""

from fizzy_md.core.exceptions import (
    ConfigError,
    ConversionError,
    DelegateExecutionError,
    DelegateNotFoundError,
    FileReadError,
    MissingFlagValueError,
    TempArtifactError,
)


class ExitCode:
    """Standard exit codes for fizzy-md's own failures.

    Example:
        >>> from fizzy_md.cli.exit_codes import ExitCode
        >>> import sys
        >>>
        >>> try:
        ...     # ... rewrite arguments ...
        ...     sys.exit(ExitCode.SUCCESS)
        ... except MissingFlagValueError:
        ...     sys.exit(ExitCode.USAGE_ERROR)
    """

    SUCCESS = 0
    """Operation completed successfully."""

    UNEXPECTED_ERROR = 1
    """Unexpected error, or the delegate could not be found or started."""

    USAGE_ERROR = 2
    """Intercepted flag without a value."""

    READ_ERROR = 3
    """Content file could not be read."""

    CONVERSION_ERROR = 4
    """Markdown conversion failed."""

    TEMP_FILE_ERROR = 5
    """Temporary HTML file could not be created or written."""

    CONFIG_ERROR = 6
    """Configuration file or environment error."""


_ERROR_CODES: list[tuple[type[Exception], int]] = [
    (MissingFlagValueError, ExitCode.USAGE_ERROR),
    (FileReadError, ExitCode.READ_ERROR),
    (ConversionError, ExitCode.CONVERSION_ERROR),
    (TempArtifactError, ExitCode.TEMP_FILE_ERROR),
    (ConfigError, ExitCode.CONFIG_ERROR),
    (DelegateNotFoundError, ExitCode.UNEXPECTED_ERROR),
    (DelegateExecutionError, ExitCode.UNEXPECTED_ERROR),
]


def exit_code_for(error: Exception) -> int:
    """Map an exception to the exit code fizzy-md terminates with.

    Args:
        error: Exception raised before or while launching the delegate

    Returns:
        Exit code for the error's family, UNEXPECTED_ERROR if unknown
    """
    for error_type, code in _ERROR_CODES:
        if isinstance(error, error_type):
            return code
    return ExitCode.UNEXPECTED_ERROR
