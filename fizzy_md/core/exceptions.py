"""Custom exception classes for fizzy-md error handling.

This module defines the exception hierarchy for the rewrite-and-delegate flow:
- ConversionError: The Markdown renderer rejected its input
- FileReadError: A file given to a file-valued flag could not be read
- MissingFlagValueError: An intercepted flag was the last argument
- TempArtifactError: A temporary HTML file could not be created or written
- DelegateNotFoundError: The fizzy executable is not on PATH
- DelegateExecutionError: The fizzy executable could not be started
- ConfigError: Invalid configuration file or environment value

All exceptions inherit from FizzyMdError for consistent error handling.
"""

from typing import Any


class FizzyMdError(Exception):
    """Base exception for all fizzy-md errors.

    Provides a common base class for all custom exceptions raised while
    rewriting arguments or delegating, enabling catch-all error handling
    at the program entry point.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error description
            context: Optional dictionary of contextual information (flag names,
                    file paths, delegate names, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return a formatted error message with context."""
        if not self.context:
            return self.message

        context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.message} [{context_str}]"


class ConversionError(FizzyMdError):
    """Exception raised when Markdown to HTML conversion fails.

    Context typically includes:
        - flag: The intercepted flag whose value was being converted
        - reason: Error reported by the renderer
    """

    def __init__(
        self,
        message: str,
        flag: str | None = None,
        reason: str | None = None,
        **extra_context: Any,
    ) -> None:
        context: dict[str, Any] = {}
        if flag is not None:
            context["flag"] = flag
        if reason is not None:
            context["reason"] = reason
        context.update(extra_context)

        super().__init__(message, context)


class FileReadError(FizzyMdError):
    """Exception raised when a content file cannot be read.

    The underlying OSError or UnicodeDecodeError is always chained as
    ``__cause__``.

    Context typically includes:
        - file_path: Path that failed to open or decode
        - reason: Underlying cause (e.g. "No such file or directory")
        - flag: The file-valued flag that referenced the path
    """

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        reason: str | None = None,
        flag: str | None = None,
        **extra_context: Any,
    ) -> None:
        context: dict[str, Any] = {}
        if file_path is not None:
            context["file_path"] = file_path
        if reason is not None:
            context["reason"] = reason
        if flag is not None:
            context["flag"] = flag
        context.update(extra_context)

        super().__init__(message, context)


class MissingFlagValueError(FizzyMdError):
    """Exception raised when an intercepted flag has no following value."""

    def __init__(self, flag: str, **extra_context: Any) -> None:
        """Initialize with the offending flag name.

        Args:
            flag: Intercepted flag found as the last argument
            **extra_context: Additional context information
        """
        self.flag = flag
        super().__init__(f"flag {flag} requires a value", {"flag": flag, **extra_context})


class TempArtifactError(FizzyMdError):
    """Exception raised when a temporary HTML file cannot be created or written.

    Context typically includes:
        - temp_dir: Directory the file was to be created in
        - reason: Underlying OS error message
    """

    def __init__(
        self,
        message: str,
        temp_dir: str | None = None,
        reason: str | None = None,
        **extra_context: Any,
    ) -> None:
        context: dict[str, Any] = {}
        if temp_dir is not None:
            context["temp_dir"] = temp_dir
        if reason is not None:
            context["reason"] = reason
        context.update(extra_context)

        super().__init__(message, context)


class DelegateNotFoundError(FizzyMdError):
    """Exception raised when the delegate executable is not on PATH.

    Context typically includes:
        - delegate: Executable name that was looked up
        - guidance: Installation hint shown to the user
    """

    def __init__(
        self,
        message: str,
        delegate: str | None = None,
        guidance: str | None = None,
        **extra_context: Any,
    ) -> None:
        self.guidance = guidance
        context: dict[str, Any] = {}
        if delegate is not None:
            context["delegate"] = delegate
        context.update(extra_context)

        super().__init__(message, context)


class DelegateExecutionError(FizzyMdError):
    """Exception raised when the delegate exists but cannot be started.

    This is distinct from the delegate running and exiting non-zero, which
    is never an error of this program.

    Context typically includes:
        - delegate: Resolved path of the executable
        - reason: Underlying OS error message (e.g. "Permission denied")
    """

    def __init__(
        self,
        message: str,
        delegate: str | None = None,
        reason: str | None = None,
        **extra_context: Any,
    ) -> None:
        context: dict[str, Any] = {}
        if delegate is not None:
            context["delegate"] = delegate
        if reason is not None:
            context["reason"] = reason
        context.update(extra_context)

        super().__init__(message, context)


class ConfigError(FizzyMdError):
    """Configuration file or environment error.

    Raised when configuration files cannot be loaded or parsed, or when a
    setting holds an invalid value.
    """
    pass
