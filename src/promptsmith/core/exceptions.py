"""Exception hierarchy with error codes for PromptSmith.

Blank or whitespace-only text is never an error: builder methods drop it.
Exceptions are reserved for merge conflicts and invalid configuration.
"""

from dataclasses import dataclass, field
from typing import Any

# Standard error codes
E_DUPLICATE_TOOL = "E_DUPLICATE_TOOL"
E_CONFIG = "E_CONFIG"


@dataclass
class PromptSmithException(Exception):  # noqa: N818
    """Base exception for all PromptSmith-specific errors.

    Carries an error code and metadata so callers can report failures
    consistently.
    """

    message: str
    error_code: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return human-readable error message."""
        return self.message

    def __post_init__(self) -> None:
        """Initialize the exception with the message."""
        super().__init__(self.message)


@dataclass
class DuplicateToolNameError(PromptSmithException):
    """Two configurations being merged declare a tool with the same name.

    The base configuration's tool list is left unchanged when this is raised.
    """

    tool_name: str = ""

    def __post_init__(self) -> None:
        """Initialize with tool-specific metadata."""
        if not self.error_code:
            self.error_code = E_DUPLICATE_TOOL
        if self.tool_name:
            self.metadata["tool_name"] = self.tool_name
        super().__post_init__()


@dataclass
class ConfigurationError(PromptSmithException):
    """Error in builder or library configuration.

    Raised for unknown prompt formats, invalid config values and unreadable
    config files.
    """

    key: str = ""
    reason: str = ""

    def __post_init__(self) -> None:
        """Initialize with configuration-specific metadata."""
        if not self.error_code:
            self.error_code = E_CONFIG
        if self.key:
            self.metadata["config_key"] = self.key
        if self.reason:
            self.metadata["reason"] = self.reason
        super().__post_init__()


def format_error_for_user(exception: PromptSmithException) -> str:
    """Format exception for user-friendly display.

    Args:
        exception: The PromptSmith exception to format

    Returns:
        Human-readable error message without internal details
    """
    if isinstance(exception, DuplicateToolNameError):
        if exception.tool_name:
            return f"Duplicate tool '{exception.tool_name}': {exception.message}"
        return f"Duplicate tool: {exception.message}"

    if isinstance(exception, ConfigurationError):
        if exception.key:
            return f"Configuration error '{exception.key}': {exception.message}"
        return f"Configuration error: {exception.message}"

    return str(exception.message)


def format_error_for_log(exception: PromptSmithException) -> dict[str, Any]:
    """Format exception for structured logging.

    Args:
        exception: The PromptSmith exception to format

    Returns:
        Dictionary with structured error information for logs
    """
    log_data: dict[str, Any] = {
        "error_type": type(exception).__name__,
        "message": exception.message,
        "error_code": exception.error_code,
    }

    if exception.metadata:
        log_data["metadata"] = exception.metadata

    if isinstance(exception, DuplicateToolNameError):
        if exception.tool_name:
            log_data["tool_name"] = exception.tool_name

    elif isinstance(exception, ConfigurationError):
        if exception.key:
            log_data["config_key"] = exception.key
        if exception.reason:
            log_data["reason"] = exception.reason

    return log_data
