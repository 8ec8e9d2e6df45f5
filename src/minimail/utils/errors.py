"""Centralized error handling module."""

import logging
from enum import Enum
from functools import wraps
from typing import Any, Dict, Optional

from minimail.utils.logging import get_logger

_logger = None


def _get_logger():
    """Get logger with lazy initialisation."""
    global _logger
    if _logger is None:
        _logger = get_logger(__name__)
    return _logger


## Error Categories


class ErrorCategory(Enum):
    """Categories of errors, also used as the error kind of a send result."""

    CONFIGURATION = "configuration"
    PROTOCOL = "protocol"
    TRANSPORT = "transport"
    INPUT = "input"
    FILE_SYSTEM = "file_system"
    UNKNOWN = "unknown"


## Custom Exceptions


class MailerError(Exception):
    """Base exception for all minimail errors."""

    category = ErrorCategory.UNKNOWN
    user_message = "An error occurred"

    def __init__(
        self, message: str | None = None, details: Dict[str, Any] | None = None
    ):
        """Initialise MailerError with optional message and details."""
        self.message = message or self.user_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error details to a dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "category": self.category.value,
            "message": self.message,
            "details": self.details,
        }


## Configuration Errors


class ConfigurationError(MailerError):
    """Raised when a message or session is missing required settings."""

    category = ErrorCategory.CONFIGURATION
    user_message = "The message is not ready to be sent"


class InvalidConfigError(ConfigurationError):
    """Exception for invalid configuration files or values."""

    user_message = "Invalid configuration settings"


## Protocol Errors


class ProtocolError(MailerError):
    """Raised when a server reply does not carry the expected status code."""

    category = ErrorCategory.PROTOCOL
    user_message = "The mail server rejected the request"


## Transport Errors


class TransportError(MailerError):
    """Connection failure, abrupt disconnect or I/O fault on the stream."""

    category = ErrorCategory.TRANSPORT
    user_message = "A network error occurred"


class TransportTimeoutError(TransportError):
    """Exception for transport operations exceeding the configured timeout."""

    user_message = "The connection timed out"


## Input Errors


class InputError(MailerError):
    """Raised by the command line tool for unusable input such as the body file."""

    category = ErrorCategory.INPUT
    user_message = "Invalid input"


## File System Errors


class FileSystemError(MailerError):
    """Base exception for file system-related errors."""

    category = ErrorCategory.FILE_SYSTEM
    user_message = "A file system error occurred"


## Error Handler


class ErrorHandler:
    """Centralized error handling and logging."""

    @staticmethod
    def handle(
        error: Exception,
        context: str = "",
        log_traceback: bool = True,
        level: int = logging.ERROR,
    ) -> Dict[str, Any]:
        """Handle errors with logging and user-friendly message."""
        if isinstance(error, MailerError):
            _get_logger().log(level, f"{context}: {error.message}", extra=error.details)
            if log_traceback:
                _get_logger().exception(error)
            return error.to_dict()
        else:
            _get_logger().log(level, f"{context}: {str(error)}")
            if log_traceback:
                _get_logger().exception(error)
            return {
                "error_type": "UnknownError",
                "category": ErrorCategory.UNKNOWN.value,
                "message": str(error),
                "details": {"context": context},
            }

    @staticmethod
    def wrap(func):
        """Decorator turning unexpected exceptions into MailerError."""

        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)

            except MailerError:
                raise

            except Exception as e:
                _get_logger().exception(f"Unexpected error in {func.__name__}")
                raise MailerError(
                    message=f"Unexpected error: {str(e)}",
                    details={"function": func.__name__},
                ) from e

        return wrapper


## Utility Functions


def format_error_message(error: Optional[Exception]) -> str:
    """Format an error message for display."""
    if isinstance(error, MailerError):
        return error.message
    else:
        return "An unexpected error occurred - check logs for details."
