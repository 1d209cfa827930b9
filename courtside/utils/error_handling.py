"""
Error types and helpers shared across Courtside.

Stores never raise for expected conditions. The errors below describe the
unexpected ones (storage I/O, backend calls) so they can be logged in a
consistent shape before being absorbed.
"""

from enum import Enum
from typing import Any, Callable, Dict, Optional, TypeVar

from courtside.config.logging_config import get_logger

logger = get_logger(__name__)

R = TypeVar("R")


class ErrorSeverity(Enum):
    """How serious an error is for the running application."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AppError(Exception):
    """Base application error with severity and optional cause."""

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.severity = severity
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to a dictionary."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "severity": self.severity.value,
            "cause": repr(self.cause) if self.cause else None,
        }

    def __str__(self) -> str:
        if self.cause:
            return f"[{self.severity.value}] {self.message} (caused by {type(self.cause).__name__})"
        return f"[{self.severity.value}] {self.message}"


class StorageError(AppError):
    """Reading or writing the key-value storage failed."""

    def __init__(
        self,
        message: str,
        key: str,
        severity: ErrorSeverity = ErrorSeverity.WARNING,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, severity=severity, cause=cause)
        self.key = key


class ApiError(AppError):
    """A backend request failed or returned an unusable response."""

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        cause: Optional[BaseException] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, severity=severity, cause=cause)
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["status_code"] = self.status_code
        return result


def safe_execute(
    func: Callable[..., R],
    *args: Any,
    default: Any = None,
    error_message: str = "Operation failed",
    severity: ErrorSeverity = ErrorSeverity.ERROR,
    **kwargs: Any,
) -> Any:
    """
    Call a function and log an AppError instead of raising.

    Args:
        func: Callable to run
        *args: Positional arguments for func
        default: Value returned when func raises
        error_message: Message prefix for the logged error
        severity: Severity recorded on the logged error
        **kwargs: Keyword arguments for func

    Returns:
        The result of func, or default on failure
    """
    try:
        return func(*args, **kwargs)
    except Exception as e:
        error = AppError(f"{error_message}: {str(e)}", severity=severity, cause=e)
        logger.error(str(error))
        return default
