"""
Error types and helpers for the cattle loan application.

Three kinds of failure are distinguished: user input that breaks a form
rule (recoverable, shown to the user), integration bugs such as addressing
a cattle entry that does not exist, and failures of the storage backend.
"""

from enum import Enum
from typing import Any, Callable, Dict, Optional, TypeVar

from cattle_loan.config.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar('T')


class ErrorSeverity(Enum):
    """Severity levels for application errors."""
    
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AppError(Exception):
    """
    Base class for all application errors.
    
    Carries a severity, the underlying cause (if any) and free-form
    details for diagnostic logging.
    """
    
    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        cause: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.severity = severity
        self.cause = cause
        self.details = details or {}
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to a dictionary for logging."""
        result = {
            "error_type": type(self).__name__,
            "message": self.message,
            "severity": self.severity.value,
        }
        if self.cause is not None:
            result["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        if self.details:
            result["details"] = self.details
        return result
    
    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message} (caused by {type(self.cause).__name__}: {self.cause})"
        return self.message


class ValidationError(AppError):
    """User input violates a form rule; the reason is shown to the user."""
    
    def __init__(self, reason: str, rule: Any = None, cattle_index: Optional[int] = None):
        details = {}
        if rule is not None:
            details["rule"] = getattr(rule, "name", rule)
        if cattle_index is not None:
            details["cattle_index"] = cattle_index
        super().__init__(reason, severity=ErrorSeverity.INFO, details=details)
        self.reason = reason
        self.rule = rule
        self.cattle_index = cattle_index


class FormStateError(AppError):
    """A form mutation was requested that the form cannot represent."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, severity=ErrorSeverity.ERROR, details=details)


class FieldPathError(FormStateError, KeyError):
    """Unknown section or field name, or a value outside a field's choices."""


class CattleIndexError(FormStateError, IndexError):
    """A cattle entry index outside the current sequence was addressed."""
    
    def __init__(self, index: int, size: int):
        super().__init__(
            f"Cattle entry index {index} out of range for {size} entries",
            details={"index": index, "size": size}
        )
        self.index = index
        self.size = size


class PersistenceError(AppError):
    """The storage backend failed to persist an application."""
    
    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message, severity=ErrorSeverity.ERROR, cause=cause)


def safe_execute(
    func: Callable[..., T],
    *args: Any,
    default: Optional[T] = None,
    error_message: str = "Error executing function",
    **kwargs: Any
) -> Optional[T]:
    """
    Call a function, logging any exception instead of raising it.
    
    Args:
        func: Function to call
        *args: Positional arguments for the function
        default: Value returned when the function raises
        error_message: Prefix for the logged error
        **kwargs: Keyword arguments for the function
        
    Returns:
        The function result, or ``default`` if it raised
    """
    try:
        return func(*args, **kwargs)
    except Exception as e:
        logger.error(f"{error_message}: {type(e).__name__}: {e}")
        return default
